import matplotlib.pyplot as plt
import numpy as np

from bpnet import BackpropagationClassifier, Domain
from bpnet.core.logger import setup_logging
from bpnet.visualize import plot_decision_map, plot_domain


setup_logging()

random_state = np.random.RandomState(1234)


# Two squares in the unit square ##############################################

domain = Domain({
    'A': [[0, 0.4999999], [0, 0.4999999]],
    'B': [[0.5, 1], [0.5, 1]],
})

# Fit the classifier ##########################################################

model = BackpropagationClassifier(
    layer_sizes=(2, 1), learning_rate=0.1, random_state=random_state)

model.fit(domain, iterations=2000, log_every=100)

print("Test accuracy: {:.2f}".format(model.score(n_patterns=100)))

# Visualize ###################################################################

fig, ax = plt.subplots()
plot_decision_map(model.network, domain, ax=ax)
plot_domain(domain, ax=ax)
plt.show()
