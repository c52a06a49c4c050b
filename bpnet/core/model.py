import logging

import numpy
from sklearn.utils import check_random_state

from bpnet.core.exception import ModelAlreadyFit, ModelNotFit
from bpnet.data.domain import Domain, Pattern
from bpnet.network.network import Network
from bpnet.network.propagation import forward_propagate
from bpnet.training import evaluate_network, train_network


_logger_name = __name__.rsplit('.', 1)[-1]
logger = logging.getLogger(_logger_name)


class BackpropagationClassifier:

    def __init__(self, layer_sizes=(2, 1), learning_rate=0.1,
                 random_state=None):
        """
        Initialize a backpropagation classifier

        Parameters
        ----------
        layer_sizes: tuple of int, default=(2, 1)
            Number of nodes in each layer. The last entry is the output
            layer and must be 1; its output is read as the normalized
            class index. The default is one hidden layer of two nodes.

        learning_rate: float, default=0.1
            The fixed step size of every weight update.

        random_state: numpy.random.RandomState, int, or None
            Provide for reproducible weight initialization and pattern
            sampling.

        """
        layer_sizes = tuple(layer_sizes)

        if len(layer_sizes) == 0 or layer_sizes[-1] != 1:
            msg = "`layer_sizes` should end with a single output node; got {}"
            raise ValueError(msg.format(layer_sizes))

        if not all(isinstance(size, (int, numpy.integer)) and
                   not isinstance(size, bool) and size > 0
                   for size in layer_sizes):
            msg = "`layer_sizes` should be positive integers; got {}"
            raise ValueError(msg.format(layer_sizes))

        try:
            learning_rate = float(learning_rate)
        except (ValueError, TypeError):
            msg = "`learning_rate` must be numeric; got {!r}"
            raise ValueError(msg.format(learning_rate))

        if not numpy.isfinite(learning_rate) or learning_rate <= 0:
            msg = "`learning_rate` should be positive and finite; got {}"
            raise ValueError(msg.format(learning_rate))

        self.layer_sizes = layer_sizes
        self.learning_rate = learning_rate
        self.random_state = check_random_state(random_state)

        # These are filled in post fit
        self.network = None
        self.domain = None
        self.training_scores = None

        self._is_fitted = False

    def __repr__(self):
        return "<BackpropagationClassifier layer_sizes={}, lr={}>".format(
            self.layer_sizes, self.learning_rate)

    def fit(self, domain, iterations=2000, log_every=100):
        """ Build a network for `domain` and train it online

        Parameters
        ----------
        domain: Domain or dict
            The labeled regions to learn. A dict is converted with
            :class:`bpnet.data.domain.Domain` (sorted label order).

        iterations: int, default=2000
            Number of training patterns.

        log_every: int, default=100
            Window size for logging the count of correct predictions.

        """
        if self._is_fitted:
            raise ModelAlreadyFit("This model has already been fit")

        if not isinstance(domain, Domain):
            domain = Domain(domain)

        self.domain = domain
        self.network = Network(
            n_inputs=domain.ndim, layer_sizes=self.layer_sizes,
            random_state=self.random_state)

        logger.info("Training %r on %r for %d iterations",
                    self.network, domain, iterations)

        self.training_scores = train_network(
            self.network, domain, iterations=iterations,
            learning_rate=self.learning_rate,
            random_state=self.random_state, log_every=log_every)

        self._is_fitted = True

        return self

    def predict(self, vector):
        """ Returns the network output and predicted label for `vector`
        """
        self._check_fitted()
        pattern = Pattern(vector=vector, class_label=None,
                          class_number=None, class_norm=None)
        return forward_propagate(self.network, pattern, self.domain)

    def score(self, domain=None, n_patterns=100):
        """ Fraction of `n_patterns` sampled patterns classified correctly

        The default `domain` (None) uses the domain the model was fit on.
        """
        self._check_fitted()

        if domain is None:
            domain = self.domain
        elif not isinstance(domain, Domain):
            domain = Domain(domain, labels=self.domain.labels)

        if domain.labels != self.domain.labels:
            msg = "Domain labels {} differ from the fitted labels {}"
            raise ValueError(msg.format(domain.labels, self.domain.labels))

        correct = evaluate_network(
            self.network, domain, n_patterns=n_patterns,
            random_state=self.random_state)

        return correct / float(n_patterns)

    def _check_fitted(self):
        if not self._is_fitted:
            raise ModelNotFit("This model has not been fit yet")
