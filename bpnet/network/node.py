import numpy


class Node:
    """ A single unit of the network

    Attributes
    ----------
    weights: ndarray, shape=(n_inputs + 1,)
        Input weights; the last entry is the bias weight.

    activation: float
        The weighted input sum from the most recent forward pass.

    output: float
        The transferred activation from the most recent forward pass.

    error_delta: float
        The error signal from the most recent backward pass.

    error_derivative: ndarray, shape=(n_inputs + 1,)
        The per-weight gradient estimate from the most recent
        accumulation pass.

    The per-pass attributes are None until the respective pass has run.
    """

    def __init__(self, weights):
        self.weights = numpy.array(weights, dtype=float)
        self.activation = None
        self.output = None
        self.error_delta = None
        self.error_derivative = None

    def __repr__(self):
        return "<Node n_inputs={:d}>".format(self.n_inputs)

    @property
    def n_inputs(self):
        return self.weights.shape[0] - 1
