import copy
import logging

import numpy
from sklearn.utils import check_random_state

from bpnet.core.exception import TopologyMismatchError
from bpnet.network.node import Node


_logger_name = __name__.rsplit('.', 1)[-1]
logger = logging.getLogger(_logger_name)

# Initial weights are drawn strictly inside (-WEIGHT_SCALE, WEIGHT_SCALE)
WEIGHT_SCALE = 0.5


def initialize_weights(n_inputs, random_state=None):
    """ Small random weights for a node with `n_inputs` inputs

    Parameters
    ----------
    n_inputs: int
        Number of inputs to the node.

    random_state: numpy.random.RandomState, int, or None
        Source of randomness. See :func:`sklearn.utils.check_random_state`.

    Returns
    -------
    weights: ndarray, shape=(n_inputs + 1,)
        The last entry is the bias weight.
    """
    random_state = check_random_state(random_state)

    # `uniform` samples [low, high); nudging low excludes -WEIGHT_SCALE
    low = numpy.nextafter(-WEIGHT_SCALE, 0)

    return random_state.uniform(low=low, high=WEIGHT_SCALE, size=n_inputs+1)


class Network:
    """ A fully connected, layered feedforward network

    Layer 0 consumes the raw input vector and layer k > 0 consumes the
    outputs of layer k-1, in the order of that layer's nodes. Hence
    `node.weights[j]` of a node in layer k is the weight it assigns to
    node j of layer k-1 (or input component j, for k = 0). The last layer
    is the output layer.
    """

    def __init__(self, n_inputs, layer_sizes, random_state=None):
        """ Build a network with randomly initialized weights

        Parameters
        ----------
        n_inputs: int
            Length of the input vectors.

        layer_sizes: list of int
            Number of nodes in each layer, ending with the output layer.
            For example, `[4, 1]` is one hidden layer of four nodes feeding
            a single output node.

        random_state: numpy.random.RandomState, int, or None
            Source of randomness for weight initialization.

        """
        random_state = check_random_state(random_state)

        self._validate_size(n_inputs, "`n_inputs`")

        if len(layer_sizes) == 0:
            raise TopologyMismatchError("`layer_sizes` is empty")

        for ilayer, size in enumerate(layer_sizes):
            self._validate_size(size, "Layer {} size".format(ilayer))

        self.n_inputs = n_inputs
        self.layers = []

        n_layer_inputs = n_inputs
        for size in layer_sizes:
            layer = [
                Node(initialize_weights(n_layer_inputs, random_state))
                for _ in range(size)
            ]
            self.layers.append(layer)
            n_layer_inputs = size

        logger.debug("Built network %r", self)

    @classmethod
    def from_weights(cls, layer_weights, n_inputs=None):
        """ Build a network from explicit weight vectors

        Parameters
        ----------
        layer_weights: list of list of array-like
            `layer_weights[k][j]` is the weight vector (bias last) of
            node j in layer k.

        n_inputs: int, default=None
            Length of the input vectors. The default (None) infers it from
            the first node of the first layer.

        """
        if len(layer_weights) == 0 or len(layer_weights[0]) == 0:
            raise TopologyMismatchError("Network has no nodes")

        layers = [[Node(weights) for weights in layer]
                  for layer in layer_weights]

        if n_inputs is None:
            n_inputs = layers[0][0].n_inputs

        network = cls.__new__(cls)
        network.n_inputs = n_inputs
        network.layers = layers
        network.validate_topology()

        return network

    def __repr__(self):
        return "<Network n_inputs={:d}, layer_sizes={}>".format(
            self.n_inputs, self.layer_sizes)

    def __iter__(self):
        return iter(self.layers)

    def __len__(self):
        return len(self.layers)

    @property
    def layer_sizes(self):
        return [len(layer) for layer in self.layers]

    @property
    def output_layer(self):
        return self.layers[-1]

    def layer_inputs(self, ilayer, vector):
        """ The values fed to layer `ilayer` on the most recent forward pass
        of `vector`
        """
        if ilayer == 0:
            return numpy.asarray(vector, dtype=float)
        return numpy.array([node.output for node in self.layers[ilayer-1]])

    def validate_topology(self):
        """ Raise TopologyMismatchError unless every node in each layer has
        one weight per input to the layer plus a bias
        """
        self._validate_size(self.n_inputs, "`n_inputs`")

        n_layer_inputs = self.n_inputs
        for ilayer, layer in enumerate(self.layers):
            if len(layer) == 0:
                msg = "Layer {} has no nodes"
                raise TopologyMismatchError(msg.format(ilayer))

            for inode, node in enumerate(layer):
                if node.weights.ndim != 1 or \
                        node.weights.shape[0] != n_layer_inputs + 1:
                    msg = ("Node {} of layer {} has {} weight(s) but should "
                           "have {} ({} input(s) plus bias)")
                    raise TopologyMismatchError(msg.format(
                        inode, ilayer, node.weights.size,
                        n_layer_inputs + 1, n_layer_inputs))

            n_layer_inputs = len(layer)

    def copy(self):
        """ An independent copy, e.g., for a separate training worker
        """
        return copy.deepcopy(self)

    @staticmethod
    def _validate_size(size, name):
        if isinstance(size, bool) or \
                not isinstance(size, (int, numpy.integer)) or size < 1:
            msg = "{} should be a positive integer; got {!r}"
            raise TopologyMismatchError(msg.format(name, size))
