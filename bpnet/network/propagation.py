""" The four phases of an online backpropagation step

For each training pattern the phases run strictly in order::

    forward_propagate(network, pattern, domain)
    backward_propagate_error(network, pattern)
    calculate_error_derivatives_for_weights(network, pattern)
    update_weights(network, learning_rate)

Every phase mutates the nodes of `network` in place and reads the values
written by the phase before it. A network must not be shared between
threads while these run; give each worker its own `Network.copy()`.
"""
import numpy

from bpnet.core.exception import PropagationStateError
from bpnet.data.domain import Domain, denormalize_class_index
from bpnet.network.transfer import activate, transfer, transfer_derivative


def forward_propagate(network, pattern, domain):
    """ Push `pattern.vector` through the network

    Parameters
    ----------
    network: Network

    pattern: Pattern
        Only `pattern.vector` is used.

    domain: Domain or dict
        Used to map the network output to a class label. A dict is
        converted with :class:`bpnet.data.domain.Domain`.

    Returns
    -------
    output, label: float, label
        The output of the first output-layer node and the label whose
        normalized class index is nearest to it.
    """
    if not isinstance(domain, Domain):
        domain = Domain(domain)

    vector = _check_vector(network, pattern.vector)

    for ilayer, layer in enumerate(network.layers):
        inputs = network.layer_inputs(ilayer, vector)
        for node in layer:
            node.activation = activate(node.weights, inputs)
            node.output = transfer(node.activation)

    output = network.output_layer[0].output
    index = denormalize_class_index(output, domain.labels)

    return output, domain.labels[index]


def backward_propagate_error(network, pattern):
    """ Compute the error signal of every node, output layer first

    The output nodes compare their output against `pattern.class_norm`.
    Node j of a hidden layer collects the error signals of the next layer
    through the weights those nodes assign to input j.
    """
    _require(network, 'output', 'backward propagation', 'forward pass')

    for node in network.output_layer:
        error = pattern.class_norm - node.output
        node.error_delta = error * transfer_derivative(node.output)

    for ilayer in reversed(range(len(network.layers) - 1)):
        downstream = network.layers[ilayer+1]
        for j, node in enumerate(network.layers[ilayer]):
            error = sum(m.weights[j] * m.error_delta for m in downstream)
            node.error_delta = error * transfer_derivative(node.output)


def calculate_error_derivatives_for_weights(network, pattern):
    """ Combine each node's error signal with the inputs it saw on the
    forward pass of `pattern` into a per-weight gradient estimate
    """
    _require(network, 'error_delta', 'gradient accumulation',
             'backward pass')

    vector = _check_vector(network, pattern.vector)

    for ilayer, layer in enumerate(network.layers):
        inputs = network.layer_inputs(ilayer, vector)
        # The bias input is a constant 1
        inputs = numpy.append(inputs, 1.0)
        for node in layer:
            node.error_derivative = node.error_delta * inputs


def update_weights(network, learning_rate):
    """ Step every weight along its gradient estimate

    The update is purely additive: calling this twice without recomputing
    the gradients applies the same step twice.
    """
    _require(network, 'error_derivative', 'weight update',
             'gradient accumulation')

    for layer in network.layers:
        for node in layer:
            node.weights += learning_rate * node.error_derivative


def _check_vector(network, vector):
    vector = numpy.asarray(vector, dtype=float)

    if vector.shape != (network.n_inputs,):
        msg = "Input vector has shape {} but the network expects ({},)"
        raise ValueError(msg.format(vector.shape, network.n_inputs))

    return vector


def _require(network, attribute, phase, prerequisite):
    for ilayer, layer in enumerate(network.layers):
        for inode, node in enumerate(layer):
            if getattr(node, attribute) is None:
                msg = ("Node {} of layer {} has no `{}`; {} requires a "
                       "preceding {}")
                raise PropagationStateError(msg.format(
                    inode, ilayer, attribute, phase, prerequisite))
