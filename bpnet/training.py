""" Online training and evaluation loops over a synthetic domain
"""
import logging

from sklearn.utils import check_random_state

from bpnet.core.logger import log_progress
from bpnet.data.domain import Domain, generate_random_pattern
from bpnet.network.propagation import (
    backward_propagate_error, calculate_error_derivatives_for_weights,
    forward_propagate, update_weights)


_logger_name = __name__.rsplit('.', 1)[-1]
logger = logging.getLogger(_logger_name)


def train_step(network, pattern, domain, learning_rate):
    """ Run one full forward/backward/accumulate/update step on `pattern`

    Returns
    -------
    output, label: float, label
        The prediction made on the forward pass, before the update.
    """
    output, label = forward_propagate(network, pattern, domain)
    backward_propagate_error(network, pattern)
    calculate_error_derivatives_for_weights(network, pattern)
    update_weights(network, learning_rate)

    return output, label


def train_network(network, domain, iterations, learning_rate,
                  random_state=None, log_every=100):
    """ Train `network` on `iterations` patterns sampled from `domain`

    Parameters
    ----------
    network: Network
        Updated in place.

    domain: Domain or dict
        The labeled regions to sample training patterns from.

    iterations: int
        Number of patterns (and weight updates).

    learning_rate: float
        Scales every weight update.

    random_state: numpy.random.RandomState, int, or None
        Source of randomness for pattern sampling.

    log_every: int, default=100
        The size of the window over which correct predictions are counted
        and logged.

    Returns
    -------
    correct_counts: list of int
        The number of correct predictions (made before each update) in
        each complete window of `log_every` iterations.
    """
    random_state = check_random_state(random_state)

    if not isinstance(domain, Domain):
        domain = Domain(domain)

    if iterations < 1:
        msg = "`iterations` should be positive; got {}"
        raise ValueError(msg.format(iterations))

    if log_every < 1:
        msg = "`log_every` should be positive; got {}"
        raise ValueError(msg.format(log_every))

    correct_counts = []
    correct = 0

    for iteration in range(iterations):
        pattern = generate_random_pattern(domain, random_state)
        _, label = train_step(network, pattern, domain, learning_rate)

        if label == pattern.class_label:
            correct += 1

        if (iteration + 1) % log_every == 0:
            log_progress(
                logger, "correct={:d}/{:d}".format(correct, log_every),
                iteration + 1, iterations)
            correct_counts.append(correct)
            correct = 0

    return correct_counts


def evaluate_network(network, domain, n_patterns=100, random_state=None):
    """ Count correct predictions on freshly sampled patterns

    The network's weights are not changed, but the per-pass node values
    are overwritten.
    """
    random_state = check_random_state(random_state)

    if not isinstance(domain, Domain):
        domain = Domain(domain)

    if n_patterns < 1:
        msg = "`n_patterns` should be positive; got {}"
        raise ValueError(msg.format(n_patterns))

    correct = 0
    for _ in range(n_patterns):
        pattern = generate_random_pattern(domain, random_state)
        _, label = forward_propagate(network, pattern, domain)
        if label == pattern.class_label:
            correct += 1

    logger.info("Finished test with a score of %d/%d (%.1f%%)",
                correct, n_patterns, 100.0 * correct / n_patterns)

    return correct
