import numpy
from scipy.special import expit


def activate(weights, inputs):
    """ Weighted sum of `inputs` plus the bias (the last weight)
    """
    weights = numpy.asarray(weights, dtype=float)
    return float(weights[-1] + numpy.dot(weights[:-1], inputs))


def transfer(activation):
    """ The logistic sigmoid, 1 / (1 + exp(-activation))

    `expit` saturates to 0 or 1 for large magnitudes rather than
    overflowing.
    """
    return float(expit(activation))


def transfer_derivative(output):
    """ Derivative of the sigmoid expressed in terms of its output
    """
    return output * (1.0 - output)
