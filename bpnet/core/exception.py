class BackpropagationError(Exception):
    """ Base class for errors raised by the backpropagation network
    """


class MalformedDomainError(BackpropagationError, ValueError):
    """ Raised when a domain's bound pairs are invalid (low > high), when the
    labels disagree on the number of dimensions, or when the label ordering
    does not match the labeled regions
    """


class TopologyMismatchError(BackpropagationError, ValueError):
    """ Raised when a node's weight vector length differs from the number of
    inputs to its layer plus one (the bias)
    """


class PropagationStateError(BackpropagationError, RuntimeError):
    """ Raised when a training phase runs before the phase it depends on,
    e.g., backward propagation before any forward pass
    """


class ModelNotFit(BackpropagationError):
    """ Raised when trying access properties or methods that require a fitted
    model
    """


class ModelAlreadyFit(BackpropagationError):
    """ Raised when attempting to fit a model that has already been fitted
    """
