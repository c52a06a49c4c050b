from .network import Network, initialize_weights
from .node import Node
from .propagation import (
    backward_propagate_error, calculate_error_derivatives_for_weights,
    forward_propagate, update_weights)
from .transfer import activate, transfer, transfer_derivative
