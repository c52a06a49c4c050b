from ._version import version as __version__
from .core.model import BackpropagationClassifier
from .data.domain import Domain, Pattern
from .network.network import Network
