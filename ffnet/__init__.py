# flake8: noqa

from ._version import version as __version__

from .algebra import Matrix, Vector
from .core.exception import ShapeError
from .nn import (
    ForwardPass,
    Gradients,
    Network,
    ReLU,
    Sigmoid,
    Softplus,
    SumSquared,
)
