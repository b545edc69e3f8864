# flake8: noqa

from .matrix import Matrix
from .vector import Vector
