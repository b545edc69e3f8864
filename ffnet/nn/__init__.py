# flake8: noqa

from .activation import ActivationBase, ReLU, Sigmoid, Softplus
from .cost import CostBase, SumSquared
from .layer import Layer, LayerGradient
from .network import ForwardPass, Gradients, Network
