""" Activation strategies: a stateless scalar nonlinearity and its
derivative
"""
import abc

import numpy
from scipy.special import expit


# Beyond these magnitudes the exponentials overflow; the activation
# returns its mathematical limit instead.
SIGMOID_LOWER_LIMIT = -420.0
SOFTPLUS_UPPER_LIMIT = 420.0


class ActivationBase(abc.ABC):
    """ The abstract base class for activation functions.

    `calc` and `prime` are static, so an activation can be used either as
    an instance stored on a network or directly from the class.
    """

    @property
    def name(self):
        return type(self).__name__

    def __eq__(self, other):
        return isinstance(other, type(self))

    def __hash__(self):
        return hash(self.name)

    def __repr__(self):
        return self.name

    @staticmethod
    @abc.abstractmethod
    def calc(x):
        """ The activation evaluated at the pre-activation value `x`
        """
        raise NotImplementedError

    @staticmethod
    @abc.abstractmethod
    def prime(x):
        """ The derivative of the activation evaluated at the
        pre-activation value `x`
        """
        raise NotImplementedError


class ReLU(ActivationBase):

    @staticmethod
    def calc(x):
        return float(max(0.0, x))

    @staticmethod
    def prime(x):
        # The kink at zero is assigned a slope of zero
        return 1.0 if x > 0 else 0.0


class Sigmoid(ActivationBase):

    @staticmethod
    def calc(x):
        if x < SIGMOID_LOWER_LIMIT:
            return 0.0
        return float(expit(x))

    @staticmethod
    def prime(x):
        s = Sigmoid.calc(x)
        return s * (1.0 - s)


class Softplus(ActivationBase):

    @staticmethod
    def calc(x):
        if x > SOFTPLUS_UPPER_LIMIT:
            return float(x)
        return float(numpy.log1p(numpy.exp(x)))

    @staticmethod
    def prime(x):
        return Sigmoid.calc(x)
