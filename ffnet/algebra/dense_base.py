""" Abstract base class for the dense algebra containers
"""
import abc
import numbers

import numpy

from ffnet.core.exception import shape_mismatch


class DenseBase(abc.ABC):
    """ The abstract base class for containers owning a flat numpy buffer.

    Arithmetic never mutates an operand; every operation allocates a fresh
    buffer for its result.
    """

    @property
    @abc.abstractmethod
    def dims(self):
        """ The dimensions compared by elementwise operations
        """
        raise NotImplementedError

    @abc.abstractmethod
    def _new_like(self, data):
        """ Wrap `data` (a flat buffer) in a container of the same shape
        """
        raise NotImplementedError

    @abc.abstractmethod
    def to_array(self):
        raise NotImplementedError

    @property
    def data(self):
        """ A read-only view of the flat buffer
        """
        view = self._data.view()
        view.flags.writeable = False
        return view

    @property
    def dtype(self):
        return self._data.dtype

    def __len__(self):
        return self._data.shape[0]

    def __iter__(self):
        return iter(self._data.tolist())

    def __eq__(self, other):
        if not isinstance(other, type(self)):
            return NotImplemented
        return (self.dims == other.dims and
                numpy.array_equal(self._data, other._data))

    __hash__ = None

    # numpy scalars and arrays defer to the reflected operators
    __array_ufunc__ = None

    def _check_same_dims(self, other, operation):
        if not isinstance(other, type(self)):
            msg = "{} requires a {} operand, got {}"
            raise TypeError(msg.format(operation, type(self).__name__,
                                       type(other).__name__))
        if self.dims != other.dims:
            raise shape_mismatch(self.dims, other.dims,
                                 what="{} shape".format(operation))

    def __add__(self, other):
        if not isinstance(other, type(self)):
            return NotImplemented
        self._check_same_dims(other, 'addition')
        return self._new_like(self._data + other._data)

    def __sub__(self, other):
        if not isinstance(other, type(self)):
            return NotImplemented
        self._check_same_dims(other, 'subtraction')
        return self._new_like(self._data - other._data)

    def hadamard(self, other):
        """ The elementwise (Hadamard) product with an equal-shaped operand
        """
        self._check_same_dims(other, 'hadamard product')
        return self._new_like(self._data * other._data)

    def __mul__(self, scalar):
        if not isinstance(scalar, numbers.Number):
            return NotImplemented
        return self._new_like(self._data * scalar)

    __rmul__ = __mul__

    def __neg__(self):
        return self._new_like(-self._data)

    def apply(self, function):
        """ Returns a new container with `function` applied to each entry
        """
        data = numpy.array([function(x) for x in self._data.tolist()])
        if data.shape[0] == 0:
            data = data.astype(self.dtype)
        return self._new_like(data)

    def sum(self):
        return self._data.sum().item()
