import numpy

from ffnet.algebra.dense_base import DenseBase
from ffnet.algebra.matrix import Matrix
from ffnet.core.exception import ShapeError


class Vector(DenseBase):
    """ Dense one-dimensional container of length `shape`
    """
    def __init__(self, data, dtype=float):
        data = numpy.array(data, dtype=dtype)

        if data.ndim != 1:
            msg = "Vector data must be one-dimensional, got array of shape {}"
            raise ShapeError(msg.format(data.shape))

        self._data = data

    @classmethod
    def _wrap(cls, data):
        vector = cls.__new__(cls)
        vector._data = data
        return vector

    def _new_like(self, data):
        return Vector._wrap(data)

    def __repr__(self):
        return "Vector({})".format(self._data.tolist())

    @property
    def shape(self):
        return self._data.shape[0]

    @property
    def dims(self):
        return (self.shape,)

    @classmethod
    def uniform(cls, value, shape, dtype=float):
        return cls._wrap(numpy.full(shape, value, dtype=dtype))

    @classmethod
    def zeros(cls, shape, dtype=float):
        return cls.uniform(0, shape, dtype=dtype)

    @classmethod
    def random(cls, low, high, shape, random_state=None):
        """ Entries drawn independently and uniformly from `[low, high)`
        """
        rs = numpy.random.RandomState() if random_state is None \
            else random_state
        return cls._wrap(rs.uniform(low, high, size=shape))

    def to_array(self):
        return self._data.copy()

    def as_column(self):
        """ A copy as an n x 1 matrix (w == 1)
        """
        return Matrix._wrap(self._data.copy(), 1, self.shape)

    def as_row(self):
        """ A copy as a 1 x n matrix (h == 1)
        """
        return Matrix._wrap(self._data.copy(), self.shape, 1)

    def _check_index(self, i):
        if not 0 <= i < self.shape:
            msg = "Index {} out of range for vector of length {}"
            raise IndexError(msg.format(i, self.shape))
        return i

    def __getitem__(self, i):
        return self._data[self._check_index(i)].item()

    def __setitem__(self, i, value):
        self._data[self._check_index(i)] = value

    def argmax(self):
        if self.shape == 0:
            raise ValueError("argmax of an empty vector")
        return int(numpy.argmax(self._data))

    def inner_prod(self, rhs):
        """ Sum of the elementwise products with an equal-length vector
        """
        self._check_same_dims(rhs, 'inner product')
        return numpy.dot(self._data, rhs._data).item()

    def outer_prod(self, rhs):
        """
        Returns
        -------
        out: Matrix, h=len(self), w=len(rhs)
            out[i, j] = self[i] * rhs[j]
        """
        if not isinstance(rhs, Vector):
            msg = "outer product requires a Vector operand, got {}"
            raise TypeError(msg.format(type(rhs).__name__))
        out = numpy.outer(self._data, rhs._data).ravel()
        return Matrix._wrap(out, rhs.shape, self.shape)


def as_vector(x, name):
    """ Returns `x` as a Vector. A Matrix with a single row or column is
    flattened; any other shape raises a ShapeError.
    """
    if isinstance(x, Vector):
        return x
    if isinstance(x, Matrix):
        if x.w == 1 or x.h == 1:
            return x.to_vector()
        msg = "`{}` must be a single row or column, got w={}, h={}"
        raise ShapeError(msg.format(name, x.w, x.h))
    msg = "`{}` must be a Vector or Matrix, got {}"
    raise TypeError(msg.format(name, type(x).__name__))
