import numpy

from ffnet.algebra.dense_base import DenseBase
from ffnet.core.exception import ShapeError, shape_mismatch


class Matrix(DenseBase):
    """
    Dense matrix stored as a flat, row-major buffer.

    The entry at (row, col) lives at buffer position `row*w + col`, where
    `w` is the width (number of columns) and `h` the height (number of
    rows).

    Multiplication follows one convention throughout the package: for
    `lhs @ rhs` the inner dimensions `lhs.w` and `rhs.h` must agree and the
    result has height `lhs.h` and width `rhs.w`.
    """
    def __init__(self, data, w, h, dtype=float):
        """
        Parameters
        ----------
        data: sequence or ndarray
            The entries in row-major order. Multi-dimensional arrays are
            flattened in C order.

        w, h: int
            Width (columns) and height (rows).

        dtype: numpy dtype, default=float
            The scalar type of the buffer.
        """
        if w < 0 or h < 0:
            msg = "Matrix dimensions must be non-negative, got w={}, h={}"
            raise ShapeError(msg.format(w, h))

        data = numpy.array(data, dtype=dtype).ravel()

        if data.shape[0] != w * h:
            msg = ("Buffer length {} does not match shape "
                   "(w={}, h={}, expected length {})")
            raise ShapeError(msg.format(data.shape[0], w, h, w * h))

        self._data = data
        self._w = int(w)
        self._h = int(h)

    @classmethod
    def _wrap(cls, data, w, h):
        # Takes ownership of `data` without copying or validating
        matrix = cls.__new__(cls)
        matrix._data = data
        matrix._w = w
        matrix._h = h
        return matrix

    def _new_like(self, data):
        return Matrix._wrap(data, self._w, self._h)

    def __repr__(self):
        return "Matrix(w={}, h={}, data={})".format(
            self._w, self._h, self._data.tolist())

    @property
    def w(self):
        return self._w

    @property
    def h(self):
        return self._h

    @property
    def dims(self):
        return (self._w, self._h)

    ##########################################################
    # Construction

    @classmethod
    def uniform(cls, value, w, h, dtype=float):
        """ A `w` by `h` matrix with every entry equal to `value`
        """
        return cls._wrap(numpy.full(w * h, value, dtype=dtype), w, h)

    @classmethod
    def zeros(cls, w, h, dtype=float):
        return cls.uniform(0, w, h, dtype=dtype)

    @classmethod
    def identity(cls, n, dtype=float):
        return cls._wrap(numpy.eye(n, dtype=dtype).ravel(), n, n)

    @classmethod
    def random(cls, low, high, w, h, random_state=None):
        """ A `w` by `h` matrix whose entries are drawn independently and
        uniformly from `[low, high)`

        random_state: numpy.random.RandomState, default=None
            Provide a RandomState object for reproducible results.
        """
        rs = numpy.random.RandomState() if random_state is None \
            else random_state
        return cls._wrap(rs.uniform(low, high, size=w * h), w, h)

    @classmethod
    def from_rows(cls, rows, dtype=float):
        """ Build a matrix from a sequence of equal-length rows
        """
        rows = [list(row) for row in rows]
        h = len(rows)
        w = len(rows[0]) if h > 0 else 0

        for i, row in enumerate(rows):
            if len(row) != w:
                msg = "Row {} has length {} but row 0 has length {}"
                raise ShapeError(msg.format(i, len(row), w))

        return cls([x for row in rows for x in row], w, h, dtype=dtype)

    @classmethod
    def from_array(cls, arr):
        """ Build a matrix from a two-dimensional numpy array (rows by
        columns)
        """
        arr = numpy.asarray(arr)
        if arr.ndim != 2:
            msg = "Expected a two-dimensional array, got {} dimensions"
            raise ShapeError(msg.format(arr.ndim))
        return cls(arr, w=arr.shape[1], h=arr.shape[0], dtype=arr.dtype)

    def to_array(self):
        """ A copy of the entries as an ndarray of shape (h, w)
        """
        return self._data.reshape(self._h, self._w).copy()

    def to_vector(self):
        """ The buffer, in row-major order, as a Vector
        """
        from ffnet.algebra.vector import Vector
        return Vector._wrap(self._data.copy())

    ##########################################################
    # Indexing

    def _flat_index(self, index):
        try:
            row, col = index
        except (TypeError, ValueError):
            msg = "Matrix index must be a (row, col) pair, got {!r}"
            raise TypeError(msg.format(index))

        if not 0 <= row < self._h:
            msg = "Row index {} out of range for matrix of height {}"
            raise IndexError(msg.format(row, self._h))
        if not 0 <= col < self._w:
            msg = "Column index {} out of range for matrix of width {}"
            raise IndexError(msg.format(col, self._w))

        return row * self._w + col

    def __getitem__(self, index):
        return self._data[self._flat_index(index)].item()

    def __setitem__(self, index, value):
        self._data[self._flat_index(index)] = value

    def clone_row(self, i):
        """ A 1 x w matrix (h == 1) holding a copy of row `i`
        """
        if not 0 <= i < self._h:
            msg = "Row index {} out of range for matrix of height {}"
            raise IndexError(msg.format(i, self._h))
        row = self._data[i * self._w:(i + 1) * self._w].copy()
        return Matrix._wrap(row, self._w, 1)

    def row(self, i):
        """ A copy of row `i` as a Vector
        """
        return self.clone_row(i).to_vector()

    ##########################################################
    # Shape manipulation

    def transpose(self):
        """ Transpose in place and return the matrix itself.

        When either new dimension is 1 the row-major order of the buffer is
        unchanged, so only the shape is relabelled.
        """
        self._w, self._h = self._h, self._w

        if self._w == 1 or self._h == 1:
            return self

        # The buffer still has the pre-transpose layout: rows of length
        # self._h (the old width).
        self._data = self._data.reshape(self._w, self._h).T.ravel()
        return self

    def transposed(self):
        """ A transposed copy; `self` is left unchanged
        """
        return Matrix._wrap(self._data.copy(), self._w, self._h).transpose()

    ##########################################################
    # Products

    def _as_2d(self):
        return self._data.reshape(self._h, self._w)

    def __matmul__(self, other):
        from ffnet.algebra.vector import Vector

        if isinstance(other, Vector):
            if self._w != len(other):
                raise shape_mismatch(
                    self._w, len(other),
                    what="matrix-vector inner dimension (matrix w, vector "
                         "length)")
            return Vector._wrap(numpy.dot(self._as_2d(), other._data))

        if isinstance(other, Matrix):
            if self._w != other._h:
                msg = ("Inner dimensions do not match for matrix product "
                       "(lhs w: {}, rhs h: {})")
                raise ShapeError(msg.format(self._w, other._h))
            out = numpy.dot(self._as_2d(), other._as_2d())
            return Matrix._wrap(out.ravel(), other._w, self._h)

        return NotImplemented
