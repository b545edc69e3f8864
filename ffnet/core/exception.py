

class ShapeError(ValueError):
    """ Raised when the dimensions of an operand do not match what an
    operation requires
    """


def shape_mismatch(expected, actual, what="shape"):
    """ Builds a ShapeError naming the expected and actual dimensions
    """
    msg = "{} mismatch: expected {}, got {}"
    return ShapeError(msg.format(what, expected, actual))


def check_length(container, expected, what):
    """ Raise a ShapeError unless `len(container) == expected`
    """
    if len(container) != expected:
        raise shape_mismatch(expected, len(container), what=what)
