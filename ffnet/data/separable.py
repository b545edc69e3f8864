import logging

import numpy

from ffnet.algebra import Matrix


logger = logging.getLogger(__name__)


def make(n_examples=100, n_features=2, margin=0.5, scale=1.0, rs=None):
    """
    Make a two-class dataset separated by a random hyperplane through the
    origin.

    Parameters
    ----------
    n_examples: int, default=100
        Number of examples (rows).

    n_features: int, default=2
        Number of input features (columns of `x`).

    margin: float, default=0.5
        Every point lies at least this distance from the separating
        hyperplane.

    scale: float, default=1.0
        Standard deviation of the Gaussian the points are drawn from
        (before being pushed away from the hyperplane).

    rs: numpy.random.RandomState
        RandomState object for reproducible results.

    Returns
    -------
    x, y, meta : Matrix, Matrix, dict
        The features (w=n_features, h=n_examples), the one-hot targets
        (w=2, h=n_examples; column 1 is hot on the positive side of the
        hyperplane), and a dictionary of the parameters used.
    """
    if n_examples < 1:
        raise ValueError("`n_examples` should be positive.")
    if n_features < 1:
        raise ValueError("`n_features` should be positive.")
    if margin < 0:
        raise ValueError("`margin` should be non-negative.")
    if scale <= 0:
        raise ValueError("`scale` should be positive.")

    rs = rs if rs is not None else numpy.random.RandomState()

    normal = rs.randn(n_features)
    normal /= numpy.linalg.norm(normal)

    points = scale * rs.randn(n_examples, n_features)
    side = numpy.where(points.dot(normal) >= 0, 1.0, -1.0)

    # Push each point away from the hyperplane along its normal.
    points += margin * side[:, None] * normal[None, :]

    labels = (side > 0).astype(int)
    targets = numpy.zeros((n_examples, 2))
    targets[numpy.arange(n_examples), labels] = 1.0

    logger.debug("Made separable dataset with %d examples (%d positive)",
                 n_examples, labels.sum())

    meta = dict(n_examples=n_examples, n_features=n_features,
                margin=margin, scale=scale, normal=normal)

    return Matrix.from_array(points), Matrix.from_array(targets), meta
