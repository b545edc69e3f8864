import numpy

from ffnet.core.exception import ShapeError


def mean_cost(network, x_rows, y_rows):
    """ The network's cost averaged over the examples (rows) of a dataset
    """
    if x_rows.h == 0:
        raise ValueError("Cannot score an empty dataset")
    return network.loss(x_rows, y_rows) / x_rows.h


def accuracy(network, x_rows, y_rows):
    """ Fraction of examples whose largest predicted output is at the
    position of the largest target value (e.g., the hot entry of a one-hot
    target)
    """
    if x_rows.h == 0:
        raise ValueError("Cannot score an empty dataset")

    predictions = network.predict(x_rows).to_array()
    targets = y_rows.to_array()

    if predictions.shape != targets.shape:
        msg = "Predictions have shape {} but targets have shape {}"
        raise ShapeError(msg.format(predictions.shape, targets.shape))

    correct = predictions.argmax(axis=1) == targets.argmax(axis=1)
    return float(numpy.mean(correct))
