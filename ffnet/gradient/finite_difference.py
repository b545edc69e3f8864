""" Central finite-difference estimates of a network's cost gradient, used
to verify the analytic gradients computed by backpropagation.
"""
import numpy

from ffnet.algebra import Matrix, Vector
from ffnet.algebra.vector import as_vector
from ffnet.nn.network import Gradients


DEFAULT_EPSILON = 1e-5


def example_cost(network, x, y):
    """ The network's cost for the single example (x, y)
    """
    return network.cost.calc(network.pred_single(x), as_vector(y, 'y'))


def _slope(network, x, y, param, index, epsilon):
    """ Central difference of the cost with respect to `param[index]`.
    The parameter is restored before returning.
    """
    original = param[index]
    try:
        param[index] = original + epsilon
        cost_plus = example_cost(network, x, y)
        param[index] = original - epsilon
        cost_minus = example_cost(network, x, y)
    finally:
        param[index] = original
    return (cost_plus - cost_minus) / (2.0 * epsilon)


def numerical_gradients(network, x, y, epsilon=DEFAULT_EPSILON):
    """
    Estimate d(cost)/d(param) for every weight and bias by central
    differences.

    Parameters
    ----------
    network: Network
        The network whose current parameters are checked. They are perturbed
        one at a time and restored.

    x, y: Vector
        A single input and its target.

    epsilon: float, default=1e-5
        The perturbation applied on either side of each parameter.

    Returns
    -------
    gradients: Gradients
        Shaped like the network's parameters.
    """
    weight_grads = []
    bias_grads = []

    for layer in network.layers:
        weight_grad = Matrix.zeros(layer.in_shape, layer.out_shape)
        for row in range(layer.out_shape):
            for col in range(layer.in_shape):
                weight_grad[row, col] = _slope(
                    network, x, y, layer.weights, (row, col), epsilon)

        bias_grad = Vector.zeros(layer.out_shape)
        for i in range(layer.out_shape):
            bias_grad[i] = _slope(network, x, y, layer.biases, i, epsilon)

        weight_grads.append(weight_grad)
        bias_grads.append(bias_grad)

    return Gradients(weight_grads, bias_grads)


def max_gradient_error(network, x, y, epsilon=DEFAULT_EPSILON):
    """ The largest absolute difference between the backpropagated and the
    finite-difference gradient over every parameter
    """
    analytic = network.single_case_grad(x, y)
    numerical = numerical_gradients(network, x, y, epsilon=epsilon)

    errors = [
        numpy.abs(a.to_array() - n.to_array()).max()
        for a, n in zip(analytic.weights + analytic.biases,
                        numerical.weights + numerical.biases)
    ]
    return float(max(errors))
