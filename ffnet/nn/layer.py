from collections import namedtuple

from ffnet.algebra import Matrix, Vector
from ffnet.core.exception import check_length


PARAM_INIT_LOW = -0.3
PARAM_INIT_HIGH = 0.3


# Returned by Layer.backward; `cost_wrt_input` is None for the first layer
LayerGradient = namedtuple(
    'LayerGradient',
    ['weights', 'biases', 'cost_wrt_input'])


class Layer(object):
    """
    Fully connected layer computing `activation(weights @ x + biases)`.

    params: weights, Matrix with w=in_shape, h=out_shape, where
                weights[i, j] = weight from input j to output unit i.
            biases, Vector of length out_shape.

    A freshly constructed layer has every weight set to 1.0 and every bias
    set to 0.0.
    """
    def __init__(self, in_shape, out_shape, activation):
        self.in_shape = in_shape
        self.out_shape = out_shape
        self.activation = activation

        self.weights = Matrix.uniform(1.0, w=in_shape, h=out_shape)
        self.biases = Vector.zeros(out_shape)

    def __repr__(self):
        return "<Layer in_shape=%d, out_shape=%d, activation=%s>" % (
            self.in_shape, self.out_shape, self.activation)

    def forward(self, x):
        """
        Parameters
        ----------
        x: Vector, len=in_shape
            The input to the layer.

        Returns
        -------
        unactivated, activated: Vector, Vector (len=out_shape)
            The output before and after the activation is applied.
        """
        check_length(x, self.in_shape, what="layer input length")

        unactivated = self.weights @ x + self.biases
        activated = unactivated.apply(self.activation.calc)

        return unactivated, activated

    def backward(self, layer_input, unactivated, cost_wrt_output,
                 is_first_layer=False):
        """
        Compute the gradient of the cost with respect to this layer's
        parameters from the values seen during one forward pass.

        Parameters
        ----------
        layer_input: Vector, len=in_shape
            The input passed to `forward`.

        unactivated: Vector, len=out_shape
            The pre-activation output returned by `forward`.

        cost_wrt_output: Vector, len=out_shape
            Derivative of the cost with respect to the activated output.

        is_first_layer: bool, default=False
            If True, the derivative with respect to the input is not
            computed since no upstream layer consumes it.

        Returns
        -------
        gradient: LayerGradient
            (weights, biases, cost_wrt_input), where `cost_wrt_input` is
            the `cost_wrt_output` of the preceding layer.
        """
        check_length(layer_input, self.in_shape, what="layer input length")
        check_length(unactivated, self.out_shape,
                     what="unactivated output length")
        check_length(cost_wrt_output, self.out_shape,
                     what="cost_wrt_output length")

        # Chain rule through the activation
        output_wrt_unactivated = unactivated.apply(self.activation.prime)
        cost_wrt_unactivated = cost_wrt_output.hadamard(
            output_wrt_unactivated)

        weight_grad = cost_wrt_unactivated.outer_prod(layer_input)

        if is_first_layer:
            cost_wrt_input = None
        else:
            cost_wrt_input = self.weights.transposed() @ cost_wrt_unactivated

        return LayerGradient(weight_grad, cost_wrt_unactivated,
                             cost_wrt_input)

    def apply_grad(self, weight_delta, bias_delta):
        """ Add the deltas to the parameters. Callers scale the deltas
        negatively to descend.
        """
        self.weights = self.weights + weight_delta
        self.biases = self.biases + bias_delta

    def randomize_params(self, random_state=None):
        """
        Draw every weight and bias uniformly from
        `[PARAM_INIT_LOW, PARAM_INIT_HIGH)`.
        """
        self.weights = Matrix.random(PARAM_INIT_LOW, PARAM_INIT_HIGH,
                                     w=self.in_shape, h=self.out_shape,
                                     random_state=random_state)
        self.biases = Vector.random(PARAM_INIT_LOW, PARAM_INIT_HIGH,
                                    shape=self.out_shape,
                                    random_state=random_state)
