from collections import namedtuple
import logging
import math
import numbers

import numpy

from ffnet.algebra import Matrix, Vector
from ffnet.algebra.vector import as_vector
from ffnet.core.exception import ShapeError, shape_mismatch
from ffnet.core.logger import format_progress
from ffnet.nn.activation import ActivationBase
from ffnet.nn.cost import CostBase, SumSquared
from ffnet.nn.layer import Layer


_logger_name = __name__.rsplit('.', 1)[-1]
logger = logging.getLogger(_logger_name)


# The values seen during one forward pass. `activated[0]` is the input and
# `activated[i+1]`, `unactivated[i]` are the outputs of `layers[i]` after
# and before the activation.
ForwardPass = namedtuple('ForwardPass', ['activated', 'unactivated'])

# Per-layer parameter gradients (or deltas), shaped like the weights and
# biases of each layer
Gradients = namedtuple('Gradients', ['weights', 'biases'])


class Network(object):
    """
    Feed-forward network of fully connected layers trained by mini-batch
    stochastic gradient descent.

    The forward pass returns its intermediate values as a `ForwardPass`
    rather than caching them on the instance, so prediction is reentrant.
    Training mutates the parameters and needs exclusive access.
    """
    def __init__(self, layer_widths, activation, cost=None,
                 random_state=None):
        """
        Parameters
        ----------
        layer_widths: sequence of int
            The width of each layer, input first and output last. There
            are `len(layer_widths) - 1` layers of parameters.

        activation: ActivationBase
            The activation applied by every layer.

        cost: CostBase, default=None
            The cost minimized by `sgd`. None uses SumSquared.

        random_state: numpy.random.RandomState, default=None
            Provide a RandomState object for reproducible results.
        """
        layer_widths = list(layer_widths)

        if len(layer_widths) < 2:
            msg = "At least two layer widths are required, got {}"
            raise ValueError(msg.format(len(layer_widths)))

        for width in layer_widths:
            if not isinstance(width, numbers.Integral) or width < 1:
                msg = "Layer widths must be positive integers, got {!r}"
                raise ValueError(msg.format(width))

        if not isinstance(activation, ActivationBase):
            msg = "`activation` should be an ActivationBase instance, got {}"
            raise TypeError(msg.format(type(activation).__name__))

        cost = SumSquared() if cost is None else cost
        if not isinstance(cost, CostBase):
            msg = "`cost` should be a CostBase instance, got {}"
            raise TypeError(msg.format(type(cost).__name__))

        self.activation = activation
        self.cost = cost
        self.random_state = numpy.random.RandomState() \
            if random_state is None else random_state

        self.layers = [
            Layer(layer_widths[i-1], layer_widths[i], activation)
            for i in range(1, len(layer_widths))
        ]

        self._is_randomized = False
        self._n_updates = 0

    def __repr__(self):
        return "<Network layer_widths=%s, activation=%s, cost=%s>" % (
            self.layer_widths, self.activation, self.cost)

    @property
    def depth(self):
        return len(self.layers)

    @property
    def layer_widths(self):
        return [self.layers[0].in_shape] + [
            layer.out_shape for layer in self.layers]

    @property
    def is_randomized(self):
        return self._is_randomized

    @property
    def is_trained(self):
        """ True once at least one mini-batch update has been applied
        """
        return self._n_updates > 0

    ##########################################################
    # Parameters

    def randomize_params(self):
        """ Re-initialize every layer's parameters uniformly at random
        """
        for layer in self.layers:
            layer.randomize_params(random_state=self.random_state)
        self._is_randomized = True

    def zero_gradients(self):
        """ Zero-valued gradients shaped like every layer's parameters
        """
        return Gradients(
            [Matrix.zeros(layer.in_shape, layer.out_shape)
             for layer in self.layers],
            [Vector.zeros(layer.out_shape) for layer in self.layers])

    def apply_grad(self, deltas):
        """ Add per-layer `deltas` (a Gradients instance) to the parameters
        """
        if len(deltas.weights) != self.depth or \
                len(deltas.biases) != self.depth:
            raise shape_mismatch(
                self.depth, (len(deltas.weights), len(deltas.biases)),
                what="number of layer deltas")

        for layer, weight_delta, bias_delta in zip(
                self.layers, deltas.weights, deltas.biases):
            layer.apply_grad(weight_delta, bias_delta)

    ##########################################################
    # Forward and backward passes

    def forward(self, x):
        """
        Parameters
        ----------
        x: Vector, or Matrix with a single row or column
            The input, of length `layer_widths[0]`.

        Returns
        -------
        forward_pass: ForwardPass
            Every layer's input and its outputs before and after the
            activation.
        """
        activated = [as_vector(x, 'x')]
        unactivated = []

        for layer in self.layers:
            z, a = layer.forward(activated[-1])
            unactivated.append(z)
            activated.append(a)

        return ForwardPass(activated, unactivated)

    def pred_single(self, x):
        """ The network's output (after the last activation) for input `x`
        """
        return self.forward(x).activated[-1]

    def backward(self, forward_pass, target):
        """
        Backpropagate the cost of one example.

        Parameters
        ----------
        forward_pass: ForwardPass
            The result of `forward` for the example.

        target: Vector, or Matrix with a single row or column
            The correct output for the example.

        Returns
        -------
        gradients: Gradients
            The derivative of the cost with respect to every layer's
            weights and biases.
        """
        target = as_vector(target, 'target')
        prediction = forward_pass.activated[-1]

        cost_wrt_output = self.cost.prime(prediction, target)

        weight_grads = [None] * self.depth
        bias_grads = [None] * self.depth

        for i in reversed(range(self.depth)):
            gradient = self.layers[i].backward(
                forward_pass.activated[i],
                forward_pass.unactivated[i],
                cost_wrt_output,
                is_first_layer=(i == 0))

            weight_grads[i] = gradient.weights
            bias_grads[i] = gradient.biases
            cost_wrt_output = gradient.cost_wrt_input

        return Gradients(weight_grads, bias_grads)

    def single_case_grad(self, x, y):
        """ Forward `x` and backpropagate its cost against `y`
        """
        return self.backward(self.forward(x), y)

    ##########################################################
    # Datasets

    def _check_dataset(self, x_rows, y_rows):
        for name, rows in (('x_rows', x_rows), ('y_rows', y_rows)):
            if not isinstance(rows, Matrix):
                msg = "`{}` must be a Matrix, got {}"
                raise TypeError(msg.format(name, type(rows).__name__))

        if x_rows.h != y_rows.h:
            msg = "`x_rows` has {} examples but `y_rows` has {}"
            raise ShapeError(msg.format(x_rows.h, y_rows.h))

        widths = self.layer_widths

        if x_rows.w != widths[0]:
            raise shape_mismatch(widths[0], x_rows.w,
                                 what="feature count (x_rows width)")
        if y_rows.w != widths[-1]:
            raise shape_mismatch(widths[-1], y_rows.w,
                                 what="target count (y_rows width)")

    def predict(self, x_rows):
        """
        Parameters
        ----------
        x_rows: Matrix, w=layer_widths[0]
            Each row of `x_rows` is an example.

        Returns
        -------
        out: Matrix, w=layer_widths[-1], h=x_rows.h
            The prediction for each example, by row.
        """
        if not isinstance(x_rows, Matrix):
            msg = "`x_rows` must be a Matrix, got {}"
            raise TypeError(msg.format(type(x_rows).__name__))
        if x_rows.w != self.layer_widths[0]:
            raise shape_mismatch(self.layer_widths[0], x_rows.w,
                                 what="feature count (x_rows width)")

        out = Matrix.zeros(self.layer_widths[-1], x_rows.h)
        for i in range(x_rows.h):
            for j, value in enumerate(self.pred_single(x_rows.row(i))):
                out[i, j] = value
        return out

    def loss(self, x_rows, y_rows):
        """ The cost summed over every example (row) of the dataset
        """
        self._check_dataset(x_rows, y_rows)
        return sum(
            self.cost.calc(self.pred_single(x_rows.row(i)), y_rows.row(i))
            for i in range(x_rows.h))

    ##########################################################
    # Training

    def sgd(self, x_rows, y_rows, batch_size, learning_rate,
            training_logger=None):
        """
        Run one pass of mini-batch stochastic gradient descent over the
        examples, in the order given.

        The parameters are re-randomized at the start of the call, so any
        previous training is discarded.

        Parameters
        ----------
        x_rows: Matrix, w=layer_widths[0]
            The training inputs, examples by row.

        y_rows: Matrix, w=layer_widths[-1]
            The training targets, examples by row.

        batch_size: int
            Number of examples whose gradients are accumulated before an
            update is applied. A trailing partial batch is applied at the
            end of the pass.

        learning_rate: float
            Each example contributes `-learning_rate / batch_size` times its
            gradient to the update.

        training_logger: logging.Logger, default=None
            Where to log progress. None uses this module's logger.
        """
        log = logger if training_logger is None else training_logger

        self._check_dataset(x_rows, y_rows)

        if isinstance(batch_size, bool) or \
                not isinstance(batch_size, numbers.Integral) or \
                batch_size < 1:
            msg = "`batch_size` must be a positive integer, got {!r}"
            raise ValueError(msg.format(batch_size))

        try:
            learning_rate = float(learning_rate)
        except (ValueError, TypeError):
            msg = "`learning_rate` must be numeric, got {!r}"
            raise ValueError(msg.format(learning_rate))

        if not learning_rate > 0:
            msg = "`learning_rate` must be positive, got {}"
            raise ValueError(msg.format(learning_rate))

        n_examples = x_rows.h
        n_batches = int(math.ceil(n_examples / batch_size))

        msg = ("Starting SGD over {} examples "
               "(batch size = {}, learning rate = {:.7f})")
        log.info(msg.format(n_examples, batch_size, learning_rate))

        self.randomize_params()

        scale = -learning_rate / batch_size
        accumulated = self.zero_gradients()
        n_accumulated = 0
        batch = 0

        for i in range(n_examples):
            gradients = self.single_case_grad(x_rows.row(i), y_rows.row(i))

            accumulated = Gradients(
                [acc + grad * scale
                 for acc, grad in zip(accumulated.weights,
                                      gradients.weights)],
                [acc + grad * scale
                 for acc, grad in zip(accumulated.biases,
                                      gradients.biases)])
            n_accumulated += 1

            is_last_example = (i == n_examples - 1)

            if n_accumulated == batch_size or is_last_example:
                batch += 1
                self.apply_grad(accumulated)
                self._n_updates += 1

                msg = "Applied update from {} examples".format(n_accumulated)
                log.debug(format_progress(msg, batch, n_batches))

                accumulated = self.zero_gradients()
                n_accumulated = 0

        log.info("Finished SGD after {} updates".format(batch))
