import unittest

import numpy as np

from ffnet.algebra import Matrix, Vector
from ffnet.core.exception import ShapeError
from ffnet.data import separable
from ffnet.nn.activation import ReLU, Sigmoid, Softplus
from ffnet.nn.cost import SumSquared
from ffnet.nn.network import Network


ERROR_MARGIN = 1e-5


class TestNetwork(unittest.TestCase):

    def setUp(self):
        self.random_state = np.random.RandomState(1234)

    def test_fixed_weight_computation(self):

        x = Vector([-1.9, 2.5])
        expected = [(ReLU(), 0.6), (Softplus(), 1.03748), (Sigmoid(), 0.64565)]

        for activation, value in expected:
            network = Network([2, 1], activation)
            result = network.pred_single(x)

            self.assertEqual(len(result), 1)
            self.assertAlmostEqual(result[0], value, delta=ERROR_MARGIN,
                                   msg=str(activation))

    def test_pred_single_accepts_row_or_column(self):
        network = Network([2, 1], Softplus())

        expected = network.pred_single(Vector([-1.9, 2.5]))

        self.assertEqual(
            network.pred_single(Matrix([-1.9, 2.5], w=2, h=1)), expected)
        self.assertEqual(
            network.pred_single(Matrix([-1.9, 2.5], w=1, h=2)), expected)

        with self.assertRaises(ShapeError):
            network.pred_single(Matrix.zeros(w=2, h=2))
        with self.assertRaises(ShapeError):
            network.pred_single(Vector([1., 2., 3.]))

    def test_construction(self):
        network = Network([4, 3, 2], ReLU())

        self.assertEqual(network.depth, 2)
        self.assertEqual(network.layer_widths, [4, 3, 2])
        self.assertEqual(network.cost, SumSquared())
        self.assertFalse(network.is_randomized)
        self.assertFalse(network.is_trained)

        with self.assertRaises(ValueError):
            Network([4], ReLU())
        with self.assertRaises(ValueError):
            Network([4, 0, 2], ReLU())
        with self.assertRaises(TypeError):
            Network([4, 2], 'relu')

    def test_forward_pass_values(self):
        network = Network([3, 4, 2], Sigmoid(), random_state=self.random_state)
        network.randomize_params()
        x = Vector(self.random_state.randn(3))

        forward_pass = network.forward(x)

        self.assertEqual(len(forward_pass.activated), 3)
        self.assertEqual(len(forward_pass.unactivated), 2)
        self.assertEqual(forward_pass.activated[0], x)
        self.assertEqual(forward_pass.activated[-1], network.pred_single(x))

    def test_interleaved_forward_passes(self):
        network = Network([3, 4, 2], Sigmoid(), random_state=self.random_state)
        network.randomize_params()

        x1, x2 = Vector(self.random_state.randn(3)), \
            Vector(self.random_state.randn(3))
        y1 = Vector([1., 0.])

        first = network.forward(x1)
        network.forward(x2)

        gradients = network.backward(first, y1)
        expected = network.single_case_grad(x1, y1)

        for a, b in zip(gradients.weights + gradients.biases,
                        expected.weights + expected.biases):
            self.assertEqual(a, b)

    def test_backward_shapes(self):
        network = Network([5, 3, 2], ReLU(), random_state=self.random_state)
        network.randomize_params()

        gradients = network.single_case_grad(
            Vector(self.random_state.randn(5)), Vector([0., 1.]))

        self.assertEqual([(g.w, g.h) for g in gradients.weights],
                         [(5, 3), (3, 2)])
        self.assertEqual([len(g) for g in gradients.biases], [3, 2])

    def test_predict_and_loss(self):
        network = Network([2, 3, 2], Softplus(), random_state=self.random_state)
        network.randomize_params()

        x = Matrix.random(-1, 1, w=2, h=5, random_state=self.random_state)
        y = Matrix.random(0, 1, w=2, h=5, random_state=self.random_state)

        predictions = network.predict(x)

        self.assertEqual((predictions.w, predictions.h), (2, 5))
        for i in range(5):
            self.assertEqual(predictions.row(i), network.pred_single(x.row(i)))

        expected = sum(SumSquared.calc(predictions.row(i), y.row(i))
                       for i in range(5))
        self.assertAlmostEqual(network.loss(x, y), expected)

    def test_sgd_reduces_cost(self):
        x, y, _ = separable.make(n_examples=200, n_features=2, margin=0.5,
                                 rs=np.random.RandomState(1234))

        # Same seed => the same parameters sgd starts from
        untrained = Network([2, 2], Sigmoid(),
                            random_state=np.random.RandomState(4321))
        untrained.randomize_params()
        cost_before = untrained.loss(x, y)

        network = Network([2, 2], Sigmoid(),
                          random_state=np.random.RandomState(4321))
        network.sgd(x, y, batch_size=1, learning_rate=0.5)
        cost_after = network.loss(x, y)

        self.assertTrue(network.is_randomized)
        self.assertTrue(network.is_trained)
        self.assertLess(cost_after, cost_before)

    def test_sgd_batches(self):
        x = Matrix.random(-1, 1, w=3, h=10, random_state=self.random_state)
        y = Matrix.random(0, 1, w=2, h=10, random_state=self.random_state)
        network = Network([3, 2], Sigmoid(), random_state=self.random_state)

        with self.assertLogs('network', level='DEBUG') as logs:
            network.sgd(x, y, batch_size=4, learning_rate=0.1)

        updates = [line for line in logs.output if 'Applied update' in line]
        self.assertEqual(len(updates), 3)
        self.assertIn('from 2 examples', updates[-1])

    def test_sgd_single_batch_matches_manual_update(self):
        x = Matrix.random(-1, 1, w=3, h=4, random_state=self.random_state)
        y = Matrix.random(0, 1, w=2, h=4, random_state=self.random_state)

        network = Network([3, 2], Sigmoid(),
                          random_state=np.random.RandomState(99))
        network.sgd(x, y, batch_size=4, learning_rate=0.2)

        manual = Network([3, 2], Sigmoid(),
                         random_state=np.random.RandomState(99))
        manual.randomize_params()
        deltas = manual.zero_gradients()
        for i in range(4):
            grads = manual.single_case_grad(x.row(i), y.row(i))
            deltas = type(deltas)(
                [d + g * (-0.2 / 4) for d, g in zip(deltas.weights,
                                                    grads.weights)],
                [d + g * (-0.2 / 4) for d, g in zip(deltas.biases,
                                                    grads.biases)])
        manual.apply_grad(deltas)

        self.assertTrue(np.allclose(network.layers[0].weights.to_array(),
                                    manual.layers[0].weights.to_array()))
        self.assertTrue(np.allclose(network.layers[0].biases.to_array(),
                                    manual.layers[0].biases.to_array()))

    def test_sgd_invalid_arguments(self):
        x = Matrix.zeros(w=3, h=4)
        y = Matrix.zeros(w=2, h=4)
        network = Network([3, 2], ReLU())

        with self.assertRaises(ValueError):
            network.sgd(x, y, batch_size=0, learning_rate=0.1)
        with self.assertRaises(ValueError):
            network.sgd(x, y, batch_size=2, learning_rate=-0.1)
        with self.assertRaises(ValueError):
            network.sgd(x, y, batch_size=2, learning_rate='fast')
        with self.assertRaises(ShapeError):
            network.sgd(x, Matrix.zeros(w=2, h=3), batch_size=2,
                        learning_rate=0.1)
        with self.assertRaises(ShapeError):
            network.sgd(Matrix.zeros(w=2, h=4), y, batch_size=2,
                        learning_rate=0.1)

        self.assertFalse(network.is_trained)


if __name__ == '__main__':
    unittest.main()
