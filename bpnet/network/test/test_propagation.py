import unittest

import numpy as np

from bpnet.core.exception import PropagationStateError
from bpnet.data.domain import Domain, Pattern
from bpnet.network.network import Network
from bpnet.network.propagation import (
    backward_propagate_error, calculate_error_derivatives_for_weights,
    forward_propagate, update_weights)
from bpnet.network.transfer import transfer, transfer_derivative


def make_pattern(vector, class_norm=None):
    return Pattern(vector=np.array(vector), class_label=None,
                   class_number=None, class_norm=class_norm)


def make_reference_network():
    network = Network.from_weights([
        [[0.2, 0.2, 0.2], [0.3, 0.3, 0.3]],
        [[0.4, 0.4, 0.4]],
    ])
    (n1, n2), (n3,) = network.layers
    return network, n1, n2, n3


class TestForwardPropagate(unittest.TestCase):

    def setUp(self):
        self.domain = Domain({'A': [[0, 0.4999999], [0, 0.4999999]],
                              'B': [[0.5, 1], [0.5, 1]]})

    def test_forward_propagate(self):

        network, n1, n2, n3 = make_reference_network()
        pattern = make_pattern([0.1, 0.1])

        out_actual, out_class = forward_propagate(
            network, pattern, self.domain)

        # Input layer
        t1 = 0.02 + 0.02 + 0.2
        self.assertAlmostEqual(t1, n1.activation)
        self.assertAlmostEqual(transfer(t1), n1.output)
        t2 = 0.03 + 0.03 + 0.3
        self.assertAlmostEqual(t2, n2.activation)
        self.assertAlmostEqual(transfer(t2), n2.output)

        # Hidden
        t3 = (0.4 * transfer(t1)) + (0.4 * transfer(t2)) + 0.4
        self.assertAlmostEqual(t3, n3.activation)
        self.assertAlmostEqual(transfer(t3), n3.output)

        # Outputs
        self.assertAlmostEqual(transfer(t3), out_actual)
        self.assertAlmostEqual(0.702556520749393, out_actual)
        self.assertEqual('B', out_class)

    def test_forward_propagate_low_output_picks_first_label(self):

        network = Network.from_weights([[[0.0, 0.0, -5.0]]])
        output, label = forward_propagate(
            network, make_pattern([0.3, 0.3]), self.domain)

        self.assertLess(output, 0.5)
        self.assertEqual('A', label)

    def test_forward_propagate_accepts_dict_domain(self):

        network, _, _, _ = make_reference_network()
        regions = {'B': [[0.5, 1], [0.5, 1]],
                   'A': [[0, 0.4999999], [0, 0.4999999]]}

        output, label = forward_propagate(
            network, make_pattern([0.1, 0.1]), regions)

        self.assertAlmostEqual(0.702556520749393, output)
        self.assertEqual('B', label)

    def test_forward_propagate_wrong_input_length(self):

        network, _, _, _ = make_reference_network()

        with self.assertRaises(ValueError):
            forward_propagate(network, make_pattern([0.1, 0.1, 0.1]),
                              self.domain)


class TestBackwardPropagateError(unittest.TestCase):

    def test_backward_propagate_error(self):

        # Target class "B"
        pattern = make_pattern([0.1, 0.1], class_norm=1.0)

        network, n1, n2, n3 = make_reference_network()
        n1.output = transfer(0.02 + 0.02 + 0.2)
        n2.output = transfer(0.03 + 0.03 + 0.3)
        n3.output = transfer((0.4 * n1.output) + (0.4 * n2.output) + 0.4)

        backward_propagate_error(network, pattern)

        # Output node
        e1 = (pattern.class_norm - n3.output) * transfer_derivative(n3.output)
        self.assertAlmostEqual(e1, n3.error_delta)

        # Hidden nodes
        e2 = (0.4 * e1) * transfer_derivative(n1.output)
        self.assertAlmostEqual(e2, n1.error_delta)
        e3 = (0.4 * e1) * transfer_derivative(n2.output)
        self.assertAlmostEqual(e3, n2.error_delta)

    def test_backward_uses_weight_of_upstream_position(self):

        # Two outputs weighting the two hidden nodes differently
        network = Network.from_weights([
            [[0.1, 0.1], [0.2, 0.2]],
            [[1.0, -2.0, 0.0], [3.0, 4.0, 0.0]],
        ])
        (h1, h2), (o1, o2) = network.layers
        h1.output, h2.output = 0.6, 0.3
        o1.output, o2.output = 0.2, 0.9

        backward_propagate_error(network, make_pattern([1.0], 1.0))

        d1 = (1.0 - 0.2) * transfer_derivative(0.2)
        d2 = (1.0 - 0.9) * transfer_derivative(0.9)
        self.assertAlmostEqual(d1, o1.error_delta)
        self.assertAlmostEqual(d2, o2.error_delta)

        self.assertAlmostEqual((1.0 * d1 + 3.0 * d2) * transfer_derivative(0.6),
                               h1.error_delta)
        self.assertAlmostEqual((-2.0 * d1 + 4.0 * d2) * transfer_derivative(0.3),
                               h2.error_delta)

    def test_backward_before_forward_raises(self):

        network, _, _, _ = make_reference_network()

        with self.assertRaises(PropagationStateError):
            backward_propagate_error(network, make_pattern([0.1, 0.1], 1.0))


class TestCalculateErrorDerivatives(unittest.TestCase):

    def test_calculate_error_derivatives_for_weights(self):

        pattern = make_pattern([0.1, 0.1])

        network, n1, n2, n3 = make_reference_network()
        n1.error_delta, n1.output = 0.5, transfer(0.02 + 0.02 + 0.2)
        n2.error_delta, n2.output = -0.6, transfer(0.03 + 0.03 + 0.3)
        n3.error_delta = 0.7
        n3.output = transfer((0.4 * n1.output) + (0.4 * n2.output) + 0.4)

        calculate_error_derivatives_for_weights(network, pattern)

        # Input layer sees the pattern vector, plus the bias input of 1
        self.assertTrue(np.allclose([0.05, 0.05, 0.5], n1.error_derivative))
        self.assertTrue(np.allclose([-0.06, -0.06, -0.6],
                                    n2.error_derivative))

        # The output layer sees the hidden outputs
        expected = [0.7 * n1.output, 0.7 * n2.output, 0.7]
        self.assertTrue(np.allclose(expected, n3.error_derivative))

        for node in (n1, n2, n3):
            self.assertEqual(len(node.weights), len(node.error_derivative))

    def test_derivatives_wrong_input_length(self):

        network, n1, _, _ = make_reference_network()
        pattern = make_pattern([0.1, 0.1], class_norm=1.0)
        domain = Domain({'A': [[0, 0.5], [0, 0.5]], 'B': [[0.5, 1], [0.5, 1]]})

        forward_propagate(network, pattern, domain)
        backward_propagate_error(network, pattern)

        with self.assertRaises(ValueError):
            calculate_error_derivatives_for_weights(
                network, make_pattern([], class_norm=1.0))

        with self.assertRaises(ValueError):
            calculate_error_derivatives_for_weights(
                network, make_pattern([0.1, 0.1, 0.1], class_norm=1.0))

        self.assertIsNone(n1.error_derivative)

    def test_derivatives_match_finite_differences(self):

        random_state = np.random.RandomState(1234)
        network = Network(3, [4, 3, 2, 1], random_state=random_state)
        domain = Domain({'A': [[0, 1]] * 3, 'B': [[0, 1]] * 3})
        pattern = make_pattern(random_state.uniform(-1, 1, size=3),
                               class_norm=1.0)

        def squared_error():
            output, _ = forward_propagate(network, pattern, domain)
            return 0.5 * (pattern.class_norm - output)**2

        forward_propagate(network, pattern, domain)
        backward_propagate_error(network, pattern)
        calculate_error_derivatives_for_weights(network, pattern)

        derivatives = [[node.error_derivative.copy() for node in layer]
                       for layer in network]

        eps = 1e-6
        for ilayer, layer in enumerate(network):
            for inode, node in enumerate(layer):
                for i in range(len(node.weights)):
                    weight = node.weights[i]

                    node.weights[i] = weight + eps
                    error_plus = squared_error()
                    node.weights[i] = weight - eps
                    error_minus = squared_error()
                    node.weights[i] = weight

                    # The derivatives point along the negative error gradient
                    expected = -(error_plus - error_minus) / (2 * eps)
                    self.assertAlmostEqual(
                        expected, derivatives[ilayer][inode][i], places=6)

    def test_derivatives_before_backward_raises(self):

        network, n1, n2, n3 = make_reference_network()

        with self.assertRaises(PropagationStateError):
            calculate_error_derivatives_for_weights(
                network, make_pattern([0.1, 0.1]))


class TestUpdateWeights(unittest.TestCase):

    def test_update_weights(self):

        network = Network.from_weights([[[0.2, 0.2, 0.2]]])
        n1 = network.layers[0][0]
        n1.error_derivative = np.array([0.1, -0.5, 100.0])

        update_weights(network, 1.0)

        self.assertEqual(0.2 + (0.1 * 1.0), n1.weights[0])
        self.assertEqual(0.2 + (-0.5 * 1.0), n1.weights[1])
        self.assertEqual(0.2 + (100.0 * 1.0), n1.weights[2])

    def test_update_weights_scaled_by_learning_rate(self):

        network = Network.from_weights([[[0.0, 1.0]]])
        node = network.layers[0][0]
        node.error_derivative = np.array([2.0, -4.0])

        update_weights(network, 0.25)

        self.assertTrue(np.allclose([0.5, 0.0], node.weights))

    def test_stale_gradient_applied_twice(self):

        network = Network.from_weights([[[0.2, 0.2, 0.2]]])
        n1 = network.layers[0][0]
        n1.error_derivative = np.array([0.1, -0.5, 100.0])

        update_weights(network, 1.0)
        update_weights(network, 1.0)

        expected = np.array([0.2, 0.2, 0.2]) + 2 * n1.error_derivative
        self.assertTrue(np.allclose(expected, n1.weights))

    def test_update_before_derivatives_raises(self):

        network = Network.from_weights([[[0.2, 0.2, 0.2]]])

        with self.assertRaises(PropagationStateError):
            update_weights(network, 1.0)


class TestTrainingStep(unittest.TestCase):

    def test_full_step_reduces_error(self):

        network, _, _, n3 = make_reference_network()
        domain = Domain({'A': [[0, 0.5], [0, 0.5]], 'B': [[0.5, 1], [0.5, 1]]})
        pattern = make_pattern([0.1, 0.1], class_norm=1.0)

        before, _ = forward_propagate(network, pattern, domain)
        backward_propagate_error(network, pattern)
        calculate_error_derivatives_for_weights(network, pattern)
        update_weights(network, 0.5)
        after, _ = forward_propagate(network, pattern, domain)

        self.assertGreater(after, before)
