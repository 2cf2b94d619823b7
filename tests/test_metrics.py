#!/usr/bin/env python3
"""
Unit tests for mean squared error and difference images
"""

import math
import unittest
from decimal import Decimal
from fractions import Fraction

import numpy as np

from floatmap import DimensionMismatch, FloatMapImage, difference, mse, psnr


class TestMSE(unittest.TestCase):
    """Test the high precision mean squared error"""

    def setUp(self):
        rng = np.random.default_rng(1234)
        self.a = FloatMapImage(16, 8, rng.random(3 * 16 * 8))
        self.b = FloatMapImage(16, 8, rng.random(3 * 16 * 8))

    def test_self_comparison_is_zero(self):
        self.assertEqual(mse(self.a, self.a), 0.0)

    def test_symmetry(self):
        self.assertEqual(mse(self.a, self.b), mse(self.b, self.a))

    def test_dimension_mismatch(self):
        with self.assertRaises(DimensionMismatch):
            mse(self.a, FloatMapImage(8, 16, np.zeros(3 * 128)))
        with self.assertRaises(DimensionMismatch):
            mse(self.a, FloatMapImage(16, 7, np.zeros(16 * 7)))

    def test_divides_by_pixel_count(self):
        black = FloatMapImage(4, 4, np.zeros(48))
        white = FloatMapImage(4, 4, np.ones(48))
        self.assertEqual(mse(black, white), 3.0)

    def test_gray_against_color(self):
        black = FloatMapImage(128, 128, np.zeros(128 * 128))
        white = FloatMapImage(128, 128, np.ones(3 * 128 * 128))
        self.assertEqual(mse(black, white), 3.0)
        self.assertEqual(mse(white, black), 3.0)

    def test_gray_broadcast_per_channel(self):
        gray = FloatMapImage(1, 1, [0.5])
        color = FloatMapImage(1, 1, [0.0, 0.5, 1.0])
        self.assertEqual(mse(gray, color), 0.5)

    def test_matches_exact_sum(self):
        # sum over i of (i - 1)^2, divided by the resolution
        width = height = 8
        ramp = FloatMapImage(width, height, np.arange(3 * width * height))
        white = FloatMapImage(width, height, np.ones(3 * width * height))
        expected = sum(Decimal(i - 1) ** 2 for i in range(3 * width * height)) / (width * height)
        self.assertEqual(mse(ramp, white), float(expected))

    def test_tiny_differences_do_not_vanish(self):
        # 1 + 2**-54 == 1 in double precision, every tiny term would be lost
        n = 256
        a = np.zeros(n * n, dtype=np.float32)
        b = np.full(n * n, 2.0 ** -27, dtype=np.float32)
        b[0] = 1.0
        err = mse(FloatMapImage(n, n, a), FloatMapImage(n, n, b))
        expected = (Fraction(1) + (n * n - 1) * Fraction(1, 2 ** 54)) / (n * n)
        self.assertEqual(err, float(expected))
        self.assertNotEqual(err, 1.0 / (n * n))


class TestNonFiniteSamples(unittest.TestCase):
    """Test mse with infinities and NaN samples"""

    def test_self_comparison_with_infinity(self):
        image = FloatMapImage(2, 1, [float('inf'), 0.5])
        self.assertEqual(mse(image, image), 0.0)

    def test_self_comparison_with_nan(self):
        image = FloatMapImage(2, 1, [float('nan'), 0.5])
        self.assertEqual(mse(image, image), 0.0)
        self.assertEqual(mse(image, image.copy()), 0.0)

    def test_mixed_modes_with_infinity(self):
        gray = FloatMapImage(1, 1, [float('-inf')])
        color = FloatMapImage(1, 1, [float('-inf')] * 3)
        self.assertEqual(mse(gray, color), 0.0)

    def test_different_infinity(self):
        a = FloatMapImage(2, 1, [float('inf'), 0.5])
        b = FloatMapImage(2, 1, [float('-inf'), 0.5])
        self.assertEqual(mse(a, b), float('inf'))
        self.assertEqual(psnr(a, b), float('-inf'))

    def test_nan_against_number(self):
        a = FloatMapImage(2, 1, [float('nan'), 0.5])
        b = FloatMapImage(2, 1, [float('inf'), 0.5])
        self.assertTrue(math.isnan(mse(a, b)))
        self.assertTrue(math.isnan(mse(b, a)))


class TestPSNR(unittest.TestCase):

    def test_identical_is_infinite(self):
        image = FloatMapImage(2, 2, np.ones(4))
        self.assertTrue(math.isinf(psnr(image, image)))

    def test_known_value(self):
        a = FloatMapImage(1, 1, [0.0])
        b = FloatMapImage(1, 1, [0.1])
        self.assertAlmostEqual(psnr(a, b), 20.0, places=5)


class TestDifference(unittest.TestCase):
    """Test absolute difference images"""

    def test_self_difference_is_zero(self):
        image = FloatMapImage(3, 2, np.random.default_rng(7).random(6))
        diff = difference(image, image)
        self.assertTrue(diff.color)
        self.assertEqual((diff.width, diff.height), (3, 2))
        self.assertTrue(np.all(diff.samples == 0.0))

    def test_mixed_modes_and_scale(self):
        gray = FloatMapImage(2, 1, [0.5, 1.0])
        color = FloatMapImage(2, 1, [0.0, 0.5, 1.0, 1.0, 1.0, 0.0])
        diff = difference(gray, color, scale=2)
        self.assertTrue(diff.color)
        self.assertEqual(diff.color_at(0, 0), (1.0, 0.0, 1.0))
        self.assertEqual(diff.color_at(1, 0), (0.0, 0.0, 2.0))

    def test_non_square_layout(self):
        a = FloatMapImage(3, 1, [0.0, 0.0, 0.0])
        b = FloatMapImage(3, 1, [1.0, 2.0, 3.0])
        diff = difference(a, b)
        self.assertEqual([diff.color_at(x, 0)[0] for x in range(3)], [1.0, 2.0, 3.0])

    def test_dimension_mismatch(self):
        with self.assertRaises(DimensionMismatch):
            difference(FloatMapImage(2, 1, [0, 0]), FloatMapImage(1, 2, [0, 0]))


if __name__ == '__main__':
    unittest.main(verbosity=2)
