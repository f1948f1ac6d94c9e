"""
tests for pen-variant width / alpha and the grain hash.
"""
import sys
import os
import math

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import unittest
from core.pen_dynamics import (
    grain_hash, speed_factor, modulated_width, segment_style,
)


class TestGrainHash(unittest.TestCase):

    def test_in_unit_range(self):
        for i in range(50):
            h = grain_hash(i * 3.7, i * -1.3, i)
            self.assertGreaterEqual(h, 0.0)
            self.assertLess(h, 1.0)

    def test_deterministic(self):
        self.assertEqual(grain_hash(123.5, 88.25, 2), grain_hash(123.5, 88.25, 2))

    def test_varies_with_index(self):
        values = {grain_hash(10.0, 20.0, i) for i in range(4)}
        self.assertGreater(len(values), 1)


class TestSpeed(unittest.TestCase):

    def test_speed_factor_saturates(self):
        self.assertEqual(speed_factor(100, 8), 1.0)
        self.assertAlmostEqual(speed_factor(4, 8), 0.5)

    def test_no_divisor_means_constant(self):
        self.assertEqual(speed_factor(100, None), 0.0)

    def test_width_interpolation(self):
        # pen 10, ballpoint range 7..12, divisor 8
        self.assertAlmostEqual(modulated_width(0, 10, 0.7, 1.2, 8), 12.0)
        self.assertAlmostEqual(modulated_width(4, 10, 0.7, 1.2, 8), 9.5)
        self.assertAlmostEqual(modulated_width(80, 10, 0.7, 1.2, 8), 7.0)


class TestVariants(unittest.TestCase):

    def test_normal_pen(self):
        look = segment_style("normal", (0, 0), (25, 0), 4)
        self.assertAlmostEqual(look.width, 4.0)
        self.assertEqual(look.alpha, 1.0)
        self.assertEqual(look.grain, ())

    def test_unknown_variant_falls_back_to_normal(self):
        look = segment_style("crayon", (0, 0), (25, 0), 4)
        self.assertAlmostEqual(look.width, 4.0)

    def test_ballpoint_alpha(self):
        self.assertEqual(segment_style("ballpoint", (0, 0), (3, 0), 5).alpha, 0.95)

    def test_fountain_thinner_on_diagonal(self):
        """same length, 45 degrees vs horizontal"""
        d = 6.0
        flat = segment_style("fountain", (0, 0), (d, 0), 10)
        diag = segment_style("fountain", (0, 0), (d / math.sqrt(2), d / math.sqrt(2)), 10)
        self.assertAlmostEqual(flat.width - diag.width, 0.3 * 10, places=6)

    def test_fountain_never_below_min(self):
        look = segment_style("fountain", (0, 0), (100, 100), 10)
        self.assertAlmostEqual(look.width, 4.0)

    def test_brush_width_range(self):
        slow = segment_style("brush", (0, 0), (0.6, 0), 5)
        fast = segment_style("brush", (0, 0), (60, 0), 5)
        self.assertLessEqual(slow.width, 10.0)
        self.assertAlmostEqual(fast.width, 4.0)

    def test_pencil_has_two_grain_strands(self):
        look = segment_style("pencil", (10, 10), (20, 15), 6)
        self.assertEqual(len(look.grain), 2)
        for strand in look.grain:
            self.assertLessEqual(abs(strand.offset), 6 * 0.15)
            self.assertAlmostEqual(strand.width, 6 * 0.4)
            self.assertGreaterEqual(strand.alpha, 0.3)
            self.assertLessEqual(strand.alpha, 0.5)

    def test_brush_has_four_grain_strands(self):
        look = segment_style("brush", (10, 10), (20, 15), 6)
        self.assertEqual(len(look.grain), 4)
        for strand in look.grain:
            self.assertLessEqual(abs(strand.offset), look.width * 0.3)

    def test_grain_reproducible(self):
        """same endpoints always give the same jitter"""
        a = segment_style("brush", (31.5, 77.0), (40.25, 80.5), 8)
        b = segment_style("brush", (31.5, 77.0), (40.25, 80.5), 8)
        self.assertEqual(a, b)

    def test_grain_depends_on_endpoints(self):
        a = segment_style("pencil", (31.5, 77.0), (40.25, 80.5), 8)
        b = segment_style("pencil", (32.5, 77.0), (40.25, 81.5), 8)
        self.assertNotEqual(a.grain, b.grain)


if __name__ == "__main__":
    unittest.main()
