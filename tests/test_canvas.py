"""
tests for the raster surface and the pen / eraser renderers on top of it.
"""
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import tempfile
import unittest

import cv2
import numpy as np

from app.canvas import Canvas
from app.tools import Pen, Eraser
from core.state_manager import StateManager
from core.stroke_sampler import StrokeSampler


def sample_between(prev, curr, **settings):
    state = StateManager()
    state.update(settings)
    sampler = StrokeSampler(state)
    sampler.append_sample(prev)
    return sampler.append_sample(curr)


class TestCanvas(unittest.TestCase):

    def test_starts_blank(self):
        c = Canvas(64, 48)
        self.assertEqual(c.surface.shape, (48, 64, 3))
        self.assertEqual(c.ink_pixels(), 0)

    def test_line_leaves_ink(self):
        c = Canvas(64, 48)
        c.draw_line((5, 5), (50, 40), (0, 0, 0), 3)
        self.assertGreater(c.ink_pixels(), 0)
        self.assertEqual(len(c.ops), 1)

    def test_translucent_line_is_lighter(self):
        solid = Canvas(64, 48)
        faint = Canvas(64, 48)
        solid.draw_line((5, 24), (60, 24), (0, 0, 0), 5)
        faint.draw_line((5, 24), (60, 24), (0, 0, 0), 5, alpha=0.3)
        self.assertLess(int(solid.surface[24, 30].sum()), int(faint.surface[24, 30].sum()))

    def test_offscreen_translucent_line(self):
        c = Canvas(64, 48)
        c.draw_line((-50, -50), (-40, -40), (0, 0, 0), 2, alpha=0.5)
        self.assertEqual(c.ink_pixels(), 0)

    def test_none_points_ignored(self):
        c = Canvas(64, 48)
        c.draw_line(None, (5, 5), (0, 0, 0), 2)
        self.assertEqual(c.ops, [])

    def test_clear(self):
        c = Canvas(64, 48)
        c.draw_dot((20, 20), 6, (0, 0, 0))
        c.clear()
        self.assertEqual(c.ink_pixels(), 0)
        self.assertEqual(c.ops, [])

    def test_erase_restores_background(self):
        c = Canvas(64, 48)
        c.draw_line((5, 24), (60, 24), (0, 0, 0), 3)
        c.erase_line((0, 24), (63, 24), 12)
        self.assertEqual(c.ink_pixels(), 0)

    def test_snapshot_is_a_copy(self):
        c = Canvas(16, 16)
        snap = c.snapshot()
        c.draw_line((0, 0), (15, 15), (0, 0, 0), 2)
        self.assertTrue(np.all(snap == 255))

    def test_save_writes_image(self):
        c = Canvas(64, 48)
        c.draw_line((5, 5), (50, 40), (0, 0, 255), 3)
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "board.png")
            self.assertEqual(c.save(path), path)
            image = cv2.imread(path)
        self.assertEqual(image.shape, (48, 64, 3))
        self.assertTrue(np.array_equal(image, c.surface))


class TestPenRenderer(unittest.TestCase):

    def test_normal_pen_one_op(self):
        c = Canvas(100, 100)
        Pen().draw(c, sample_between((10, 10), (60, 10)), (0, 0, 0))
        self.assertEqual(len(c.ops), 1)

    def test_pencil_adds_grain(self):
        c = Canvas(100, 100)
        Pen().draw(c, sample_between((10, 10), (60, 30), pen_variant="pencil"), (0, 0, 0))
        self.assertEqual(len(c.ops), 3)
        for op in c.ops[1:]:
            self.assertLess(op.alpha, 0.6)

    def test_brush_grain_parallel_to_segment(self):
        c = Canvas(100, 100)
        Pen().draw(c, sample_between((10, 10), (60, 10), pen_variant="brush"), (0, 0, 0))
        self.assertEqual(len(c.ops), 5)
        for op in c.ops[1:]:
            self.assertAlmostEqual(op.start[1], op.end[1])

    def test_first_sample_draws_blob(self):
        c = Canvas(100, 100)
        state = StateManager()
        first = StrokeSampler(state).append_sample((30, 30))
        Pen().draw(c, first, (0, 0, 0))
        self.assertEqual(c.ops[0].start, c.ops[0].end)

    def test_eraser(self):
        c = Canvas(100, 100)
        c.draw_line((0, 50), (99, 50), (0, 0, 0), 4)
        sample = sample_between((0, 50), (99, 50), tool="eraser", eraser_size=20)
        Eraser(shape="rectangle").draw(c, sample)
        self.assertEqual(c.ink_pixels(), 0)
        self.assertEqual(c.ops[-1].kind, "erase")


if __name__ == "__main__":
    unittest.main()
