"""
end-to-end tests for the drawing pipeline: pointer samples in, draw
ops and archived strokes out.
"""
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import unittest
from app.canvas import Canvas
from core.drawing_engine import DrawingEngine
from core.edge_snap import EDGES_LEGS
from core.profiler import Profiler


def make_engine(**settings):
    engine = DrawingEngine(Canvas(400, 300))
    engine.state.update(settings)
    return engine


def draw_stroke(engine, points):
    """begin / move / end, returns the archived stroke (or None)"""
    if not engine.begin_stroke(points[0]):
        return None
    for p in points[1:]:
        engine.move(p)
    return engine.end_stroke()


def line_ops(engine):
    return [op for op in engine.canvas.ops if op.kind == "line"]


class TestStrokeLifecycle(unittest.TestCase):

    def test_stroke_archived(self):
        engine = make_engine()
        stroke = draw_stroke(engine, [(10, 10), (20, 10), (30, 12)])
        self.assertIsNotNone(stroke)
        self.assertEqual(len(engine.archive), 1)
        self.assertEqual(len(stroke.points), 3)
        self.assertEqual(stroke.width, engine.state.pen_size)

    def test_move_without_begin_is_ignored(self):
        engine = make_engine()
        self.assertIsNone(engine.move((10, 10)))
        self.assertIsNone(engine.end_stroke())
        self.assertEqual(engine.canvas.ops, [])

    def test_abort_archives_nothing(self):
        engine = make_engine()
        engine.begin_stroke((10, 10))
        engine.move((40, 40))
        engine.abort_stroke()
        self.assertFalse(engine.is_drawing)
        self.assertIsNone(engine.sampler)
        self.assertIsNone(engine.end_stroke())
        self.assertEqual(len(engine.archive), 0)

    def test_jitter_samples_not_stored(self):
        engine = make_engine()
        stroke = draw_stroke(engine, [(10, 10), (10.2, 10.1), (10.4, 9.9), (30, 10)])
        self.assertEqual(len(stroke.points), 2)

    def test_state_reset_between_strokes(self):
        engine = make_engine(line_style="dashed", dash_density=10)
        draw_stroke(engine, [(0, 0), (12, 0)])
        engine.begin_stroke((0, 50))
        self.assertEqual(engine.sampler.dash_state.accumulated_distance, 0.0)
        self.assertFalse(engine.multi_state.has_previous)

    def test_beginning_twice_aborts_first(self):
        engine = make_engine()
        engine.begin_stroke((0, 0))
        engine.move((20, 0))
        engine.begin_stroke((100, 100))
        stroke = engine.end_stroke()
        self.assertEqual(len(engine.archive), 1)
        self.assertEqual(stroke.points[0], (100, 100))

    def test_eraser_stroke_records_tool(self):
        engine = make_engine(tool="eraser", eraser_size=25)
        stroke = draw_stroke(engine, [(10, 10), (50, 10)])
        self.assertEqual(stroke.tool_kind, "eraser")
        self.assertEqual(stroke.width, 25)
        self.assertTrue(all(op.kind == "erase" for op in engine.canvas.ops))


class TestLineStyles(unittest.TestCase):

    def test_dashed_skips_gap_segments(self):
        engine = make_engine(line_style="dashed", dash_density=10)
        draw_stroke(engine, [(x, 100) for x in (0, 5, 10, 15, 20, 25)])
        # start dot, then segments ending at 5, 20, 25 (10 and 15 are gap)
        dots = [op for op in engine.canvas.ops if op.kind == "dot"]
        self.assertEqual(len(dots), 1)
        ends = [op.end[0] for op in line_ops(engine)]
        self.assertEqual(ends, [5, 20, 25])

    def test_dotted_start_dot(self):
        engine = make_engine(line_style="dotted", pen_size=6)
        engine.begin_stroke((50, 50))
        self.assertEqual(engine.canvas.ops[0].kind, "dot")
        self.assertEqual(engine.canvas.ops[0].width, 6)

    def test_multi_line_count(self):
        engine = make_engine(line_style="multi", multi_line_count=3, multi_line_spacing=10)
        draw_stroke(engine, [(50, 100), (100, 100), (150, 120)])
        # first sample blob + 3 lines per segment
        self.assertEqual(len(line_ops(engine)), 1 + 2 * 3)

    def test_multi_line_seams_on_canvas(self):
        engine = make_engine(line_style="multi", multi_line_count=2, multi_line_spacing=10)
        draw_stroke(engine, [(50, 100), (100, 100), (150, 140), (160, 200)])
        ops = line_ops(engine)[1:]
        segments = [ops[i:i + 2] for i in range(0, len(ops), 2)]
        for a, b in zip(segments, segments[1:]):
            for prev_line, next_line in zip(a, b):
                self.assertEqual(prev_line.end, next_line.start)


class TestToolConstraints(unittest.TestCase):

    def test_start_inside_tool_blocked(self):
        engine = make_engine()
        ruler = engine.teaching_tools.add_ruler((200, 150))
        self.assertFalse(engine.begin_stroke(ruler.center))
        self.assertFalse(engine.is_drawing)
        self.assertEqual(engine.canvas.ops, [])

    def test_stroke_snaps_along_ruler(self):
        engine = make_engine()
        engine.teaching_tools.add_ruler((200, 150), width=300, height=60)
        # top edge is y = 120, wobble within tolerance above it
        stroke = draw_stroke(engine, [(80, 112), (120, 116), (160, 110), (220, 118)])
        self.assertTrue(all(abs(p.y - 120) < 1e-9 for p in stroke.points))

    def test_blocked_samples_skipped_mid_stroke(self):
        engine = make_engine()
        engine.teaching_tools.add_set_square((200, 150), angle=45, edge_rule=EDGES_LEGS)
        # square box is (150, 100) - (250, 200); (215, 165) sits in the body
        stroke = draw_stroke(engine, [(20, 20), (60, 20), (215, 165), (100, 20)])
        self.assertEqual(len(stroke.points), 3)

    def test_eraser_ignores_tools(self):
        engine = make_engine(tool="eraser")
        ruler = engine.teaching_tools.add_ruler((200, 150))
        self.assertTrue(engine.begin_stroke(ruler.center))

    def test_snap_feedback_cleared_on_end(self):
        engine = make_engine()
        engine.teaching_tools.add_ruler((200, 150), width=300, height=60)
        engine.begin_stroke((100, 115))
        self.assertTrue(engine.is_snapped_to_edge)
        engine.end_stroke()
        self.assertFalse(engine.is_snapped_to_edge)


class TestArchiveHelpers(unittest.TestCase):

    def test_select_copy_redraw(self):
        engine = make_engine()
        draw_stroke(engine, [(10, 10), (100, 10)])
        self.assertEqual(engine.select_stroke_at((50, 14)), 0)
        engine.archive.copy_selected()
        engine.redraw()
        self.assertEqual(len(engine.archive), 2)
        self.assertEqual(len(line_ops(engine)), 2)

    def test_select_miss_deselects(self):
        engine = make_engine()
        draw_stroke(engine, [(10, 10), (100, 10)])
        engine.select_stroke_at((50, 10))
        self.assertIsNone(engine.select_stroke_at((50, 200)))
        self.assertIsNone(engine.archive.selected)

    def test_clear(self):
        engine = make_engine()
        draw_stroke(engine, [(10, 10), (100, 10)])
        engine.clear()
        self.assertEqual(len(engine.archive), 0)
        self.assertEqual(engine.canvas.ink_pixels(), 0)

class TestRedrawLook(unittest.TestCase):

    def test_pencil_stays_translucent(self):
        engine = make_engine(pen_variant="pencil", pen_size=5)
        draw_stroke(engine, [(10, 10), (100, 10)])
        engine.redraw()
        ops = line_ops(engine)
        self.assertTrue(ops)
        for op in ops:
            self.assertAlmostEqual(op.alpha, 0.7)
            self.assertEqual(op.width, 5)

    def test_brush_keeps_width(self):
        engine = make_engine(pen_variant="brush", pen_size=4)
        draw_stroke(engine, [(10, 10), (60, 10), (100, 30)])
        engine.select_stroke_at((60, 10))
        engine.archive.copy_selected()
        engine.redraw()
        ops = line_ops(engine)
        self.assertEqual(len(ops), 4)
        for op in ops:
            self.assertAlmostEqual(op.alpha, 0.85)
            self.assertAlmostEqual(op.width, 6.0)


class TestShapes(unittest.TestCase):

    def test_shape_drawn_and_archived(self):
        engine = make_engine(shape_kind="rectangle", shape_line_style="solid")
        shape = engine.draw_shape((20, 20), (120, 80))
        self.assertEqual(shape.kind, "rectangle")
        self.assertEqual(len(engine.archive), 1)
        self.assertEqual(len(line_ops(engine)), 4)
        self.assertGreater(engine.canvas.ink_pixels(), 0)

    def test_explicit_kind_and_style(self):
        engine = make_engine()
        shape = engine.draw_shape((50, 50), (50, 90), kind="circle", line_style="double")
        self.assertEqual(len(shape.polylines), 2)
        self.assertEqual(shape.line_style, "double")

    def test_degenerate_shape_not_archived(self):
        engine = make_engine()
        self.assertIsNone(engine.draw_shape((30, 30), (30, 30), kind="line"))
        self.assertEqual(len(engine.archive), 0)
        self.assertEqual(engine.canvas.ops, [])

    def test_shape_aborts_open_stroke(self):
        engine = make_engine()
        engine.begin_stroke((0, 0))
        engine.move((30, 0))
        engine.draw_shape((10, 100), (200, 100), kind="line")
        self.assertFalse(engine.is_drawing)
        self.assertEqual([item.tool_kind for item in engine.archive], ["shape"])

    def test_shape_select_copy_redraw(self):
        engine = make_engine(pen_variant="pencil")
        engine.draw_shape((20, 20), (120, 20), kind="line", line_style="dashed")
        self.assertEqual(engine.select_stroke_at((25, 22)), 0)
        engine.archive.copy_selected()
        engine.redraw()
        self.assertEqual(len(engine.archive), 2)
        ops = line_ops(engine)
        self.assertTrue(all(abs(op.alpha - 0.7) < 1e-9 for op in ops))
        self.assertTrue(any(op.start[1] == 40 for op in ops))


class TestProfiling(unittest.TestCase):

    def test_stages_recorded(self):
        profiler = Profiler()
        engine = DrawingEngine(Canvas(200, 200), profiler=profiler)
        draw_stroke(engine, [(10, 10), (40, 10), (80, 30)])
        stages = profiler.summary_dict()["stages"]
        for name in ("resolve", "sample", "render"):
            self.assertIn(name, stages)
        self.assertEqual(profiler.event_count, 2)


if __name__ == "__main__":
    unittest.main()
