"""
the per-event drawing pipeline.

    pointer sample
        -> edge resolver   (pen only: snap onto a tool edge, or block)
        -> stroke sampler  (drop jitter, dash phase, pen dynamics)
        -> multi-line renderer or pen/eraser renderer
        -> canvas

everything is synchronous, one call per pointer event. per-stroke state
(sampler, dash phase, multi-line seams) is created in begin_stroke and
dropped in end_stroke / abort_stroke, never shared between strokes.

shapes skip the pipeline, draw_shape builds the whole outline in one go.
"""
import logging

from app.tools import Pen, Eraser, multi_line_drawer
from core.edge_snap import EdgeResolver
from core.geometry import Point
from core.multiline import MultiLineState, render_multiline_segment
from core.pen_dynamics import flat_style
from core.profiler import Profiler
from core.shapes import Shape, build_shape
from core.state_manager import StateManager
from core.stroke import Stroke, StrokeArchive
from core.stroke_sampler import StrokeSampler
from core.teaching_tools import TeachingTools

logger = logging.getLogger(__name__)


class DrawingEngine:
    """owns the stroke archive and drives one stroke at a time onto a canvas"""

    def __init__(self, canvas, state=None, teaching_tools=None, resolver=None,
                 archive=None, profiler=None):
        self.canvas = canvas
        self.state = state if state is not None else StateManager()
        self.teaching_tools = teaching_tools if teaching_tools is not None else TeachingTools()
        self.resolver = resolver if resolver is not None else EdgeResolver()
        # an empty archive is falsy, so no `or` here
        self.archive = archive if archive is not None else StrokeArchive()
        self.profiler = profiler if profiler is not None else Profiler(enabled=False)

        self.pen = Pen()
        self.eraser = Eraser()

        self.is_drawing = False
        self.sampler = None
        self.multi_state = MultiLineState.initial()
        self._shapes = ()

    @property
    def is_snapped_to_edge(self):
        return self.resolver.is_snapped

    # --- stroke lifecycle ---

    def begin_stroke(self, point):
        """
        start a stroke at point. returns False if the point landed inside
        a teaching tool, in which case nothing is drawn.
        """
        if self.is_drawing:
            self.abort_stroke()

        self.sampler = StrokeSampler(self.state)
        self.multi_state = MultiLineState.initial()
        self.resolver.reset_snapping()
        # tools only move between strokes, freeze what this stroke sees
        self._shapes = self.teaching_tools.snapshot()

        pos = self._resolve(point)
        if pos is None:
            logger.debug("stroke start at %s blocked by a tool", point)
            self.sampler = None
            return False

        self.is_drawing = True
        self.eraser.shape = self.state.eraser_shape
        sample = self.sampler.append_sample(pos)
        self._render_start(sample)
        logger.debug("stroke started at %s (%s, %s)", pos, self.state.current_tool,
                     self.state.line_style)
        return True

    def move(self, point):
        """
        feed the next pointer sample. returns the SampleResult, or None
        if the sample was blocked or filtered out.
        """
        if not self.is_drawing:
            return None

        self.profiler.begin_event()
        try:
            self.profiler.start("resolve")
            pos = self._resolve(point)
            self.profiler.stop("resolve")
            if pos is None:
                return None

            self.profiler.start("sample")
            sample = self.sampler.append_sample(pos)
            self.profiler.stop("sample")
            if sample is None:
                return None

            self.profiler.start("render")
            self._render_segment(sample)
            self.profiler.stop("render")
            return sample
        finally:
            self.profiler.end_event()

    def end_stroke(self):
        """finish the stroke and archive it. returns the Stroke or None"""
        if not self.is_drawing:
            return None

        points = self.sampler.freeze()
        self._reset_stroke_state()

        if not points:
            return None

        state = self.state
        width = state.eraser_size if state.current_tool == "eraser" else state.pen_size
        stroke = Stroke(points, state.color, width, state.pen_variant, state.current_tool)
        self.archive.add(stroke)
        logger.debug("archived %r", stroke)
        return stroke

    def abort_stroke(self):
        """throw the stroke away, e.g. pointer left the canvas"""
        if self.sampler is not None:
            logger.debug("stroke aborted after %d samples", len(self.sampler))
        self._reset_stroke_state()

    def _reset_stroke_state(self):
        self.is_drawing = False
        self.sampler = None
        self.multi_state = MultiLineState.initial()
        self.resolver.reset_snapping()
        self._shapes = ()

    # --- pipeline steps ---

    def _resolve(self, point):
        """snapped / original point, or None if a tool blocks it"""
        point = Point(point[0], point[1])
        if not self.state.is_pen or not self._shapes:
            return point
        result = self.resolver.process_point(point, self._shapes)
        if result.blocked:
            return None
        return result.point

    def _render_start(self, sample):
        state = self.state
        if state.current_tool == "eraser":
            self.eraser.draw(self.canvas, sample)
        elif state.line_style in ("dashed", "dotted"):
            self.canvas.draw_dot(sample.curr, state.pen_size, state.color)
        else:
            self.pen.draw(self.canvas, sample, state.color)

    def _render_segment(self, sample):
        state = self.state
        if state.current_tool == "eraser":
            self.eraser.draw(self.canvas, sample)
            return
        if not sample.should_draw:
            return

        if state.line_style == "multi":
            draw = multi_line_drawer(self.canvas, state.color, state.pen_size,
                                     sample.render_alpha)
            self.multi_state, _ = render_multiline_segment(
                sample.prev, sample.curr, self.multi_state, state, draw)
        else:
            self.pen.draw(self.canvas, sample, state.color)

    # --- shapes ---

    def draw_shape(self, start, end, kind=None, line_style=None):
        """
        draw a line / rectangle / circle spanned by start and end and
        archive it. kind and line_style default to the state's shape
        settings. returns the Shape, or None for a degenerate one.
        """
        if self.is_drawing:
            self.abort_stroke()

        state = self.state
        kind = kind or state.shape_kind
        line_style = line_style or state.shape_line_style
        polylines = build_shape(kind, start, end, line_style, state)
        if not polylines:
            logger.debug("degenerate %s from %s to %s, nothing drawn", kind, start, end)
            return None

        shape = Shape(kind, line_style, start, end, polylines, state.color,
                      state.pen_size, state.pen_variant)
        self._paint(shape)
        self.archive.add(shape)
        logger.debug("archived %r", shape)
        return shape

    # --- archive helpers ---

    def select_stroke_at(self, point, threshold=None):
        if threshold is None:
            index = self.archive.find_stroke_near(point)
        else:
            index = self.archive.find_stroke_near(point, threshold)
        if index is None:
            self.archive.deselect()
        else:
            self.archive.select(index)
        return index

    def redraw(self):
        """repaint the canvas from the archive (after copy/delete)"""
        self.canvas.clear()
        for item in self.archive:
            self._paint(item)

    def _paint(self, item):
        """one archived stroke or shape, flat pen look"""
        if item.tool_kind == "eraser":
            for a, b in zip(item.points, item.points[1:]):
                self.canvas.erase_line(a, b, item.width)
            return

        width, alpha = flat_style(item.pen_variant, item.width)
        paths = item.polylines if item.tool_kind == "shape" else (item.points,)
        for path in paths:
            self.canvas.draw_polyline(path, item.color, width, alpha)

    def clear(self):
        self.abort_stroke()
        self.canvas.clear()
        self.archive.clear()
