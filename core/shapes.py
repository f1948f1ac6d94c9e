"""
parametric shapes: a straight line, rectangle or circle spanned by two
pointer positions.

    line       start -> end
    rectangle  start and end are opposite corners
    circle     start is the centre, end sits on the rim

shapes take the freehand line styles plus "wavy" and the fixed
"double" / "triple" multi-line styles. everything here is geometry, a
shape comes out as a list of polylines and the engine paints them with
the flat pen look.

dashes run continuously along the whole outline, so a dashed rectangle
keeps its rhythm around the corners. wavy and multi-line outlines are
never dashed.
"""
import math

from app.config import (
    SHAPE_DASH_GAP_RATIO, SHAPE_DOT_LENGTH,
    WAVY_LINE_AMPLITUDE, WAVY_CIRCLE_AMPLITUDE, WAVY_MIN_SEGMENTS,
    WAVY_CIRCLE_MIN_WAVES, WAVE_CURVE_STEPS,
    CIRCLE_SEGMENT_LENGTH, CIRCLE_MIN_SEGMENTS, MIN_CIRCLE_RADIUS,
)
from core.geometry import Point, distance, perpendicular, point_to_segment_distance
from core.multiline import line_offsets

LINE = "line"
RECTANGLE = "rectangle"
CIRCLE = "circle"


def _lerp(a, b, t):
    return Point(a[0] + (b[0] - a[0]) * t, a[1] + (b[1] - a[1]) * t)


def _quad_curve(p0, control, p1, steps=WAVE_CURVE_STEPS):
    """points along a quadratic bezier, p0 itself left out"""
    points = []
    for k in range(1, steps + 1):
        t = k / steps
        u = 1 - t
        points.append(Point(
            u * u * p0[0] + 2 * u * t * control[0] + t * t * p1[0],
            u * u * p0[1] + 2 * u * t * control[1] + t * t * p1[1],
        ))
    return points


# --- dashes ---

def shape_dash_pattern(line_style, dash_density):
    """(dash, gap) for dashed / dotted outlines, None when drawn unbroken"""
    gap = dash_density * SHAPE_DASH_GAP_RATIO
    if line_style == "dashed":
        return dash_density, gap
    if line_style == "dotted":
        return SHAPE_DOT_LENGTH, gap
    return None


def dash_polyline(points, dash_length, gap_length):
    """
    cut a polyline into its dashes. the phase carries over from one
    segment to the next, zero-length segments are skipped.
    """
    if dash_length <= 0 or gap_length <= 0:
        return [list(points)]

    pieces = []
    current = []
    drawing = True
    remaining = dash_length

    for a, b in zip(points, points[1:]):
        seg = distance(a, b)
        if seg == 0:
            continue
        along = 0.0
        while along < seg:
            if drawing and not current:
                current.append(_lerp(a, b, along / seg))
            left = seg - along
            if remaining > left:
                # this phase runs on into the next segment
                if drawing:
                    current.append(Point(b[0], b[1]))
                remaining -= left
                break
            along += remaining
            if drawing:
                current.append(_lerp(a, b, along / seg))
                pieces.append(current)
                current = []
            drawing = not drawing
            remaining = dash_length if drawing else gap_length

    if len(current) > 1:
        pieces.append(current)
    return pieces


# --- outlines ---

def rectangle_bounds(start, end):
    """(x, y, width, height) from two opposite corners"""
    return (min(start[0], end[0]), min(start[1], end[1]),
            abs(end[0] - start[0]), abs(end[1] - start[1]))


def rectangle_path(x, y, width, height):
    """closed outline, clockwise on screen from the top-left corner"""
    return [Point(x, y), Point(x + width, y), Point(x + width, y + height),
            Point(x, y + height), Point(x, y)]


def circle_path(center, radius):
    """closed polygon close enough to a circle at screen resolution"""
    n = max(CIRCLE_MIN_SEGMENTS, int(math.ceil(2 * math.pi * radius / CIRCLE_SEGMENT_LENGTH)))
    points = [Point(center[0] + math.cos(2 * math.pi * i / n) * radius,
                    center[1] + math.sin(2 * math.pi * i / n) * radius)
              for i in range(n)]
    points.append(points[0])
    return points


def wavy_line(start, end, wave_density, pen_size):
    """
    sine wave along start -> end, wavelength wave_density and amplitude
    1.5x pen size. built from quadratic curves, then flattened.
    """
    dx = end[0] - start[0]
    dy = end[1] - start[1]
    length = math.hypot(dx, dy)
    if length == 0:
        return []

    amplitude = pen_size * WAVY_LINE_AMPLITUDE
    segments = max(WAVY_MIN_SEGMENTS, int(length // (wave_density / 2.0)))
    px, py = perpendicular(start, end)

    points = [Point(start[0], start[1])]
    for i in range(1, segments + 1):
        t = i / segments
        wave = math.sin(t * math.pi * (length / wave_density)) * amplitude
        mid = (i - 0.5) / segments
        control = (start[0] + dx * mid + px * wave, start[1] + dy * mid + py * wave)
        tip = (start[0] + dx * t + px * wave * 0.5, start[1] + dy * t + py * wave * 0.5)
        points.extend(_quad_curve(points[-1], control, tip))

    end = Point(end[0], end[1])
    if points[-1] != end:
        points.append(end)
    return points


def wavy_circle(center, radius, wave_density, pen_size):
    """rim alternates pen_size * 1.2 outside / inside the true radius"""
    amplitude = pen_size * WAVY_CIRCLE_AMPLITUDE
    waves = max(WAVY_CIRCLE_MIN_WAVES, int(radius * math.pi * 2 // wave_density))

    def offset(i):
        return amplitude if i % 2 == 0 else -amplitude

    def on_rim(angle, r):
        return Point(center[0] + math.cos(angle) * r, center[1] + math.sin(angle) * r)

    points = [on_rim(0.0, radius + offset(0))]
    for i in range(1, waves + 1):
        angle = i / waves * math.pi * 2
        prev_angle = (i - 1) / waves * math.pi * 2
        control = on_rim((angle + prev_angle) / 2, radius + (offset(i) + offset(i - 1)) / 2)
        points.extend(_quad_curve(points[-1], control, on_rim(angle, radius + offset(i))))

    if points[-1] != points[0]:
        points.append(points[0])
    return points


def multi_line(start, end, count, spacing):
    if distance(start, end) == 0:
        return []
    px, py = perpendicular(start, end)
    return [[Point(start[0] + px * off, start[1] + py * off),
             Point(end[0] + px * off, end[1] + py * off)]
            for off in line_offsets(count, spacing)]


def multi_rectangle(x, y, width, height, count, spacing):
    """nested outlines, each `spacing` apart, centred on the drawn one"""
    return [rectangle_path(x - off, y - off, width + off * 2, height + off * 2)
            for off in line_offsets(count, spacing)]


def multi_circle(center, radius, count, spacing):
    """concentric rims, never shrinking below radius 1"""
    return [circle_path(center, max(1, radius + off))
            for off in line_offsets(count, spacing)]


def _line_count(line_style, style):
    if line_style == "double":
        return 2
    if line_style == "triple":
        return 3
    if line_style == "multi":
        return style.multi_line_count
    return None


def build_shape(kind, start, end, line_style, style):
    """
    polylines for a shape of `kind` spanned by start and end.

    style supplies pen_size, dash_density, wave_density,
    multi_line_count and multi_line_spacing (a StateManager will do).
    unknown line styles draw solid. degenerate shapes (zero-length line,
    zero-size rectangle, circle under radius 2) give an empty list.
    """
    start = Point(start[0], start[1])
    end = Point(end[0], end[1])
    count = _line_count(line_style, style)
    wavy = line_style == "wavy"

    if kind == LINE:
        if distance(start, end) == 0:
            return []
        if wavy:
            return [wavy_line(start, end, style.wave_density, style.pen_size)]
        if count:
            return multi_line(start, end, count, style.multi_line_spacing)
        path = [start, end]

    elif kind == RECTANGLE:
        x, y, width, height = rectangle_bounds(start, end)
        if width == 0 and height == 0:
            return []
        if wavy:
            corners = rectangle_path(x, y, width, height)
            sides = (wavy_line(a, b, style.wave_density, style.pen_size)
                     for a, b in zip(corners, corners[1:]))
            return [side for side in sides if side]
        if count:
            return multi_rectangle(x, y, width, height, count, style.multi_line_spacing)
        path = rectangle_path(x, y, width, height)

    elif kind == CIRCLE:
        radius = distance(start, end)
        if radius < MIN_CIRCLE_RADIUS:
            return []
        if wavy:
            return [wavy_circle(start, radius, style.wave_density, style.pen_size)]
        if count:
            return multi_circle(start, radius, count, style.multi_line_spacing)
        path = circle_path(start, radius)

    else:
        raise ValueError(f"unknown shape kind {kind!r}")

    pattern = shape_dash_pattern(line_style, style.dash_density)
    if pattern is None:
        return [path]
    return dash_polyline(path, *pattern)


class Shape:
    """a finished shape, archived alongside freehand strokes"""

    __slots__ = ("kind", "line_style", "start", "end", "polylines",
                 "color", "width", "pen_variant")

    tool_kind = "shape"

    def __init__(self, kind, line_style, start, end, polylines, color, width,
                 pen_variant="normal"):
        self.kind = kind
        self.line_style = line_style
        self.start = Point(start[0], start[1])
        self.end = Point(end[0], end[1])
        self.polylines = tuple(tuple(Point(p[0], p[1]) for p in path) for path in polylines)
        self.color = color
        self.width = width
        self.pen_variant = pen_variant

    def segments(self):
        for path in self.polylines:
            yield from zip(path, path[1:])

    def is_near(self, point, threshold):
        for a, b in self.segments():
            if point_to_segment_distance(point, a, b) < threshold:
                return True
        return False

    def bounds(self):
        """(x, y, width, height) around every polyline, padded by 2x width"""
        points = [p for path in self.polylines for p in path]
        if not points:
            return None
        xs = [p.x for p in points]
        ys = [p.y for p in points]
        pad = self.width * 2
        return (min(xs) - pad, min(ys) - pad,
                max(xs) - min(xs) + pad * 2, max(ys) - min(ys) + pad * 2)

    def translated(self, dx, dy):
        moved = [[(p.x + dx, p.y + dy) for p in path] for path in self.polylines]
        return Shape(self.kind, self.line_style,
                     (self.start.x + dx, self.start.y + dy), (self.end.x + dx, self.end.y + dy),
                     moved, self.color, self.width, self.pen_variant)

    def __len__(self):
        return len(self.polylines)

    def __repr__(self):
        return f"Shape({self.kind}/{self.line_style}, {len(self.polylines)} paths)"
