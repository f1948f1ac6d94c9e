"""
edge constraints for teaching tools (rulers and set squares).

when the pen comes close to a tool edge the point gets pulled onto
that edge, so you can rule a straight line by dragging along it. points
well inside a tool are blocked so the tool behaves like an opaque
object lying on the board.

all edge math happens in the tool's own unrotated frame. we rotate the
incoming point by -rotation about the tool centre, work against the
plain bounding box, then rotate the snapped point back.

set square layout in the local frame (y grows downward):

    C (x, y)
    |\\
    | \\   hypotenuse C-B
    |  \\
    A---B
    A = (x, y+h) right angle, B = (x+w, y+h)

legs are A-B (bottom) and A-C (left). with the "legs" edge rule only
the legs can be drawn on and the hypotenuse is part of the body.
"""
import logging
from collections import namedtuple

from app.config import EDGE_TOLERANCE, INTERIOR_MARGIN_FACTOR
from core.geometry import (
    Point, cross_sign, point_to_segment_distance, project_onto_segment, rotate_around,
)

logger = logging.getLogger(__name__)

RECTANGLE = "rectangle"
RIGHT_TRIANGLE = "right_triangle"

EDGES_LEGS = "legs"
EDGES_LEGS_AND_HYPOTENUSE = "legs_and_hypotenuse"

# cross products this close to 0 count as "on the edge line"
_ON_LINE_EPS = 1e-9


class ToolShape:
    """
    a placed ruler or set square. x/y/width/height is the box in the
    tool's local frame, rotation (degrees) turns it about the box centre.
    mutated in place when the user drags or rotates it.
    """

    def __init__(self, x, y, width, height, rotation=0.0, kind=RECTANGLE,
                 edge_rule=EDGES_LEGS_AND_HYPOTENUSE, name=None):
        self.x = x
        self.y = y
        self.width = width
        self.height = height
        self.rotation = rotation
        self.kind = kind
        self.edge_rule = edge_rule
        self.name = name

    @property
    def center(self):
        return Point(self.x + self.width / 2.0, self.y + self.height / 2.0)

    def to_local(self, point):
        """canvas space -> tool's unrotated frame"""
        return rotate_around(point, self.center, -self.rotation)

    def to_canvas(self, point):
        """tool's unrotated frame -> canvas space"""
        return rotate_around(point, self.center, self.rotation)

    def triangle_vertices(self):
        """(right angle, far end of bottom leg, top of left leg)"""
        a = Point(self.x, self.y + self.height)
        b = Point(self.x + self.width, self.y + self.height)
        c = Point(self.x, self.y)
        return a, b, c

    def triangle_edges(self):
        """named edge segments the pen may snap to, in test order"""
        a, b, c = self.triangle_vertices()
        edges = [("bottom", a, b), ("left", a, c)]
        if self.edge_rule == EDGES_LEGS_AND_HYPOTENUSE:
            edges.append(("hypotenuse", c, b))
        return edges

    def outline(self):
        """corners in canvas space, for drawing the tool"""
        if self.kind == RIGHT_TRIANGLE:
            corners = self.triangle_vertices()
        else:
            corners = (Point(self.x, self.y), Point(self.x + self.width, self.y),
                       Point(self.x + self.width, self.y + self.height),
                       Point(self.x, self.y + self.height))
        return [self.to_canvas(p) for p in corners]

    def edge_segment(self, edge):
        """(start, end) of a named edge in canvas space, or None"""
        left, top = self.x, self.y
        right, bottom = self.x + self.width, self.y + self.height
        if self.kind == RIGHT_TRIANGLE:
            a, b, c = self.triangle_vertices()
            segments = {"bottom": (a, b), "left": (a, c), "hypotenuse": (c, b)}
        else:
            segments = {
                "top": (Point(left, top), Point(right, top)),
                "bottom": (Point(left, bottom), Point(right, bottom)),
                "left": (Point(left, top), Point(left, bottom)),
                "right": (Point(right, top), Point(right, bottom)),
            }
        if edge not in segments:
            return None
        start, end = segments[edge]
        return self.to_canvas(start), self.to_canvas(end)

    def contains_local(self, local, margin=0.0):
        """inside the bounding box, optionally grown by margin"""
        return (self.x - margin <= local[0] <= self.x + self.width + margin and
                self.y - margin <= local[1] <= self.y + self.height + margin)

    def __repr__(self):
        return (f"ToolShape({self.kind}, x={self.x}, y={self.y}, w={self.width}, "
                f"h={self.height}, rot={self.rotation})")


EdgeSnapResult = namedtuple("EdgeSnapResult", ["point", "snapped", "blocked", "edge", "shape"])


class EdgeResolver:
    """
    decides per pointer sample whether to snap, block or pass the point.

    the snap fields (is_snapped, snapped_tool, snapped_edge) are only
    there so the ui can highlight the active edge. they never influence
    the next point.
    """

    def __init__(self, tolerance=EDGE_TOLERANCE):
        self.tolerance = tolerance
        self.is_snapped = False
        self.snapped_tool = None
        self.snapped_edge = None

    def reset_snapping(self):
        self.is_snapped = False
        self.snapped_tool = None
        self.snapped_edge = None

    # --- public api ---

    def process_point(self, point, shapes):
        """
        returns an EdgeSnapResult. proximity beats blocking: a point near
        an edge of any tool snaps even if it is inside another tool.
        """
        point = Point(point[0], point[1])

        for shape in shapes:
            hit = self.edge_at_point(point, shape)
            if hit is not None:
                edge, snapped = hit
                self.is_snapped = True
                self.snapped_tool = shape
                self.snapped_edge = edge
                return EdgeSnapResult(snapped, True, False, edge, shape)

        for shape in shapes:
            if self.is_point_inside(point, shape):
                logger.debug("point %s blocked by %r", point, shape)
                return EdgeSnapResult(point, False, True, None, shape)

        self.reset_snapping()
        return EdgeSnapResult(point, False, False, None, None)

    def edge_at_point(self, point, shape):
        """(edge name, snapped canvas point) or None"""
        local = shape.to_local(point)
        if shape.kind == RECTANGLE:
            hit = self._rect_edge(local, shape)
        elif shape.kind == RIGHT_TRIANGLE:
            hit = self._triangle_edge(local, shape)
        else:
            return None
        if hit is None:
            return None
        edge, snapped_local = hit
        return edge, shape.to_canvas(snapped_local)

    def is_point_inside(self, point, shape):
        """true if the point sits in the tool's opaque body, clear of any edge"""
        local = shape.to_local(point)
        if shape.kind == RECTANGLE:
            return self._inside_rect(local, shape)
        if shape.kind == RIGHT_TRIANGLE:
            return self._inside_triangle(local, shape)
        return False

    # --- rectangles (rulers) ---

    def _rect_edge(self, local, shape):
        tol = self.tolerance
        lx, ly = local
        left, top = shape.x, shape.y
        right, bottom = shape.x + shape.width, shape.y + shape.height

        along_x = left - tol <= lx <= right + tol
        along_y = top - tol <= ly <= bottom + tol

        # order matters for thin rulers: bottom, top, left, right
        if abs(ly - bottom) < tol and along_x:
            return "bottom", Point(_clamp(lx, left, right), bottom)
        if abs(ly - top) < tol and along_x:
            return "top", Point(_clamp(lx, left, right), top)
        if abs(lx - left) < tol and along_y:
            return "left", Point(left, _clamp(ly, top, bottom))
        if abs(lx - right) < tol and along_y:
            return "right", Point(right, _clamp(ly, top, bottom))
        return None

    def _inside_rect(self, local, shape):
        m = self.tolerance
        return (shape.x + m < local[0] < shape.x + shape.width - m and
                shape.y + m < local[1] < shape.y + shape.height - m)

    # --- right triangles (set squares) ---

    def _triangle_edge(self, local, shape):
        for name, a, b in shape.triangle_edges():
            if point_to_segment_distance(local, a, b) < self.tolerance:
                snapped = project_onto_segment(local, a, b)
                # the box check always passes for the right-angled layout, it only
                # matters for a vertex layout that does not span the full box
                if name == "hypotenuse" and not shape.contains_local(snapped, _ON_LINE_EPS):
                    continue
                return name, snapped
        return None

    def _inside_triangle(self, local, shape):
        if not shape.contains_local(local):
            return False

        a, b, c = shape.triangle_vertices()
        signs = (cross_sign(local, a, b), cross_sign(local, b, c), cross_sign(local, c, a))
        has_neg = any(s < -_ON_LINE_EPS for s in signs)
        has_pos = any(s > _ON_LINE_EPS for s in signs)
        if has_neg and has_pos:
            return False

        if shape.edge_rule == EDGES_LEGS:
            # hypotenuse is solid body here, only keep clear of the legs
            margin = self.tolerance * INTERIOR_MARGIN_FACTOR
            legs = ((a, b), (a, c))
            return all(point_to_segment_distance(local, p, q) > margin for p, q in legs)

        return all(point_to_segment_distance(local, p, q) > self.tolerance
                   for _, p, q in _all_triangle_edges(a, b, c))


def _all_triangle_edges(a, b, c):
    return (("bottom", a, b), ("left", a, c), ("hypotenuse", c, b))


def _clamp(v, lo, hi):
    return max(lo, min(hi, v))


def process_point(point, shapes, tolerance=EDGE_TOLERANCE):
    """one-off resolution without keeping snap feedback state"""
    return EdgeResolver(tolerance).process_point(point, shapes)
