"""
archived strokes and hit-testing against them.

a Stroke is frozen on pointer-up. only `rotation` may change afterwards
and nothing in the geometry code reads it.
"""
import logging

from app.config import SELECTION_THRESHOLD, COPY_OFFSET
from core.geometry import Point, distance, point_to_segment_distance

logger = logging.getLogger(__name__)


class Stroke:
    """one finished pen or eraser path"""

    __slots__ = ("points", "color", "width", "pen_variant", "tool_kind", "rotation")

    def __init__(self, points, color, width, pen_variant="normal", tool_kind="pen", rotation=0.0):
        self.points = tuple(Point(p[0], p[1]) for p in points)
        self.color = color
        self.width = width
        self.pen_variant = pen_variant
        self.tool_kind = tool_kind
        self.rotation = rotation

    def segments(self):
        return zip(self.points, self.points[1:])

    def is_near(self, point, threshold):
        """within threshold of any segment (or of the lone point)"""
        if len(self.points) == 1:
            return distance(point, self.points[0]) < threshold
        for a, b in self.segments():
            if point_to_segment_distance(point, a, b) < threshold:
                return True
        return False

    def bounds(self):
        """(x, y, width, height) around the points, padded by 2x stroke width"""
        if not self.points:
            return None
        xs = [p.x for p in self.points]
        ys = [p.y for p in self.points]
        pad = self.width * 2
        return (min(xs) - pad, min(ys) - pad,
                max(xs) - min(xs) + pad * 2, max(ys) - min(ys) + pad * 2)

    def translated(self, dx, dy):
        return Stroke([(p.x + dx, p.y + dy) for p in self.points], self.color,
                      self.width, self.pen_variant, self.tool_kind, self.rotation)

    def __len__(self):
        return len(self.points)

    def __repr__(self):
        return f"Stroke({self.tool_kind}/{self.pen_variant}, {len(self.points)} pts)"


def find_stroke_near(point, strokes, threshold=SELECTION_THRESHOLD):
    """index of the most recent stroke near point, or None"""
    for i in range(len(strokes) - 1, -1, -1):
        if strokes[i].is_near(point, threshold):
            return i
    return None


class StrokeArchive:
    """all finished strokes (and shapes) of a drawing session, plus the selection"""

    def __init__(self):
        self.strokes = []
        self.selected_index = None

    def add(self, stroke):
        self.strokes.append(stroke)
        return len(self.strokes) - 1

    def find_stroke_near(self, point, threshold=SELECTION_THRESHOLD):
        return find_stroke_near(point, self.strokes, threshold)

    def select(self, index):
        if index is not None and 0 <= index < len(self.strokes):
            self.selected_index = index

    def deselect(self):
        self.selected_index = None

    @property
    def selected(self):
        if self.selected_index is None:
            return None
        return self.strokes[self.selected_index]

    def copy_selected(self, offset=COPY_OFFSET):
        """duplicate the selection shifted by offset and select the copy"""
        stroke = self.selected
        if stroke is None:
            return None
        copy = stroke.translated(offset, offset)
        self.selected_index = self.add(copy)
        return copy

    def delete_selected(self):
        stroke = self.selected
        if stroke is None:
            return None
        del self.strokes[self.selected_index]
        self.selected_index = None
        logger.debug("deleted %r", stroke)
        return stroke

    def clear(self):
        self.strokes = []
        self.selected_index = None

    def __len__(self):
        return len(self.strokes)

    def __iter__(self):
        return iter(self.strokes)

    def __getitem__(self, index):
        return self.strokes[index]
