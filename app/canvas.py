import logging
from collections import namedtuple

import numpy as np
import cv2

from app.config import BACKGROUND_COLOR

logger = logging.getLogger(__name__)

# every primitive we put on the surface, so tests can look at geometry
# instead of pixels
DrawOp = namedtuple("DrawOp", ["kind", "start", "end", "color", "width", "alpha"])


def _px(point):
    """float canvas point -> int pixel coords for opencv"""
    return int(round(point[0])), int(round(point[1]))


class Canvas:
    """
    the drawing surface. a plain BGR image that starts out as an empty
    whiteboard. partial opacity is done by drawing onto a copy of the
    affected region and blending it back.
    """

    def __init__(self, width, height, background=BACKGROUND_COLOR):
        self.width = width
        self.height = height
        self.background = background
        self.surface = self._blank()
        self.ops = []

    def _blank(self):
        surface = np.zeros((self.height, self.width, 3), dtype=np.uint8)
        surface[:] = self.background
        return surface

    def draw_line(self, pt1, pt2, color, thickness, alpha=1.0):
        """draw a line segment between two points"""
        if pt1 is None or pt2 is None:
            return
        self.ops.append(DrawOp("line", pt1, pt2, color, thickness, alpha))
        t = max(1, int(round(thickness)))
        p1, p2 = _px(pt1), _px(pt2)

        if alpha >= 1.0:
            cv2.line(self.surface, p1, p2, color, t, cv2.LINE_AA)
            return

        # only blend the bounding box of the segment, whole-frame copies are slow
        x0 = max(min(p1[0], p2[0]) - t, 0)
        y0 = max(min(p1[1], p2[1]) - t, 0)
        x1 = min(max(p1[0], p2[0]) + t + 1, self.width)
        y1 = min(max(p1[1], p2[1]) + t + 1, self.height)
        if x0 >= x1 or y0 >= y1:
            return

        roi = self.surface[y0:y1, x0:x1]
        overlay = roi.copy()
        cv2.line(overlay, (p1[0] - x0, p1[1] - y0), (p2[0] - x0, p2[1] - y0),
                 color, t, cv2.LINE_AA)
        self.surface[y0:y1, x0:x1] = cv2.addWeighted(overlay, alpha, roi, 1 - alpha, 0)

    def draw_dot(self, center, diameter, color):
        """filled round dot, used to start dashed and dotted strokes"""
        if center is None:
            return
        self.ops.append(DrawOp("dot", center, center, color, diameter, 1.0))
        radius = max(1, int(round(diameter / 2.0)))
        cv2.circle(self.surface, _px(center), radius, color, -1, cv2.LINE_AA)

    def draw_polyline(self, points, color, thickness, alpha=1.0):
        """redraw a whole archived path in one go"""
        if len(points) == 1:
            self.draw_line(points[0], points[0], color, thickness, alpha)
        for a, b in zip(points, points[1:]):
            self.draw_line(a, b, color, thickness, alpha)

    def erase_line(self, pt1, pt2, size, shape="circle"):
        """erase by painting the background back over the path"""
        if pt1 is None or pt2 is None:
            return
        self.ops.append(DrawOp("erase", pt1, pt2, self.background, size, 1.0))
        t = max(1, int(round(size)))
        p1, p2 = _px(pt1), _px(pt2)
        cv2.line(self.surface, p1, p2, self.background, t)
        if shape == "rectangle":
            half = t // 2
            for x, y in (p1, p2):
                cv2.rectangle(self.surface, (x - half, y - half), (x + half, y + half),
                              self.background, -1)

    def clear(self):
        """wipe everything"""
        self.surface = self._blank()
        self.ops.clear()

    def snapshot(self):
        return self.surface.copy()

    def ink_pixels(self):
        """how many pixels differ from the background"""
        diff = np.any(self.surface != np.array(self.background, dtype=np.uint8), axis=2)
        return int(np.count_nonzero(diff))

    def save(self, filename):
        cv2.imwrite(filename, self.surface)
        logger.info("saved drawing to %s", filename)
        return filename
