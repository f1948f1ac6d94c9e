"""
places and tracks the teaching tools lying on the board.

owns the ToolShape list that the edge resolver reads. tools are only
changed between strokes, the drawing engine treats the list as a
read-only snapshot while a stroke is in progress.
"""
import logging
import math

from app.config import RULER_WIDTH, RULER_HEIGHT, SET_SQUARE_HEIGHT
from core.edge_snap import (
    ToolShape, RECTANGLE, RIGHT_TRIANGLE, EDGES_LEGS_AND_HYPOTENUSE,
)

logger = logging.getLogger(__name__)


class TeachingTools:
    """rulers and set squares, in stacking order (last one is on top)"""

    def __init__(self):
        self.tools = []

    def add_ruler(self, center, width=RULER_WIDTH, height=RULER_HEIGHT, rotation=0.0):
        tool = ToolShape(center[0] - width / 2.0, center[1] - height / 2.0,
                         width, height, rotation, RECTANGLE, name="ruler")
        return self._add(tool)

    def add_set_square(self, center, angle=60, rotation=0.0, edge_rule=EDGES_LEGS_AND_HYPOTENUSE):
        """
        angle=60 gives the 30/60/90 square (long leg = height * sqrt(3)),
        anything else gives the 45 degree one
        """
        height = SET_SQUARE_HEIGHT
        if angle == 60:
            width = round(height * math.sqrt(3))
            name = "set_square_60"
        else:
            width = height
            name = "set_square_45"
        tool = ToolShape(center[0] - width / 2.0, center[1] - height / 2.0,
                         width, height, rotation, RIGHT_TRIANGLE, edge_rule, name=name)
        return self._add(tool)

    def _add(self, tool):
        self.tools.append(tool)
        logger.debug("placed %r", tool)
        return tool

    def remove(self, tool):
        if tool in self.tools:
            self.tools.remove(tool)

    def remove_last(self, kind):
        """drop the most recently placed tool of this kind, if any"""
        for i in range(len(self.tools) - 1, -1, -1):
            if self.tools[i].kind == kind:
                return self.tools.pop(i)
        return None

    def clear(self):
        self.tools = []

    def counts(self):
        rulers = sum(1 for t in self.tools if t.kind == RECTANGLE)
        squares = sum(1 for t in self.tools if t.kind == RIGHT_TRIANGLE)
        return {"rulers": rulers, "set_squares": squares}

    def tool_at(self, point):
        """top-most tool whose rotated box contains point, or None"""
        for tool in reversed(self.tools):
            if tool.contains_local(tool.to_local(point)):
                return tool
        return None

    def move(self, tool, dx, dy):
        tool.x += dx
        tool.y += dy

    def rotate(self, tool, degrees):
        tool.rotation = (tool.rotation + degrees) % 360

    def snapshot(self):
        """the list the resolver should see for the next stroke"""
        return tuple(self.tools)
