"""
parallel-line ("multi") rendering along a freehand stroke.

each segment draws `count` lines offset along the segment normal.
the trick is at the joins: every line starts exactly where the same
line of the previous segment ended, and the end normal is blended
90/10 with the previous one so sharp turns don't leave a gap or a
kink between segments.

state is threaded explicitly: render_multiline_segment takes a
MultiLineState and hands back a new one. samples MUST go through in
arrival order, a dropped or reordered sample breaks the seams.
"""
from collections import namedtuple

from app.config import MULTI_LINE_BLEND
from core.geometry import Point, distance, normalize, perpendicular


class MultiLineState(namedtuple("MultiLineState", ["last_perp", "last_offset_points"])):
    """
    last_perp: unit normal used for the previous segment's end points,
               (0, 0) before the first segment
    last_offset_points: where each parallel line ended, or None
    """
    __slots__ = ()

    @classmethod
    def initial(cls):
        return cls((0.0, 0.0), None)

    @property
    def has_previous(self):
        return self.last_perp[0] != 0 or self.last_perp[1] != 0


def line_offsets(count, spacing):
    """signed offsets of each line from the centre, evenly spaced"""
    centre = (count - 1) / 2.0
    return [(i - centre) * spacing for i in range(count)]


def render_multiline_segment(prev, curr, state, style, draw=None):
    """
    compute (and optionally draw) the parallel lines for prev -> curr.

    style needs multi_line_count and multi_line_spacing.
    draw(start, end) is called once per line if given.

    returns (new_state, lines) where lines is a list of (start, end).
    a zero-length segment returns the state untouched and no lines.
    """
    if distance(prev, curr) == 0:
        return state, []

    count = style.multi_line_count
    spacing = style.multi_line_spacing

    current_perp = perpendicular(prev, curr)

    if state.has_previous:
        start_perp = state.last_perp
        blend = MULTI_LINE_BLEND
        end_perp = normalize(
            current_perp[0] * blend + state.last_perp[0] * (1 - blend),
            current_perp[1] * blend + state.last_perp[1] * (1 - blend),
        )
        if end_perp == (0.0, 0.0):
            # exact u-turn, blend cancelled out
            end_perp = current_perp
    else:
        start_perp = current_perp
        end_perp = current_perp

    offsets = line_offsets(count, spacing)
    ends = [Point(curr[0] + end_perp[0] * off, curr[1] + end_perp[1] * off)
            for off in offsets]

    previous_ends = state.last_offset_points or ()
    lines = []
    for i, off in enumerate(offsets):
        if i < len(previous_ends):
            start = previous_ends[i]
        else:
            start = Point(prev[0] + start_perp[0] * off, prev[1] + start_perp[1] * off)
        lines.append((start, ends[i]))
        if draw is not None:
            draw(start, ends[i])

    return MultiLineState(end_perp, tuple(ends)), lines
