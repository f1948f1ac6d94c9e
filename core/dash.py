"""
dash / gap cycling for freehand strokes.

a freehand stroke arrives as a bunch of short segments whose length
depends on how fast the pointer moves. we can't just alternate
draw/skip per segment or the pattern would change with pointer speed.
instead we keep a running arc length and look at where it sits inside
one dash+gap cycle. fast motion gives a coarser dash edge, but the
pattern itself stays put.
"""
from app.config import DASHED_GAP_RATIO, DOTTED_DOT_RATIO, DOTTED_GAP_RATIO


class DashState:
    """per-stroke phase accumulator. make a fresh one on stroke start"""

    def __init__(self):
        self.accumulated_distance = 0.0
        self.in_dash_phase = True

    def reset(self):
        self.accumulated_distance = 0.0
        self.in_dash_phase = True

    def __repr__(self):
        return (f"DashState(accumulated_distance={self.accumulated_distance:.2f}, "
                f"in_dash_phase={self.in_dash_phase})")


def dash_pattern(line_style, dash_density, pen_size):
    """
    (dash_length, gap_length) for a style, or None when the style
    doesn't break up the line (solid, multi, anything unknown)
    """
    if line_style == "dashed":
        return dash_density, dash_density * DASHED_GAP_RATIO
    if line_style == "dotted":
        return pen_size * DOTTED_DOT_RATIO, dash_density * DOTTED_GAP_RATIO
    return None


def phase_is_dash(accumulated_distance, dash_length, gap_length):
    """true if this arc length falls inside the dash part of the cycle"""
    cycle = dash_length + gap_length
    if cycle <= 0:
        return True
    return (accumulated_distance % cycle) < dash_length


def advance(state, segment_length, line_style, dash_density, pen_size):
    """
    add one segment to the stroke and decide if it gets drawn.

    the distance is always accumulated, even for solid lines, so
    switching styles never leaves the accumulator out of sync.
    negative lengths are treated as 0 to keep the accumulator monotonic.
    """
    if segment_length > 0:
        state.accumulated_distance += segment_length

    pattern = dash_pattern(line_style, dash_density, pen_size)
    if pattern is None:
        state.in_dash_phase = True
        return True

    dash_length, gap_length = pattern
    state.in_dash_phase = phase_is_dash(state.accumulated_distance, dash_length, gap_length)
    return state.in_dash_phase
