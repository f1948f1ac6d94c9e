"""
per-stroke sampling: jitter filter, dash phase, pen dynamics.

one StrokeSampler lives exactly as long as one pointer-down interval.
it owns the sample list and the DashState, so throwing the sampler away
is all it takes to abort a stroke.
"""
from collections import namedtuple

from app.config import MIN_SAMPLE_MOVE
from core import dash
from core.geometry import Point, distance
from core.pen_dynamics import segment_style


SampleResult = namedtuple("SampleResult", [
    "should_draw", "render_width", "render_alpha", "grain", "prev", "curr", "distance",
])


class StrokeSampler:
    """
    collects the samples of the stroke in progress.

    style is read live (a StateManager or anything with the same
    attributes) but is only expected to change between strokes.
    """

    def __init__(self, style):
        self.style = style
        self.points = []
        self.dash_state = dash.DashState()

    @property
    def last_point(self):
        return self.points[-1] if self.points else None

    def is_jitter(self, point):
        """too close to the last kept sample to be worth a segment"""
        last = self.last_point
        if last is None:
            return False
        return (abs(point[0] - last[0]) < MIN_SAMPLE_MOVE and
                abs(point[1] - last[1]) < MIN_SAMPLE_MOVE)

    def append_sample(self, point):
        """
        add a sample and describe the segment it closes.

        returns None when the sample was dropped as jitter. the first
        sample has no segment, it comes back with prev=None and is always
        drawn (phase position 0 is inside the first dash).
        """
        point = Point(point[0], point[1])
        if self.is_jitter(point):
            return None

        prev = self.last_point
        self.points.append(point)

        seg_len = distance(prev, point) if prev is not None else 0.0
        style = self.style

        if style.current_tool == "eraser":
            # eraser ignores line styles and pen variants
            dash.advance(self.dash_state, seg_len, "solid", style.dash_density, style.pen_size)
            return SampleResult(True, style.eraser_size, 1.0, (), prev, point, seg_len)

        should_draw = dash.advance(self.dash_state, seg_len, style.line_style,
                                   style.dash_density, style.pen_size)

        if prev is None:
            look = segment_style(style.pen_variant, point, point, style.pen_size)
        else:
            look = segment_style(style.pen_variant, prev, point, style.pen_size)

        return SampleResult(should_draw, look.width, look.alpha, look.grain, prev, point, seg_len)

    def freeze(self):
        """the samples as an immutable tuple, for archiving"""
        return tuple(self.points)

    def __len__(self):
        return len(self.points)


def append_sample(sampler, point):
    return sampler.append_sample(point)
