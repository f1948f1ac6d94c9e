"""
pen-variant width / opacity modulation.

segment length between two samples is our stand-in for pointer speed
(same event rate, longer segment = faster hand = less "pressure").
every function here is pure: same inputs, same output. that includes
the pencil/brush grain, which comes from a sine hash of the endpoint
coordinates instead of an rng so redraws and tests are reproducible.
"""
import math
from collections import namedtuple

from app.config import (
    PEN_DYNAMICS, FLAT_PEN_STYLE, FOUNTAIN_DIRECTION_WEIGHT,
    PENCIL_GRAIN_STROKES, BRUSH_GRAIN_STROKES,
)


# one secondary stroke: perpendicular offset from the main segment plus its own look
GrainStroke = namedtuple("GrainStroke", ["offset", "width", "alpha"])

# what the renderer needs to know about one segment
SegmentStyle = namedtuple("SegmentStyle", ["width", "alpha", "grain"])


def grain_hash(x, y, i):
    """
    classic shader-style hash. returns a float in [0, 1) that only
    depends on (x, y, i)
    """
    h = math.sin(x * 12.9898 + y * 78.233 + i * 43758.5453) * 43758.5453
    return h - math.floor(h)


def speed_factor(distance, divisor):
    """0 when barely moving, 1 at or beyond the divisor"""
    if not divisor:
        return 0.0
    return min(distance / divisor, 1.0)


def modulated_width(distance, pen_size, min_ratio, max_ratio, divisor):
    """max width when slow, shrinking linearly to min width when fast"""
    min_width = pen_size * min_ratio
    max_width = pen_size * max_ratio
    return max_width - speed_factor(distance, divisor) * (max_width - min_width)


def segment_style(variant, prev, curr, pen_size):
    """
    width, alpha and grain strokes for the segment prev -> curr.
    unknown variants render like the normal pen.
    """
    params = PEN_DYNAMICS.get(variant, PEN_DYNAMICS["normal"])
    dx = curr[0] - prev[0]
    dy = curr[1] - prev[1]
    dist = math.hypot(dx, dy)

    width = modulated_width(dist, pen_size, params["min"], params["max"],
                            params["speed_divisor"])

    if variant == "fountain":
        # calligraphic nib: thinner on the diagonals
        angle = math.atan2(dy, dx)
        direction = abs(math.sin(angle * 2)) * FOUNTAIN_DIRECTION_WEIGHT
        width = max(pen_size * params["min"], width - direction * pen_size)

    grain = ()
    if variant == "pencil":
        grain = pencil_grain(prev, curr, pen_size)
    elif variant == "brush":
        grain = brush_grain(prev, curr, width)

    return SegmentStyle(width, params["alpha"], grain)


def flat_style(variant, pen_size):
    """
    (width, alpha) for a path painted in one go, no speed or grain.
    used when repainting archived strokes and for shapes
    """
    alpha, scale = FLAT_PEN_STYLE.get(variant, FLAT_PEN_STYLE["normal"])
    return pen_size * scale, alpha


def pencil_grain(prev, curr, pen_size):
    """thin, faint strands either side of the main line"""
    strands = []
    for i in range(PENCIL_GRAIN_STROKES):
        seed = grain_hash(prev[0], curr[1], i)
        strands.append(GrainStroke(
            offset=(seed - 0.5) * pen_size * 0.3,
            width=pen_size * 0.4,
            alpha=0.3 + seed * 0.2,
        ))
    return tuple(strands)


def brush_grain(prev, curr, brush_width):
    """fuzzy bristle edges, scaled by the current brush width"""
    strands = []
    for i in range(BRUSH_GRAIN_STROKES):
        seed1 = grain_hash(prev[0], curr[1], i * 1.1)
        seed2 = grain_hash(prev[1], curr[0], i * 2.2)
        seed3 = grain_hash(curr[0], prev[1], i * 3.3)
        strands.append(GrainStroke(
            offset=(seed1 - 0.5) * brush_width * 0.6,
            width=brush_width * (0.2 + seed3 * 0.4),
            alpha=0.1 + seed2 * 0.15,
        ))
    return tuple(strands)
