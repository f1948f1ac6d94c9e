"""
point / vector math shared by the whole engine.

everything works on plain (x, y) tuples or Point namedtuples, so callers
can pass either. nothing in here raises on degenerate input: zero-length
segments and zero vectors have a defined answer.
"""
import math
from collections import namedtuple


Point = namedtuple("Point", ["x", "y"])


def distance(a, b):
    """euclidean distance, 0 iff a == b"""
    return math.hypot(b[0] - a[0], b[1] - a[1])


def _segment_param(p, a, b):
    """
    where p projects onto the infinite line through a and b, as a
    fraction of the segment, clamped to [0, 1]. None for a == b.
    """
    dx = b[0] - a[0]
    dy = b[1] - a[1]
    length_sq = dx * dx + dy * dy
    if length_sq == 0:
        return None
    t = ((p[0] - a[0]) * dx + (p[1] - a[1]) * dy) / length_sq
    return max(0.0, min(1.0, t))


def project_onto_segment(p, a, b):
    """closest point on segment [a, b] to p. degenerate segment gives a"""
    t = _segment_param(p, a, b)
    if t is None:
        return Point(a[0], a[1])
    return Point(a[0] + t * (b[0] - a[0]), a[1] + t * (b[1] - a[1]))


def point_to_segment_distance(p, a, b):
    """distance from p to the closest point of segment [a, b]"""
    return distance(p, project_onto_segment(p, a, b))


def rotate_around(p, center, angle_degrees):
    """
    rotate p about center. positive angles turn clockwise on screen
    (y grows downward), same as css/canvas rotate().
    """
    rad = math.radians(angle_degrees)
    cos = math.cos(rad)
    sin = math.sin(rad)
    dx = p[0] - center[0]
    dy = p[1] - center[1]
    return Point(cos * dx - sin * dy + center[0],
                 sin * dx + cos * dy + center[1])


def normalize(vx, vy):
    """unit vector in the direction of (vx, vy). zero stays zero"""
    length = math.hypot(vx, vy)
    if length == 0:
        return (0.0, 0.0)
    return (vx / length, vy / length)


def perpendicular(a, b):
    """unit normal of segment a -> b, i.e. normalize(-dy, dx)"""
    return normalize(-(b[1] - a[1]), b[0] - a[0])


def cross_sign(p, a, b):
    """
    signed area test of p against the directed edge a -> b.
    sign tells which side of the edge p is on, 0 means on the line.
    """
    return (p[0] - b[0]) * (a[1] - b[1]) - (a[0] - b[0]) * (p[1] - b[1])
