"""
Edge endpoint geometry.
"""

from __future__ import annotations

import math
from typing import Tuple

Point = Tuple[float, float]


def edge_points(source: Point, target: Point, radius: float, arrow_offset: float = 0.0) -> Tuple[float, float, float, float]:
    """
    Clip the centre-to-centre segment to the node marker boundaries.

    The line starts `radius` away from the source centre and stops
    ``radius + arrow_offset`` short of the target centre, leaving room for
    an arrowhead. Coincident points fall back to angle 0.

    Returns:
        (x1, y1, x2, y2)
    """
    sx, sy = source
    tx, ty = target
    angle = math.atan2(ty - sy, tx - sx)
    cos_a = math.cos(angle)
    sin_a = math.sin(angle)

    x1 = sx + cos_a * radius
    y1 = sy + sin_a * radius

    end_offset = radius + arrow_offset
    x2 = tx - cos_a * end_offset
    y2 = ty - sin_a * end_offset
    return (x1, y1, x2, y2)


def midpoint(x1: float, y1: float, x2: float, y2: float) -> Point:
    return ((x1 + x2) / 2.0, (y1 + y2) / 2.0)
