"""
Collision-avoiding placement for nodes inserted without a position.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence, Tuple

import numpy as np

from .config import GraphStyle

logger = logging.getLogger(__name__)

Point = Tuple[float, float]


def _as_array(positions: Iterable[Optional[Point]]) -> np.ndarray:
    pts = [p for p in positions if p is not None]
    if not pts:
        return np.empty((0, 2), dtype=float)
    return np.asarray(pts, dtype=float).reshape(-1, 2)


def find_free_position(
    start_x: float,
    start_y: float,
    positions: Iterable[Optional[Point]],
    style: Optional[GraphStyle] = None,
) -> Point:
    """
    Search downward from ``(start_x, start_y)`` for a collision-free point.

    A candidate collides when any existing position lies closer than
    ``clearance - 1``. On collision the candidate moves down by one clearance
    (x stays fixed) and the full set is checked again.

    Args:
        start_x, start_y: First candidate point
        positions: Existing node positions; ``None`` entries are ignored
        style: Geometry source, defaults to `GraphStyle()`

    Returns:
        The first free candidate, or the candidate reached when the probe
        budget (`style.max_probes`) runs out.
    """
    style = style or GraphStyle()
    clearance = style.clearance
    pts = _as_array(positions)

    x = float(start_x)
    y = float(start_y)
    if pts.shape[0] == 0:
        return (x, y)

    for _ in range(max(1, style.max_probes)):
        dist = np.hypot(pts[:, 0] - x, pts[:, 1] - y)
        if not np.any(dist < clearance - 1):
            return (x, y)
        y += clearance

    logger.warning(
        "No free position found from (%s, %s) within %d probes; using (%s, %s)",
        start_x, start_y, style.max_probes, x, y,
    )
    return (x, y)


def placement_after(ref_positions: Sequence[Optional[Point]], style: Optional[GraphStyle] = None) -> Point:
    """Start point one level to the right of the rightmost referenced node."""
    style = style or GraphStyle()
    pts = _as_array(ref_positions)
    if pts.shape[0] == 0:
        return (0.0, 0.0)
    return (float(pts[:, 0].max()) + style.level_width, float(pts[:, 1].mean()))


def placement_before(ref_positions: Sequence[Optional[Point]], style: Optional[GraphStyle] = None) -> Point:
    """Start point one level to the left of the leftmost referenced node."""
    style = style or GraphStyle()
    pts = _as_array(ref_positions)
    if pts.shape[0] == 0:
        return (0.0, 0.0)
    return (float(pts[:, 0].min()) - style.level_width, float(pts[:, 1].mean()))
