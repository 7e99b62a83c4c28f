"""Plane geometry helpers shared by the policy and the agents.

Positions are plain ``(x, y)`` pairs or arrays of shape ``(..., 2)``.
"""

from __future__ import annotations

import numpy as np

__all__ = [
    "distance",
    "distances_to_stalls",
    "heading",
]


def distance(a, b) -> float:
    """Euclidean distance between two points."""
    return float(np.hypot(b[0] - a[0], b[1] - a[1]))


def distances_to_stalls(xy, stall_x: np.ndarray) -> np.ndarray:
    """Distance from ``xy`` to every stall at ``(stall_x[k], 0)``.

    Parameters
    ----------
    xy
        Position of the observer.
    stall_x
        1-D array of stall x-coordinates.
    """
    stall_x = np.asarray(stall_x, dtype=float)
    return np.hypot(stall_x - xy[0], 0.0 - xy[1])


def heading(a, b) -> float:
    """Angle (radians) of the ray pointing from ``a`` towards ``b``."""
    return float(np.arctan2(b[1] - a[1], b[0] - a[0]))
