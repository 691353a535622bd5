"""Bottom-of-pipe elevation with slope correction."""

from __future__ import annotations

import math

import numpy as np

from pipestake.utils.geometry import EPS
from ._segments import Run


def vertical_radius_component(c0: np.ndarray, c1: np.ndarray, radius: float) -> float:
    """Vertical extent of the pipe radius: r * sqrt(1 - uz^2).

    uz is the Z component of the unit axis. Degenerate axes are treated as
    horizontal.
    """
    d = c1 - c0
    length = float(np.linalg.norm(d))
    if length < EPS:
        return radius
    uz = float(d[2]) / length
    return radius * math.sqrt(max(0.0, 1.0 - uz * uz))


def bop_z(run: Run, t: float) -> float:
    """BOP elevation at station t (t may lie outside [0, 1])."""
    zc = float(run.c0[2] + t * (run.c1[2] - run.c0[2]))
    return zc - run.rad_vertical


def ext_to_station(t_ext: float, plan_length: float, ext: float) -> float:
    """Map a parameter on the extended plan segment to a station on the true run.

    The result lies outside [0, 1] when the parameter falls in an extension.
    """
    if plan_length < EPS:
        return 0.0
    s = t_ext * (plan_length + 2.0 * ext) - ext
    return s / plan_length
