"""Open-end detection for regular runs."""

from __future__ import annotations

import logging

import numpy as np

from pipestake.utils.geometry import dist_2d
from ._elevation import bop_z
from ._segments import Run, StakeoutPoint

logger = logging.getLogger(__name__)


def near_any_xy(points: list[StakeoutPoint], p: np.ndarray, tol: float) -> bool:
    """True if any point lies within ``tol`` of p in plan."""
    return any(dist_2d(np.array([q.x, q.y]), p) <= tol for q in points)


def find_open_ends(
    runs: list[Run],
    accepted: list[StakeoutPoint],
    tol: float,
    description: str = "BOP",
) -> list[StakeoutPoint]:
    """Endpoints of regular runs with no accepted point within ``tol`` in plan.

    Open ends found earlier in this pass also suppress later ones. Short runs
    are never open-end sources.
    """
    known = list(accepted)
    points: list[StakeoutPoint] = []
    for run in runs:
        if not run.is_regular:
            continue
        for p, t in ((run.p0, 0.0), (run.p1, 1.0)):
            if near_any_xy(known, p, tol):
                continue
            pt = StakeoutPoint(float(p[0]), float(p[1]), bop_z(run, t), description, "open_end")
            points.append(pt)
            known.append(pt)

    logger.info(f"Open ends: {len(points)}")
    return points
