"""Merge near-duplicate stake-out points, keeping the lower elevation."""

from __future__ import annotations

import logging
import math

from ._segments import StakeoutPoint

logger = logging.getLogger(__name__)


def merge_nearby(points: list[StakeoutPoint], xy_tol: float, z_tol: float) -> list[StakeoutPoint]:
    """Greedy single-pass clustering.

    Each point joins the first accepted representative within ``xy_tol`` in
    plan and ``z_tol`` in elevation; the representative keeps its XY and takes
    the lower Z. Otherwise the point starts a new cluster. Output follows
    cluster creation order.
    """
    result: list[StakeoutPoint] = []
    for p in points:
        idx = -1
        for i, q in enumerate(result):
            dxy = math.hypot(p.x - q.x, p.y - q.y)
            if dxy <= xy_tol and abs(p.z - q.z) <= z_tol:
                idx = i
                break
        if idx < 0:
            result.append(p)
        elif p.z < result[idx].z:
            result[idx] = result[idx].with_z(p.z)

    logger.info(f"Merged {len(points)} raw points into {len(result)}")
    return result
