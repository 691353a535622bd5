"""Junction detection from intersections of extended run centerlines.

Each run is extended past both ends so that runs meeting through a fitting
(elbow, tee) intersect in plan. A plan intersection is accepted only when
the two true centerlines pass within ``join_centerline_tol`` of each other
in 3D at the mapped stations, and the runs are within
``intersection_max_hops`` of each other in the connectivity graph.
"""

from __future__ import annotations

import logging

import numpy as np

from pipestake.utils.geometry import lerp, segment_intersection_2d
from ._elevation import bop_z, ext_to_station
from ._graph import Adjacency, are_connected
from ._segments import Run, StakeoutPoint

logger = logging.getLogger(__name__)


def intersect_runs(a: Run, b: Run) -> tuple[float, float, float, float] | None:
    """Plan intersection of two extended runs mapped to true stations.

    Returns (ix, iy, tA, tB) or None when the extended segments do not meet.
    """
    hit = segment_intersection_2d(a.e0, a.e1, b.e0, b.e1)
    if hit is None:
        return None
    ix, iy, ta_ext, tb_ext = hit
    t_a = ext_to_station(ta_ext, a.plan_length, a.ext)
    t_b = ext_to_station(tb_ext, b.plan_length, b.ext)
    return ix, iy, t_a, t_b


def centerline_gap(a: Run, t_a: float, b: Run, t_b: float) -> float:
    """3D distance between the two centerline stations."""
    return float(np.linalg.norm(lerp(a.c0, a.c1, t_a) - lerp(b.c0, b.c1, t_b)))


def find_intersections(
    runs: list[Run],
    adj: Adjacency,
    join_tol: float,
    max_hops: int = 3,
    description: str = "BOP",
) -> list[StakeoutPoint]:
    """Detect junction points over every unordered pair of runs.

    The point elevation is the lower of the two runs' BOP at the junction.
    """
    points: list[StakeoutPoint] = []
    rejected_gap = 0
    rejected_graph = 0

    for i in range(len(runs)):
        a = runs[i]
        for j in range(i + 1, len(runs)):
            b = runs[j]

            hit = intersect_runs(a, b)
            if hit is None:
                continue
            ix, iy, t_a, t_b = hit

            if centerline_gap(a, t_a, b, t_b) > join_tol:
                rejected_gap += 1
                continue
            if not are_connected(adj, a.part_id, b.part_id, max_hops):
                rejected_graph += 1
                continue

            z = min(bop_z(a, t_a), bop_z(b, t_b))
            points.append(StakeoutPoint(ix, iy, z, description, "intersection"))

    logger.info(
        f"Intersections: {len(points)} accepted, {rejected_gap} rejected by 3D gap, "
        f"{rejected_graph} rejected by connectivity"
    )
    return points
