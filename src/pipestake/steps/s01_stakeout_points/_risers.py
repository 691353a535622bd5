"""Riser attachment: where a vertical post lands on a horizontal run."""

from __future__ import annotations

import logging

from pipestake.utils.geometry import point_segment_distance_2d
from ._elevation import bop_z, ext_to_station
from ._graph import Adjacency, reachable_within
from ._segments import Riser, Run, StakeoutPoint

logger = logging.getLogger(__name__)


def nearest_run(riser: Riser, candidates: list[Run]) -> tuple[Run, float, float] | None:
    """Closest candidate to the riser anchor in plan.

    Distance is measured to the run's extended plan segment with the
    parameter clamped to [0, 1]. Returns (run, distance, station) with the
    clamped parameter mapped back to a true station; the first candidate
    wins on ties.
    """
    best = None
    best_d = float("inf")
    best_t = 0.0
    for run in candidates:
        d, t_ext = point_segment_distance_2d(riser.x, riser.y, run.e0, run.e1)
        if d < best_d:
            best, best_d, best_t = run, d, t_ext
    if best is None:
        return None
    return best, best_d, ext_to_station(best_t, best.plan_length, best.ext)


def find_riser_hits(
    risers: list[Riser],
    runs_by_id: dict[str, Run],
    adj: Adjacency,
    tol: float,
    max_hops: int = 2,
    description: str = "BOP",
) -> list[StakeoutPoint]:
    """Emit one point per riser attached to a reachable run within ``tol``."""
    points: list[StakeoutPoint] = []
    for riser in risers:
        candidates = [
            runs_by_id[pid] for pid in reachable_within(adj, riser.part_id, max_hops) if pid in runs_by_id
        ]
        if not candidates:
            logger.debug(f"Riser {riser.part_id}: no connected runs within {max_hops} hops")
            continue

        match = nearest_run(riser, candidates)
        if match is None:
            continue
        run, dist, t = match
        if dist > tol:
            logger.debug(f"Riser {riser.part_id}: nearest run {run.part_id} at {dist:.3f} ft, beyond tolerance")
            continue
        points.append(StakeoutPoint(riser.x, riser.y, bop_z(run, t), description, "riser"))

    logger.info(f"Riser hits: {len(points)} of {len(risers)} risers")
    return points
