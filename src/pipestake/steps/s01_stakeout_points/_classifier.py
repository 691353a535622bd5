"""Partition straight parts into regular runs, short runs and risers.

A part qualifies as a straight when it has exactly two connectors whose axes
point in opposite directions. When axis data is missing the part is assumed
straight. Fittings (tees, elbows, couplings) fail this test and only take
part in the connectivity graph.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import numpy as np

from pipestake.core.contracts import PartRecord
from pipestake.utils.geometry import as_point, dir_2d, farthest_pair, flatten, safe_normalize
from ._elevation import vertical_radius_component
from ._radius import resolve_outside_radius
from ._segments import Riser, Run, RunKind

logger = logging.getLogger(__name__)


@dataclass
class ClassifiedSegments:
    regular: list[Run] = field(default_factory=list)
    short: list[Run] = field(default_factory=list)
    risers: list[Riser] = field(default_factory=list)
    runs_by_id: dict[str, Run] = field(default_factory=dict)
    skipped: int = 0

    @property
    def all_runs(self) -> list[Run]:
        """Regular runs followed by short runs."""
        return self.regular + self.short

    @property
    def is_empty(self) -> bool:
        return not self.runs_by_id and not self.risers


def is_straight(part: PartRecord, dot_max: float = -0.999) -> bool:
    """Exactly two connectors with opposite axes (or axes unavailable)."""
    if len(part.connectors) != 2:
        return False
    d0 = safe_normalize(part.connectors[0].axis)
    d1 = safe_normalize(part.connectors[1].axis)
    if d0 is None or d1 is None:
        # no usable axis data: assume straight
        return True
    return float(np.dot(d0, d1)) <= dot_max


def extension_length(rad_out: float, ext_factor: float, extra_in: float) -> float:
    """Extension in feet: (ext_factor × diameter_in + extra_in) / 12."""
    diam_in = 2.0 * rad_out * 12.0
    return (ext_factor * diam_in + extra_in) / 12.0


def build_run(
    part_id: str,
    c0: np.ndarray,
    c1: np.ndarray,
    rad_out: float,
    ext_factor: float = 2.0,
    extra_in: float = 3.0,
    kind: RunKind = "regular",
) -> Run:
    """Build a run with its plan projection, extension and vertical radius."""
    p0 = flatten(c0)
    p1 = flatten(c1)
    ux, uy, plan_length = dir_2d(p0, p1)
    ext = extension_length(rad_out, ext_factor, extra_in)
    e0 = np.array([p0[0] - ext * ux, p0[1] - ext * uy, 0.0])
    e1 = np.array([p1[0] + ext * ux, p1[1] + ext * uy, 0.0])
    return Run(
        part_id=part_id,
        c0=c0,
        c1=c1,
        p0=p0,
        p1=p1,
        e0=e0,
        e1=e1,
        plan_length=plan_length,
        ext=ext,
        rad_out=rad_out,
        rad_vertical=vertical_radius_component(c0, c1, rad_out),
        kind=kind,
    )


def classify_segments(parts: list[PartRecord], config) -> ClassifiedSegments:
    """Classify every straight part.

    Args:
        parts: validated part records (fittings included; they are ignored here).
        config: StakeoutConfig with the classification thresholds.
    """
    result = ClassifiedSegments()

    for part in parts:
        if not is_straight(part, config.straight_dot_max):
            continue

        origins = [c.origin for c in part.connectors]
        if any(o is None for o in origins):
            logger.debug(f"Part {part.id}: connector origin missing, skipping")
            result.skipped += 1
            continue

        pair = farthest_pair([as_point(o) for o in origins])
        if pair is None:
            logger.debug(f"Part {part.id}: coincident connectors, skipping")
            result.skipped += 1
            continue
        c0, c1 = pair

        plan_length = dir_2d(c0, c1)[2]
        dz = abs(float(c1[2] - c0[2]))

        if plan_length <= config.vert_plan_tol and dz >= config.vert_min_z:
            result.risers.append(Riser(part_id=part.id, x=float(c0[0]), y=float(c0[1]), c0=c0, c1=c1))
            continue

        if plan_length >= config.reg_min_plan_len:
            kind: RunKind = "regular"
        elif plan_length >= config.short_min_plan_len:
            kind = "short"
        else:
            continue

        rad_out = resolve_outside_radius(part, config.default_radius)
        run = build_run(part.id, c0, c1, rad_out, config.ext_factor, config.extra_in, kind)
        if kind == "regular":
            result.regular.append(run)
        else:
            result.short.append(run)
        result.runs_by_id[part.id] = run

    logger.info(
        f"Classified {len(result.regular)} regular runs, {len(result.short)} short runs, "
        f"{len(result.risers)} risers (skipped {result.skipped})"
    )
    return result
