"""Segment model: straight runs, vertical risers and stake-out points.

All values are derived once per extraction from the geometry snapshot and
never mutated afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

import numpy as np

RunKind = Literal["regular", "short"]
PointSource = Literal["intersection", "riser", "open_end"]


@dataclass(frozen=True, eq=False)
class Run:
    """A straight, two-ended pipe segment.

    c0/c1 are the true 3D connector points, p0/p1 their plan projections and
    e0/e1 the plan endpoints extended by ``ext`` along the plan direction.
    """

    part_id: str
    c0: np.ndarray
    c1: np.ndarray
    p0: np.ndarray
    p1: np.ndarray
    e0: np.ndarray
    e1: np.ndarray
    plan_length: float
    ext: float
    rad_out: float
    rad_vertical: float
    kind: RunKind = "regular"

    @property
    def is_regular(self) -> bool:
        return self.kind == "regular"


@dataclass(frozen=True, eq=False)
class Riser:
    """A vertical post anchored at plan point (x, y)."""

    part_id: str
    x: float
    y: float
    c0: np.ndarray
    c1: np.ndarray


@dataclass(frozen=True)
class StakeoutPoint:
    x: float
    y: float
    z: float
    description: str = "BOP"
    source: PointSource | None = None

    def with_z(self, z: float) -> StakeoutPoint:
        return StakeoutPoint(self.x, self.y, z, self.description, self.source)
