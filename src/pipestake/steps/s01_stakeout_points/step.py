"""Step 01: Stake-out point extraction from a fabrication piping snapshot.

Pipeline, in order:
  A. Survey transform (optional: project → shared coordinates)
  B. Connectivity graph over all parts (straights and fittings)
  C. Classification into regular runs, short runs and risers
  D. Intersections of extended runs (3D gap + graph hops)
  E. Riser attachments (graph hops + plan distance)
  F. Open ends of regular runs not near any point from D/E
  G. De-duplication (XY/Z tolerance, lower Z kept)

D, E and F each return a fresh list; the lists are concatenated before G.
All elevations are bottom of pipe (BOP) with slope correction.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import ClassVar, Literal

from pipestake.core.contracts import PartRecord, PointRecord, StepMeta
from pipestake.core.step_base import BaseStep
from pipestake.utils.geometry import as_point, make_survey_transform, transform_point, transform_vector
from pipestake.utils.io import read_parts_json, write_points_json
from ._classifier import classify_segments
from ._dedup import merge_nearby
from ._graph import build_adjacency
from ._intersections import find_intersections
from ._open_ends import find_open_ends
from ._risers import find_riser_hits
from ._segments import StakeoutPoint
from .config import StakeoutConfig
from .contracts import StakeoutInput, StakeoutOutput

logger = logging.getLogger(__name__)


@dataclass
class StakeoutResult:
    points: list[StakeoutPoint] = field(default_factory=list)
    raw_count: int = 0
    status: Literal["ok", "no_segments", "no_points"] = "ok"
    message: str = ""
    stats: dict = field(default_factory=dict)

    @property
    def found(self) -> bool:
        return self.status == "ok"


def _apply_survey_transform(parts: list[PartRecord], config: StakeoutConfig) -> list[PartRecord]:
    """Return copies of the parts with connector origins/axes in survey coordinates."""
    m = make_survey_transform(
        (config.survey_origin_x, config.survey_origin_y, config.survey_origin_z),
        config.survey_rotation_deg,
    )
    result = []
    for part in parts:
        connectors = []
        for c in part.connectors:
            update = {}
            if c.origin is not None:
                update["origin"] = transform_point(m, as_point(c.origin)).tolist()
            if c.axis is not None:
                update["axis"] = transform_vector(m, as_point(c.axis)).tolist()
            connectors.append(c.model_copy(update=update))
        result.append(part.model_copy(update={"connectors": connectors}))
    return result


def extract_stakeout_points(parts: list[PartRecord], config: StakeoutConfig | None = None) -> StakeoutResult:
    """Compute de-duplicated stake-out points for a geometry snapshot.

    Pure function of its inputs. "Nothing found" is reported through
    ``StakeoutResult.status`` rather than an exception.
    """
    config = config or StakeoutConfig()

    if config.use_survey_coordinates:
        parts = _apply_survey_transform(parts, config)
        logger.info(
            f"Survey coordinates: origin=({config.survey_origin_x}, {config.survey_origin_y}, "
            f"{config.survey_origin_z}), rotation={config.survey_rotation_deg}°"
        )

    # --- B. Graph ---
    adj = build_adjacency(parts)
    num_edges = sum(len(n) for n in adj.values()) // 2
    logger.info(f"Connectivity graph: {len(adj)} nodes, {num_edges} edges")

    # --- C. Classification ---
    segments = classify_segments(parts, config)
    stats: dict = {
        "parts": len(parts),
        "graph_nodes": len(adj),
        "graph_edges": num_edges,
        "regular_runs": len(segments.regular),
        "short_runs": len(segments.short),
        "risers": len(segments.risers),
        "skipped_parts": segments.skipped,
    }
    if segments.is_empty:
        logger.warning("No usable straights or risers in the snapshot")
        return StakeoutResult(
            status="no_segments",
            message="No usable fabrication straights found.",
            stats=stats,
        )

    # --- D. Intersections (regular + short) ---
    intersections = find_intersections(
        segments.all_runs,
        adj,
        join_tol=config.join_centerline_tol,
        max_hops=config.intersection_max_hops,
        description=config.description,
    )

    # --- E. Riser hits ---
    riser_hits = find_riser_hits(
        segments.risers,
        segments.runs_by_id,
        adj,
        tol=config.riser_tol,
        max_hops=config.riser_max_hops,
        description=config.description,
    )

    # --- F. Open ends (regular only) ---
    open_ends = find_open_ends(
        segments.regular,
        intersections + riser_hits,
        tol=config.end_near_tol,
        description=config.description,
    )

    raw = intersections + riser_hits + open_ends
    stats.update({
        "intersections": len(intersections),
        "riser_hits": len(riser_hits),
        "open_ends": len(open_ends),
    })
    if not raw:
        logger.warning("No intersections or eligible open ends found")
        return StakeoutResult(
            status="no_points",
            message="No intersections or eligible open ends found.",
            stats=stats,
        )

    # --- G. De-duplication ---
    merged = merge_nearby(raw, config.merge_xy_tol, config.merge_z_tol)
    stats["merged"] = len(merged)

    return StakeoutResult(
        points=merged,
        raw_count=len(raw),
        message=f"{len(merged)} stake points (from {len(raw)} raw)",
        stats=stats,
    )


def to_point_records(points: list[StakeoutPoint], prefix: str = "P-") -> list[PointRecord]:
    """Name points P-1, P-2, ... in output order."""
    return [
        PointRecord(name=f"{prefix}{i}", x=p.x, y=p.y, z=p.z, description=p.description, source=p.source)
        for i, p in enumerate(points, 1)
    ]


class StakeoutPointsStep(BaseStep[StakeoutInput, StakeoutOutput, StakeoutConfig]):
    name: ClassVar[str] = "stakeout_points"
    input_type: ClassVar = StakeoutInput
    output_type: ClassVar = StakeoutOutput
    config_type: ClassVar = StakeoutConfig

    def validate_inputs(self, inputs: StakeoutInput) -> bool:
        if not inputs.parts_file.exists():
            logger.error(f"parts_file not found: {inputs.parts_file}")
            return False
        if inputs.parts_file.suffix.lower() != ".json":
            logger.error(f"parts_file must be a .json snapshot: {inputs.parts_file}")
            return False
        return True

    def run(self, inputs: StakeoutInput) -> StakeoutOutput:
        output_dir = self.data_root / "interim" / "s01_stakeout_points"
        output_dir.mkdir(parents=True, exist_ok=True)

        t0 = time.time()
        parts, skipped = read_parts_json(inputs.parts_file)
        result = extract_stakeout_points(parts, self.config)
        result.stats["unreadable_parts"] = skipped

        records = to_point_records(result.points, self.config.name_prefix)
        meta = StepMeta(
            step_name=self.name,
            elapsed_seconds=time.time() - t0,
            params=self.config.model_dump(),
        )

        points_file = output_dir / "points.json"
        write_points_json(
            points_file,
            records,
            status=result.status,
            message=result.message,
            raw_count=result.raw_count,
            stats=result.stats,
            meta=meta.model_dump(),
        )

        if result.found:
            logger.info(f"Wrote {len(records)} stake points (from {result.raw_count} raw) to {points_file}")
        else:
            logger.warning(f"{result.message} Wrote empty {points_file}")

        return StakeoutOutput(
            points_file=points_file,
            status=result.status,
            message=result.message,
            num_points=len(records),
            num_raw_points=result.raw_count,
        )
