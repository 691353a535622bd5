"""I/O utilities: geometry snapshot reader, points JSON, Trimble CSV writer."""

from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from pipestake.core.contracts import PartRecord, PointRecord

logger = logging.getLogger(__name__)

# Length unit -> feet
UNIT_TO_FEET = {
    "ft": 1.0,
    "in": 1.0 / 12.0,
    "mm": 1.0 / 304.8,
    "cm": 1.0 / 30.48,
    "m": 1.0 / 0.3048,
}

CSV_HEADER = ["Name", "X", "Y", "Z", "Description"]


# ── Geometry snapshot ────────────────────────────────────────────────

def _scale_part(raw: dict, factor: float) -> dict:
    """Scale connector origins, radii and numeric attributes of a raw part dict."""
    scaled = dict(raw)
    connectors = []
    for c in raw.get("connectors") or []:
        if not isinstance(c, dict):
            connectors.append(c)
            continue
        c = dict(c)
        if isinstance(c.get("origin"), list):
            c["origin"] = [v * factor if isinstance(v, (int, float)) else v for v in c["origin"]]
        if isinstance(c.get("radius"), (int, float)):
            c["radius"] = c["radius"] * factor
        connectors.append(c)
    scaled["connectors"] = connectors

    attrs = raw.get("attributes")
    if isinstance(attrs, dict):
        scaled["attributes"] = {
            k: (v * factor if isinstance(v, (int, float)) and not isinstance(v, bool) else v)
            for k, v in attrs.items()
        }
    return scaled


def read_parts_json(path: Path) -> tuple[list[PartRecord], int]:
    """Read a geometry snapshot into validated part records.

    Accepts either ``{"units": ..., "parts": [...]}`` or a bare list of parts.
    Parts that fail validation are logged and skipped.

    Returns:
        (parts, num_skipped)
    """
    with open(path, encoding="utf-8") as f:
        data = json.load(f)

    units = "ft"
    if isinstance(data, dict):
        if "parts" not in data:
            raise ValueError(f"{path}: expected a 'parts' list")
        units = str(data.get("units", "ft")).lower()
        raw_parts = data["parts"]
    else:
        raw_parts = data

    if not isinstance(raw_parts, list):
        raise ValueError(f"{path}: 'parts' must be a list")
    if units not in UNIT_TO_FEET:
        raise ValueError(f"{path}: unsupported units '{units}' (expected one of {sorted(UNIT_TO_FEET)})")
    factor = UNIT_TO_FEET[units]

    parts: list[PartRecord] = []
    skipped = 0
    for i, raw in enumerate(raw_parts):
        if not isinstance(raw, dict):
            logger.warning(f"Part #{i}: not an object, skipping")
            skipped += 1
            continue
        if factor != 1.0:
            raw = _scale_part(raw, factor)
        try:
            parts.append(PartRecord.model_validate(raw))
        except ValidationError as e:
            logger.warning(f"Part #{i} ({raw.get('id', '?')}): unreadable geometry, skipping ({e.error_count()} errors)")
            skipped += 1

    logger.info(f"Loaded {len(parts)} parts from {path} (units={units}, skipped={skipped})")
    return parts, skipped


# ── Points JSON ──────────────────────────────────────────────────────

def write_points_json(path: Path, points: list[PointRecord], **extra: Any) -> None:
    """Write named points plus run metadata to points.json."""
    payload = dict(extra)
    payload["points"] = [p.model_dump() for p in points]
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2)


def read_points_json(path: Path) -> list[PointRecord]:
    """Read the points list back from points.json."""
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    raw = data["points"] if isinstance(data, dict) else data
    return [PointRecord.model_validate(p) for p in raw]


# ── Trimble CSV ──────────────────────────────────────────────────────

def format_number(value: float) -> str:
    """Shortest round-trip, culture-invariant decimal representation."""
    return repr(float(value))


def write_trimble_csv(
    path: Path,
    points: list[PointRecord],
    header: list[str] | None = None,
    encoding: str = "utf-8",
) -> int:
    """Write points as a Trimble field CSV (CRLF line endings).

    String fields are quoted only when they contain a comma, quote or newline.
    Returns the number of data rows written.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding=encoding, newline="") as f:
        writer = csv.writer(f, quoting=csv.QUOTE_MINIMAL, lineterminator="\r\n")
        writer.writerow(header or CSV_HEADER)
        for p in points:
            writer.writerow([
                p.name,
                format_number(p.x),
                format_number(p.y),
                format_number(p.z),
                p.description,
            ])
    return len(points)
