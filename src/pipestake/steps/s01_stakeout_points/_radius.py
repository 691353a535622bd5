"""Outside-radius resolution for straight parts.

The radius is resolved from an ordered list of lookup strategies, each a
pure function of the part record returning feet or None. The largest
strategy result wins; if none resolves, the configured default is used.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable

from pipestake.core.contracts import PartRecord

logger = logging.getLogger(__name__)

# Attribute names probed in order; the first usable one is taken
DIAMETER_ATTRIBUTE_NAMES = (
    "Outside Diameter",
    "OutsideDiameter",
    "Outer Diameter",
    "OuterDiameter",
    "OD",
    "Outside Dia",
    "Outside dia",
    "Diameter",
    "Primary Diameter",
    "Nominal Diameter",
)

_NUMBER_RE = re.compile(r"([-+]?\d*\.?\d+)")

# Unitless values below this are read as inches, otherwise feet
_UNITLESS_INCH_LIMIT = 48.0


def parse_length_to_feet(text: str | None) -> float | None:
    """Parse a free-text length such as '2.375 in', '60.3 mm' or "4'" to feet.

    Only the first number in the text is used. Returns None for blank text
    or text without a number.
    """
    if text is None or not text.strip():
        return None
    s = text.strip().lower()

    m = _NUMBER_RE.search(s)
    if m is None:
        return None
    val = float(m.group(1))

    if "mm" in s:
        return val / 304.8
    if "cm" in s:
        return val / 30.48
    if "m" in s:
        return val / 0.3048
    if "ft" in s or "'" in s:
        return val
    if "in" in s or '"' in s:
        return val / 12.0
    return val / 12.0 if val < _UNITLESS_INCH_LIMIT else val


def largest_connector_radius(part: PartRecord) -> float | None:
    """Largest positive connector radius (often OD/2, but not always)."""
    radii = [c.radius for c in part.connectors if c.radius is not None and c.radius > 0]
    return max(radii) if radii else None


def named_diameter_radius(part: PartRecord) -> float | None:
    """Half of the first diameter-like attribute that parses to a positive length."""
    for name in DIAMETER_ATTRIBUTE_NAMES:
        if name not in part.attributes:
            continue
        value = part.attributes[name]
        if isinstance(value, str):
            od_ft = parse_length_to_feet(value)
        else:
            od_ft = float(value)
        if od_ft is not None and od_ft > 0:
            return od_ft * 0.5
    return None


RADIUS_STRATEGIES: tuple[Callable[[PartRecord], float | None], ...] = (
    largest_connector_radius,
    named_diameter_radius,
)


def resolve_outside_radius(part: PartRecord, default_radius: float) -> float:
    """Outside radius in feet; always positive."""
    found = [r for r in (strategy(part) for strategy in RADIUS_STRATEGIES) if r is not None and r > 0]
    if found:
        return max(found)
    logger.debug(f"Part {part.id}: no radius source, using default {default_radius:.4f} ft")
    return default_radius
