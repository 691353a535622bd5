"""Shared pytest fixtures for pipestake tests."""

import json
from pathlib import Path

import pytest

from tests.factories import fitting, straight


@pytest.fixture
def data_root(tmp_path: Path) -> Path:
    """Create a temporary data root with standard directory structure."""
    for subdir in ["raw", "interim/s01_stakeout_points", "processed"]:
        (tmp_path / subdir).mkdir(parents=True, exist_ok=True)
    return tmp_path


@pytest.fixture
def crossing_parts() -> list[dict]:
    """Runs A (x axis) and B (y axis) crossing at (5, 0), joined through tee T."""
    return [
        straight("A", (0, 0, 0), (10, 0, 0), joined1=("T",)),
        straight("B", (5, -5, 0), (5, 5, 0), joined0=("T",)),
        fitting("T", [(5, 0, 0), (5, -0.1, 0), (5, 0.1, 0)], [("A",), ("B",), ()]),
    ]


@pytest.fixture
def disjoint_crossing_parts() -> list[dict]:
    """Same geometry as crossing_parts but the two runs belong to unrelated systems."""
    return [
        straight("A", (0, 0, 0), (10, 0, 0)),
        straight("B", (5, -5, 0), (5, 5, 0)),
    ]


@pytest.fixture
def corner_parts() -> list[dict]:
    """Run A ends at (10, 0); elbow E; short stub S runs north at x=10.3.

    The extended centerlines meet at (10.3, 0), outside both true segments.
    """
    return [
        straight("A", (0, 0, 0), (10, 0, 0), joined1=("E",)),
        fitting("E", [(10, 0, 0), (10.3, 0.3, 0)], [("A",), ("S",)]),
        straight("S", (10.3, 0.3, 0), (10.3, 0.6, 0), joined0=("E",)),
    ]


@pytest.fixture
def riser_parts() -> list[dict]:
    """Run A, elbow E at its east end, riser R going up from the elbow."""
    return [
        straight("A", (0, 0, 0), (10, 0, 0), joined1=("E",)),
        fitting("E", [(10, 0, 0), (10, 0, 0.3)], [("A",), ("R",)]),
        straight("R", (10, 0, 0.3), (10, 0, 5), joined0=("E",)),
    ]


@pytest.fixture
def parts_json(data_root: Path, corner_parts: list[dict]) -> Path:
    """Write the corner snapshot to raw/parts.json."""
    path = data_root / "raw" / "parts.json"
    with open(path, "w") as f:
        json.dump({"units": "ft", "parts": corner_parts}, f)
    return path
