"""End-to-end tests of the pipestake command line."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest
import yaml
from typer.testing import CliRunner

from pipestake.cli import app
from tests.factories import fitting

runner = CliRunner()


@pytest.fixture(autouse=True)
def _drop_stdout_handlers():
    """setup_logging binds sys.stdout, which CliRunner closes after each invoke."""
    yield
    root = logging.getLogger()
    for handler in list(root.handlers):
        if type(handler) is logging.StreamHandler:
            root.removeHandler(handler)


@pytest.mark.e2e
class TestExtractCommand:
    def test_writes_csv(self, parts_json: Path, tmp_path: Path):
        out = tmp_path / "Trimble_Points.csv"
        result = runner.invoke(app, ["extract", str(parts_json), "-o", str(out)])

        assert result.exit_code == 0, result.output
        assert "Wrote 2 stake points" in result.output
        lines = out.read_bytes().split(b"\r\n")
        assert lines[0] == b"Name,X,Y,Z,Description"
        assert lines[2] == b"P-2,0.0,0.0,-0.05,BOP"

    def test_custom_config(self, parts_json: Path, tmp_path: Path):
        cfg = tmp_path / "s01.yaml"
        with open(cfg, "w") as f:
            yaml.dump({"description": "INV"}, f)
        out = tmp_path / "pts.csv"
        result = runner.invoke(app, ["extract", str(parts_json), "-o", str(out), "-c", str(cfg)])

        assert result.exit_code == 0, result.output
        assert out.read_bytes().endswith(b",INV\r\n")

    def test_nothing_found(self, tmp_path: Path):
        parts = tmp_path / "fittings.json"
        with open(parts, "w") as f:
            json.dump({"parts": [fitting("E", [(0, 0, 0), (1, 1, 0)], [(), ()])]}, f)
        out = tmp_path / "pts.csv"
        result = runner.invoke(app, ["extract", str(parts), "-o", str(out)])

        assert result.exit_code == 0
        assert "No usable fabrication straights found." in result.output
        assert not out.exists()

    def test_malformed_snapshot(self, tmp_path: Path):
        parts = tmp_path / "bad.json"
        parts.write_text("{not json")
        result = runner.invoke(app, ["extract", str(parts), "-o", str(tmp_path / "pts.csv")])

        assert result.exit_code == 1
        assert "Failed" in result.output


@pytest.mark.e2e
class TestPipelineCommands:
    @pytest.fixture
    def pipeline_yaml(self, data_root: Path, parts_json: Path, tmp_path: Path) -> Path:
        config = {
            "project_name": "cli_test",
            "data_root": str(data_root),
            "steps": [
                {"name": "stakeout_points", "module": "pipestake.steps.s01_stakeout_points",
                 "config_file": str(tmp_path / "none.yaml"), "inputs": {"parts_file": str(parts_json)}},
                {"name": "trimble_export", "module": "pipestake.steps.s02_trimble_export",
                 "config_file": str(tmp_path / "none.yaml"), "depends_on": ["stakeout_points"]},
            ],
        }
        path = tmp_path / "pipeline.yaml"
        with open(path, "w") as f:
            yaml.dump(config, f)
        return path

    def test_info(self, pipeline_yaml: Path):
        result = runner.invoke(app, ["info", "--config", str(pipeline_yaml)])
        assert result.exit_code == 0, result.output
        assert "stakeout_points" in result.output
        assert "trimble_export" in result.output

    def test_run(self, pipeline_yaml: Path, data_root: Path):
        result = runner.invoke(app, ["run", "--config", str(pipeline_yaml)])
        assert result.exit_code == 0, result.output
        assert (data_root / "processed" / "Trimble_Points.csv").exists()

    def test_run_step(self, pipeline_yaml: Path, data_root: Path):
        result = runner.invoke(app, ["run-step", "stakeout_points", "--config", str(pipeline_yaml)])
        assert result.exit_code == 0, result.output
        assert (data_root / "interim" / "s01_stakeout_points" / "points.json").exists()

    def test_run_step_unknown(self, pipeline_yaml: Path):
        result = runner.invoke(app, ["run-step", "nope", "--config", str(pipeline_yaml)])
        assert result.exit_code == 1
