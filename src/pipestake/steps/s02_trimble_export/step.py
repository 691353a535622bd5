"""Step 02: Write stake-out points as a Trimble field CSV.

Format: header ``Name,X,Y,Z,Description``, one row per point, shortest
round-trip decimals, CRLF line endings.
"""

from __future__ import annotations

import logging
from typing import ClassVar

from pipestake.core.step_base import BaseStep
from pipestake.utils.io import read_points_json, write_trimble_csv
from .config import TrimbleExportConfig
from .contracts import TrimbleExportInput, TrimbleExportOutput

logger = logging.getLogger(__name__)


class TrimbleExportStep(BaseStep[TrimbleExportInput, TrimbleExportOutput, TrimbleExportConfig]):
    name: ClassVar[str] = "trimble_export"
    input_type: ClassVar = TrimbleExportInput
    output_type: ClassVar = TrimbleExportOutput
    config_type: ClassVar = TrimbleExportConfig

    def _csv_path(self):
        output_dir = self.config.output_dir or (self.data_root / "processed")
        return output_dir / self.config.filename

    def validate_inputs(self, inputs: TrimbleExportInput) -> bool:
        if not inputs.points_file.exists():
            logger.error(f"points_file not found: {inputs.points_file}")
            return False
        csv_path = self._csv_path()
        if csv_path.exists() and not self.config.overwrite:
            logger.error(f"{csv_path} exists and overwrite is disabled")
            return False
        return True

    def run(self, inputs: TrimbleExportInput) -> TrimbleExportOutput:
        points = read_points_json(inputs.points_file)
        if not points:
            logger.warning("No points to export; writing header-only CSV")

        csv_path = self._csv_path()
        num_rows = write_trimble_csv(
            csv_path, points, header=self.config.header, encoding=self.config.encoding,
        )
        logger.info(f"Wrote {num_rows} rows to {csv_path}")
        return TrimbleExportOutput(csv_file=csv_path, num_rows=num_rows)
