"""I/O contracts for Step 02: Trimble CSV export."""

from pathlib import Path

from pydantic import BaseModel, Field


class TrimbleExportInput(BaseModel):
    points_file: Path = Field(..., description="Path to points.json from s01")


class TrimbleExportOutput(BaseModel):
    csv_file: Path = Field(..., description="Path to the written Trimble CSV")
    num_rows: int = Field(0, description="Number of point rows (header excluded)")
