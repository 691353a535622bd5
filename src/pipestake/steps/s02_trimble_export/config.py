"""Configuration for Step 02: Trimble CSV export."""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field


class TrimbleExportConfig(BaseModel):
    filename: str = Field("Trimble_Points.csv", description="Output CSV file name")
    output_dir: Optional[Path] = Field(
        None, description="Output directory (default: <data_root>/processed)"
    )
    header: list[str] = Field(
        default_factory=lambda: ["Name", "X", "Y", "Z", "Description"],
        min_length=5,
        max_length=5,
        description="CSV header row",
    )
    encoding: str = Field("utf-8", description="Text encoding ('utf-8-sig' adds a BOM)")
    overwrite: bool = Field(True, description="Replace an existing CSV")
