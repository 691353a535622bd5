"""I/O contracts for Step 01: Stake-out point extraction."""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field


class StakeoutInput(BaseModel):
    parts_file: Path = Field(..., description="Path to parts.json geometry snapshot")


class StakeoutOutput(BaseModel):
    points_file: Path = Field(..., description="Path to points.json with named stake-out points")
    status: Literal["ok", "no_segments", "no_points"] = Field("ok")
    message: str = Field("")
    num_points: int = Field(0, description="Points after de-duplication")
    num_raw_points: int = Field(0, description="Points before de-duplication")
