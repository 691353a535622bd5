"""Common Pydantic models shared across pipeline steps."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field


Vec3 = Annotated[list[float], Field(min_length=3, max_length=3)]


class StepMeta(BaseModel):
    """Metadata attached to every step output for reproducibility."""

    step_name: str
    elapsed_seconds: float = 0.0
    params: dict[str, Any] = Field(default_factory=dict)


class ConnectorRef(BaseModel):
    """Reference to a connector on another part that this connector is joined to."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    owner: str = Field(..., description="Id of the part owning the joined connector")
    fabrication: bool = Field(True, description="False for non-fabrication owners (equipment, etc.)")


class ConnectorRecord(BaseModel):
    """One directional connector on a part. Lengths in feet."""

    origin: Vec3 | None = None
    axis: Vec3 | None = None
    radius: float | None = Field(None, description="Connector radius (feet), often OD/2")
    joined: list[ConnectorRef] | None = Field(
        default_factory=list, description="Connectors physically joined to this one (None = unreadable)"
    )


class PartRecord(BaseModel):
    """A fabrication part as exported from the host model."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    id: str
    category: str | None = None
    connectors: list[ConnectorRecord] = Field(default_factory=list)
    attributes: dict[str, float | str] = Field(
        default_factory=dict, description="Named cross-section size attributes (float = feet, str = free text)"
    )


class PointRecord(BaseModel):
    """A named stake-out point as written to points.json and the Trimble CSV."""

    name: str
    x: float
    y: float
    z: float
    description: str = "BOP"
    source: Literal["intersection", "riser", "open_end"] | None = None


class PipelineConfig(BaseModel):
    """Top-level pipeline configuration loaded from pipeline.yaml."""

    project_name: str = "pipestake_project"
    data_root: Path = Path("./data")
    steps: list[StepEntry] = Field(default_factory=list)


class StepEntry(BaseModel):
    """One entry in the pipeline step list."""

    name: str
    module: str
    config_file: str
    depends_on: list[str] = Field(default_factory=list)
    inputs: dict[str, Any] = Field(default_factory=dict, description="Literal input fields for this step")
    enabled: bool = True


# Fix forward reference
PipelineConfig.model_rebuild()
