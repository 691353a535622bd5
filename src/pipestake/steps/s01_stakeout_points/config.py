"""Configuration for Step 01: Stake-out point extraction.

All lengths in feet unless the field says otherwise.
"""

from pydantic import BaseModel, Field


class StakeoutConfig(BaseModel):
    # Line extension: each end extended by (ext_factor × diameter_in + extra_in) / 12 ft
    ext_factor: float = Field(2.0, ge=0, description="Extension multiple of the outside diameter")
    extra_in: float = Field(3.0, ge=0, description="Extra extension margin (inches)")

    # Classification
    reg_min_plan_len: float = Field(0.50, gt=0, description="Min plan length of a regular run (6 in)")
    short_min_plan_len: float = Field(0.001, gt=0, description="Min plan length of a short run")
    vert_plan_tol: float = Field(0.05, ge=0, description="Max plan span of a riser (~0.6 in)")
    vert_min_z: float = Field(0.10, gt=0, description="Min vertical span of a riser (~1.2 in)")
    straight_dot_max: float = Field(
        -0.999, ge=-1.0, le=0.0, description="Max dot of connector axes for a straight (opposite directions)"
    )
    default_radius: float = Field(
        1.0 / 12.0, gt=0, description="Fallback outside radius when nothing else resolves (2 in OD)"
    )

    # Detection tolerances
    join_centerline_tol: float = Field(
        1.0 / 12.0, gt=0, description="Max 3D centerline-to-centerline distance at a joint (1 in)"
    )
    riser_tol: float = Field(0.50, ge=0, description="Max plan distance from riser to run (6 in)")
    end_near_tol: float = Field(
        1.5, ge=0, description="Open end suppressed if a point lies within this plan distance (18 in)"
    )

    # Hop limits
    intersection_max_hops: int = Field(3, ge=1, description="Max graph hops between intersecting runs")
    riser_max_hops: int = Field(2, ge=1, description="Max graph hops from riser to candidate runs")

    # De-duplication
    merge_xy_tol: float = Field(0.25, ge=0, description="Plan merge tolerance (3 in)")
    merge_z_tol: float = Field(1.0 / 48.0, ge=0, description="Elevation merge tolerance (1/4 in)")

    # Output
    description: str = Field("BOP", description="Description label for every point")
    name_prefix: str = Field("P-", description="Point names are <prefix>1, <prefix>2, ...")

    # Survey (shared) coordinates
    use_survey_coordinates: bool = Field(False, description="Report in survey instead of project coordinates")
    survey_origin_x: float = Field(0.0, description="Survey X of the project origin")
    survey_origin_y: float = Field(0.0, description="Survey Y of the project origin")
    survey_origin_z: float = Field(0.0, description="Survey elevation of the project origin")
    survey_rotation_deg: float = Field(0.0, description="Rotation from project to survey north (degrees, CCW)")
