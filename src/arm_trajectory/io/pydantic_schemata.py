"""Define Pydantic models for validating goal and executor configuration YAML files."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from arm_trajectory.io.yaml_utils import load_yaml_data
from arm_trajectory.spatial.frames import ARM_BASE_FRAME

XYZ_RPY = Tuple[float, float, float, float, float, float]
"""A six-tuple of floats representing an SE(3) pose."""


def _validate_file(schema: type[BaseModel], yaml_path: Path) -> BaseModel:
    """Load a YAML file and validate its contents against the given schema.

    :raises RuntimeError: If the data in the file doesn't satisfy the schema
    """
    yaml_data = load_yaml_data(yaml_path)

    try:
        return schema.model_validate(yaml_data)
    except ValidationError as v_err:
        raise RuntimeError(f"Validation error in {yaml_path}: {v_err}") from v_err


# =============================================================================
# Pose and Frame Schemata
# =============================================================================


class Pose3DDictSchema(BaseModel):
    """Schema for specifying a Pose3D as a dictionary."""

    xyz_rpy: XYZ_RPY
    frame: str

    model_config = ConfigDict(extra="forbid")


# =============================================================================
# Trajectory Goal Schemata
# =============================================================================


class WaypointDictSchema(BaseModel):
    """Schema for a waypoint given with an optional frame, timestamp, and finger angles."""

    xyz_rpy: XYZ_RPY
    frame: Optional[str] = None
    """Frame in which the pose is given (uses the arm's base frame if unspecified)."""

    stamp_s: Optional[float] = None
    fingers_rad: Optional[List[float]] = Field(default=None, min_length=1)

    model_config = ConfigDict(extra="forbid")


WaypointSchema = Union[XYZ_RPY, WaypointDictSchema]
"""A waypoint can be given as a 6-tuple (in the base frame) or as a dictionary."""


class TrajectoryGoalSchema(BaseModel):
    """Schema for a trajectory goal and the static frames its waypoints refer to."""

    waypoints: List[WaypointSchema]
    frames: Dict[str, Pose3DDictSchema] = Field(default_factory=dict)
    """Map from frame names to their poses relative to a parent frame."""

    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="after")
    def check_fingers_consistent(self) -> TrajectoryGoalSchema:
        """Validate that either all waypoints or none of them specify finger angles."""
        with_fingers = [
            isinstance(w, WaypointDictSchema) and w.fingers_rad is not None for w in self.waypoints
        ]
        if any(with_fingers) and not all(with_fingers):
            raise ValueError("Either all waypoints or none of them may specify 'fingers_rad'.")

        finger_counts = {
            len(w.fingers_rad)
            for w in self.waypoints
            if isinstance(w, WaypointDictSchema) and w.fingers_rad is not None
        }
        if len(finger_counts) > 1:
            raise ValueError(f"Waypoints disagree on the number of fingers: {finger_counts}")
        return self

    @classmethod
    def validate_yaml(cls, yaml_path: Path) -> TrajectoryGoalSchema:
        """Validate a trajectory goal YAML file and return the resulting schema.

        :param yaml_path: Path to a YAML file to be validated by the schema
        :return: Validated TrajectoryGoalSchema instance
        """
        return _validate_file(cls, yaml_path)  # type: ignore[return-value]


# =============================================================================
# Executor Configuration Schema
# =============================================================================


class ExecutorConfigSchema(BaseModel):
    """Schema for the parameters of the trajectory executor."""

    canonical_frame: str = ARM_BASE_FRAME
    loop_hz: float = Field(default=10.0, gt=0, description="Poll frequency (Hz)")
    transform_timeout_s: float = Field(default=1.0, ge=0)
    position_tolerance_m: float = Field(default=0.05, ge=0)

    model_config = ConfigDict(extra="forbid")

    @classmethod
    def validate_yaml(cls, yaml_path: Path) -> ExecutorConfigSchema:
        """Validate an executor configuration YAML file and return the resulting schema."""
        return _validate_file(cls, yaml_path)  # type: ignore[return-value]
