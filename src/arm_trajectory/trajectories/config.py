"""Define the parameters configuring a trajectory executor."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from arm_trajectory.io.pydantic_schemata import ExecutorConfigSchema
from arm_trajectory.spatial.frames import ARM_BASE_FRAME

if TYPE_CHECKING:
    from pathlib import Path


@dataclass(frozen=True)
class TrajectoryExecutorConfig:
    """Configures how trajectory goals are dispatched to and monitored on the arm."""

    canonical_frame: str = ARM_BASE_FRAME
    """Base frame of the arm; waypoints are sent and feedback/results are reported in it."""

    loop_hz: float = 10.0
    """Frequency (Hz) at which the arm is polled while a goal executes."""

    transform_timeout_s: float = 1.0
    """Duration (seconds) to wait for a transform to become available before giving up."""

    position_tolerance_m: float = 0.05
    """Positional dead zone (meters) kept for parameter compatibility.

    Not consulted when deciding completion; a goal completes once the arm's queue is empty.
    """

    def __post_init__(self) -> None:
        """Verify that the configured values are usable."""
        if not self.canonical_frame:
            raise ValueError("The canonical frame name cannot be empty.")
        if self.loop_hz <= 0:
            raise ValueError(f"Poll frequency must be positive, got {self.loop_hz} Hz")
        if self.transform_timeout_s < 0:
            raise ValueError(f"Transform timeout cannot be negative: {self.transform_timeout_s}")

    @property
    def poll_interval_s(self) -> float:
        """Retrieve the duration (seconds) between consecutive poll ticks."""
        return 1.0 / self.loop_hz

    @classmethod
    def from_yaml(cls, yaml_path: Path) -> TrajectoryExecutorConfig:
        """Load an executor configuration from the given YAML file.

        :param yaml_path: Path to a YAML file whose keys match the config's fields
        :return: Constructed TrajectoryExecutorConfig instance
        """
        schema = ExecutorConfigSchema.validate_yaml(yaml_path)
        return cls(**schema.model_dump())
