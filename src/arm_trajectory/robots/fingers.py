"""Define classes representing the finger state of an angular robot gripper."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class GripperAngleLimits:
    """Specifies joint limits (in radians) for the fingers of a robot gripper."""

    open_rad: float
    """Angle (radians) at which a finger is fully open."""

    closed_rad: float
    """Angle (radians) at which a finger is fully closed."""

    def clamp(self, angle_rad: float) -> float:
        """Clamp the given finger angle (radians) into the range allowed by the limits."""
        low = min(self.open_rad, self.closed_rad)
        high = max(self.open_rad, self.closed_rad)
        return min(max(angle_rad, low), high)


@dataclass(frozen=True)
class FingerAngles:
    """Angles (radians) of each finger of the gripper, in the gripper's canonical finger order."""

    angles_rad: Tuple[float, ...]

    def __post_init__(self) -> None:
        """Verify that at least one finger angle was given."""
        if not self.angles_rad:
            raise ValueError("FingerAngles requires at least one finger angle.")

    def __len__(self) -> int:
        """Retrieve the number of fingers described by the angles."""
        return len(self.angles_rad)

    @classmethod
    def uniform(cls, angle_rad: float, num_fingers: int = 3) -> FingerAngles:
        """Construct finger angles placing every finger at the same angle (radians)."""
        return FingerAngles(tuple(float(angle_rad) for _ in range(num_fingers)))

    def clamped(self, limits: GripperAngleLimits) -> FingerAngles:
        """Return a copy of the finger angles with each angle clamped into the given limits."""
        return FingerAngles(tuple(limits.clamp(a) for a in self.angles_rad))
