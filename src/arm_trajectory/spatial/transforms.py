"""Define the interface used to re-express poses in other reference frames."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from arm_trajectory.spatial.poses import Pose3D

if TYPE_CHECKING:
    from collections.abc import Mapping


class TransformUnavailableError(RuntimeError):
    """An error raised when a pose cannot be converted into a requested reference frame."""


class FrameTransformer(ABC):
    """An interface for a service converting stamped poses between reference frames."""

    @abstractmethod
    def can_transform(self, target_frame: str, source_frame: str, stamp_s: float | None) -> bool:
        """Evaluate whether data in the source frame can be expressed in the target frame.

        :param target_frame: Reference frame into which data would be converted
        :param source_frame: Reference frame in which the data is currently expressed
        :param stamp_s: Timestamp (seconds) of the data (if None, use the latest transform)
        :return: True if the transform is available, else False
        """
        ...

    @abstractmethod
    def transform(self, pose: Pose3D, target_frame: str, stamp_s: float | None = None) -> Pose3D:
        """Convert the given pose into the target reference frame.

        :param pose: Pose w.r.t. its current reference frame
        :param target_frame: Reference frame of the output pose
        :param stamp_s: Timestamp (seconds) of the pose (if None, use the latest transform)
        :return: Equivalent pose expressed in the target frame
        :raises TransformUnavailableError: If the transform cannot be found
        """
        ...

    def try_transform(self, pose: Pose3D, target_frame: str) -> Pose3D | None:
        """Convert the given pose into the target frame, or return None if that isn't possible."""
        try:
            return self.transform(pose, target_frame)
        except TransformUnavailableError:
            return None


class StaticFrameTransformer(FrameTransformer):
    """A frame transformer backed by a fixed, in-memory tree of named frames.

    Each frame is stored as its pose relative to a parent frame. Any two frames sharing a
    root can be converted between; timestamps are ignored since the tree never changes
    unless frames are explicitly set or removed.
    """

    def __init__(self, frames: Mapping[str, Pose3D] | None = None) -> None:
        """Initialize the transformer with an optional map from frame names to parent-relative poses."""
        self._frames: dict[str, Pose3D] = dict(frames or {})

    def set_frame(self, frame_name: str, pose_p_f: Pose3D) -> None:
        """Set the pose of the named frame (f) relative to its parent frame (p)."""
        if frame_name == pose_p_f.ref_frame:
            raise ValueError(f"Frame '{frame_name}' cannot be its own parent.")
        self._frames[frame_name] = pose_p_f

    def remove_frame(self, frame_name: str) -> None:
        """Remove the named frame from the tree (does nothing if the frame is unknown)."""
        self._frames.pop(frame_name, None)

    @property
    def known_frames(self) -> set[str]:
        """Retrieve the names of all frames in the tree, including root frames."""
        return set(self._frames) | {pose.ref_frame for pose in self._frames.values()}

    def _pose_wrt_root(self, frame_name: str) -> Pose3D | None:
        """Find the pose of the named frame relative to the root of its tree (None if unknown)."""
        if frame_name not in self.known_frames:
            return None

        pose_r_f = Pose3D.identity(frame_name)
        curr_frame = frame_name
        for _ in range(len(self._frames) + 1):
            if curr_frame not in self._frames:
                return pose_r_f
            pose_p_c = self._frames[curr_frame]
            pose_r_f = pose_p_c @ pose_r_f
            curr_frame = pose_p_c.ref_frame

        raise ValueError(f"Frame tree contains a cycle through frame '{frame_name}'.")

    def can_transform(self, target_frame: str, source_frame: str, stamp_s: float | None) -> bool:
        """Evaluate whether data in the source frame can be expressed in the target frame."""
        if target_frame == source_frame:
            return True

        pose_r_t = self._pose_wrt_root(target_frame)
        pose_r_s = self._pose_wrt_root(source_frame)
        if pose_r_t is None or pose_r_s is None:
            return False

        return pose_r_t.ref_frame == pose_r_s.ref_frame

    def transform(self, pose: Pose3D, target_frame: str, stamp_s: float | None = None) -> Pose3D:
        """Convert the given pose into the target reference frame."""
        source_frame = pose.ref_frame
        if source_frame == target_frame:
            return pose

        if not self.can_transform(target_frame, source_frame, stamp_s):
            raise TransformUnavailableError(
                f"No transform from '{source_frame}' to '{target_frame}' in the frame tree.",
            )

        pose_r_t = self._pose_wrt_root(target_frame)
        pose_r_s = self._pose_wrt_root(source_frame)
        assert pose_r_t is not None and pose_r_s is not None

        pose_t_r = pose_r_t.inverse(target_frame)
        return pose_t_r @ pose_r_s @ pose
