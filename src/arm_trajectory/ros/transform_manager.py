"""Define a frame transformer that reads transforms from the /tf tree."""

from __future__ import annotations

import rospy
from tf2_ros import Buffer, TransformException, TransformListener

from arm_trajectory.io.logging import log_warn
from arm_trajectory.ros.msg_conversion import pose_from_tf_stamped_msg
from arm_trajectory.spatial import FrameTransformer, Pose3D, TransformUnavailableError


def _ros_time(stamp_s: float | None) -> rospy.Time:
    """Convert an optional timestamp (seconds) into a ROS time (None = latest available)."""
    return rospy.Time(0) if stamp_s is None else rospy.Time.from_sec(stamp_s)


class TFFrameTransformer(FrameTransformer):
    """Transforms poses between frames using a tf2 buffer filled by a transform listener."""

    def __init__(self, timeout_s: float = 1.0, buffer: Buffer | None = None) -> None:
        """Initialize the transformer and start listening to /tf.

        :param timeout_s: Duration (seconds) to wait for a transform before giving up
        :param buffer: Optional existing tf2 buffer (a new one is created if None)
        """
        self.timeout = rospy.Duration.from_sec(timeout_s)
        self._buffer = Buffer() if buffer is None else buffer
        self._listener = TransformListener(self._buffer)

    def can_transform(self, target_frame: str, source_frame: str, stamp_s: float | None) -> bool:
        """Check whether the source frame can be transformed into the target frame."""
        if target_frame == source_frame:
            return True
        return self._buffer.can_transform(
            target_frame,
            source_frame,
            _ros_time(stamp_s),
            self.timeout,
        )

    def transform(self, pose: Pose3D, target_frame: str, stamp_s: float | None = None) -> Pose3D:
        """Convert the given pose into the target frame using the latest /tf data.

        :raises TransformUnavailableError: If the transform couldn't be found within the timeout
        """
        if pose.ref_frame == target_frame:
            return pose

        try:
            tf_stamped_msg = self._buffer.lookup_transform(
                target_frame=target_frame,
                source_frame=pose.ref_frame,
                time=_ros_time(stamp_s),
                timeout=self.timeout,
            )
        except TransformException as t_exc:
            log_warn(
                f"[TFFrameTransformer] Lookup of '{pose.ref_frame}' w.r.t. '{target_frame}' "
                f"gave exception: {t_exc}",
            )
            raise TransformUnavailableError(
                f"Could not get transform from {target_frame} to {pose.ref_frame}",
            ) from t_exc

        pose_t_s = pose_from_tf_stamped_msg(tf_stamped_msg)
        return pose_t_s @ pose
