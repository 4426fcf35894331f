"""Define utility functions to simplify logging, inside or outside of a ROS node."""

from rich.console import Console

try:
    import rospy

    ROS_PRESENT = True
except ModuleNotFoundError:
    ROS_PRESENT = False

import logging

logger = logging.getLogger("arm_trajectory")
console = Console()


def _ros_node_running() -> bool:
    """Check whether this process has initialized a ROS node to log through."""
    return ROS_PRESENT and rospy.get_name() not in ["", "/unnamed"]


def log_debug(message: str) -> None:
    """Log the given string at the debug level."""
    if _ros_node_running():
        rospy.logdebug(message)
    else:
        logger.debug(message)


def log_info(message: str) -> None:
    """Log the given string to standard output."""
    if _ros_node_running():
        rospy.loginfo(message)
    else:
        logger.info(message)


def log_warn(message: str) -> None:
    """Log the given string as a warning."""
    if _ros_node_running():
        rospy.logwarn(message)
    else:
        logger.warning(message)


def log_error(message: str) -> None:
    """Log the given string as an error."""
    if _ros_node_running():
        rospy.logerr(message)
    else:
        logger.error(message)
