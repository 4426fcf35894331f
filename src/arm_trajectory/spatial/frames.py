"""Define names of the reference frames shared across the package."""

DEFAULT_FRAME = "map"
"""Reference frame assumed for poses that don't specify one."""

ARM_BASE_FRAME = "jaco_api_origin"
"""Canonical base frame of the arm; waypoints, feedback, and results are expressed in it."""
