"""Import classes defining robot arm interfaces."""

from .arm_controller import ArmController as ArmController
from .arm_controller import ArmFaultedError as ArmFaultedError
from .arm_controller import ArmSnapshot as ArmSnapshot
from .fingers import FingerAngles as FingerAngles
from .fingers import GripperAngleLimits as GripperAngleLimits
from .simulated_arm import SimulatedArmController as SimulatedArmController
