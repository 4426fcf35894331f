"""Define a class to represent positions in 3D space."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from numpy.typing import NDArray


@dataclass(frozen=True)
class Point3D:
    """An (x,y,z) position in 3D space."""

    x: float
    y: float
    z: float

    @classmethod
    def identity(cls) -> Point3D:
        """Construct a Point3D corresponding to the identity translation."""
        return Point3D(0.0, 0.0, 0.0)

    def to_tuple(self) -> tuple[float, float, float]:
        """Convert the point into an (x,y,z) tuple of floats."""
        return (float(self.x), float(self.y), float(self.z))

    def to_array(self) -> NDArray[np.float64]:
        """Convert the 3D point to a NumPy array."""
        return np.array([self.x, self.y, self.z], dtype=np.float64)

    def approx_equal(self, other: Point3D, rtol: float = 1e-05, atol: float = 1e-08) -> bool:
        """Evaluate whether another Point3D is approximately equal to this one."""
        return bool(np.allclose(self.to_array(), other.to_array(), rtol=rtol, atol=atol))
