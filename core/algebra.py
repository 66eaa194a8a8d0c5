from __future__ import annotations

from dataclasses import dataclass
import math


@dataclass(frozen=True)
class Vector3:
    x: float
    y: float
    z: float

    @staticmethod
    def from_xy(x: float, y: float, z: float = 0.0) -> Vector3:
        return Vector3(float(x), float(y), float(z))

    @staticmethod
    def zero() -> Vector3:
        return Vector3(0.0, 0.0, 0.0)

    # Navigation only cares about the floor plane; z is ignored below.
    def planar_distance_squared_to(self, other: Vector3) -> float:
        dx = self.x - other.x
        dy = self.y - other.y
        return float(dx * dx + dy * dy)

    def planar_distance_to(self, other: Vector3) -> float:
        return float(math.sqrt(self.planar_distance_squared_to(other)))
