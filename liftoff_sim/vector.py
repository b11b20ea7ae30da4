"""
Liftoff Telemetry Replay - Vector3

Minimal immutable 3-component vector. NaN components are allowed and are
propagated as-is (upstream uses NaN as the "no data" sentinel).
"""

from dataclasses import dataclass
import math

import numpy as np


@dataclass(frozen=True)
class Vector3:
    """
    Immutable 3D vector.

    Attributes:
        x: Horizontal (downrange) component
        y: Vertical component
        z: Out-of-plane component
    """

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @classmethod
    def zero(cls) -> 'Vector3':
        return cls(0.0, 0.0, 0.0)

    @classmethod
    def from_array(cls, arr) -> 'Vector3':
        """Create a Vector3 from any length-3 sequence."""
        a = np.asarray(arr, dtype=np.float64)
        if a.shape != (3,):
            raise ValueError(f"Vector3 needs shape (3,), got {a.shape}")
        return cls(float(a[0]), float(a[1]), float(a[2]))

    def to_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=np.float64)

    def add(self, other: 'Vector3') -> 'Vector3':
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def subtract(self, other: 'Vector3') -> 'Vector3':
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def scale(self, factor: float) -> 'Vector3':
        return Vector3(self.x * factor, self.y * factor, self.z * factor)

    def magnitude(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def normalized(self) -> 'Vector3':
        """Unit vector in the same direction, or zero for a zero vector."""
        mag = self.magnitude()
        if mag == 0.0:
            return Vector3.zero()
        return self.scale(1.0 / mag)

    def __add__(self, other: 'Vector3') -> 'Vector3':
        return self.add(other)

    def __sub__(self, other: 'Vector3') -> 'Vector3':
        return self.subtract(other)

    def __mul__(self, factor: float) -> 'Vector3':
        return self.scale(factor)

    __rmul__ = __mul__

    def __truediv__(self, divisor: float) -> 'Vector3':
        return self.scale(1.0 / divisor)

    def __neg__(self) -> 'Vector3':
        return self.scale(-1.0)

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    def __str__(self) -> str:
        return f"({self.x:.3f}, {self.y:.3f}, {self.z:.3f})"


def vector_sum(vectors) -> Vector3:
    """Sum an iterable of vectors (zero for an empty iterable)."""
    total = Vector3.zero()
    for v in vectors:
        total = total + v
    return total
