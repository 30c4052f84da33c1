"""
2D vector arithmetic.

Normalization goes through a fast inverse square root (the Quake III bit
trick widened to 64-bit floats) refined with Newton-Raphson, so normalized
vectors may differ from an exact division in the last bits.
"""

import math
import struct
from dataclasses import dataclass

# Magic constant for the 64-bit IEEE 754 variant of the bit-shift seed
RSQRT_MAGIC = 0x5FE6EB50C7B537A9
RSQRT_ITERATIONS = 4

_U64_MASK = 0xFFFFFFFFFFFFFFFF


def q_rsqrt(x):
    """
    Approximate 1 / sqrt(x) for a non-negative float.

    The float64 bit pattern of x is read as an unsigned integer, shifted and
    subtracted from the magic constant to get a first guess, which is then
    refined by four Newton-Raphson iterations. For x = 0 the seed is finite
    and never refined away, so callers scaling a zero vector still get zero.
    """
    word = struct.unpack("<Q", struct.pack("<d", x))[0]
    word = (RSQRT_MAGIC - (word >> 1)) & _U64_MASK

    threehalfs = 1.5
    x2 = 0.5 * x
    y = struct.unpack("<d", struct.pack("<Q", word))[0]

    for _ in range(RSQRT_ITERATIONS):
        y = y * (threehalfs - (x2 * y * y))

    return y


@dataclass(frozen=True)
class Vector:
    """A displacement in the plane."""

    x: float
    y: float

    @classmethod
    def zero(cls):
        return cls(0.0, 0.0)

    def __add__(self, other):
        if not isinstance(other, Vector):
            return NotImplemented
        return Vector(self.x + other.x, self.y + other.y)

    def __neg__(self):
        return Vector(-self.x, -self.y)

    def __mul__(self, scalar):
        if not isinstance(scalar, (int, float)):
            return NotImplemented
        return Vector(self.x * scalar, self.y * scalar)

    def __rmul__(self, scalar):
        return self.__mul__(scalar)

    def dot(self, other):
        return self.x * other.x + self.y * other.y

    def cross(self, other):
        """2D cross product returning a scalar (z-component)."""
        return self.x * other.y - self.y * other.x

    def magnitude(self):
        """Exact Euclidean length."""
        return math.sqrt(self.dot(self))

    def normalize(self):
        """Unit vector in the same direction, scaled with q_rsqrt."""
        factor = q_rsqrt(self.dot(self))
        return Vector(self.x * factor, self.y * factor)
