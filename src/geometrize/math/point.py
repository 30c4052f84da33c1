"""2D point arithmetic."""

from dataclasses import dataclass

from geometrize.math.vector import Vector


@dataclass(frozen=True)
class Point:
    """A position in the plane."""

    x: float
    y: float

    @classmethod
    def zero(cls):
        return cls(0.0, 0.0)

    def __add__(self, other):
        if not isinstance(other, Vector):
            return NotImplemented
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other):
        # Point - Point is the displacement between them, Point - Vector moves back
        if isinstance(other, Point):
            return Vector(self.x - other.x, self.y - other.y)
        if isinstance(other, Vector):
            return Point(self.x - other.x, self.y - other.y)
        return NotImplemented
