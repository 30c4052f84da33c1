"""
Ellipse shape.

Defined by its cartesian form ((x - u) / a)^2 + ((y - v) / b)^2 = 1, with an
optional rotation angle in radians. An ellipse without an angle is
axis-aligned.

    ellipse = (
        Ellipse.builder()
        .u(0.0)
        .v(0.0)
        .a(1.0)
        .b(1.0)
        .angle(math.pi / 4)
        .build()
    )
"""

import sys
from collections import OrderedDict
from typing import Optional

from geometrize.shapes.base import Shape


class Ellipse(Shape):
    """An ellipse centred on (u, v) with half-axes a and b."""

    u: float = 0.0
    v: float = 0.0
    a: float = 0.0
    b: float = 0.0
    angle: Optional[float] = None

    @classmethod
    def builder(cls):
        return EllipseBuilder()

    def is_circle(self):
        """Check that both half-axes are equal up to float epsilon."""
        return abs(self.a - self.b) < sys.float_info.epsilon

    def is_rotated(self):
        return self.angle is not None

    def parameters(self):
        params = OrderedDict([("u", self.u), ("v", self.v), ("a", self.a), ("b", self.b)])
        if self.angle is not None:
            params["angle"] = self.angle
        return params

    def _fields_from(self, values):
        return dict(values)


class EllipseBuilder:
    """Accumulates ellipse parameters until build() is called."""

    def __init__(self):
        self._u = 0.0
        self._v = 0.0
        self._a = 0.0
        self._b = 0.0
        self._angle = None

    def u(self, u):
        self._u = u
        return self

    def v(self, v):
        self._v = v
        return self

    def a(self, a):
        self._a = a
        return self

    def b(self, b):
        self._b = b
        return self

    def angle(self, angle):
        self._angle = angle
        return self

    def build(self):
        return Ellipse(u=self._u, v=self._v, a=self._a, b=self._b, angle=self._angle)
