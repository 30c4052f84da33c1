"""
Rectangle shape.

A rectangle is a unit square placed at an origin point, scaled to its width
and height, then rotated by an angle in radians.

    # A rotated golden rectangle
    rect = (
        Rectangle.builder()
        .height((1.0 + math.sqrt(5.0)) / 2.0)
        .angle(math.pi / 4)
        .build()
    )
    assert rect.is_valid()
"""

from collections import OrderedDict
from typing import Tuple

from pydantic import Field

from geometrize.config import ShapeConfig
from geometrize.math.point import Point
from geometrize.shapes.base import Shape, point_parameters


class Rectangle(Shape):
    """A scaled and rotated unit square."""

    origin: Point = Field(default_factory=Point.zero)
    scaling: Tuple[float, float] = (1.0, 1.0)
    angle: float = 0.0

    @classmethod
    def builder(cls):
        return RectangleBuilder()

    @property
    def width(self):
        return self.scaling[0]

    @property
    def height(self):
        return self.scaling[1]

    def aspect_ratio(self):
        """
        Ratio of the longer side to the shorter one.

        Infinite when the shorter side is zero.
        """
        longer = max(abs(self.width), abs(self.height))
        shorter = min(abs(self.width), abs(self.height))
        if shorter == 0:
            return float("inf")
        return longer / shorter

    def is_valid(self, limits=None):
        """A rectangle is valid while it is not too stretched (5:1 by default)."""
        limits = limits or ShapeConfig()
        return self.aspect_ratio() <= limits.max_aspect_ratio

    def parameters(self):
        return OrderedDict(
            point_parameters("origin", self.origin)
            + [("width", self.width), ("height", self.height), ("angle", self.angle)]
        )

    def _fields_from(self, values):
        return {
            "origin": {"x": values["origin.x"], "y": values["origin.y"]},
            "scaling": (values["width"], values["height"]),
            "angle": values["angle"],
        }


class RectangleBuilder:
    """Accumulates rectangle parameters until build() is called."""

    def __init__(self):
        self._origin = (0.0, 0.0)
        self._scaling = (1.0, 1.0)
        self._angle = 0.0

    def origin(self, x, y):
        self._origin = (x, y)
        return self

    def aspect(self, width, height):
        """Set both width and height."""
        self._scaling = (width, height)
        return self

    def width(self, width):
        self._scaling = (width, self._scaling[1])
        return self

    def height(self, height):
        self._scaling = (self._scaling[0], height)
        return self

    def angle(self, angle):
        self._angle = angle
        return self

    def build(self):
        return Rectangle(
            origin=Point(*self._origin),
            scaling=self._scaling,
            angle=self._angle,
        )
