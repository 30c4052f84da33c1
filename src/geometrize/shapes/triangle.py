"""
Triangle shape.

A triangle is considered valid when all its inner angles are at least 15
degrees. Thinner triangles are still triangles, they just fail is_valid().
"""

import math
from collections import OrderedDict
from typing import Tuple

from pydantic import Field

from geometrize.config import ShapeConfig
from geometrize.math.point import Point
from geometrize.shapes.base import Shape, point_parameters


def _angle_between(u, v):
    """Angle in degrees between two unit vectors."""
    # q_rsqrt can push the dot product a hair outside acos's domain
    cosine = max(-1.0, min(1.0, u.dot(v)))
    return math.degrees(math.acos(cosine))


class Triangle(Shape):
    """Three vertices of the plane."""

    vertices: Tuple[Point, Point, Point] = Field(
        default_factory=lambda: (Point.zero(), Point.zero(), Point.zero())
    )

    @classmethod
    def builder(cls):
        return TriangleBuilder()

    @classmethod
    def from_points(cls, a, b, c):
        return cls(vertices=(a, b, c))

    def angles(self):
        """
        Inner angles in degrees at each vertex.

        The first two are measured from normalized edge vectors; the third
        is derived as 180 minus the other two.
        """
        a, b, c = self.vertices
        a1 = _angle_between((b - a).normalize(), (c - a).normalize())
        a2 = _angle_between((a - b).normalize(), (c - b).normalize())
        return a1, a2, 180.0 - a1 - a2

    def is_valid(self, limits=None):
        limits = limits or ShapeConfig()
        return all(angle >= limits.min_triangle_angle for angle in self.angles())

    def parameters(self):
        params = []
        for idx, vertex in enumerate(self.vertices):
            params.extend(point_parameters(f"vertices[{idx}]", vertex))
        return OrderedDict(params)

    def _fields_from(self, values):
        return {
            "vertices": tuple(
                {"x": values[f"vertices[{idx}].x"], "y": values[f"vertices[{idx}].y"]}
                for idx in range(3)
            )
        }


class TriangleBuilder:
    """Accumulates triangle vertices until build() is called."""

    def __init__(self):
        self._vertices = [Point.zero(), Point.zero(), Point.zero()]

    def a(self, x, y):
        self._vertices[0] = Point(x, y)
        return self

    def b(self, x, y):
        self._vertices[1] = Point(x, y)
        return self

    def c(self, x, y):
        self._vertices[2] = Point(x, y)
        return self

    def vertices(self, a, b, c):
        self._vertices = [a, b, c]
        return self

    def build(self):
        return Triangle(vertices=tuple(self._vertices))
