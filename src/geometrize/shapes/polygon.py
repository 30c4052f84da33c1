"""
Polygon shape.

A polygon is an ordered ring of vertices. It is valid when it is convex and
not degenerate: at least three vertices, and every pair of consecutive edges
turns in the same direction.
"""

from collections import OrderedDict
from typing import List

from pydantic import Field

from geometrize.math.point import Point
from geometrize.shapes.base import Shape, point_parameters


class Polygon(Shape):
    """An ordered ring of vertices."""

    vertices: List[Point] = Field(default_factory=list)

    @classmethod
    def builder(cls):
        return PolygonBuilder()

    @classmethod
    def from_points(cls, points):
        return cls(vertices=list(points))

    @property
    def order(self):
        """Number of vertices."""
        return len(self.vertices)

    def turns(self):
        """
        Cross products of consecutive edges, one per vertex of the ring.

        Entry i is the turn made at vertex i + 1 going from vertex i to
        vertex i + 2, indices wrapping around.
        """
        order = self.order
        result = []
        for idx in range(order):
            p0 = self.vertices[idx]
            p1 = self.vertices[(idx + 1) % order]
            p2 = self.vertices[(idx + 2) % order]
            result.append((p1 - p0).cross(p2 - p1))
        return result

    def is_valid(self, limits=None):
        """Check the polygon is convex and not degenerate."""
        if self.order < 3:
            return False

        turns = self.turns()
        # collinear edges make the ring degenerate
        if any(turn == 0 for turn in turns):
            return False

        positive = turns[0] > 0
        return all((turn > 0) == positive for turn in turns)

    def parameters(self):
        params = []
        for idx, vertex in enumerate(self.vertices):
            params.extend(point_parameters(f"vertices[{idx}]", vertex))
        return OrderedDict(params)

    def _fields_from(self, values):
        return {
            "vertices": [
                {"x": values[f"vertices[{idx}].x"], "y": values[f"vertices[{idx}].y"]}
                for idx in range(self.order)
            ]
        }


class PolygonBuilder:
    """Accumulates polygon vertices until build() is called."""

    def __init__(self):
        self._vertices = []

    def vertex(self, x, y):
        """Append a vertex to the ring."""
        self._vertices.append(Point(x, y))
        return self

    def vertices(self, points):
        """Replace the whole ring."""
        self._vertices = list(points)
        return self

    def build(self):
        return Polygon(vertices=list(self._vertices))
