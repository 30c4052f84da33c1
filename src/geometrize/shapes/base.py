"""
Common behaviour of all shapes.

Shapes are pydantic models so they can be validated on construction, dumped
to JSON next to exported heatmaps, and summarized by the tracer. Geometric
validity is never enforced at construction; it is a predicate queried on
demand by whoever drives the search.
"""

from abc import ABC, abstractmethod

from pydantic import BaseModel, ConfigDict


class Shape(BaseModel, ABC):
    """
    Base class of the ellipse, rectangle, triangle and polygon shapes.

    Subclasses expose their scalar parameters through `parameters()` and
    map an updated mapping back to field values in `_fields_from()`,
    which is all `mutate()` needs.
    """

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    def is_valid(self, limits=None):
        """
        Indicate whether the shape satisfies its geometric constraints.

        By default a shape is always valid. `limits` is an optional
        ShapeConfig overriding the default thresholds.
        """
        return True

    @abstractmethod
    def parameters(self):
        """Return an ordered dict of scalar parameter names to values."""

    @abstractmethod
    def _fields_from(self, values):
        """Map updated scalar parameters back to model field values."""

    def mutate(self, perturb):
        """
        Perturb every scalar parameter in place.

        The update is validated as a whole first; when it fails, a
        ValidationError is raised and the shape is left unchanged.

        `perturb(name, value)` returns the new value for one parameter. The
        perturbation policy belongs to the caller; the shape only routes its
        parameters through it. Returns self so calls can be chained.
        """
        updated = {name: perturb(name, value) for name, value in self.parameters().items()}
        # validate the whole update before touching self
        validated = type(self).model_validate({**self.model_dump(), **self._fields_from(updated)})
        self.__dict__.update(validated.__dict__)
        return self


def point_parameters(prefix, point):
    """Flatten a point into two named scalar parameters."""
    return [(f"{prefix}.x", point.x), (f"{prefix}.y", point.y)]
