"""
Heatmap accumulator for Geometrize.

A heatmap is a 2D canvas storing the magnitude of a phenomenon (per-pixel
error, attention) as unsigned 64-bit counters. It can be merged with heatmaps
produced by parallel evaluation passes and exported as an 8-bit or 16-bit
grayscale raster.

    heatmap = Heatmap.from_fn(32, 32, lambda x, y: x * y if (x * y) % 2 == 0 else 0)
    raster = heatmap.to_luma8(gamma=0.5)
"""

import operator

import numpy as np

from geometrize.tracer import get_tracer, trace


class HeatmapDimensionError(ValueError):
    """Raised by a strict merge of heatmaps with different dimensions."""


class Heatmap:
    """
    Dense width x height grid of uint64 magnitudes, row-major.

    The grid is stored as an array of shape (height, width). Pixel accessors
    are bounds-checked and report out-of-range coordinates with None or
    False instead of raising.
    """

    dtype = np.uint64

    # keep numpy from broadcasting `array == heatmap` element-wise
    __array_ufunc__ = None

    def __init__(self, width, height):
        if width < 0 or height < 0:
            raise ValueError(f"Heatmap dimensions must be non-negative, got {width}x{height}")
        self._width = int(width)
        self._height = int(height)
        self._data = np.zeros((self._height, self._width), dtype=self.dtype)

    @classmethod
    @trace(label="heatmap_from_fn")
    def from_fn(cls, width, height, f):
        """
        Build a heatmap by calling f(x, y) once per cell.

        Cells are visited in row-major order. f should be a deterministic
        function of its coordinates for reproducible heatmaps, and must
        return integers; a float raises TypeError instead of being truncated.
        """
        heatmap = cls(width, height)
        data = heatmap._data
        for y in range(heatmap._height):
            for x in range(heatmap._width):
                data[y, x] = operator.index(f(x, y))
        return heatmap

    @classmethod
    def from_array(cls, array):
        """Build a heatmap from a 2D array of non-negative integers (copied)."""
        array = np.asarray(array)
        if array.ndim != 2:
            raise ValueError(f"Expected a 2D array, got shape {array.shape}")
        if array.size and np.any(array < 0):
            raise ValueError("Heatmap magnitudes must be non-negative")
        heatmap = cls(array.shape[1], array.shape[0])
        heatmap._data[...] = array.astype(cls.dtype)
        return heatmap

    @classmethod
    def sum(cls, heatmaps, strict=False):
        """Fold per-worker heatmaps into one with merge()."""
        heatmaps = list(heatmaps)
        if not heatmaps:
            raise ValueError("Cannot sum an empty collection of heatmaps")
        total = heatmaps[0].copy()
        for other in heatmaps[1:]:
            total = total.merge(other, strict=strict)
        return total

    @property
    def width(self):
        return self._width

    @property
    def height(self):
        return self._height

    @property
    def dimensions(self):
        """(width, height) of the heatmap."""
        return self._width, self._height

    def __len__(self):
        return self._data.size

    def __repr__(self):
        return f"Heatmap(width={self._width}, height={self._height}, max_heat={self.max_heat()})"

    def copy(self):
        clone = Heatmap(0, 0)
        clone._width = self._width
        clone._height = self._height
        clone._data = self._data.copy()
        return clone

    def _in_bounds(self, x, y):
        return 0 <= x < self._width and 0 <= y < self._height

    def get_pixel(self, x, y):
        """Magnitude at (x, y), or None when out of range."""
        if not self._in_bounds(x, y):
            return None
        return int(self._data[y, x])

    def get_pixel_mut(self, x, y):
        """
        Writable one-element view of the cell at (x, y), or None when out of range.

        Writes go straight into the grid: `px[0] = 7` or `px += 1`.
        """
        if not self._in_bounds(x, y):
            return None
        return self._data[y, x:x + 1]

    def put_pixel(self, x, y, value):
        """Overwrite the cell at (x, y). Returns False when out of range."""
        if not self._in_bounds(x, y):
            return False
        self._data[y, x] = operator.index(value)
        return True

    def add_to_pixel(self, x, y, amount):
        """Accumulate amount into the cell at (x, y). Returns False when out of range."""
        if not self._in_bounds(x, y):
            return False
        self._data[y, x] += self.dtype(operator.index(amount))
        return True

    def clear(self):
        """Reset every cell to zero, keeping the dimensions."""
        self._data = np.zeros((self._height, self._width), dtype=self.dtype)

    def max_heat(self):
        """Largest magnitude in the grid, 0 when empty."""
        if self._data.size == 0:
            return 0
        return int(self._data.max())

    def to_array(self):
        """Copy of the raw (height, width) uint64 grid."""
        return self._data.copy()

    @trace(label="heatmap_merge")
    def merge(self, other, strict=False):
        """
        Sum two heatmaps cell by cell into a new heatmap.

        The result covers the shared extent, min(width) x min(height). Cells
        outside it are dropped; with strict=True a dimension mismatch raises
        HeatmapDimensionError instead.
        """
        if not isinstance(other, Heatmap):
            raise TypeError(f"Cannot merge Heatmap with {type(other).__name__}")

        width = min(self._width, other._width)
        height = min(self._height, other._height)

        if self.dimensions != other.dimensions:
            if strict:
                raise HeatmapDimensionError(
                    f"Cannot merge {self._width}x{self._height} heatmap "
                    f"with {other._width}x{other._height} heatmap"
                )
            get_tracer().event(
                f"Merging heatmaps of different sizes, truncating to {width}x{height}",
                level="WARN",
                left=self.dimensions,
                right=other.dimensions,
            )

        merged = Heatmap(width, height)
        merged._data = self._data[:height, :width] + other._data[:height, :width]
        return merged

    def __add__(self, other):
        if not isinstance(other, Heatmap):
            return NotImplemented
        return self.merge(other)

    def __iadd__(self, other):
        if not isinstance(other, Heatmap):
            return NotImplemented
        merged = self.merge(other)
        self._width, self._height = merged.dimensions
        self._data = merged._data
        return self

    def __eq__(self, other):
        if isinstance(other, Heatmap):
            return self.dimensions == other.dimensions and np.array_equal(self._data, other._data)
        if isinstance(other, (list, tuple, np.ndarray)):
            flat = np.asarray(other)
            if flat.ndim != 1 or flat.size != self._data.size:
                return False
            return bool(np.all(self._data.ravel() == flat))
        return NotImplemented

    # mutable container
    __hash__ = None

    def _normalized(self, gamma):
        """Cells scaled to [0, 255] by the grid maximum, with gamma applied."""
        max_heat = self.max_heat()
        if max_heat == 0:
            get_tracer().event("Exporting heatmap with zero maximum, output is black", level="DEBUG")
            return np.zeros((self._height, self._width), dtype=np.float64)

        levels = np.power(self._data.astype(np.float64) / float(max_heat), gamma)
        # round half up
        return np.floor(255.0 * levels + 0.5)

    @trace(label="heatmap_to_luma8")
    def to_luma8(self, gamma=1.0):
        """Export as an 8-bit grayscale raster of shape (height, width)."""
        return self._normalized(gamma).astype(np.uint8)

    @trace(label="heatmap_to_luma16")
    def to_luma16(self, gamma=1.0):
        """Export as a 16-bit grayscale raster of shape (height, width)."""
        return self._normalized(gamma).astype(np.uint16)
