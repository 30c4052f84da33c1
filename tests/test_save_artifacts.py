"""Tests for writing exported heatmaps and shape dumps."""

import json
import os

import cv2
import numpy as np
import pytest

from geometrize.images.heatmap import Heatmap
from geometrize.io.save_artifacts import export_heatmap, save_heatmap, save_image, save_json


class TestSaveHeatmap:
    """Tests for grayscale raster export to disk."""

    def test_save_luma8_png(self, temp_dir, gradient_heatmap):
        path = os.path.join(temp_dir, "out", "heat.png")

        save_heatmap(gradient_heatmap, path)

        loaded = cv2.imread(path, cv2.IMREAD_UNCHANGED)
        assert loaded.dtype == np.uint8
        assert loaded.shape == (2, 3)
        assert np.array_equal(loaded, gradient_heatmap.to_luma8())

    def test_save_luma16_png(self, temp_dir, gradient_heatmap):
        path = os.path.join(temp_dir, "heat16.png")

        save_heatmap(gradient_heatmap, path, gamma=2.0, depth=16)

        loaded = cv2.imread(path, cv2.IMREAD_UNCHANGED)
        assert loaded.dtype == np.uint16
        assert np.array_equal(loaded, gradient_heatmap.to_luma16(2.0))

    def test_unsupported_depth(self, temp_dir, gradient_heatmap):
        with pytest.raises(ValueError):
            save_heatmap(gradient_heatmap, os.path.join(temp_dir, "heat.png"), depth=12)

    def test_export_with_config(self, temp_dir, default_config):
        default_config.heatmap.bit_depth = 16
        path = os.path.join(temp_dir, "configured.png")

        export_heatmap(Heatmap.from_fn(2, 2, lambda x, y: x + y), path, default_config)

        loaded = cv2.imread(path, cv2.IMREAD_UNCHANGED)
        assert loaded.dtype == np.uint16
        assert loaded.tolist() == [[0, 128], [128, 255]]

    def test_save_image_rejects_color(self, temp_dir):
        with pytest.raises(ValueError):
            save_image(np.zeros((2, 2, 3), dtype=np.uint8), os.path.join(temp_dir, "c.png"))

    def test_save_image_rejects_float(self, temp_dir):
        with pytest.raises(ValueError):
            save_image(np.zeros((2, 2), dtype=np.float32), os.path.join(temp_dir, "f.png"))


class TestSaveJson:
    """Tests for JSON dumps."""

    def test_save_shape(self, temp_dir):
        from geometrize.shapes.triangle import Triangle

        path = os.path.join(temp_dir, "triangle.json")
        triangle = Triangle.builder().b(1.0, 0.0).c(0.0, 1.0).build()

        save_json(triangle, path)

        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        assert data["vertices"][1] == {"x": 1.0, "y": 0.0}
