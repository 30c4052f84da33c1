"""
Artifact saving utilities for Geometrize.

Writes exported heatmap rasters and JSON dumps of shapes to disk.
"""

import json
import os

import cv2
import numpy as np

from geometrize.tracer import get_tracer, trace


def ensure_dir(path):
    """Create directory if it does not exist."""
    if path:
        os.makedirs(path, exist_ok=True)


def save_image(img, path):
    """
    Save a single-channel grayscale raster to disk.

    Accepts uint8 or uint16 arrays of shape (height, width). 16-bit rasters
    need a format that supports them, such as PNG or TIFF.
    """
    tracer = get_tracer()

    img = np.asarray(img)
    if img.ndim != 2:
        raise ValueError(f"Expected a 2D grayscale raster, got shape {img.shape}")
    if img.dtype not in (np.uint8, np.uint16):
        raise ValueError(f"Unsupported raster dtype: {img.dtype}")

    ensure_dir(os.path.dirname(path))
    if not cv2.imwrite(path, img):
        raise ValueError(f"Failed to write image: {path}")
    tracer.event(f"Saved image: {path}")


@trace(label="save_heatmap")
def save_heatmap(heatmap, path, gamma=1.0, depth=8):
    """Export a heatmap as an 8-bit or 16-bit grayscale image."""
    if depth == 8:
        raster = heatmap.to_luma8(gamma)
    elif depth == 16:
        raster = heatmap.to_luma16(gamma)
    else:
        raise ValueError(f"Unsupported bit depth: {depth} (expected 8 or 16)")

    save_image(raster, path)
    return path


def save_json(data, path, indent=2):
    """
    Save a dictionary or Pydantic model to JSON.
    """
    tracer = get_tracer()

    ensure_dir(os.path.dirname(path))

    # Handle Pydantic models
    if hasattr(data, "model_dump"):
        data = data.model_dump()

    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=indent, default=str)

    tracer.event(f"Saved JSON: {path}")


def export_heatmap(heatmap, path, config):
    """Export a heatmap with the gamma and bit depth of a GeometrizeConfig."""
    return save_heatmap(
        heatmap,
        path,
        gamma=config.heatmap.gamma,
        depth=config.heatmap.bit_depth,
    )
