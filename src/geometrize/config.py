"""
Configuration management for Geometrize.

Loads YAML configuration with sensible defaults for shape validity limits,
heatmap export and tracing.
"""

import os
from dataclasses import asdict, dataclass, field, fields

import yaml

from geometrize.tracer import configure_tracer


@dataclass
class ShapeConfig:
    """Thresholds used by the shape validity predicates."""
    min_triangle_angle: float = 15.0  # degrees
    max_aspect_ratio: float = 5.0


@dataclass
class HeatmapConfig:
    """Configuration for heatmap grayscale export."""
    gamma: float = 1.0
    bit_depth: int = 8  # 8 or 16


@dataclass
class TracingConfig:
    """Configuration for runtime tracing."""
    enabled: bool = False
    level: str = "INFO"
    file_path: str = None
    json_output: bool = False


@dataclass
class GeometrizeConfig:
    """Complete configuration."""
    shapes: ShapeConfig = field(default_factory=ShapeConfig)
    heatmap: HeatmapConfig = field(default_factory=HeatmapConfig)
    tracing: TracingConfig = field(default_factory=TracingConfig)


def load_config(config_path=None):
    """
    Load configuration from YAML file.

    Falls back to defaults for any missing values.
    """
    config = GeometrizeConfig()

    if config_path and os.path.exists(config_path):
        with open(config_path, "r", encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f) or {}

        config = _merge_config(config, yaml_data)

    return config


def _merge_config(config, yaml_data):
    """Merge YAML data into config dataclass, ignoring unknown keys."""
    for section in fields(config):
        values = yaml_data.get(section.name)
        if not isinstance(values, dict):
            continue
        target = getattr(config, section.name)
        for key, value in values.items():
            if hasattr(target, key):
                setattr(target, key, value)

    return config


def save_default_config(path):
    """Save default configuration to YAML file for reference."""
    yaml_data = asdict(GeometrizeConfig())

    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(yaml_data, f, default_flow_style=False, sort_keys=False)


def configure_from(config):
    """Apply the tracing section of a configuration to the global tracer."""
    configure_tracer(
        enabled=config.tracing.enabled,
        level=config.tracing.level,
        file_path=config.tracing.file_path,
        json_output=config.tracing.json_output,
    )
