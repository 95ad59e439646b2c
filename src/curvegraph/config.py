"""
Configuration management for curvegraph.

Loads YAML configuration with sensible defaults for every analysis stage.
"""

import os
from dataclasses import dataclass, field, fields

import yaml


@dataclass
class TopologyConfig:
    """Configuration for graph building."""
    adjacency_radius: float = 0.1  # drawing units
    include_self_loop: bool = False
    self_loop_offset: float = 1.0
    ignore_z: bool = True


@dataclass
class ArcConfig:
    """Configuration for arc endpoint evaluation."""
    angle_units: str = "degrees"  # "degrees" or "radians"


@dataclass
class ValidationConfig:
    """Configuration for defect checks."""
    max_evidence: int = 5


@dataclass
class TracingConfig:
    """Configuration for runtime tracing."""
    enabled: bool = False
    level: str = "INFO"
    file_path: str = None
    json_output: bool = False


@dataclass
class DebugConfig:
    """Configuration for debug artifact generation."""
    enabled: bool = False
    stroke_width: float = 0.5
    marker_radius: float = 1.5


@dataclass
class AnalysisConfig:
    """Complete analysis configuration."""
    topology: TopologyConfig = field(default_factory=TopologyConfig)
    arc: ArcConfig = field(default_factory=ArcConfig)
    validation: ValidationConfig = field(default_factory=ValidationConfig)
    tracing: TracingConfig = field(default_factory=TracingConfig)
    debug: DebugConfig = field(default_factory=DebugConfig)


SECTIONS = ("topology", "arc", "validation", "tracing", "debug")


def load_config(config_path=None):
    """
    Load configuration from YAML file.

    Falls back to defaults for any missing values.
    """
    config = AnalysisConfig()

    if config_path and os.path.exists(config_path):
        with open(config_path, "r", encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f) or {}

        config = _merge_config(config, yaml_data)

    return config


def _merge_config(config, yaml_data):
    """Merge YAML data into config dataclass."""
    for section in SECTIONS:
        if section not in yaml_data or not yaml_data[section]:
            continue
        target = getattr(config, section)
        for key, value in yaml_data[section].items():
            if hasattr(target, key):
                setattr(target, key, value)

    if config.arc.angle_units not in ("degrees", "radians"):
        raise ValueError(f"arc.angle_units must be 'degrees' or 'radians', got {config.arc.angle_units!r}")
    if config.topology.adjacency_radius <= 0:
        raise ValueError("topology.adjacency_radius must be positive")

    return config


def config_to_dict(config):
    """Plain dict view of a config, one key per section."""
    return {
        section: {f.name: getattr(getattr(config, section), f.name) for f in fields(getattr(config, section))}
        for section in SECTIONS
    }


def save_default_config(path):
    """Save default configuration to YAML file for reference."""
    yaml_data = config_to_dict(AnalysisConfig())
    # file_path has no useful default
    yaml_data["tracing"].pop("file_path")

    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(yaml_data, f, default_flow_style=False, sort_keys=False)
