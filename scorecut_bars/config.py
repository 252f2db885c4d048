"""
Configuration schema for scorecut.

This module defines the cutting workflow settings (when a system counts as
fully cut), the rendering style and the log level. Configuration is loaded
from YAML and validated at construction.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict
import logging
import yaml


@dataclass(frozen=True)
class CuttingConfig:
    """
    Cutting workflow configuration.

    A click whose projection on the top edge lies past
    ``completion_threshold`` (as a proportion of the top edge) ends the
    system. ``include_final_break_point`` decides whether that click also
    closes a last bar.
    """

    completion_threshold: float = 0.98
    include_final_break_point: bool = True

    def __post_init__(self):
        """Validate cutting configuration."""
        if not 0.0 < self.completion_threshold <= 2.0:
            raise ValueError(
                f"completion_threshold must be in (0.0, 2.0], got {self.completion_threshold}"
            )
        if not isinstance(self.include_final_break_point, bool):
            raise ValueError(
                f"include_final_break_point must be a boolean, got {self.include_final_break_point!r}"
            )


@dataclass(frozen=True)
class RenderConfig:
    """Style of annotated previews."""

    thickness: int = 2
    point_radius: int = 4
    text_scale: float = 0.5
    show_labels: bool = True

    def __post_init__(self):
        """Validate render configuration."""
        if self.thickness < 1:
            raise ValueError(f"thickness must be >= 1, got {self.thickness}")
        if self.point_radius < 1:
            raise ValueError(f"point_radius must be >= 1, got {self.point_radius}")
        if self.text_scale <= 0:
            raise ValueError(f"text_scale must be > 0, got {self.text_scale}")


@dataclass(frozen=True)
class ScorecutConfig:
    """
    Main configuration.

    Immutable after construction (frozen dataclass).
    """

    cutting: CuttingConfig = field(default_factory=CuttingConfig)
    render: RenderConfig = field(default_factory=RenderConfig)
    log_level: str = "INFO"

    def __post_init__(self):
        """Validate log level."""
        if (
            not isinstance(self.log_level, str)
            or not isinstance(logging.getLevelName(self.log_level.upper()), int)
        ):
            raise ValueError(
                f"Invalid log_level: {self.log_level}. "
                f"Must be one of DEBUG, INFO, WARNING, ERROR, CRITICAL"
            )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ScorecutConfig":
        """Build from a parsed mapping (unknown keys are rejected)."""
        try:
            return cls(
                cutting=CuttingConfig(**data.get("cutting", {})),
                render=RenderConfig(**data.get("render", {})),
                log_level=data.get("log_level", "INFO"),
            )
        except TypeError as e:
            raise ValueError(f"Invalid configuration: {e}")

    @classmethod
    def from_yaml(cls, yaml_path: Path) -> "ScorecutConfig":
        """
        Load configuration from YAML file.

        Example YAML:
            cutting:
              completion_threshold: 0.98
              include_final_break_point: true

            render:
              thickness: 2
              point_radius: 4
              text_scale: 0.5
              show_labels: true

            log_level: "INFO"

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the YAML or a value is invalid
        """
        yaml_path = Path(yaml_path)
        if not yaml_path.exists():
            raise FileNotFoundError(f"Config file not found: {yaml_path}")

        try:
            with open(yaml_path) as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {yaml_path}: {e}")

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValueError(f"Config root must be a mapping, got {type(data).__name__}")

        return cls.from_dict(data)
