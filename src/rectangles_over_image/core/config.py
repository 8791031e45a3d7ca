"""Configuration management for Rectangles over Image."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .models import RectStyle

logger = logging.getLogger(__name__)

# Default configuration file path
DEFAULT_CONFIG_PATH = Path("config.yaml")


@dataclass
class AppConfig:
    """
    Application configuration settings.

    Holds the annotation style, handle geometry and the
    gesture limits used by the drawing surface.
    """

    fill_color: str = "#ADFF2F"  # GreenYellow
    fill_alpha: int = 255  # 0-255
    stroke_color: str = "#000000"
    stroke_width: float = 1.0
    mover_color: str = "#4169E1"  # RoyalBlue
    resizer_color: str = "#B22222"  # Firebrick
    handle_size: int = 10  # Mover and resizer thumbs, in pixels
    remover_size: int = 16  # Delete glyph, in pixels
    min_rect_size: float = 5.0  # Smallest width/height reachable by resizing
    edge_margin: float = 2.0  # Drawing finalizes this close to the right/bottom edge
    layout_delay_ms: int = 100  # Wait before sizing the surface to a new image
    window_width: int = 1000
    window_height: int = 700

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary for serialization."""
        return {
            "fillColor": self.fill_color,
            "fillAlpha": self.fill_alpha,
            "strokeColor": self.stroke_color,
            "strokeWidth": self.stroke_width,
            "moverColor": self.mover_color,
            "resizerColor": self.resizer_color,
            "handleSize": self.handle_size,
            "removerSize": self.remover_size,
            "minRectSize": self.min_rect_size,
            "edgeMargin": self.edge_margin,
            "layoutDelayMs": self.layout_delay_ms,
            "windowWidth": self.window_width,
            "windowHeight": self.window_height,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> AppConfig:
        """Create config from dictionary."""
        return cls(
            fill_color=data.get("fillColor", "#ADFF2F"),
            fill_alpha=data.get("fillAlpha", 255),
            stroke_color=data.get("strokeColor", "#000000"),
            stroke_width=data.get("strokeWidth", 1.0),
            mover_color=data.get("moverColor", "#4169E1"),
            resizer_color=data.get("resizerColor", "#B22222"),
            handle_size=data.get("handleSize", 10),
            remover_size=data.get("removerSize", 16),
            min_rect_size=data.get("minRectSize", 5.0),
            edge_margin=data.get("edgeMargin", 2.0),
            layout_delay_ms=data.get("layoutDelayMs", 100),
            window_width=data.get("windowWidth", 1000),
            window_height=data.get("windowHeight", 700),
        )

    @property
    def rect_style(self) -> RectStyle:
        """Style applied to every annotation rectangle."""
        return RectStyle(
            fill_color=self.fill_color,
            fill_alpha=self.fill_alpha,
            stroke_color=self.stroke_color,
            stroke_width=self.stroke_width,
        )


class ConfigManager:
    """
    Manager for loading and saving application configuration.

    Handles YAML serialization and provides a clean interface
    for configuration access.
    """

    def __init__(self, config_path: Path = DEFAULT_CONFIG_PATH) -> None:
        """
        Initialize the configuration manager.

        Args:
            config_path: Path to the configuration file
        """
        self.config_path = config_path
        self._config: Optional[AppConfig] = None

    @property
    def config(self) -> AppConfig:
        """Get the current configuration, loading if necessary."""
        if self._config is None:
            self._config = self.load()
        return self._config

    def load(self) -> AppConfig:
        """
        Load configuration from file.

        Returns:
            AppConfig instance with loaded or default values
        """
        if not self.config_path.exists():
            logger.info(f"Config file not found at {self.config_path}, using defaults")
            return AppConfig()

        try:
            with open(self.config_path, "r") as f:
                data = yaml.safe_load(f) or {}
            if not isinstance(data, dict):
                logger.error(f"Config file {self.config_path} is not a mapping, using defaults")
                return AppConfig()
            logger.info(f"Loaded configuration from {self.config_path}")
            return AppConfig.from_dict(data)
        except yaml.YAMLError as e:
            logger.error(f"Error parsing config file: {e}")
            return AppConfig()
        except OSError as e:
            logger.error(f"Error loading config: {e}")
            return AppConfig()

    def save(self, config: Optional[AppConfig] = None) -> bool:
        """
        Save configuration to file.

        Args:
            config: Configuration to save, or use current config

        Returns:
            True if save was successful
        """
        if config is not None:
            self._config = config

        if self._config is None:
            logger.warning("No configuration to save")
            return False

        try:
            with open(self.config_path, "w") as f:
                yaml.dump(self._config.to_dict(), f, default_flow_style=False)
            logger.info(f"Saved configuration to {self.config_path}")
            return True
        except OSError as e:
            logger.error(f"Error saving config: {e}")
            return False
