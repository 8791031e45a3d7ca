"""Core modules for Rectangles over Image."""

from .models import AnnotationRect, RectStyle, Scaler
from .config import AppConfig, ConfigManager
from .exporter import ExportError, ImageExporter

__all__ = [
    "AnnotationRect",
    "RectStyle",
    "Scaler",
    "AppConfig",
    "ConfigManager",
    "ExportError",
    "ImageExporter",
]
