"""UI components for Rectangles over Image."""

from .rectangle_adorner import HandleType, RectangleAdorner
from .drawing_surface import DrawingSurface
from .image_view import ImageView
from .main_window import MainWindow

__all__ = [
    "HandleType",
    "RectangleAdorner",
    "DrawingSurface",
    "ImageView",
    "MainWindow",
]
