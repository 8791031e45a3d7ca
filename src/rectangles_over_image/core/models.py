"""Data models for Rectangles over Image annotations."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from PyQt6.QtCore import QRectF
from PyQt6.QtGui import QColor

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class AnnotationRect:
    """
    A user-drawn rectangle in displayed (surface) coordinates.

    Equality is identity: two rectangles with the same geometry
    are still two separate annotations.
    """

    left: float = 0.0
    top: float = 0.0
    width: float = 0.0
    height: float = 0.0

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    def is_empty(self) -> bool:
        """True when the rectangle has no area."""
        return self.width <= 0 or self.height <= 0

    def move_to(self, left: float, top: float) -> None:
        self.left = left
        self.top = top

    def resize(self, width: float, height: float) -> None:
        self.width = width
        self.height = height

    def to_qrectf(self) -> QRectF:
        return QRectF(self.left, self.top, self.width, self.height)

    @classmethod
    def from_qrectf(cls, rect: QRectF) -> AnnotationRect:
        rect = rect.normalized()
        return cls(rect.x(), rect.y(), rect.width(), rect.height())

    def scaled(self, scaler: Scaler) -> AnnotationRect:
        """Return a copy of this rectangle in native image coordinates."""
        return scaler.apply(self)


@dataclass(frozen=True)
class Scaler:
    """
    Ratio between native image pixels and displayed pixels.

    Used to map rectangles drawn over the fitted image back to
    the resolution of the source picture.
    """

    x: float = 1.0
    y: float = 1.0

    @classmethod
    def from_sizes(
        cls,
        native_width: float,
        native_height: float,
        displayed_width: float,
        displayed_height: float
    ) -> Scaler:
        """
        Build a scaler from native and displayed dimensions.

        Raises:
            ValueError: If a displayed dimension is not positive
        """
        if displayed_width <= 0 or displayed_height <= 0:
            raise ValueError(
                f"Displayed size must be positive, got {displayed_width}x{displayed_height}"
            )
        return cls(native_width / displayed_width, native_height / displayed_height)

    def apply(self, rect: AnnotationRect) -> AnnotationRect:
        return AnnotationRect(
            left=rect.left * self.x,
            top=rect.top * self.y,
            width=rect.width * self.x,
            height=rect.height * self.y,
        )


@dataclass
class RectStyle:
    """Fill and stroke shared by every annotation rectangle."""

    fill_color: str = "#ADFF2F"
    fill_alpha: int = 255
    stroke_color: str = "#000000"
    stroke_width: float = 1.0

    @property
    def fill(self) -> QColor:
        color = QColor(self.fill_color)
        if not color.isValid():
            logger.warning(f"Invalid fill color '{self.fill_color}', using GreenYellow")
            color = QColor("#ADFF2F")
        color.setAlpha(max(0, min(255, self.fill_alpha)))
        return color

    @property
    def stroke(self) -> QColor:
        color = QColor(self.stroke_color)
        if not color.isValid():
            logger.warning(f"Invalid stroke color '{self.stroke_color}', using black")
            color = QColor("#000000")
        return color
