"""Move, resize and delete handles attached to a finished rectangle."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Optional

from PyQt6.QtCore import Qt, QPointF, QRectF, QSizeF
from PyQt6.QtGui import QColor, QPainter, QPen

from ..core.geometry import clamp_position, clamp_size
from ..core.models import AnnotationRect

logger = logging.getLogger(__name__)


class HandleType(str, Enum):
    """Kind of handle on a rectangle adorner."""

    MOVER = "mover"
    RESIZER = "resizer"
    REMOVER = "remover"


class RectangleAdorner:
    """
    Decoration set for a single annotation rectangle.

    Places a mover thumb at the center, a resizer thumb at the
    bottom-right corner and a delete glyph at the top-right corner.
    Drag deltas applied through the handles are clamped so the
    rectangle never leaves its container.
    """

    def __init__(
        self,
        rect: AnnotationRect,
        handle_size: float = 10,
        remover_size: float = 16,
        min_rect_size: float = 5.0,
        mover_color: str = "#4169E1",
        resizer_color: str = "#B22222"
    ) -> None:
        self.rect = rect
        self.handle_size = handle_size
        self.remover_size = remover_size
        self.min_rect_size = min_rect_size
        self.mover_color = QColor(mover_color)
        self.resizer_color = QColor(resizer_color)

    # === Handle Layout ===

    def mover_rect(self) -> QRectF:
        half = self.handle_size / 2
        return QRectF(
            self.rect.left + self.rect.width / 2 - half,
            self.rect.top + self.rect.height / 2 - half,
            self.handle_size,
            self.handle_size
        )

    def resizer_rect(self) -> QRectF:
        half = self.handle_size / 2
        return QRectF(
            self.rect.right - half,
            self.rect.bottom - half,
            self.handle_size,
            self.handle_size
        )

    def remover_rect(self) -> QRectF:
        half = self.remover_size / 2
        return QRectF(
            self.rect.right - half,
            self.rect.top - half,
            self.remover_size,
            self.remover_size
        )

    def bounding_rect(self) -> QRectF:
        """Area covered by the rectangle and all of its handles."""
        return (
            self.rect.to_qrectf()
            .united(self.mover_rect())
            .united(self.resizer_rect())
            .united(self.remover_rect())
        )

    def handle_at(self, pos: QPointF) -> Optional[HandleType]:
        """
        Get the handle under a position.

        Handles are tested topmost first: resizer, remover, mover.
        """
        if self.resizer_rect().contains(pos):
            return HandleType.RESIZER
        if self.remover_rect().contains(pos):
            return HandleType.REMOVER
        if self.mover_rect().contains(pos):
            return HandleType.MOVER
        return None

    # === Drag Handlers ===

    def move_by(self, dx: float, dy: float, container: QSizeF) -> None:
        """Move the rectangle by a drag delta, keeping it inside the container."""
        x = clamp_position(self.rect.left + dx, self.rect.width, container.width())
        y = clamp_position(self.rect.top + dy, self.rect.height, container.height())
        self.rect.move_to(x, y)

    def resize_by(self, dx: float, dy: float, container: QSizeF) -> None:
        """Grow or shrink the rectangle, never below the minimum or past the container."""
        width = clamp_size(
            self.rect.width + dx, self.rect.left, container.width(), self.min_rect_size
        )
        height = clamp_size(
            self.rect.height + dy, self.rect.top, container.height(), self.min_rect_size
        )
        self.rect.resize(width, height)

    # === Painting ===

    def paint(self, painter: QPainter) -> None:
        """Draw the three handles."""
        painter.save()
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)

        painter.setPen(QPen(QColor(0, 0, 0), 1))
        painter.setBrush(self.mover_color)
        painter.drawRect(self.mover_rect())

        painter.setBrush(self.resizer_color)
        painter.drawRect(self.resizer_rect())

        self._paint_remover(painter)
        painter.restore()

    def _paint_remover(self, painter: QPainter) -> None:
        """Draw the delete glyph: a red disc with a white cross."""
        area = self.remover_rect()
        painter.setPen(QPen(QColor(255, 255, 255), 1))
        painter.setBrush(QColor(220, 20, 60))
        painter.drawEllipse(area)

        inset = self.remover_size * 0.3
        cross = area.adjusted(inset, inset, -inset, -inset)
        pen = QPen(QColor(255, 255, 255), max(1.5, self.remover_size / 8))
        pen.setCapStyle(Qt.PenCapStyle.RoundCap)
        painter.setPen(pen)
        painter.drawLine(cross.topLeft(), cross.bottomRight())
        painter.drawLine(cross.topRight(), cross.bottomLeft())
