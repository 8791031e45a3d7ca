"""Image display widget with the drawing surface laid over it."""

from __future__ import annotations

import logging
from typing import Optional

from PyQt6.QtCore import Qt, QRectF, QSizeF
from PyQt6.QtGui import QColor, QPainter, QPixmap, QResizeEvent
from PyQt6.QtWidgets import QSizePolicy, QWidget

from ..core.config import AppConfig
from .drawing_surface import DrawingSurface

logger = logging.getLogger(__name__)


class ImageView(QWidget):
    """
    Shows the loaded image fitted to the widget, keeping its aspect ratio.

    The image may be displayed smaller or larger than its native size.
    A DrawingSurface child covers exactly the displayed image area so
    rectangle coordinates are relative to the visible picture.
    """

    BACKGROUND_COLOR = QColor("#2b2b2b")

    def __init__(self, config: Optional[AppConfig] = None, parent: Optional[QWidget] = None) -> None:
        """Initialize the image view."""
        super().__init__(parent)

        self.config = config or AppConfig()
        self._pixmap: Optional[QPixmap] = None

        self.surface = DrawingSurface(self.config, self)
        self.surface.setGeometry(0, 0, 0, 0)
        self.surface.hide()

        self.setMinimumSize(200, 150)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)

    # === Pixmap Methods ===

    def pixmap(self) -> Optional[QPixmap]:
        """Return the current pixmap."""
        return self._pixmap

    def has_image(self) -> bool:
        return self._pixmap is not None and not self._pixmap.isNull()

    def set_pixmap(self, pixmap: QPixmap) -> None:
        """
        Display a new image and clear every rectangle.

        The surface is hidden until fit_surface() places it over the
        new image, once the layout has settled.
        """
        self._pixmap = pixmap
        self.surface.clear()
        self.surface.hide()
        self.surface.set_image_loaded(self.has_image())
        self.update()

    def displayed_size(self) -> QSizeF:
        """Size of the drawing surface, which tracks the displayed image."""
        return self.surface.surface_size()

    def displayed_rect(self) -> QRectF:
        """Area of the widget the image occupies when fitted and centered."""
        if not self.has_image():
            return QRectF()

        available_width = self.width()
        available_height = self.height()
        if available_width <= 0 or available_height <= 0:
            return QRectF()

        aspect_ratio = self._pixmap.width() / self._pixmap.height()

        # Calculate size that maintains aspect ratio
        scaled_width = float(available_width)
        scaled_height = scaled_width / aspect_ratio

        if scaled_height > available_height:
            scaled_height = float(available_height)
            scaled_width = scaled_height * aspect_ratio

        # Calculate the offset for centering
        offset_x = (available_width - scaled_width) / 2
        offset_y = (available_height - scaled_height) / 2

        return QRectF(offset_x, offset_y, scaled_width, scaled_height)

    def fit_surface(self) -> None:
        """Place the drawing surface over the displayed image."""
        target = self.displayed_rect().toRect()
        if target.isEmpty():
            return

        old_size = self.surface.size()
        if not old_size.isEmpty() and old_size != target.size():
            self.surface.rescale(
                target.width() / old_size.width(),
                target.height() / old_size.height(),
                QSizeF(target.size())
            )

        self.surface.setGeometry(target)
        self.surface.show()
        logger.debug(f"Drawing surface fitted to {target.width()}x{target.height()}")

    # === Event Handlers ===

    def resizeEvent(self, event: QResizeEvent) -> None:
        """Keep the surface over the image when the window changes size."""
        super().resizeEvent(event)
        if self.has_image() and not self.surface.isHidden():
            self.fit_surface()

    def paintEvent(self, event) -> None:
        """Paint the background and the fitted image."""
        painter = QPainter(self)
        painter.fillRect(self.rect(), self.BACKGROUND_COLOR)

        target = self.displayed_rect()
        if not target.isEmpty():
            painter.setRenderHint(QPainter.RenderHint.SmoothPixmapTransform)
            painter.drawPixmap(target, self._pixmap, QRectF(self._pixmap.rect()))
        else:
            painter.setPen(QColor("#9a9a9a"))
            painter.drawText(self.rect(), Qt.AlignmentFlag.AlignCenter, "Load an image to start annotating")

        painter.end()
