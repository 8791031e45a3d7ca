"""Flattened PNG export of an image with its annotation rectangles."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Union

from PyQt6.QtCore import QRectF, QSizeF
from PyQt6.QtGui import QImage, QPainter, QPen, QPixmap

from .models import AnnotationRect, RectStyle, Scaler

logger = logging.getLogger(__name__)

PNG_SUFFIX = ".png"


class ExportError(Exception):
    """Raised when the flattened image cannot be written."""


def ensure_png_suffix(path: Union[str, Path]) -> Path:
    """Append a .png suffix unless the path already has one."""
    path = Path(path)
    if path.suffix.lower() != PNG_SUFFIX:
        path = path.with_name(path.name + PNG_SUFFIX)
    return path


class ImageExporter:
    """
    Composes the source image and its rectangles at native resolution.

    Rectangles are drawn over a fitted, possibly shrunken copy of the
    image, so they are rescaled by the native/displayed ratio before
    being painted onto a canvas as large as the original picture.
    """

    def __init__(self, style: RectStyle) -> None:
        self.style = style

    def scale_rects(
        self,
        rects: Iterable[AnnotationRect],
        scaler: Scaler
    ) -> List[AnnotationRect]:
        """Return the rectangles mapped to native image coordinates."""
        return [rect.scaled(scaler) for rect in rects]

    def compose(
        self,
        source: Union[QImage, QPixmap],
        rects: Iterable[AnnotationRect],
        displayed_size: QSizeF
    ) -> QImage:
        """
        Render the source image with scaled rectangles on top.

        Args:
            source: The loaded image at native resolution
            rects: Rectangles in displayed coordinates
            displayed_size: Size the image occupies on screen

        Returns:
            A new image with the same dimensions as the source

        Raises:
            ValueError: If the displayed size is empty
        """
        if isinstance(source, QPixmap):
            source = source.toImage()

        native_width = source.width()
        native_height = source.height()
        scaler = Scaler.from_sizes(
            native_width, native_height,
            displayed_size.width(), displayed_size.height()
        )
        logger.debug(f"Export scaler x={scaler.x:.4f} y={scaler.y:.4f}")

        result = QImage(native_width, native_height, QImage.Format.Format_ARGB32)
        result.fill(0)

        painter = QPainter(result)
        try:
            painter.drawImage(QRectF(0, 0, native_width, native_height), source)

            pen = QPen(self.style.stroke)
            pen.setWidthF(self.style.stroke_width)
            painter.setPen(pen)
            painter.setBrush(self.style.fill)
            for rect in self.scale_rects(rects, scaler):
                painter.drawRect(rect.to_qrectf())
        finally:
            painter.end()

        return result

    def save(self, image: QImage, path: Union[str, Path]) -> Path:
        """
        Write the image as PNG.

        Returns:
            The path written, with a .png suffix

        Raises:
            ExportError: If the file could not be written
        """
        target = ensure_png_suffix(path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ExportError(f"Cannot create directory {target.parent}: {e}") from e

        if not image.save(str(target), "PNG"):
            raise ExportError(f"Failed to write PNG to {target}")

        logger.info(f"Saved {image.width()}x{image.height()} image to {target}")
        return target

    def export(
        self,
        source: Union[QImage, QPixmap],
        rects: Iterable[AnnotationRect],
        displayed_size: QSizeF,
        path: Union[str, Path]
    ) -> Path:
        """
        Compose and write the flattened image in one step.

        Raises:
            ExportError: If composing or writing fails
        """
        try:
            image = self.compose(source, rects, displayed_size)
        except ValueError as e:
            raise ExportError(str(e)) from e
        return self.save(image, path)
