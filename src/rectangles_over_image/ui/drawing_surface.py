"""Transparent overlay where annotation rectangles are drawn and edited."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Tuple

from PyQt6.QtCore import Qt, QPointF, QSizeF, pyqtSignal
from PyQt6.QtGui import QMouseEvent, QPainter, QPen
from PyQt6.QtWidgets import QWidget

from ..core.config import AppConfig
from ..core.geometry import clamp, clamp_point, clamp_size, is_near_far_edge, normalize_drag
from ..core.models import AnnotationRect, RectStyle
from .rectangle_adorner import HandleType, RectangleAdorner

logger = logging.getLogger(__name__)


class DrawingSurface(QWidget):
    """
    Overlay widget sized to the displayed image.

    A left press-drag-release draws a new rectangle. Once finished,
    each rectangle gets a RectangleAdorner whose handles move, resize
    or delete it. All coordinates are in surface (displayed) pixels.
    """

    # Signals
    rectangles_changed = pyqtSignal()
    rectangle_created = pyqtSignal(object)
    rectangle_removed = pyqtSignal(object)

    HANDLE_CURSORS = {
        HandleType.MOVER: Qt.CursorShape.SizeAllCursor,
        HandleType.RESIZER: Qt.CursorShape.SizeFDiagCursor,
        HandleType.REMOVER: Qt.CursorShape.PointingHandCursor,
    }

    def __init__(self, config: Optional[AppConfig] = None, parent: Optional[QWidget] = None) -> None:
        """Initialize the drawing surface."""
        super().__init__(parent)

        self.config = config or AppConfig()
        self.rect_style: RectStyle = self.config.rect_style

        self.image_loaded = False
        self.rectangles: List[AnnotationRect] = []
        self._adorners: Dict[AnnotationRect, RectangleAdorner] = {}

        # Drawing state
        self.start_point = QPointF()
        self.mouse_down = False
        self.current_rect: Optional[AnnotationRect] = None

        # Handle drag state
        self._active_handle: Optional[Tuple[RectangleAdorner, HandleType]] = None
        self._last_drag_pos = QPointF()

        self.setMouseTracking(True)
        self.setCursor(Qt.CursorShape.CrossCursor)

    # === Surface State ===

    def surface_size(self) -> QSizeF:
        return QSizeF(self.width(), self.height())

    def set_image_loaded(self, loaded: bool) -> None:
        self.image_loaded = loaded

    def clear(self) -> None:
        """Remove every rectangle and decoration from the surface."""
        self.rectangles.clear()
        self._adorners.clear()
        self._reset_drawing_state()
        self._active_handle = None
        self.update()
        self.rectangles_changed.emit()

    def adorner_for(self, rect: AnnotationRect) -> Optional[RectangleAdorner]:
        return self._adorners.get(rect)

    @property
    def adorners(self) -> List[RectangleAdorner]:
        return list(self._adorners.values())

    def _reset_drawing_state(self) -> None:
        self.mouse_down = False
        self.current_rect = None
        self.start_point = QPointF()

    # === Rectangle Drawing ===

    def begin_rectangle(self, pos: QPointF) -> bool:
        """
        Start drawing a rectangle at a position.

        Returns:
            True if drawing started
        """
        if not self.image_loaded:
            return False

        self.mouse_down = True
        if self.current_rect is None:
            x, y = clamp_point(pos.x(), pos.y(), self.width(), self.height())
            self.start_point = QPointF(x, y)
            self.current_rect = AnnotationRect(x, y, 0.0, 0.0)
            self.rectangles.append(self.current_rect)
            logger.debug(f"Started rectangle at ({x:.1f}, {y:.1f})")
        self.update()
        return True

    def update_rectangle(self, pos: QPointF) -> None:
        """Stretch the rectangle being drawn towards a position."""
        if not self.mouse_down or self.current_rect is None:
            return

        # Reaching the far edges finishes the rectangle
        if is_near_far_edge(pos.x(), pos.y(), self.width(), self.height(), self.config.edge_margin):
            self.finish_rectangle()
            return

        x, y = clamp_point(pos.x(), pos.y(), self.width(), self.height())
        left, top, width, height = normalize_drag(
            self.start_point.x(), self.start_point.y(), x, y
        )
        self.current_rect.move_to(left, top)
        self.current_rect.resize(width, height)
        self.update()

    def finish_rectangle(self) -> Optional[AnnotationRect]:
        """
        Finalize the rectangle being drawn and attach its handles.

        A rectangle with no area is discarded.

        Returns:
            The finished rectangle, or None if nothing was kept
        """
        rect = self.current_rect
        self._reset_drawing_state()

        if rect is None:
            return None

        if rect.is_empty():
            if rect in self.rectangles:
                self.rectangles.remove(rect)
            self.update()
            return None

        self._attach_adorner(rect)
        logger.debug(
            f"Finished rectangle {rect.width:.1f}x{rect.height:.1f} "
            f"at ({rect.left:.1f}, {rect.top:.1f})"
        )
        self.update()
        self.rectangle_created.emit(rect)
        self.rectangles_changed.emit()
        return rect

    def add_rectangle(self, rect: AnnotationRect) -> RectangleAdorner:
        """Add a finished rectangle with its handles."""
        self.rectangles.append(rect)
        adorner = self._attach_adorner(rect)
        self.update()
        self.rectangles_changed.emit()
        return adorner

    def _attach_adorner(self, rect: AnnotationRect) -> RectangleAdorner:
        adorner = RectangleAdorner(
            rect,
            handle_size=self.config.handle_size,
            remover_size=self.config.remover_size,
            min_rect_size=self.config.min_rect_size,
            mover_color=self.config.mover_color,
            resizer_color=self.config.resizer_color,
        )
        self._adorners[rect] = adorner
        return adorner

    def remove_rectangle(self, rect: AnnotationRect) -> bool:
        """
        Remove one rectangle and its handles.

        Returns:
            True if the rectangle was on the surface
        """
        if rect not in self.rectangles:
            return False

        self.rectangles.remove(rect)
        self._adorners.pop(rect, None)
        if self._active_handle and self._active_handle[0].rect is rect:
            self._active_handle = None

        logger.debug("Removed rectangle")
        self.update()
        self.rectangle_removed.emit(rect)
        self.rectangles_changed.emit()
        return True

    # === Handle Interaction ===

    def handle_at(self, pos: QPointF) -> Optional[Tuple[RectangleAdorner, HandleType]]:
        """Find the topmost handle under a position."""
        # Most recently drawn rectangles sit on top
        for rect in reversed(self.rectangles):
            adorner = self._adorners.get(rect)
            if adorner is None:
                continue
            handle = adorner.handle_at(pos)
            if handle is not None:
                return adorner, handle
        return None

    def begin_handle_drag(self, pos: QPointF) -> bool:
        """
        Start a handle gesture if a handle is under the position.

        Clicking the remover deletes its rectangle straight away.

        Returns:
            True if a handle consumed the press
        """
        hit = self.handle_at(pos)
        if hit is None:
            return False

        adorner, handle = hit
        if handle == HandleType.REMOVER:
            self.remove_rectangle(adorner.rect)
            return True

        self._active_handle = hit
        self._last_drag_pos = QPointF(pos)
        return True

    def drag_handle_to(self, pos: QPointF) -> None:
        """Apply the delta since the last drag position to the active handle."""
        if self._active_handle is None:
            return

        adorner, handle = self._active_handle
        dx = pos.x() - self._last_drag_pos.x()
        dy = pos.y() - self._last_drag_pos.y()
        self._last_drag_pos = QPointF(pos)

        if handle == HandleType.MOVER:
            adorner.move_by(dx, dy, self.surface_size())
        elif handle == HandleType.RESIZER:
            adorner.resize_by(dx, dy, self.surface_size())
        self.update()

    def end_handle_drag(self) -> None:
        if self._active_handle is not None:
            self._active_handle = None
            self.rectangles_changed.emit()

    @property
    def dragging_handle(self) -> bool:
        return self._active_handle is not None

    # === Layout ===

    def rescale(self, scale_x: float, scale_y: float, container: QSizeF) -> None:
        """
        Scale every rectangle, used when the displayed image changes size.

        Args:
            scale_x: Horizontal ratio of new to old displayed size
            scale_y: Vertical ratio of new to old displayed size
            container: The new surface size; scaled rectangles are clamped into it
        """
        if scale_x == 1.0 and scale_y == 1.0:
            return

        width_limit = container.width()
        height_limit = container.height()
        for rect in self.rectangles:
            left = clamp(rect.left * scale_x, 0.0, width_limit)
            top = clamp(rect.top * scale_y, 0.0, height_limit)
            rect.move_to(left, top)
            rect.resize(
                clamp_size(rect.width * scale_x, left, width_limit, 0.0),
                clamp_size(rect.height * scale_y, top, height_limit, 0.0)
            )

        if self.current_rect is not None:
            x, y = clamp_point(
                self.start_point.x() * scale_x, self.start_point.y() * scale_y,
                width_limit, height_limit
            )
            self.start_point = QPointF(x, y)
        self.update()

    # === Event Handlers ===

    def mousePressEvent(self, event: QMouseEvent) -> None:
        """Handle mouse press events."""
        if event.button() != Qt.MouseButton.LeftButton or not self.image_loaded:
            return

        pos = event.position()
        if self.begin_handle_drag(pos):
            return
        self.begin_rectangle(pos)

    def mouseMoveEvent(self, event: QMouseEvent) -> None:
        """Handle mouse move events."""
        pos = event.position()
        left_down = bool(event.buttons() & Qt.MouseButton.LeftButton)

        if self.dragging_handle:
            if left_down:
                self.drag_handle_to(pos)
            else:
                self.end_handle_drag()
            return

        if self.mouse_down:
            if not left_down:
                # Button was released somewhere we did not hear about
                self.finish_rectangle()
                return
            self.update_rectangle(pos)
            return

        self._update_cursor(pos)

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:
        """Handle mouse release events."""
        if event.button() != Qt.MouseButton.LeftButton:
            return

        if self.dragging_handle:
            self.end_handle_drag()
        elif self.current_rect is not None:
            self.finish_rectangle()
        self._reset_drawing_state()
        self._update_cursor(event.position())

    def _update_cursor(self, pos: QPointF) -> None:
        hit = self.handle_at(pos)
        if hit is None:
            self.setCursor(Qt.CursorShape.CrossCursor)
        else:
            self.setCursor(self.HANDLE_CURSORS[hit[1]])

    def paintEvent(self, event) -> None:
        """Paint rectangles, then their handles above all of them."""
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)

        pen = QPen(self.rect_style.stroke)
        pen.setWidthF(self.rect_style.stroke_width)
        painter.setPen(pen)
        painter.setBrush(self.rect_style.fill)
        for rect in self.rectangles:
            painter.drawRect(rect.to_qrectf())

        for rect in self.rectangles:
            adorner = self._adorners.get(rect)
            if adorner is not None:
                adorner.paint(painter)

        painter.end()
