"""Main application window for Rectangles over Image."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from PyQt6.QtCore import Qt, QSize, QTimer
from PyQt6.QtGui import QAction, QFont, QIcon, QImageReader, QPainter, QPixmap
from PyQt6.QtWidgets import (
    QFileDialog, QLabel, QMainWindow, QMessageBox, QStatusBar, QToolBar,
    QVBoxLayout, QWidget
)

from ..core.config import AppConfig, ConfigManager
from ..core.exporter import ExportError, ImageExporter
from .image_view import ImageView

logger = logging.getLogger(__name__)

OPEN_IMAGE_FILTER = "Image Files (*.bmp *.jpg *.jpeg *.png)"
SAVE_IMAGE_FILTER = "PNG Image (*.png)"
SAVE_TITLE = "Image Save"


def increase_image_allocation_limit() -> None:
    """Remove image allocation limit for large images."""
    QImageReader.setAllocationLimit(0)


class MainWindow(QMainWindow):
    """
    Main application window for Rectangles over Image.

    Provides:
    - Loading a BMP, JPG or PNG image
    - Drawing, moving, resizing and deleting rectangles over it
    - Saving a flattened PNG at the image's native resolution
    """

    def __init__(self, config_manager: Optional[ConfigManager] = None) -> None:
        """Initialize the main window."""
        super().__init__()

        increase_image_allocation_limit()

        self.config_manager = config_manager or ConfigManager()
        self.exporter = ImageExporter(self.config.rect_style)

        # State
        self.current_image_path: Optional[Path] = None
        self.last_directory = ""

        # UI elements (initialized in _init_ui)
        self.image_view: Optional[ImageView] = None
        self.status_bar: Optional[QStatusBar] = None
        self.file_label: Optional[QLabel] = None
        self.count_label: Optional[QLabel] = None

        self._init_ui()
        self._setup_connections()

        logger.info("MainWindow initialization complete")

    @property
    def config(self) -> AppConfig:
        """Get the current configuration."""
        return self.config_manager.config

    @property
    def image_loaded(self) -> bool:
        return self.image_view.has_image()

    def _init_ui(self) -> None:
        """Initialize the user interface."""
        self.setWindowTitle("Rectangles over Image")
        self.resize(self.config.window_width, self.config.window_height)

        central_widget = QWidget()
        self.setCentralWidget(central_widget)

        self.image_view = ImageView(self.config)

        layout = QVBoxLayout(central_widget)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(self.image_view)

        self._create_status_bar()
        self._create_toolbar()
        self._create_menus()

    def _create_status_bar(self) -> None:
        """Create the status bar."""
        self.status_bar = QStatusBar()
        self.setStatusBar(self.status_bar)

        self.file_label = QLabel()
        self.status_bar.addPermanentWidget(self.file_label)

        self.count_label = QLabel()
        self.status_bar.addPermanentWidget(self.count_label)

    def _create_toolbar(self) -> None:
        """Create the main toolbar."""
        self.toolbar = QToolBar()
        self.toolbar.setObjectName("MainToolBar")
        self.toolbar.setIconSize(QSize(32, 32))
        self.toolbar.setToolButtonStyle(Qt.ToolButtonStyle.ToolButtonTextBesideIcon)
        self.addToolBar(self.toolbar)

        self.load_action = QAction(self._create_icon("open"), "Load Image", self)
        self.load_action.triggered.connect(self.load_image)
        self.toolbar.addAction(self.load_action)

        self.save_action = QAction(self._create_icon("save"), "Save Image", self)
        self.save_action.triggered.connect(self.save_image)
        self.save_action.setEnabled(False)
        self.toolbar.addAction(self.save_action)

    def _create_menus(self) -> None:
        """Create the menu bar."""
        menubar = self.menuBar()

        file_menu = menubar.addMenu("File")

        open_action = QAction("Load Image...", self)
        open_action.setShortcut("Ctrl+O")
        open_action.triggered.connect(self.load_image)
        file_menu.addAction(open_action)

        self.menu_save_action = QAction("Save Image...", self)
        self.menu_save_action.setShortcut("Ctrl+S")
        self.menu_save_action.triggered.connect(self.save_image)
        self.menu_save_action.setEnabled(False)
        file_menu.addAction(self.menu_save_action)

        file_menu.addSeparator()

        exit_action = QAction("Exit", self)
        exit_action.triggered.connect(self.close)
        file_menu.addAction(exit_action)

        info_menu = menubar.addMenu("Info")

        about_action = QAction("About", self)
        about_action.triggered.connect(self._show_about)
        info_menu.addAction(about_action)

    def _setup_connections(self) -> None:
        """Set up signal/slot connections."""
        self.image_view.surface.rectangles_changed.connect(self._update_rectangle_count)

    @staticmethod
    def _create_icon(name: str, size: int = 32) -> QIcon:
        """Create an icon from a Unicode symbol.

        Args:
            name: Icon identifier
            size: Icon size in pixels
        """
        icons = {
            "open": "\U0001F4C2",
            "save": "\U0001F4BE",
        }

        symbol = icons.get(name, name)

        pixmap = QPixmap(size, size)
        pixmap.fill(Qt.GlobalColor.transparent)

        painter = QPainter(pixmap)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)

        font = QFont()
        font.setPointSize(int(size * 0.65))
        painter.setFont(font)

        painter.drawText(pixmap.rect(), Qt.AlignmentFlag.AlignCenter, symbol)
        painter.end()

        return QIcon(pixmap)

    # === File Operations ===

    def load_image(self) -> None:
        """Ask for an image file and display it."""
        file_path, _ = QFileDialog.getOpenFileName(
            self, "Load Image", self.last_directory, OPEN_IMAGE_FILTER
        )
        if file_path:
            self.open_image_path(file_path)

    def open_image_path(self, file_path: str) -> bool:
        """
        Display an image and clear existing rectangles.

        Returns:
            True if the image was loaded
        """
        pixmap = QPixmap(file_path)
        if pixmap.isNull():
            logger.warning(f"Failed to load image: {file_path}")
            QMessageBox.warning(self, "Load Image", f"Failed to load image: {Path(file_path).name}")
            return False

        self.current_image_path = Path(file_path)
        self.last_directory = str(self.current_image_path.parent)

        self.image_view.set_pixmap(pixmap)
        self.save_action.setEnabled(True)
        self.menu_save_action.setEnabled(True)
        self.file_label.setText(f"{self.current_image_path.name} ({pixmap.width()}x{pixmap.height()})")
        logger.info(f"Loaded image {file_path} ({pixmap.width()}x{pixmap.height()})")

        # Let the layout settle before matching the surface to the displayed image
        QTimer.singleShot(self.config.layout_delay_ms, self.image_view.fit_surface)
        return True

    def save_image(self) -> None:
        """Ask for a destination and write the annotated image."""
        if not self.image_loaded:
            self._show_status_message("Load an image before saving")
            return

        default_path = ""
        if self.current_image_path is not None:
            default_path = str(
                self.current_image_path.with_name(f"{self.current_image_path.stem}_annotated.png")
            )

        file_path, _ = QFileDialog.getSaveFileName(
            self, "Save Image", default_path, SAVE_IMAGE_FILTER
        )
        if file_path:
            self.save_image_path(file_path)

    def save_image_path(self, file_path: str) -> bool:
        """
        Export the image with scaled rectangles as PNG.

        Returns:
            True if the file was written
        """
        try:
            written = self.exporter.export(
                self.image_view.pixmap(),
                self.image_view.surface.rectangles,
                self.image_view.displayed_size(),
                file_path
            )
        except ExportError as e:
            logger.error(f"Could not save image to {file_path}: {e}", exc_info=True)
            QMessageBox.warning(self, SAVE_TITLE, "Could not save image.")
            return False

        self._show_status_message(f"Saved {written}")
        QMessageBox.information(self, SAVE_TITLE, "Image saved successfully.")
        return True

    # === Utility Methods ===

    def _update_rectangle_count(self) -> None:
        count = len(self.image_view.surface.rectangles)
        self.count_label.setText(f"Rectangles: {count}")

    def _show_status_message(self, message: str) -> None:
        """Show a status bar message."""
        self.status_bar.showMessage(message)

    def _show_about(self) -> None:
        """Show about dialog."""
        QMessageBox.about(
            self,
            "About Rectangles over Image",
            "Rectangles over Image\nVersion 1.0.0\n\n"
            "Draw rectangles over an image and save the result at full resolution."
        )
