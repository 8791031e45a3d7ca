"""Pytest configuration and fixtures."""

import os
import sys
from pathlib import Path

import pytest

# Add src to path for imports
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

# Widgets are created without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


@pytest.fixture(scope="session")
def qapp():
    """Create a QApplication for tests that need it."""
    from PyQt6.QtWidgets import QApplication

    app = QApplication.instance()
    if app is None:
        app = QApplication([])

    yield app


@pytest.fixture
def sample_image_file(tmp_path, qapp):
    """Create a 400x200 white PNG with a red top-left quadrant."""
    from PyQt6.QtCore import Qt
    from PyQt6.QtGui import QColor, QImage, QPainter

    image = QImage(400, 200, QImage.Format.Format_RGB32)
    image.fill(Qt.GlobalColor.white)
    painter = QPainter(image)
    painter.fillRect(0, 0, 200, 100, QColor("#FF0000"))
    painter.end()

    path = tmp_path / "sample.png"
    assert image.save(str(path), "PNG")
    return path


@pytest.fixture
def sample_config_yaml(tmp_path):
    """Create a sample config.yaml file."""
    yaml_path = tmp_path / "config.yaml"
    yaml_path.write_text(
        "fillColor: '#FF00FF'\n"
        "fillAlpha: 128\n"
        "minRectSize: 8\n"
        "layoutDelayMs: 50\n"
    )
    return yaml_path
