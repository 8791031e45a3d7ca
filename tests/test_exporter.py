"""Tests for flattened PNG export."""

import pytest
from PyQt6.QtCore import QSizeF, Qt
from PyQt6.QtGui import QColor, QImage, QPixmap

from rectangles_over_image.core.exporter import ExportError, ImageExporter, ensure_png_suffix
from rectangles_over_image.core.models import AnnotationRect, RectStyle, Scaler

GREEN_YELLOW = QColor("#ADFF2F")
WHITE = QColor("#FFFFFF")


@pytest.fixture
def source(qapp):
    image = QImage(400, 200, QImage.Format.Format_RGB32)
    image.fill(Qt.GlobalColor.white)
    return image


@pytest.fixture
def exporter():
    return ImageExporter(RectStyle())


class TestEnsurePngSuffix:
    """Tests for ensure_png_suffix."""

    def test_keeps_png(self, tmp_path):
        assert ensure_png_suffix(tmp_path / "out.png") == tmp_path / "out.png"

    def test_keeps_uppercase_png(self, tmp_path):
        assert ensure_png_suffix(tmp_path / "out.PNG") == tmp_path / "out.PNG"

    def test_appends_missing_suffix(self, tmp_path):
        assert ensure_png_suffix(tmp_path / "out") == tmp_path / "out.png"

    def test_appends_to_other_suffix(self, tmp_path):
        assert ensure_png_suffix(tmp_path / "out.jpg") == tmp_path / "out.jpg.png"


class TestCompose:
    """Tests for composing the flattened image."""

    def test_scale_rects(self, exporter):
        rects = [AnnotationRect(10, 10, 50, 25), AnnotationRect(0, 0, 5, 5)]

        scaled = exporter.scale_rects(rects, Scaler(2.0, 2.0))

        assert [(r.left, r.top, r.width, r.height) for r in scaled] == [
            (20, 20, 100, 50),
            (0, 0, 10, 10),
        ]

    def test_output_has_native_size(self, exporter, source):
        result = exporter.compose(source, [], QSizeF(200, 100))

        assert result.width() == 400
        assert result.height() == 200

    def test_rectangles_drawn_at_native_positions(self, exporter, source):
        """Test that displayed rectangles land at scaled positions."""
        rects = [AnnotationRect(10, 10, 50, 25)]

        result = exporter.compose(source, rects, QSizeF(200, 100))

        # Displayed (10, 10, 50, 25) becomes native (20, 20, 100, 50)
        assert result.pixelColor(70, 45) == GREEN_YELLOW
        assert result.pixelColor(115, 65) == GREEN_YELLOW
        assert result.pixelColor(10, 10) == WHITE
        assert result.pixelColor(130, 45) == WHITE
        assert result.pixelColor(70, 80) == WHITE

    def test_source_is_untouched(self, exporter, source):
        exporter.compose(source, [AnnotationRect(0, 0, 100, 50)], QSizeF(200, 100))

        assert source.pixelColor(50, 50) == WHITE

    def test_accepts_pixmap(self, exporter, source):
        result = exporter.compose(QPixmap.fromImage(source), [], QSizeF(400, 200))

        assert result.size() == source.size()

    def test_empty_displayed_size(self, exporter, source):
        with pytest.raises(ValueError):
            exporter.compose(source, [], QSizeF(0, 0))

    def test_custom_style(self, source):
        exporter = ImageExporter(RectStyle(fill_color="#0000FF"))

        result = exporter.compose(source, [AnnotationRect(0, 0, 100, 50)], QSizeF(400, 200))

        assert result.pixelColor(50, 25) == QColor("#0000FF")


class TestSave:
    """Tests for writing the PNG."""

    def test_export_writes_png(self, exporter, source, tmp_path):
        target = exporter.export(
            source, [AnnotationRect(10, 10, 50, 25)], QSizeF(200, 100), tmp_path / "result"
        )

        assert target == tmp_path / "result.png"
        assert target.exists()

        loaded = QImage(str(target))
        assert loaded.width() == 400
        assert loaded.height() == 200
        assert loaded.pixelColor(70, 45) == GREEN_YELLOW

    def test_save_creates_parent_directory(self, exporter, source, tmp_path):
        target = exporter.save(source, tmp_path / "nested" / "out.png")

        assert target.exists()

    def test_unwritable_path_raises(self, exporter, source, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")

        with pytest.raises(ExportError):
            exporter.save(source, blocker / "out.png")

    def test_export_wraps_scaler_error(self, exporter, source, tmp_path):
        with pytest.raises(ExportError):
            exporter.export(source, [], QSizeF(0, 100), tmp_path / "out.png")
