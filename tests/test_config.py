"""Tests for configuration management."""

import pytest
from pathlib import Path
import tempfile

from rectangles_over_image.core.config import AppConfig, ConfigManager


class TestAppConfig:
    """Tests for AppConfig."""

    def test_default_config(self):
        """Test creating config with defaults."""
        config = AppConfig()

        assert config.fill_color == "#ADFF2F"
        assert config.stroke_color == "#000000"
        assert config.handle_size == 10
        assert config.remover_size == 16
        assert config.min_rect_size == 5.0
        assert config.edge_margin == 2.0
        assert config.layout_delay_ms == 100

    def test_to_dict(self):
        """Test converting config to dictionary."""
        config = AppConfig(fill_color="#123456", min_rect_size=3)

        data = config.to_dict()

        assert data["fillColor"] == "#123456"
        assert data["minRectSize"] == 3
        assert "layoutDelayMs" in data

    def test_from_dict_with_defaults(self):
        """Test creating config from partial dictionary."""
        config = AppConfig.from_dict({"strokeWidth": 2.5})

        assert config.stroke_width == 2.5
        assert config.fill_color == "#ADFF2F"  # default
        assert config.handle_size == 10  # default

    def test_rect_style(self):
        """Test that the rectangle style mirrors the config."""
        config = AppConfig(fill_color="#00FF00", fill_alpha=100, stroke_width=3)

        style = config.rect_style

        assert style.fill_color == "#00FF00"
        assert style.fill_alpha == 100
        assert style.stroke_width == 3


class TestConfigManager:
    """Tests for ConfigManager."""

    def test_load_nonexistent_file(self):
        """Test loading config when file doesn't exist."""
        with tempfile.TemporaryDirectory() as tmpdir:
            manager = ConfigManager(Path(tmpdir) / "nonexistent.yaml")

            config = manager.load()

            assert config.fill_color == "#ADFF2F"

    def test_load_sample_file(self, sample_config_yaml):
        """Test loading values from a YAML file."""
        manager = ConfigManager(sample_config_yaml)

        config = manager.config

        assert config.fill_color == "#FF00FF"
        assert config.fill_alpha == 128
        assert config.min_rect_size == 8
        assert config.layout_delay_ms == 50
        assert config.handle_size == 10  # default

    def test_load_invalid_yaml(self, tmp_path):
        """Test that a broken file falls back to defaults."""
        config_path = tmp_path / "config.yaml"
        config_path.write_text("fillColor: [unclosed\n")

        config = ConfigManager(config_path).load()

        assert config == AppConfig()

    def test_load_non_mapping(self, tmp_path):
        """Test that a YAML list falls back to defaults."""
        config_path = tmp_path / "config.yaml"
        config_path.write_text("- one\n- two\n")

        config = ConfigManager(config_path).load()

        assert config == AppConfig()

    def test_save_and_load(self):
        """Test saving and loading config."""
        with tempfile.TemporaryDirectory() as tmpdir:
            config_path = Path(tmpdir) / "config.yaml"
            manager = ConfigManager(config_path)

            result = manager.save(AppConfig(stroke_color="#FFFFFF", edge_margin=4))
            loaded = manager.load()

            assert result is True
            assert loaded.stroke_color == "#FFFFFF"
            assert loaded.edge_margin == 4

    def test_save_without_config(self, tmp_path):
        """Test saving when nothing was loaded or given."""
        manager = ConfigManager(tmp_path / "config.yaml")

        assert manager.save() is False

    def test_config_property(self, tmp_path):
        """Test config property lazy loading."""
        manager = ConfigManager(tmp_path / "config.yaml")

        config1 = manager.config
        config2 = manager.config

        assert config1 is config2
