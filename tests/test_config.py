"""Tests for the YAML style config loader."""

import tempfile

import pytest
import yaml

from reelframe.config import default_config, load_config
from reelframe.geometry import CanvasTarget


def _write_config(content) -> str:
    """Write a config dict to a temp YAML file, return path."""
    f = tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False)
    yaml.dump(content, f)
    f.close()
    return f.name


class TestLoadConfig:
    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        config = load_config(path)
        defaults = default_config()
        assert config["canvas"] == CanvasTarget(720, 1280)
        assert config["style"] == defaults["style"]
        assert config["resolver"] == defaults["resolver"]
        assert config["output"] == "."

    def test_parses_style_colors(self):
        config = load_config(_write_config({
            "style": {"title": "Launch", "background": "#000000", "accent": "e04c77"},
        }))
        style = config["style"]
        assert style.title == "Launch"
        assert style.background_color == (0, 0, 0)
        assert style.accent_color == (224, 76, 119)

    def test_partial_style_keeps_defaults(self):
        config = load_config(_write_config({"style": {"title": "Only title"}}))
        assert config["style"].accent_color == (124, 58, 237)

    def test_canvas_resolution(self):
        config = load_config(_write_config({"canvas": {"resolution": [1080, 1920]}}))
        assert config["canvas"] == CanvasTarget(1080, 1920)

    def test_resolver_overrides(self):
        config = load_config(_write_config({
            "resolver": {"host": "dl.example.com", "timeout": 5},
        }))
        assert config["resolver"]["host"] == "dl.example.com"
        assert config["resolver"]["timeout"] == 5.0
        assert config["resolver"]["api_key_env"] == "RAPIDAPI_KEY"

    def test_resolves_output_path_vars(self):
        config = load_config(_write_config({
            "paths": {"out": "/data/renders"},
            "output": "${out}/reels",
        }))
        assert config["output"] == "/data/renders/reels"


class TestConfigValidation:
    def test_unknown_top_level_key(self):
        with pytest.raises(ValueError, match="unknown keys"):
            load_config(_write_config({"colour": {}}))

    def test_unknown_resolver_key(self):
        with pytest.raises(ValueError, match="resolver"):
            load_config(_write_config({"resolver": {"retries": 3}}))

    def test_non_mapping_rejected(self):
        with pytest.raises(ValueError, match="mapping"):
            load_config(_write_config(["a", "b"]))

    def test_landscape_canvas_rejected(self):
        with pytest.raises(ValueError, match="9:16"):
            load_config(_write_config({"canvas": {"resolution": [1280, 720]}}))

    def test_non_positive_canvas_rejected(self):
        with pytest.raises(ValueError, match="positive"):
            load_config(_write_config({"canvas": {"resolution": [0, 0]}}))

    def test_malformed_canvas_rejected(self):
        with pytest.raises(ValueError, match="width, height"):
            load_config(_write_config({"canvas": {"resolution": "720x1280"}}))

    def test_bad_color_rejected(self):
        with pytest.raises(ValueError, match="invalid style"):
            load_config(_write_config({"style": {"accent": "purple"}}))

    def test_bad_timeout_rejected(self):
        with pytest.raises(ValueError, match="timeout"):
            load_config(_write_config({"resolver": {"timeout": 0}}))

    def test_unknown_path_var_rejected(self):
        with pytest.raises(ValueError, match="Unknown path variable"):
            load_config(_write_config({"output": "${nowhere}/x"}))

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.yaml")
