"""Tests for the design-tool insert command."""

import sys
import types

import pytest

from reelframe.insert_cli import load_host


class RecordingApp:
    def __init__(self, fail=False):
        self.media = []
        self.closed = False
        self.fail = fail

    async def on_ready(self):
        pass

    async def add_media(self, media):
        if self.fail:
            raise RuntimeError("upload rejected")
        self.media.append(media)

    async def close(self):
        self.closed = True


@pytest.fixture
def bridge(monkeypatch):
    """Registers an importable 'reel_bridge' module exposing a host."""
    module = types.ModuleType("reel_bridge")
    module.host = types.SimpleNamespace(app=RecordingApp())
    monkeypatch.setitem(sys.modules, "reel_bridge", module)
    return module


class TestLoadHost:
    def test_module_attribute(self, bridge):
        assert load_host("reel_bridge:host") is bridge.host

    def test_missing_colon_raises(self):
        with pytest.raises(ValueError, match="module:attribute"):
            load_host("reel_bridge")

    def test_missing_attribute_raises(self, bridge):
        with pytest.raises(ValueError, match="no attribute 'nope'"):
            load_host("reel_bridge:nope")


class TestInsertCommand:
    def test_no_host_skips(self, capsys):
        from reelframe.main import main

        main(["insert", "https://cdn.example.com/reel.mp4"])
        assert "No design tool available" in capsys.readouterr().out

    def test_host_without_app_skips(self, capsys, monkeypatch):
        from reelframe.main import main

        module = types.ModuleType("bare_bridge")
        module.host = object()
        monkeypatch.setitem(sys.modules, "bare_bridge", module)
        main(["insert", "https://cdn.example.com/reel.mp4", "--host", "bare_bridge:host"])
        assert "No design tool available" in capsys.readouterr().out

    def test_inserts_into_host_app(self, bridge, capsys):
        from reelframe.main import main

        main([
            "insert", "https://cdn.example.com/reel.mp4",
            "--host", "reel_bridge:host", "--title", "Launch day",
        ])
        app = bridge.host.app
        assert app.media == [{
            "type": "video",
            "src": "https://cdn.example.com/reel.mp4",
            "mimeType": "video/mp4",
            "name": "Launch day",
        }]
        assert app.closed
        assert "Inserted 'Launch day'" in capsys.readouterr().out

    def test_title_defaults_to_style_title(self, bridge):
        from reelframe.main import main

        main(["insert", "https://cdn.example.com/reel.mp4", "--host", "reel_bridge:host"])
        assert bridge.host.app.media[0]["name"] == "My Reel"

    def test_resolved_url_inserted(self, bridge, monkeypatch):
        from reelframe.main import main

        monkeypatch.delenv("RAPIDAPI_KEY", raising=False)
        main([
            "insert", "https://instagram.com/reel/abc",
            "--resolve", "--host", "reel_bridge:host",
        ])
        # Without an API key the reference itself is used.
        assert bridge.host.app.media[0]["src"] == "https://instagram.com/reel/abc"

    def test_failed_insert_exits_nonzero(self, bridge, capsys):
        from reelframe.main import main

        bridge.host.app.fail = True
        with pytest.raises(SystemExit) as exc_info:
            main(["insert", "https://cdn.example.com/reel.mp4", "--host", "reel_bridge:host"])
        assert exc_info.value.code == 1
        assert "insert failed" in capsys.readouterr().err

    def test_unimportable_host_errors(self):
        from reelframe.main import main

        with pytest.raises(SystemExit) as exc_info:
            main(["insert", "https://cdn.example.com/reel.mp4", "--host", "no_such_bridge_mod:host"])
        assert exc_info.value.code == 2

    def test_rejects_non_url(self, capsys):
        from reelframe.main import main

        with pytest.raises(SystemExit) as exc_info:
            main(["insert", "cdn.example.com/reel.mp4"])
        assert exc_info.value.code == 1
        assert "Not an http(s) URL" in capsys.readouterr().err
