"""Tests for the subcommand dispatcher."""

import pytest


class TestMainDispatcher:
    def test_no_subcommand_shows_help(self, capsys):
        from reelframe.main import main

        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code != 0
        assert "snapshot" in capsys.readouterr().out

    def test_snapshot_subcommand_exists(self):
        """snapshot is registered (fails on missing --source)."""
        from reelframe.main import main

        with pytest.raises(SystemExit):
            main(["snapshot"])

    def test_resolve_subcommand_exists(self):
        from reelframe.main import main

        with pytest.raises(SystemExit):
            main(["resolve"])

    def test_insert_subcommand_exists(self):
        from reelframe.main import main

        with pytest.raises(SystemExit):
            main(["insert"])

    def test_invalid_subcommand_errors(self):
        from reelframe.main import main

        with pytest.raises(SystemExit) as exc_info:
            main(["nonexistent"])
        assert exc_info.value.code != 0


class TestResolveCommand:
    def test_prints_reference_without_key(self, capsys, monkeypatch):
        from reelframe.main import main

        monkeypatch.delenv("RAPIDAPI_KEY", raising=False)
        main(["resolve", "https://instagram.com/reel/abc"])
        assert capsys.readouterr().out.strip() == "https://instagram.com/reel/abc"

    def test_rejects_non_url(self, capsys):
        from reelframe.main import main

        with pytest.raises(SystemExit) as exc_info:
            main(["resolve", "instagram.com/reel/abc"])
        assert exc_info.value.code == 1
        assert "Not an http(s) URL" in capsys.readouterr().err
