from __future__ import annotations

from pathlib import Path

import pytest

from tile_cover.settings import (
    DEFAULT_TILE_COVER_CONFIG_NAME,
    TileCoverSettings,
    resolve_config_dir,
    resolve_config_path,
)


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("TILE_COVER_CONFIG_DIR", raising=False)

    settings = TileCoverSettings()
    assert settings.config_file is None
    assert settings.config_dir is None
    assert settings.log_level == "INFO"
    assert settings.log_format == "json"


def test_env_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("TILE_COVER_LOG_LEVEL", "debug")
    monkeypatch.setenv("TILE_COVER_LOG_FORMAT", "TEXT")
    monkeypatch.setenv("TILE_COVER_CONFIG_FILE", str(tmp_path / "x.yaml"))

    settings = TileCoverSettings()
    assert settings.log_level == "DEBUG"
    assert settings.log_format == "text"
    assert settings.config_file == tmp_path / "x.yaml"


def test_rejects_invalid_log_level(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TILE_COVER_LOG_LEVEL", "chatty")
    with pytest.raises(ValueError, match="Invalid TILE_COVER_LOG_LEVEL"):
        TileCoverSettings()


def test_config_dir_searches_parents(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.delenv("TILE_COVER_CONFIG_DIR", raising=False)
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    (config_dir / DEFAULT_TILE_COVER_CONFIG_NAME).write_text("", encoding="utf-8")
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)
    monkeypatch.chdir(nested)

    assert resolve_config_dir() == config_dir


def test_resolve_config_path_reports_explicitness(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.setenv("TILE_COVER_CONFIG_DIR", str(tmp_path))

    assert resolve_config_path() == (tmp_path / DEFAULT_TILE_COVER_CONFIG_NAME, False)
    assert resolve_config_path(tmp_path / "a.yaml") == (tmp_path / "a.yaml", True)

    monkeypatch.setenv("TILE_COVER_CONFIG_FILE", str(tmp_path / "b.yaml"))
    assert resolve_config_path() == (tmp_path / "b.yaml", True)
