from __future__ import annotations

from pathlib import Path
from typing import Final, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_TILE_COVER_PREFIX: Final[str] = "TILE_COVER_"

DEFAULT_TILE_COVER_CONFIG_NAME: Final[str] = "tile-cover.yaml"

_LOG_LEVELS: Final[set[str]] = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}
_LOG_FORMATS: Final[set[str]] = {"json", "text"}


class TileCoverSettings(BaseSettings):
    """Process-level settings read from ``TILE_COVER_*`` environment variables."""

    model_config = SettingsConfigDict(env_prefix=_TILE_COVER_PREFIX, extra="ignore")

    config_file: Optional[Path] = None
    config_dir: Optional[Path] = None
    log_level: str = "INFO"
    log_format: str = "json"

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        normalized = (value or "").strip().upper() or "INFO"
        if normalized not in _LOG_LEVELS:
            raise ValueError(
                f"Invalid {_TILE_COVER_PREFIX}LOG_LEVEL={value!r}; expected one of: "
                f"{', '.join(sorted(_LOG_LEVELS))}"
            )
        return normalized

    @field_validator("log_format")
    @classmethod
    def _normalize_log_format(cls, value: str) -> str:
        normalized = (value or "").strip().lower() or "json"
        if normalized not in _LOG_FORMATS:
            raise ValueError(
                f"Invalid {_TILE_COVER_PREFIX}LOG_FORMAT={value!r}; expected json or text"
            )
        return normalized


def _absolute(path: Path) -> Path:
    path = path.expanduser()
    if not path.is_absolute():
        path = (Path.cwd() / path).resolve()
    return path


def resolve_config_dir(settings: Optional[TileCoverSettings] = None) -> Path:
    settings = settings or TileCoverSettings()
    if settings.config_dir is not None:
        return _absolute(settings.config_dir)

    cwd = Path.cwd()
    for candidate_root in (cwd, *cwd.parents):
        config_dir = candidate_root / "config"
        if (config_dir / DEFAULT_TILE_COVER_CONFIG_NAME).is_file():
            return config_dir

    return cwd / "config"


def resolve_config_path(
    path: Optional[Path] = None, settings: Optional[TileCoverSettings] = None
) -> tuple[Path, bool]:
    """Return the config file to read and whether it was named explicitly.

    Explicit paths (argument or ``TILE_COVER_CONFIG_FILE``) must exist; the
    default location may be absent.
    """

    if path is not None:
        return _absolute(Path(path)), True

    settings = settings or TileCoverSettings()
    if settings.config_file is not None:
        return _absolute(settings.config_file), True

    return resolve_config_dir(settings) / DEFAULT_TILE_COVER_CONFIG_NAME, False
