from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any, Final, Mapping, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .projection import Projection
from .settings import resolve_config_path
from .web_mercator import EARTH_RADIUS_M, WEB_MERCATOR_MAX_LAT
from .wgs84 import GEOGRAPHIC_MAX_LAT

SUPPORTED_SCHEMA_VERSIONS: Final[set[int]] = {1}


class TileCoverConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    schema_version: int = 1

    # Sphere used by the Web Mercator projection.
    earth_radius_m: float = Field(default=EARTH_RADIUS_M, gt=0)

    # Latitude limits applied before indexing.
    mercator_max_lat: float = Field(default=WEB_MERCATOR_MAX_LAT, gt=0, lt=90)
    geographic_max_lat: float = Field(default=GEOGRAPHIC_MAX_LAT, gt=0, le=90)

    clamp_tile_indices: bool = False
    max_tiles_per_zoom: Optional[int] = Field(default=None, ge=1)

    default_projection: Projection = Projection.WEB_MERCATOR

    @field_validator("default_projection", mode="before")
    @classmethod
    def _parse_projection(cls, value: Any) -> Projection:
        return Projection.parse(value)

    @model_validator(mode="after")
    def _validate_schema_version(self) -> "TileCoverConfig":
        if self.schema_version not in SUPPORTED_SCHEMA_VERSIONS:
            raise ValueError(
                f"Unsupported tile cover schema_version={self.schema_version}; "
                f"supported versions: {sorted(SUPPORTED_SCHEMA_VERSIONS)}"
            )
        return self


DEFAULT_TILE_COVER_CONFIG: Final[TileCoverConfig] = TileCoverConfig()


class TileCoverConfigFile(BaseModel):
    model_config = ConfigDict(extra="forbid")

    tile_cover: TileCoverConfig = Field(default_factory=TileCoverConfig)


def _parse_yaml(text: str, *, source: Path) -> Mapping[str, Any]:
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ValueError(f"Failed to load tile cover YAML: {source}") from exc

    if data is None:
        data = {}
    if not isinstance(data, Mapping):
        raise ValueError(f"tile cover config must be a mapping: {source}")
    return data


def _load_file(config_path: Path) -> TileCoverConfig:
    raw = config_path.read_text(encoding="utf-8")
    data = dict(_parse_yaml(raw, source=config_path))

    try:
        parsed = TileCoverConfigFile.model_validate(data)
    except ValidationError as exc:
        raise ValueError(f"Invalid tile cover config ({config_path}): {exc}") from exc

    return parsed.tile_cover


def load_tile_cover_config(path: Optional[Union[str, Path]] = None) -> TileCoverConfig:
    config_path, explicit = resolve_config_path(Path(path) if path is not None else None)
    if not config_path.is_file():
        if explicit:
            raise FileNotFoundError(f"tile cover config file not found: {config_path}")
        return DEFAULT_TILE_COVER_CONFIG
    return _load_file(config_path)


@lru_cache(maxsize=8)
def _get_tile_cover_config_cached(
    config_path: str, mtime_ns: int, size: int
) -> TileCoverConfig:
    _ = (mtime_ns, size)
    return _load_file(Path(config_path))


def get_tile_cover_config(path: Optional[Union[str, Path]] = None) -> TileCoverConfig:
    resolved, explicit = resolve_config_path(Path(path) if path is not None else None)
    try:
        stat = resolved.stat()
    except FileNotFoundError as exc:
        if explicit:
            raise FileNotFoundError(f"tile cover config file not found: {resolved}") from exc
        return DEFAULT_TILE_COVER_CONFIG

    return _get_tile_cover_config_cached(str(resolved), stat.st_mtime_ns, stat.st_size)


get_tile_cover_config.cache_clear = _get_tile_cover_config_cached.cache_clear  # type: ignore[attr-defined]
