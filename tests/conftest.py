import sys
from pathlib import Path

import pytest

SRC = Path(__file__).resolve().parents[1] / "src"

sys.path.insert(0, str(SRC))


@pytest.fixture(autouse=True)
def _isolated_tile_cover_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    for name in ("TILE_COVER_CONFIG_FILE", "TILE_COVER_LOG_LEVEL", "TILE_COVER_LOG_FORMAT"):
        monkeypatch.delenv(name, raising=False)
    empty_config_dir = tmp_path / "empty-config"
    empty_config_dir.mkdir()
    monkeypatch.setenv("TILE_COVER_CONFIG_DIR", str(empty_config_dir))


@pytest.fixture
def beijing_geojson() -> dict:
    return {
        "type": "FeatureCollection",
        "name": "bj",
        "crs": {"type": "name", "properties": {"name": "urn:ogc:def:crs:OGC:1.3:CRS84"}},
        "features": [
            {
                "type": "Feature",
                "properties": {},
                "geometry": {
                    "type": "Polygon",
                    "coordinates": [
                        [
                            [116.374842044447277, 39.928336620101462],
                            [116.428756054000047, 39.929049441227839],
                            [116.426896950222343, 39.905522425131416],
                            [116.37948980389146, 39.904096285603835],
                            [116.37948980389146, 39.904096285603835],
                            [116.37948980389146, 39.904096285603835],
                            [116.374842044447277, 39.928336620101462],
                        ]
                    ],
                },
            }
        ],
    }
