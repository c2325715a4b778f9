from __future__ import annotations

from dataclasses import dataclass, field
import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent
DEFAULT_DATA_FILE = BASE_DIR / "data" / "reviews.json"
DEFAULT_SITE_DIR = BASE_DIR / "site"

OSM_TILE_URL = "https://{s}.tile.openstreetmap.org/{z}/{x}/{y}.png"
OSM_ATTRIBUTION = "&copy; OpenStreetMap"
ENV_PREFIX = "STOUTMAP_"


@dataclass(frozen=True, slots=True)
class TileSettings:
    url: str = OSM_TILE_URL
    attribution: str = OSM_ATTRIBUTION
    max_zoom: int = 19


@dataclass(frozen=True, slots=True)
class Settings:
    data_source: str = str(DEFAULT_DATA_FILE)
    site_dir: Path = DEFAULT_SITE_DIR
    tiles: TileSettings = field(default_factory=TileSettings)
    request_timeout_seconds: float = 15.0
    log_level: str = "INFO"


def read_env_file(path: Path) -> dict[str, str]:
    """Parse STOUTMAP_* assignments from a .env file.

    Accepts an optional `export` prefix, quoted values, and trailing comments
    after unquoted values. Unrelated keys are ignored.
    """
    if not path.exists():
        return {}
    values: dict[str, str] = {}
    for raw_line in path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if line.startswith("export "):
            line = line[len("export ") :].lstrip()
        key, sep, raw_value = line.partition("=")
        key = key.strip()
        if not sep or not key.startswith(ENV_PREFIX):
            continue
        values[key] = _env_value(raw_value.strip())
    return values


def _env_value(raw: str) -> str:
    if raw[:1] in {'"', "'"} and raw.endswith(raw[0]) and len(raw) >= 2:
        return raw[1:-1]
    return raw.split(" #", 1)[0].strip()


def load_settings(base_dir: Path = BASE_DIR, filename: str = ".env") -> Settings:
    # Real environment variables win over the .env file.
    environ = {**read_env_file(base_dir / filename), **os.environ}

    def _env(key: str) -> str:
        return environ.get(key, "").strip()

    defaults = Settings()
    tiles = TileSettings(
        url=_env("STOUTMAP_TILE_URL") or defaults.tiles.url,
        attribution=_env("STOUTMAP_TILE_ATTRIBUTION") or defaults.tiles.attribution,
        max_zoom=int(_env("STOUTMAP_MAX_ZOOM") or defaults.tiles.max_zoom),
    )
    site_dir = _env("STOUTMAP_SITE_DIR")
    return Settings(
        data_source=_env("STOUTMAP_DATA_SOURCE") or defaults.data_source,
        site_dir=Path(site_dir) if site_dir else defaults.site_dir,
        tiles=tiles,
        request_timeout_seconds=float(_env("STOUTMAP_REQUEST_TIMEOUT") or defaults.request_timeout_seconds),
        log_level=(_env("STOUTMAP_LOG_LEVEL") or defaults.log_level).upper(),
    )
