"""
Database Module
File-based storage under db/ (or $APPGRAPH_DATA_DIR): app.json holds the application
records, settings.json the service settings. Records can also be fetched from a remote URL.
Uses orjson for faster JSON parsing.
"""

import os
from pathlib import Path
from typing import Optional

import aiofiles
import httpx
import orjson
from loguru import logger

from builder import DEFAULT_ID_STRATEGY, ID_STRATEGIES
from shared.constants import normalize_direction
from shared.errors import FetchError

DB_DIR = Path(__file__).parent
APPS_FILE = "app.json"
SETTINGS_FILE = "settings.json"
DEFAULT_FETCH_TIMEOUT = 10.0

DEFAULT_SETTINGS = {
    "direction": "TB",
    "idStrategy": DEFAULT_ID_STRATEGY,
    "sourceUrl": "",
    "fetchTimeout": DEFAULT_FETCH_TIMEOUT,
}


def get_data_dir() -> Path:
    """Data directory: $APPGRAPH_DATA_DIR if set, else db/ beside this module."""
    env = os.environ.get("APPGRAPH_DATA_DIR")
    return Path(env) if env else DB_DIR


async def _write_json_file(filename: str, data) -> dict:
    """Atomic write: write to .tmp then rename to avoid partial/corrupt files on concurrent access."""
    data_dir = get_data_dir()
    data_dir.mkdir(parents=True, exist_ok=True)
    file_path = data_dir / filename
    tmp_path = file_path.with_suffix(file_path.suffix + ".tmp")
    content = orjson.dumps(data, option=orjson.OPT_INDENT_2).decode("utf-8")
    async with aiofiles.open(tmp_path, "w", encoding="utf-8") as f:
        await f.write(content)
    tmp_path.replace(file_path)
    return {"success": True}


async def get_apps():
    """Read the raw record array from app.json. Missing or invalid file -> FetchError."""
    file_path = get_data_dir() / APPS_FILE
    try:
        async with aiofiles.open(file_path, "rb") as f:
            data = await f.read()
    except FileNotFoundError as e:
        raise FetchError(f"Application records not found: {file_path}") from e
    try:
        return orjson.loads(data)
    except orjson.JSONDecodeError as e:
        raise FetchError(f"Invalid JSON in {file_path}: {e}") from e


async def save_apps(records: list) -> dict:
    """Overwrite app.json with the given record array."""
    return await _write_json_file(APPS_FILE, records)


async def fetch_records(
    url: str,
    timeout: float = DEFAULT_FETCH_TIMEOUT,
    transport: Optional[httpx.AsyncBaseTransport] = None,
):
    """GET a record array over HTTP. Transport errors, non-2xx responses and bad JSON raise FetchError."""
    try:
        async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
            response = await client.get(url)
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        raise FetchError(f"Failed to fetch application records from {url}: {e}") from e
    if not response.is_success:
        raise FetchError(
            f"Fetching application records from {url} returned HTTP {response.status_code}",
            status_code=response.status_code,
        )
    try:
        return orjson.loads(response.content)
    except orjson.JSONDecodeError as e:
        raise FetchError(f"Invalid JSON from {url}: {e}", status_code=response.status_code) from e


async def load_records(settings: Optional[dict] = None):
    """Load records from settings' sourceUrl, or local app.json when unset."""
    settings = settings if settings is not None else await get_effective_settings()
    url = settings.get("sourceUrl")
    if url:
        logger.info("Fetching application records from {}", url)
        return await fetch_records(url, timeout=settings.get("fetchTimeout", DEFAULT_FETCH_TIMEOUT))
    return await get_apps()


async def get_settings() -> dict:
    """Get raw settings from settings.json. For frontend and other modules."""
    file_path = get_data_dir() / SETTINGS_FILE
    try:
        async with aiofiles.open(file_path, "rb") as f:
            data = await f.read()
            return orjson.loads(data)
    except FileNotFoundError:
        return {}
    except orjson.JSONDecodeError as e:
        logger.warning("Invalid JSON in {}: {}", file_path, e)
        return {}


def _resolve_settings(raw: dict) -> dict:
    """Merge raw settings over defaults; invalid values fall back to defaults with a warning."""
    cfg = dict(DEFAULT_SETTINGS)
    if not isinstance(raw, dict):
        return cfg

    direction = raw.get("direction")
    if direction is not None:
        try:
            cfg["direction"] = normalize_direction(direction)
        except ValueError as e:
            logger.warning("Ignoring setting direction: {}", e)

    strategy = raw.get("idStrategy")
    if strategy in ID_STRATEGIES:
        cfg["idStrategy"] = strategy
    elif strategy is not None:
        logger.warning("Ignoring unknown idStrategy {!r}", strategy)

    url = raw.get("sourceUrl")
    if isinstance(url, str):
        cfg["sourceUrl"] = url.strip()

    v = raw.get("fetchTimeout")
    if v is not None:
        try:
            cfg["fetchTimeout"] = float(v)
        except (TypeError, ValueError):
            logger.warning("Ignoring non-numeric fetchTimeout {!r}", v)
    return cfg


async def get_effective_settings() -> dict:
    """Settings with defaults applied and values validated."""
    raw = await get_settings()
    return _resolve_settings(raw)


async def save_settings(settings: dict) -> dict:
    """Save settings to settings.json. Atomic write to avoid corruption."""
    return await _write_json_file(SETTINGS_FILE, settings or {})
