"""Asteroid catalog reader for the per-date crash API previews."""

import logging
import math
import os
from typing import Any

import httpx

from impactglobe.models import AsteroidRecord

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_URL = "https://crash-api-ptq6.onrender.com"


class CatalogError(Exception):
    """Catalog call failure."""


def catalog_url() -> str:
    return os.environ.get("IMPACT_CATALOG_URL", DEFAULT_CATALOG_URL).rstrip("/")


def _get_payload(date: str, base_url: str, client: httpx.Client | None) -> Any:
    """Single catalog API call. Raises CatalogError on transport, HTTP, or JSON failure."""
    url = f"{base_url}/previewAsteroid/{date}"
    try:
        if client is None:
            resp = httpx.get(url, timeout=10)
        else:
            resp = client.get(url, timeout=10)
        resp.raise_for_status()
        return resp.json()
    except (httpx.HTTPError, ValueError) as e:
        raise CatalogError(f"catalog error for {date}: {e}") from e


def _number(entry: dict[str, Any], key: str, default: float | None) -> float | None:
    value = entry.get(key)
    if value is None or isinstance(value, bool):
        return default
    try:
        value = float(value)
    except (TypeError, ValueError):
        return default
    return value if math.isfinite(value) else default


def parse_record(entry: dict[str, Any], index: int = 0) -> AsteroidRecord:
    """Convert one catalog entry to an AsteroidRecord, defaulting missing fields.

    Expected keys: ``id``, ``nombre``, ``diametro_promedio_m``, ``velocidad_km_s``,
    ``altura_tierra_m``, ``inclinacion`` (optional, radians).
    """
    name = entry.get("nombre") or entry.get("name")
    record_id = entry.get("id")
    return AsteroidRecord(
        id=str(record_id) if record_id is not None else f"asteroid-{index}",
        name=str(name) if name else f"Asteroid {index + 1}",
        diameter_m=_number(entry, "diametro_promedio_m", 0.0),
        velocity_km_s=_number(entry, "velocidad_km_s", 0.0),
        altitude_m=_number(entry, "altura_tierra_m", 0.0),
        inclination_rad=_number(entry, "inclinacion", None),
    )


def parse_catalog(payload: Any) -> tuple[AsteroidRecord, ...]:
    """Extract the asteroid list from a catalog response.

    A payload without an ``asteroides`` array yields an empty tuple; entries
    that are not objects are skipped.
    """
    if not isinstance(payload, dict):
        logger.warning("catalog payload is not an object: %r", type(payload).__name__)
        return ()
    entries = payload.get("asteroides")
    if not isinstance(entries, list):
        logger.warning("no asteroid array in catalog payload")
        return ()
    return tuple(
        parse_record(entry, i) for i, entry in enumerate(entries) if isinstance(entry, dict)
    )


def fetch_catalog(
    date: str,
    base_url: str | None = None,
    client: httpx.Client | None = None,
) -> tuple[AsteroidRecord, ...]:
    """Fetch the asteroids for a date.

    Args:
        date: Catalog date in "YYYY-MM-DD" format.
        base_url: Service root. Defaults to $IMPACT_CATALOG_URL or the public API.
        client: Optional httpx client (used by tests and for connection reuse).

    Returns:
        Tuple of AsteroidRecord. Empty when the service fails or has no data.
    """
    try:
        payload = _get_payload(date, base_url or catalog_url(), client)
    except CatalogError as e:
        logger.warning("%s", e)
        return ()
    records = parse_catalog(payload)
    logger.info("catalog %s: %d asteroids", date, len(records))
    return records
