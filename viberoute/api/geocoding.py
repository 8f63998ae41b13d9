# viberoute/api/geocoding.py
from __future__ import annotations

import logging
import time
from functools import lru_cache
from typing import Any, Dict, List

import googlemaps
from googlemaps.exceptions import ApiError, HTTPError, Timeout, TransportError

from viberoute.api.config import get_google_maps_config
from viberoute.api.models import Category

logger = logging.getLogger(__name__)

_gmaps: googlemaps.Client | None = None

# Field holding a geocodable place for each list category.
PLACE_FIELDS = {
    Category.ITINERARY: "location",
    Category.BITES: "address",
}


def _get_client() -> googlemaps.Client | None:
    """Return a cached googlemaps.Client instance, or None if it cannot be built."""
    global _gmaps
    if _gmaps is None:
        try:
            api_key = get_google_maps_config().get("api_key", "")
            if not api_key:
                logger.error("No Google Maps API key found in config")
                return None
            _gmaps = googlemaps.Client(key=api_key)
        except Exception as e:
            logger.error(f"Failed to initialize Google Maps client: {e}")
            return None
    return _gmaps


def geocoding_enabled() -> bool:
    cfg = get_google_maps_config()
    return bool(cfg["geocode_results"] and cfg["api_key"])


@lru_cache(maxsize=1000)
def _lookup(place: str) -> tuple[float, float] | None:
    # Errors propagate, so only answers the API actually gave are cached.
    results = _get_client().geocode(place, language="it")
    if not results:
        logger.warning(f"No results found for place: {place}")
        return None

    loc = results[0]["geometry"]["location"]
    logger.debug(f"Geocoded {place} to {loc['lat']}, {loc['lng']}")
    return loc["lat"], loc["lng"]


def get_coordinates_for_place(place: str) -> tuple[float, float] | None:
    """Resolve a free-text place name to (lat, lng) or None if not found.

    Failed look-ups are not cached and are retried on the next call.
    """
    if _get_client() is None:
        return None
    try:
        return _lookup(place)
    except (ApiError, HTTPError, Timeout, TransportError) as e:
        logger.error(f"Geocoding error for '{place}': {e}")
        return None


def attach_coordinates(records: List[Dict[str, Any]], category: Category, city: str = "") -> List[Dict[str, Any]]:
    """Add ``lat``/``lng`` to every record whose place can be geocoded.

    Records that already carry coordinates are left untouched; failed
    look-ups are logged and skipped. Returns the same list object.
    """
    field = PLACE_FIELDS.get(category)
    if field is None:
        return records

    start_time = time.time()
    geocoded = 0
    for record in records:
        if not isinstance(record, dict):
            continue
        if record.get("lat") is not None and record.get("lng") is not None:
            continue
        place = record.get(field)
        if not place:
            continue

        query = f"{place}, {city}" if city else place
        coords = get_coordinates_for_place(query)
        if coords:
            record["lat"], record["lng"] = coords
            geocoded += 1
        else:
            logger.warning(f"Failed to geocode '{query}'")

    duration = time.time() - start_time
    logger.info(f"Geocoded {geocoded}/{len(records)} {category.value} records in {duration:.2f}s")
    return records


__all__ = [
    "attach_coordinates",
    "geocoding_enabled",
    "get_coordinates_for_place",
]
