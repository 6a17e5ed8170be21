"""
Best-effort reverse geocoding of the coordinates reported by the browser.
Uses the public Nominatim endpoint. Any failure yields an empty string.
"""
import logging
from typing import Optional

import httpx

from core import settings

log = logging.getLogger(__name__)

USER_AGENT = "pathfinder-career-guide/1.0"
TIMEOUT_SECONDS = 5.0


async def reverse_geocode(
    latitude: float,
    longitude: float,
    client: Optional[httpx.AsyncClient] = None,
) -> str:
    """Return the city, town or state for a coordinate pair, or '' on failure."""
    params = {"lat": latitude, "lon": longitude, "format": "json"}
    headers = {"User-Agent": USER_AGENT}

    try:
        if client is None:
            async with httpx.AsyncClient(timeout=TIMEOUT_SECONDS) as own_client:
                response = await own_client.get(settings.NOMINATIM_URL, params=params, headers=headers)
        else:
            response = await client.get(settings.NOMINATIM_URL, params=params, headers=headers)
        response.raise_for_status()
        address = response.json().get("address") or {}
        if not isinstance(address, dict):
            raise ValueError(f"unexpected address payload: {address!r}")
    except (httpx.HTTPError, ValueError, AttributeError) as e:
        log.warning(f"[Geo] Could not reverse geocode location: {e}")
        return ""

    return address.get("city") or address.get("town") or address.get("state") or ""
