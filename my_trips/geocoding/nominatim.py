"""
Nominatim Client
--------------
Reverse geocoding against OpenStreetMap's Nominatim API.
"""
import logging
from typing import Any, Dict, Optional

import requests

from my_trips import config
from my_trips.exceptions import GeocodingFailure
from my_trips.geocoding.base import GeocodingClient
from my_trips.models import Coordinates

# Get logger
logger = logging.getLogger(__name__)


class NominatimGeocodingClient(GeocodingClient):
    name = "nominatim"

    def __init__(
        self,
        base_url: Optional[str] = None,
        user_agent: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.base_url = base_url or config.NOMINATIM_BASE_URL
        self.user_agent = user_agent or config.USER_AGENT
        self.timeout = timeout if timeout is not None else config.REQUEST_TIMEOUT

    def resolve(self, coordinates: Coordinates) -> Dict[str, Any]:
        latitude, longitude = coordinates.latitude, coordinates.longitude

        params = {
            "lat": latitude,
            "lon": longitude,
            "format": "jsonv2",
            "addressdetails": 1,
        }

        headers = {
            "User-Agent": self.user_agent
        }

        try:
            response = requests.get(
                self.base_url,
                params=params,
                headers=headers,
                timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.warning(f"Network error for coordinates ({latitude}, {longitude}): {e}")
            raise GeocodingFailure(f"Network error while contacting Nominatim: {e}") from e

        if response.status_code != 200:
            logger.warning(f"Geocoding HTTP error ({response.status_code}) for coordinates ({latitude}, {longitude})")
            raise GeocodingFailure(
                f"Failed to retrieve address from Nominatim (HTTP {response.status_code})",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            logger.warning(f"Malformed Nominatim response for coordinates ({latitude}, {longitude})")
            raise GeocodingFailure("Nominatim returned a body that is not JSON", status_code=200) from e

        # Nominatim answers unknown points with 200 and an "error" member
        if not isinstance(data, dict) or "error" in data:
            reason = data.get("error") if isinstance(data, dict) else "unexpected payload"
            logger.warning(f"No address found for coordinates ({latitude}, {longitude}): {reason}")
            raise GeocodingFailure(f"Nominatim could not resolve the point: {reason}", status_code=200)

        if not isinstance(data.get("address"), dict):
            logger.warning(f"Nominatim payload for ({latitude}, {longitude}) has no address details")
            raise GeocodingFailure("Nominatim payload is missing the address mapping", status_code=200)

        self._check_payload_coordinates(data)

        logger.info(f"Successfully geocoded coordinates ({latitude}, {longitude})")
        return data
