"""
Google Geocoding Client
---------------------
API-key authenticated reverse geocoding. Results are normalised into the
same payload shape Nominatim produces so address records are built the same
way regardless of provider.
"""
import logging
from typing import Any, Dict, List, Optional

import requests

from my_trips import config
from my_trips.exceptions import GeocodingFailure
from my_trips.geocoding.base import GeocodingClient
from my_trips.models import Coordinates

logger = logging.getLogger(__name__)

# Google address component type -> Nominatim address key
COMPONENT_KEYS = {
    "route": "road",
    "street_number": "house_number",
    "locality": "city",
    "postal_town": "town",
    "administrative_area_level_2": "village",
    "administrative_area_level_1": "state",
    "country": "country",
    "postal_code": "postcode",
    "sublocality": "suburb",
    "neighborhood": "neighbourhood",
    "point_of_interest": "amenity",
    "premise": "building",
}


def normalize_result(result: Dict[str, Any]) -> Dict[str, Any]:
    address: Dict[str, str] = {}
    for component in result.get("address_components", []):
        for component_type in component.get("types", []):
            key = COMPONENT_KEYS.get(component_type)
            if key and key not in address:
                address[key] = component.get("long_name", "")

    location = result.get("geometry", {}).get("location", {})
    payload: Dict[str, Any] = {
        "display_name": result.get("formatted_address"),
        "address": address,
    }
    if "lat" in location and "lng" in location:
        payload["lat"] = str(location["lat"])
        payload["lon"] = str(location["lng"])
    return payload


class GoogleGeocodingClient(GeocodingClient):
    name = "google"

    def __init__(self, api_key: Optional[str] = None, base_url: Optional[str] = None, timeout: Optional[float] = None):
        self.api_key = api_key or config.GOOGLE_MAPS_API_KEY
        if not self.api_key:
            raise ValueError("GOOGLE_MAPS_API_KEY not set")
        self.base_url = base_url or config.GOOGLE_GEOCODING_URL
        self.timeout = timeout if timeout is not None else config.REQUEST_TIMEOUT

    def resolve(self, coordinates: Coordinates) -> Dict[str, Any]:
        latlng = f"{coordinates.latitude},{coordinates.longitude}"
        try:
            response = requests.get(
                self.base_url,
                params={"latlng": latlng, "key": self.api_key},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.warning(f"Network error for coordinates ({latlng}): {e}")
            raise GeocodingFailure(f"Network error while contacting Google: {e}") from e

        if response.status_code != 200:
            logger.warning(f"Google geocoding HTTP error ({response.status_code}) for coordinates ({latlng})")
            raise GeocodingFailure(
                f"Failed to retrieve address from Google (HTTP {response.status_code})",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise GeocodingFailure("Google returned a body that is not JSON", status_code=200) from e

        if not isinstance(data, dict):
            raise GeocodingFailure("Google returned an unexpected payload", status_code=200)

        results: List[Dict[str, Any]] = data.get("results") or []
        status = data.get("status")
        if status != "OK" or not results:
            logger.warning(f"Google geocoding returned status {status} for coordinates ({latlng})")
            raise GeocodingFailure(f"Google could not resolve the point: {status}", status_code=200)

        try:
            payload = normalize_result(results[0])
        except (AttributeError, TypeError, KeyError) as e:
            logger.warning(f"Unexpected Google result shape for coordinates ({latlng}): {e}")
            raise GeocodingFailure("Google returned a result in an unexpected shape", status_code=200) from e
        self._check_payload_coordinates(payload)
        logger.info(f"Successfully geocoded coordinates ({latlng}) with Google")
        return payload
