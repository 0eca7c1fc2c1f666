"""
Geocoding Module
--------------
Handles reverse geocoding operations to convert geographic coordinates to
structured addresses. Nominatim is the default provider; Google is an
alternate strategy behind the same contract, chosen only by configuration.
"""
import logging
from typing import Optional

from my_trips import config
from my_trips.geocoding.base import GeocodingClient
from my_trips.geocoding.google import GoogleGeocodingClient
from my_trips.geocoding.nominatim import NominatimGeocodingClient

logger = logging.getLogger(__name__)

PROVIDERS = {
    NominatimGeocodingClient.name: NominatimGeocodingClient,
    GoogleGeocodingClient.name: GoogleGeocodingClient,
}


def create_geocoding_client(provider: Optional[str] = None) -> GeocodingClient:
    provider = (provider or config.GEOCODING_PROVIDER).lower()
    if provider not in PROVIDERS:
        raise ValueError(f"Unknown geocoding provider '{provider}'. Choose from: {', '.join(PROVIDERS)}")
    logger.info(f"Using {provider} reverse geocoding provider")
    return PROVIDERS[provider]()


__all__ = [
    "GeocodingClient",
    "GoogleGeocodingClient",
    "NominatimGeocodingClient",
    "create_geocoding_client",
]
