from abc import ABC, abstractmethod
from typing import Any, Dict, Mapping

from my_trips.exceptions import GeocodingFailure
from my_trips.models import Coordinates


class GeocodingClient(ABC):
    """Contract shared by every reverse geocoding provider."""

    name = "unknown"

    @abstractmethod
    def resolve(self, coordinates: Coordinates) -> Dict[str, Any]:
        """
        Reverse geocode ``coordinates`` with a single request.

        Returns:
            The provider payload: ``lat``, ``lon``, an ``address`` mapping and
            optionally ``display_name`` and ``name``.

        Raises:
            GeocodingFailure: on any non-200 response, network error or
            malformed body. No retry is attempted.
        """

    def _check_payload_coordinates(self, payload: Mapping[str, Any]) -> None:
        if payload.get("lat") is None or payload.get("lon") is None:
            return
        try:
            Coordinates(latitude=float(payload["lat"]), longitude=float(payload["lon"]))
        except (TypeError, ValueError) as e:
            raise GeocodingFailure(f"{self.name} payload carries invalid coordinates", status_code=200) from e
