from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

# City label given to points that could not be reverse geocoded
MANUAL_ENTRY_CITY = "Not identified"


class Coordinates(BaseModel):
    model_config = ConfigDict(frozen=True)

    latitude: float = Field(ge=-90.0, le=90.0, allow_inf_nan=False)
    longitude: float = Field(ge=-180.0, le=180.0, allow_inf_nan=False)

    def format(self, precision: int = 6) -> str:
        return f"{self.latitude:.{precision}f}, {self.longitude:.{precision}f}"


def _first_present(data: Mapping[str, Any], *keys: str) -> str:
    """Return the first value among ``keys`` that the provider actually sent, else ''."""
    for key in keys:
        value = data.get(key)
        if value is not None:
            return str(value)
    return ""


def _street_address(data: Mapping[str, Any]) -> str:
    parts = [data.get("road"), data.get("house_number")]
    return ", ".join(str(part) for part in parts if part).strip()


class AddressRecord(BaseModel):
    """A saved trip location.

    Textual fields default to the empty string. ``neighborhood`` and
    ``reference`` are the only nullable ones, and are still populated with at
    least an empty string when the record comes from a provider payload.
    """

    model_config = ConfigDict(frozen=True)

    coordinates: Coordinates
    name: str
    address: str = ""
    city: str = ""
    state: str = ""
    country: str = ""
    zip: str = ""
    neighborhood: Optional[str] = None
    reference: Optional[str] = None

    @classmethod
    def from_geocode_payload(
        cls,
        payload: Mapping[str, Any],
        name: str,
        fallback_coordinates: Optional[Coordinates] = None,
    ) -> "AddressRecord":
        """Map a reverse geocoding payload onto a record named ``name``.

        Coordinates come from the payload's ``lat``/``lon`` when both are
        present, otherwise from ``fallback_coordinates`` (the point that was
        looked up).
        """
        address_data = payload.get("address") or {}

        if payload.get("lat") is not None and payload.get("lon") is not None:
            coordinates = Coordinates(latitude=float(payload["lat"]), longitude=float(payload["lon"]))
        elif fallback_coordinates is not None:
            coordinates = fallback_coordinates
        else:
            raise ValueError("Geocode payload has no coordinates and no fallback was given")

        return cls(
            coordinates=coordinates,
            name=name,
            address=_street_address(address_data),
            city=_first_present(address_data, "city", "town", "village"),
            state=_first_present(address_data, "state"),
            country=_first_present(address_data, "country"),
            zip=_first_present(address_data, "postcode"),
            neighborhood=_first_present(address_data, "suburb", "neighbourhood"),
            reference=_first_present(address_data, "amenity", "building"),
        )

    @classmethod
    def from_manual_entry(cls, coordinates: Coordinates, name: str) -> "AddressRecord":
        """Degraded record for a point the provider could not resolve."""
        return cls(
            coordinates=coordinates,
            name=name,
            address=f"Coordinates: {coordinates.format(6)}",
            city=MANUAL_ENTRY_CITY,
            neighborhood="",
            reference="",
        )

    def summary_lines(self) -> List[str]:
        """Lines shown for this trip in a list view."""
        lines = []
        if self.address:
            lines.append(self.address)
        if self.city:
            lines.append(f"{self.city}, {self.state}")
        if self.country:
            lines.append(self.country)
        if self.zip:
            lines.append(f"ZIP: {self.zip}")
        lines.append(f"Coordinates: {self.coordinates.format(4)}")
        return lines

    def to_dict(self) -> Dict[str, Any]:
        data = self.model_dump()
        data["summary"] = self.summary_lines()
        return data
