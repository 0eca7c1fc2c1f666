"""
Data Models Module
----------------
Contains Pydantic models for coordinates and saved trip locations.
Address records are immutable once built, either from a reverse geocoding
payload or from a manually named point.
"""
from my_trips.models.address_record import AddressRecord, Coordinates, MANUAL_ENTRY_CITY

__all__ = ["AddressRecord", "Coordinates", "MANUAL_ENTRY_CITY"]
