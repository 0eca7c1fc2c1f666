"""
Exceptions Module
---------------
Error kinds raised across geocoding, device location, resolution and the
trip collection.
"""
from typing import Optional


class MyTripsError(Exception):
    """Base class for every error raised by this package."""


class GeocodingFailure(MyTripsError):
    """Reverse geocoding could not produce a usable payload.

    Covers non-200 responses, network errors and malformed bodies. The
    resolution pipeline recovers from it by falling back to manual entry.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class LocationError(MyTripsError):
    """The device position could not be acquired."""

    can_open_settings = False


class ServiceDisabled(LocationError):
    def __init__(self, message: str = "Location services are disabled"):
        super().__init__(message)


class PermissionDenied(LocationError):
    def __init__(self, message: str = "Location permission denied"):
        super().__init__(message)


class PermissionDeniedForever(LocationError):
    can_open_settings = True

    def __init__(self, message: str = "Location permission permanently denied. Enable it in settings."):
        super().__init__(message)


class PositionUnavailable(LocationError):
    def __init__(self, message: str = "Error getting location"):
        super().__init__(message)


class IndexOutOfRange(MyTripsError, IndexError):
    def __init__(self, index: int, size: int):
        super().__init__(f"Trip index {index} out of range for collection of size {size}")
        self.index = index
        self.size = size


class InvalidTransition(MyTripsError):
    """An event arrived that the resolution pipeline cannot accept in its current state."""

    def __init__(self, event: str, state):
        super().__init__(f"Cannot handle '{event}' while in state '{state.value}'")
        self.event = event
        self.state = state


class ResolutionInProgress(MyTripsError):
    """Only one add-location request may be in flight per session."""


class NoActiveResolution(MyTripsError):
    def __init__(self, message: str = "No add-location request is in progress"):
        super().__init__(message)
