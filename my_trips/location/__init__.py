"""
Device Location Module
--------------------
Interface to the platform location API and the permission flow run before
reading the current position.
"""
from my_trips.location.provider import (
    LocationProvider,
    PermissionStatus,
    ReportedLocationProvider,
    acquire_current_position,
)

__all__ = ["LocationProvider", "PermissionStatus", "ReportedLocationProvider", "acquire_current_position"]
