"""
Resolution Module
---------------
Turns a picked coordinate pair into a confirmed AddressRecord, falling back to
a manually named record when reverse geocoding fails.
"""
from my_trips.resolution.pipeline import (
    DEFAULT_LOCATION_NAME,
    LocationResolutionPipeline,
    ResolutionState,
)

__all__ = ["DEFAULT_LOCATION_NAME", "LocationResolutionPipeline", "ResolutionState"]
