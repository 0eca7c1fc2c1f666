"""
Trips Module
----------
In-memory, session-scoped list of saved locations and great-circle distance
used to order it.
"""
from my_trips.trips.collection import TripCollection
from my_trips.trips.distance import haversine_km

__all__ = ["TripCollection", "haversine_km"]
