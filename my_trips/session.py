"""
Session Module
------------
Owns the trip list of one user session and the single add-location request
that may be in flight at any time.
"""
import logging
from threading import Lock
from typing import List, Optional

from my_trips.exceptions import LocationError, NoActiveResolution, ResolutionInProgress
from my_trips.geocoding import GeocodingClient
from my_trips.location import LocationProvider, acquire_current_position
from my_trips.models import AddressRecord, Coordinates
from my_trips.resolution import LocationResolutionPipeline
from my_trips.trips import TripCollection

logger = logging.getLogger(__name__)


class TripSession:
    """
    Session controller. Mutations of the trip list and of the in-flight
    request are serialised with a lock since the API may call in from
    several worker threads.
    """

    def __init__(
        self,
        client: GeocodingClient,
        location_provider: LocationProvider,
        trips: Optional[TripCollection] = None,
    ):
        self.client = client
        self.location_provider = location_provider
        self.trips = trips if trips is not None else TripCollection()
        self.pipeline: Optional[LocationResolutionPipeline] = None
        self.lock = Lock()

    @property
    def has_active_resolution(self) -> bool:
        return self.pipeline is not None and not self.pipeline.is_finished

    def begin_add(self, coordinates: Coordinates) -> LocationResolutionPipeline:
        with self.lock:
            if self.has_active_resolution:
                raise ResolutionInProgress(
                    f"A request for ({self.pipeline.coordinates.format()}) is still {self.pipeline.state.value}"
                )
            pipeline = LocationResolutionPipeline(coordinates, self.client, on_done=self.trips.add)
            self.pipeline = pipeline

        # The lookup runs outside the lock; the pipeline above reserves the slot
        try:
            pipeline.start()
        except Exception:
            with self.lock:
                if self.pipeline is pipeline:
                    self.pipeline = None
            raise
        return pipeline

    def confirm(self, name: Optional[str] = None) -> AddressRecord:
        with self.lock:
            return self._active().confirm(name)

    def submit_manual_name(self, name: Optional[str]) -> Optional[AddressRecord]:
        with self.lock:
            return self._active().submit_manual_name(name)

    def cancel(self) -> None:
        with self.lock:
            self._active().cancel()

    def delete(self, index: int) -> AddressRecord:
        with self.lock:
            return self.trips.remove_at(index)

    def sort_by_distance_from(self, reference: Coordinates) -> None:
        with self.lock:
            self.trips.sort_by_distance_from(reference)

    def sort_by_current_position(self) -> Coordinates:
        """
        Order trips by distance from the device's current position.

        A position that cannot be acquired leaves the trips untouched; the
        error is re-raised so the caller can notify the user.
        """
        try:
            reference = acquire_current_position(self.location_provider)
        except LocationError as e:
            logger.warning(f"Error sorting trips: {e}")
            raise
        with self.lock:
            self.trips.sort_by_distance_from(reference)
        return reference

    def snapshot(self) -> List[AddressRecord]:
        with self.lock:
            return self.trips.to_list()

    def _active(self) -> LocationResolutionPipeline:
        if self.pipeline is None:
            raise NoActiveResolution()
        return self.pipeline
