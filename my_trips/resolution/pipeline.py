import enum
import logging
from typing import Any, Callable, Dict, Optional

from my_trips.exceptions import GeocodingFailure, InvalidTransition
from my_trips.geocoding import GeocodingClient
from my_trips.models import AddressRecord, Coordinates

logger = logging.getLogger(__name__)

DEFAULT_LOCATION_NAME = "New Location"
UNKNOWN_DISPLAY_NAME = "Not identified"


class ResolutionState(str, enum.Enum):
    START = "start"
    AWAITING_CONFIRMATION = "awaiting_confirmation"
    MANUAL_ENTRY = "manual_entry"
    DONE = "done"
    ABORTED = "aborted"


TERMINAL_STATES = (ResolutionState.DONE, ResolutionState.ABORTED)


def suggest_name(payload: Dict[str, Any]) -> str:
    address_data = payload.get("address") or {}
    for candidate in (payload.get("name"), address_data.get("amenity")):
        if candidate is not None:
            return str(candidate)
    return DEFAULT_LOCATION_NAME


class LocationResolutionPipeline:
    """
    One add-location request, driven by discrete events.

    ``start`` looks the point up and moves to AWAITING_CONFIRMATION on success
    or MANUAL_ENTRY on a geocoding failure. ``confirm`` and
    ``submit_manual_name`` finish the request in DONE, handing the record to
    ``on_done`` exactly once. ``cancel`` ends it in ABORTED without emitting
    anything.
    """

    def __init__(
        self,
        coordinates: Coordinates,
        client: GeocodingClient,
        on_done: Callable[[AddressRecord], None],
    ):
        self.coordinates = coordinates
        self.client = client
        self.on_done = on_done
        self.state = ResolutionState.START
        self.payload: Optional[Dict[str, Any]] = None
        self.suggested_name: Optional[str] = None
        self.display_name: Optional[str] = None
        self.failure: Optional[GeocodingFailure] = None
        self.record: Optional[AddressRecord] = None

    @property
    def is_finished(self) -> bool:
        return self.state in TERMINAL_STATES

    def start(self) -> ResolutionState:
        self._expect("start", ResolutionState.START)
        try:
            payload = self.client.resolve(self.coordinates)
        except GeocodingFailure as e:
            logger.warning(f"Reverse geocoding failed for ({self.coordinates.format()}), asking for a manual name: {e}")
            self.failure = e
            self.state = ResolutionState.MANUAL_ENTRY
            return self.state

        self.payload = payload
        self.suggested_name = suggest_name(payload)
        self.display_name = payload.get("display_name") or UNKNOWN_DISPLAY_NAME
        self.state = ResolutionState.AWAITING_CONFIRMATION
        logger.info(f"Resolved ({self.coordinates.format()}) to '{self.display_name}', awaiting confirmation")
        return self.state

    def confirm(self, name: Optional[str] = None) -> AddressRecord:
        """Accept the looked-up address, optionally under an edited name."""
        self._expect("confirm", ResolutionState.AWAITING_CONFIRMATION)
        record = AddressRecord.from_geocode_payload(
            self.payload,
            name=self.suggested_name if name is None else name,
            fallback_coordinates=self.coordinates,
        )
        return self._finish(record)

    def submit_manual_name(self, name: Optional[str]) -> Optional[AddressRecord]:
        """Name a point the provider could not resolve. ``None`` cancels the prompt."""
        self._expect("submit_manual_name", ResolutionState.MANUAL_ENTRY)
        if name is None:
            self.cancel()
            return None
        return self._finish(AddressRecord.from_manual_entry(self.coordinates, name))

    def cancel(self) -> None:
        if self.is_finished:
            raise InvalidTransition("cancel", self.state)
        logger.info(f"Add-location request for ({self.coordinates.format()}) cancelled in state {self.state.value}")
        self.state = ResolutionState.ABORTED

    def view(self) -> Dict[str, Any]:
        """What a presentation layer needs to render the current step."""
        data: Dict[str, Any] = {
            "state": self.state.value,
            "coordinates": self.coordinates.model_dump(),
        }
        if self.state == ResolutionState.AWAITING_CONFIRMATION:
            data["suggested_name"] = self.suggested_name
            data["display_name"] = self.display_name
        elif self.state == ResolutionState.MANUAL_ENTRY:
            data["reason"] = str(self.failure)
        elif self.state == ResolutionState.DONE:
            data["record"] = self.record.to_dict()
        return data

    def _finish(self, record: AddressRecord) -> AddressRecord:
        self.record = record
        self.state = ResolutionState.DONE
        logger.info(f"Saved location '{record.name}' at ({record.coordinates.format()})")
        self.on_done(record)
        return record

    def _expect(self, event: str, state: ResolutionState) -> None:
        if self.state != state:
            raise InvalidTransition(event, self.state)
