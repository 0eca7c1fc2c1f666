import threading
from unittest.mock import MagicMock

import pytest

from my_trips.exceptions import (
    IndexOutOfRange,
    NoActiveResolution,
    PermissionDeniedForever,
    ResolutionInProgress,
)
from my_trips.geocoding import GeocodingClient, GoogleGeocodingClient, google
from my_trips.location import PermissionStatus
from my_trips.models import Coordinates
from my_trips.resolution import ResolutionState
from my_trips.session import TripSession
from tests.conftest import FakeGeocodingClient


def test_confirmed_location_is_added(session, paris):
    session.begin_add(paris)
    session.confirm("Louvre")

    assert [record.name for record in session.trips] == ["Louvre"]
    assert not session.has_active_resolution


def test_cancelled_location_is_not_added(session, paris):
    session.begin_add(paris)
    session.cancel()

    assert session.trips.is_empty()


def test_manual_entry_is_added(failing_client, location_provider, paris):
    session = TripSession(failing_client, location_provider)

    assert session.begin_add(paris).state == ResolutionState.MANUAL_ENTRY
    session.submit_manual_name("Secret Spot")

    assert session.trips[0].city == "Not identified"


def test_one_resolution_at_a_time(session, paris):
    session.begin_add(paris)

    with pytest.raises(ResolutionInProgress):
        session.begin_add(paris)

    session.cancel()
    session.begin_add(paris)
    assert session.has_active_resolution


def test_events_without_request(session):
    with pytest.raises(NoActiveResolution):
        session.confirm("x")


def test_delete(session, paris):
    session.begin_add(paris)
    session.confirm("Louvre")

    assert session.delete(0).name == "Louvre"
    with pytest.raises(IndexOutOfRange):
        session.delete(0)


def _add(session, name, longitude):
    session.begin_add(Coordinates(latitude=0.0, longitude=longitude))
    session.confirm(name)


def test_sort_by_current_position(working_client, location_provider):
    # payload coordinates would override the picked point, so drop them
    del working_client.payload["lat"]
    del working_client.payload["lon"]
    session = TripSession(working_client, location_provider)
    _add(session, "far", 0.5)
    _add(session, "near", 0.1)

    location_provider.report(Coordinates(latitude=0.0, longitude=0.0))
    reference = session.sort_by_current_position()

    assert reference == Coordinates(latitude=0.0, longitude=0.0)
    assert [record.name for record in session.trips] == ["near", "far"]


def test_sort_failure_leaves_trips_untouched(working_client, location_provider):
    del working_client.payload["lat"]
    del working_client.payload["lon"]
    session = TripSession(working_client, location_provider)
    _add(session, "far", 0.5)
    _add(session, "near", 0.1)

    location_provider.report(Coordinates(latitude=0.0, longitude=0.0), permission=PermissionStatus.DENIED_FOREVER)
    with pytest.raises(PermissionDeniedForever):
        session.sort_by_current_position()

    assert [record.name for record in session.trips] == ["far", "near"]


class ExplodingClient(GeocodingClient):
    name = "exploding"

    def resolve(self, coordinates):
        raise RuntimeError("unexpected provider bug")


def test_unexpected_lookup_error_frees_the_session(location_provider, paris):
    session = TripSession(ExplodingClient(), location_provider)

    with pytest.raises(RuntimeError):
        session.begin_add(paris)

    assert session.pipeline is None
    assert not session.has_active_resolution
    session.client = FakeGeocodingClient(payload={"address": {}})
    assert session.begin_add(paris).state == ResolutionState.AWAITING_CONFIRMATION


def test_malformed_google_result_goes_to_manual_entry(monkeypatch, location_provider, paris):
    response = MagicMock(status_code=200)
    response.json.return_value = {"status": "OK", "results": [{"geometry": None}]}
    monkeypatch.setattr(google.requests, "get", MagicMock(return_value=response))
    session = TripSession(GoogleGeocodingClient(api_key="key"), location_provider)

    assert session.begin_add(paris).state == ResolutionState.MANUAL_ENTRY
    session.submit_manual_name("Somewhere")

    assert session.trips[0].city == "Not identified"
    assert not session.has_active_resolution


def test_mutations_wait_for_the_session_lock(session, paris):
    session.begin_add(paris)
    worker = threading.Thread(target=session.confirm, args=("Louvre",))

    with session.lock:
        worker.start()
        worker.join(timeout=0.2)
        assert worker.is_alive()
        assert session.trips.is_empty()

    worker.join(timeout=5)
    assert not worker.is_alive()
    assert [record.name for record in session.snapshot()] == ["Louvre"]
