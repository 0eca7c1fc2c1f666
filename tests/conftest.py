import pytest

from my_trips.exceptions import GeocodingFailure
from my_trips.geocoding import GeocodingClient
from my_trips.location import ReportedLocationProvider
from my_trips.models import Coordinates
from my_trips.session import TripSession

LOUVRE_PAYLOAD = {
    "lat": "48.8566",
    "lon": "2.3522",
    "display_name": "10, Rue de Rivoli, Paris, France",
    "address": {
        "road": "Rue de Rivoli",
        "house_number": "10",
        "city": "Paris",
        "country": "France",
        "postcode": "75001",
    },
}


class FakeGeocodingClient(GeocodingClient):
    name = "fake"

    def __init__(self, payload=None, failure=None):
        self.payload = payload
        self.failure = failure
        self.calls = []

    def resolve(self, coordinates):
        self.calls.append(coordinates)
        if self.failure is not None:
            raise self.failure
        return self.payload


@pytest.fixture
def paris():
    return Coordinates(latitude=48.8566, longitude=2.3522)


@pytest.fixture
def louvre_payload():
    return {**LOUVRE_PAYLOAD, "address": dict(LOUVRE_PAYLOAD["address"])}


@pytest.fixture
def working_client(louvre_payload):
    return FakeGeocodingClient(payload=louvre_payload)


@pytest.fixture
def failing_client():
    return FakeGeocodingClient(failure=GeocodingFailure("HTTP 500", status_code=500))


@pytest.fixture
def location_provider():
    return ReportedLocationProvider()


@pytest.fixture
def session(working_client, location_provider):
    return TripSession(working_client, location_provider)
