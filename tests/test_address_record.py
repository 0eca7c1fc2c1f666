import math

import pytest
from pydantic import ValidationError

from my_trips.models import AddressRecord, Coordinates, MANUAL_ENTRY_CITY


def test_louvre_payload_maps_to_record(louvre_payload):
    record = AddressRecord.from_geocode_payload(louvre_payload, name="Louvre")

    assert record.name == "Louvre"
    assert record.coordinates == Coordinates(latitude=48.8566, longitude=2.3522)
    assert record.address == "Rue de Rivoli, 10"
    assert record.city == "Paris"
    assert record.state == ""
    assert record.country == "France"
    assert record.zip == "75001"
    assert record.neighborhood == ""
    assert record.reference == ""


@pytest.mark.parametrize("address, expected", [
    ({"city": "Paris", "town": "T", "village": "V"}, "Paris"),
    ({"town": "T", "village": "V"}, "T"),
    ({"village": "V"}, "V"),
    ({}, ""),
])
def test_city_fallback_order(address, expected):
    record = AddressRecord.from_geocode_payload({"lat": "1", "lon": "2", "address": address}, name="x")
    assert record.city == expected


@pytest.mark.parametrize("address, neighborhood, reference", [
    ({"suburb": "S", "neighbourhood": "N", "amenity": "A", "building": "B"}, "S", "A"),
    ({"neighbourhood": "N", "building": "B"}, "N", "B"),
    ({}, "", ""),
])
def test_neighborhood_and_reference_fallback(address, neighborhood, reference):
    record = AddressRecord.from_geocode_payload({"lat": "1", "lon": "2", "address": address}, name="x")
    assert record.neighborhood == neighborhood
    assert record.reference == reference


@pytest.mark.parametrize("address, expected", [
    ({"road": "Main St", "house_number": "5"}, "Main St, 5"),
    ({"road": "Main St"}, "Main St"),
    ({"house_number": "5"}, "5"),
    ({}, ""),
])
def test_street_address(address, expected):
    record = AddressRecord.from_geocode_payload({"lat": "1", "lon": "2", "address": address}, name="x")
    assert record.address == expected


def test_full_payload_keeps_every_field():
    payload = {
        "lat": "40.7484",
        "lon": "-73.9857",
        "address": {
            "road": "5th Avenue",
            "house_number": "350",
            "city": "New York",
            "state": "New York",
            "country": "United States",
            "postcode": "10118",
            "suburb": "Manhattan",
            "amenity": "Empire State Building",
        },
    }
    record = AddressRecord.from_geocode_payload(payload, name="ESB")

    assert record.model_dump() == {
        "coordinates": {"latitude": 40.7484, "longitude": -73.9857},
        "name": "ESB",
        "address": "5th Avenue, 350",
        "city": "New York",
        "state": "New York",
        "country": "United States",
        "zip": "10118",
        "neighborhood": "Manhattan",
        "reference": "Empire State Building",
    }


def test_missing_payload_coordinates_use_fallback(paris):
    record = AddressRecord.from_geocode_payload({"address": {"city": "Paris"}}, name="x", fallback_coordinates=paris)
    assert record.coordinates == paris


def test_missing_payload_coordinates_without_fallback():
    with pytest.raises(ValueError):
        AddressRecord.from_geocode_payload({"address": {}}, name="x")


def test_manual_entry_record(paris):
    record = AddressRecord.from_manual_entry(paris, "Secret Spot")

    assert record.name == "Secret Spot"
    assert record.address == "Coordinates: 48.856600, 2.352200"
    assert record.city == MANUAL_ENTRY_CITY == "Not identified"
    assert (record.state, record.country, record.zip) == ("", "", "")
    assert record.neighborhood == ""
    assert record.reference == ""


def test_record_is_immutable(louvre_payload):
    record = AddressRecord.from_geocode_payload(louvre_payload, name="Louvre")
    with pytest.raises(ValidationError):
        record.name = "Other"


def test_optional_fields_default_to_none(paris):
    record = AddressRecord(coordinates=paris, name="x")
    assert record.neighborhood is None
    assert record.reference is None
    assert record.city == ""


@pytest.mark.parametrize("latitude, longitude", [
    (91.0, 0.0),
    (-90.5, 0.0),
    (0.0, 180.5),
    (math.inf, 0.0),
    (math.nan, 0.0),
])
def test_invalid_coordinates_rejected(latitude, longitude):
    with pytest.raises(ValidationError):
        Coordinates(latitude=latitude, longitude=longitude)


def test_summary_lines(louvre_payload):
    record = AddressRecord.from_geocode_payload(louvre_payload, name="Louvre")
    assert record.summary_lines() == [
        "Rue de Rivoli, 10",
        "Paris, ",
        "France",
        "ZIP: 75001",
        "Coordinates: 48.8566, 2.3522",
    ]


def test_non_string_provider_values_are_kept_as_text():
    payload = {
        "lat": "48.8566",
        "lon": "2.3522",
        "address": {"postcode": 75001, "house_number": 10, "road": "Rue de Rivoli", "building": 7},
    }
    record = AddressRecord.from_geocode_payload(payload, name="Louvre")

    assert record.zip == "75001"
    assert record.address == "Rue de Rivoli, 10"
    assert record.reference == "7"
