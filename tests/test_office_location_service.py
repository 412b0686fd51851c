import pytest
from atams.exceptions import BadRequestException, ConflictException, NotFoundException

from app.schemas.office_location import OfficeLocationCreate, OfficeLocationUpdate
from app.services.office_location_service import OfficeGeofence, OfficeLocationCache, OfficeLocationService


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


def office_payload(**overrides):
    data = {"ol_id": "HQ", "ol_name": "Head Office", "ol_lat": -6.2, "ol_lon": 106.8166, "ol_radius_m": 150}
    data.update(overrides)
    return OfficeLocationCreate(**data)


def test_cache_entry_expires_after_ttl():
    clock = FakeClock()
    cache = OfficeLocationCache(ttl_seconds=60, clock=clock)
    geofence = OfficeGeofence("HQ", "Head Office", -6.2, 106.8, 100, True)

    cache.set("HQ", geofence)
    clock.now += 59
    assert cache.get("HQ") == geofence

    clock.now += 1
    assert cache.get("HQ") is None


def test_zero_ttl_disables_caching():
    cache = OfficeLocationCache(ttl_seconds=0)
    cache.set("HQ", OfficeGeofence("HQ", "Head Office", 0.0, 0.0, 100, True))

    assert cache.get("HQ") is None


def test_create_and_read_back(db):
    service = OfficeLocationService()

    created = service.create_location(db, office_payload())

    assert created.ol_id == "HQ"
    assert created.ol_radius_m == 150
    assert service.get_location(db, "HQ").ol_name == "Head Office"
    assert service.count_locations(db, search="head") == 1


def test_default_radius_comes_from_settings(db):
    payload = OfficeLocationCreate(ol_id="BR", ol_name="Branch", ol_lat=0.0, ol_lon=0.0)

    assert payload.ol_radius_m == 100


def test_create_duplicate_is_conflict(db):
    service = OfficeLocationService()
    service.create_location(db, office_payload())

    with pytest.raises(ConflictException):
        service.create_location(db, office_payload())


def test_create_rejects_invalid_coordinates(db):
    with pytest.raises(BadRequestException) as exc:
        OfficeLocationService().create_location(db, office_payload(ol_lat=123.0))

    assert exc.value.details["code"] == "INVALID_COORDINATES"


def test_update_invalidates_cached_geofence(db):
    cache = OfficeLocationCache(ttl_seconds=300)
    service = OfficeLocationService(cache=cache)
    service.create_location(db, office_payload())

    assert service.get_geofence(db, "HQ").radius_m == 150
    service.update_location(db, "HQ", OfficeLocationUpdate(ol_radius_m=250))

    assert service.get_geofence(db, "HQ").radius_m == 250


def test_get_geofence_unknown_office(db):
    assert OfficeLocationService().get_geofence(db, "NOPE") is None


def test_delete(db):
    service = OfficeLocationService()
    service.create_location(db, office_payload())

    service.delete_location(db, "HQ")

    with pytest.raises(NotFoundException):
        service.get_location(db, "HQ")
    with pytest.raises(NotFoundException):
        service.delete_location(db, "HQ")
