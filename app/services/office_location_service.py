"""
Office Location Service - Business logic for office geofence management
"""
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from sqlalchemy.orm import Session
from atams.exceptions import ConflictException
from atams.logging import get_logger

from app.core.errors import not_found_error
from app.repositories.office_location_repository import OfficeLocationRepository
from app.schemas.office_location import OfficeLocation, OfficeLocationCreate, OfficeLocationUpdate
from app.services.geofence import validate_coordinates

logger = get_logger(__name__)


@dataclass(frozen=True)
class OfficeGeofence:
    """Detached, cacheable view of an office's geofence"""
    office_id: str
    name: str
    lat: float
    lon: float
    radius_m: int
    geofence_enabled: bool


class OfficeLocationCache:
    """In-process TTL cache of office geofences keyed by office id"""

    def __init__(self, ttl_seconds: float, clock: Callable[[], float] = time.monotonic) -> None:
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._entries: Dict[str, dict] = {}

    def get(self, office_id: str) -> Optional[OfficeGeofence]:
        with self._lock:
            entry = self._entries.get(office_id)
            if entry is None:
                return None
            if self._clock() >= entry["expires"]:
                del self._entries[office_id]
                return None
            return entry["value"]

    def set(self, office_id: str, value: OfficeGeofence) -> None:
        if self.ttl_seconds <= 0:
            return
        with self._lock:
            self._entries[office_id] = {"value": value, "expires": self._clock() + self.ttl_seconds}

    def invalidate(self, office_id: Optional[str] = None) -> None:
        with self._lock:
            if office_id is None:
                self._entries.clear()
            else:
                self._entries.pop(office_id, None)


class OfficeLocationService:
    def __init__(self, cache: Optional[OfficeLocationCache] = None) -> None:
        self.repo = OfficeLocationRepository()
        self.cache = cache or OfficeLocationCache(ttl_seconds=0)

    def get_geofence(self, db: Session, office_id: str) -> Optional[OfficeGeofence]:
        """Read-through lookup used by check-in; None when the office is unknown"""
        cached = self.cache.get(office_id)
        if cached is not None:
            return cached

        obj = self.repo.get_by_id(db, office_id)
        if not obj:
            return None

        geofence = OfficeGeofence(
            office_id=obj.ol_id,
            name=obj.ol_name,
            lat=obj.ol_lat,
            lon=obj.ol_lon,
            radius_m=obj.ol_radius_m,
            geofence_enabled=obj.ol_geofence_enabled
        )
        self.cache.set(office_id, geofence)
        return geofence

    def list_locations(self, db: Session, search: str = "", skip: int = 0, limit: int = 100) -> List[OfficeLocation]:
        locations = self.repo.get_locations_with_search(db, search=search, skip=skip, limit=limit)
        return [OfficeLocation.model_validate(o) for o in locations]

    def count_locations(self, db: Session, search: str = "") -> int:
        return self.repo.count_locations_with_search(db, search=search)

    def get_location(self, db: Session, office_id: str) -> OfficeLocation:
        obj = self.repo.get_by_id(db, office_id)
        if not obj:
            raise not_found_error("Office location not found", office_id=office_id)
        return OfficeLocation.model_validate(obj)

    def create_location(self, db: Session, payload: OfficeLocationCreate) -> OfficeLocation:
        validate_coordinates(payload.ol_lat, payload.ol_lon)
        if self.repo.check_location_exists(db, payload.ol_id):
            raise ConflictException("Office location with this ID already exists")

        obj = self.repo.create(db, payload.model_dump())
        self.cache.invalidate(obj.ol_id)
        logger.info("Office location created", extra={'extra_data': {'office_id': obj.ol_id}})
        return OfficeLocation.model_validate(obj)

    def update_location(self, db: Session, office_id: str, payload: OfficeLocationUpdate) -> OfficeLocation:
        obj = self.repo.get_by_id(db, office_id)
        if not obj:
            raise not_found_error("Office location not found", office_id=office_id)

        update_data = payload.model_dump(exclude_unset=True)
        validate_coordinates(update_data.get("ol_lat", obj.ol_lat), update_data.get("ol_lon", obj.ol_lon))

        obj = self.repo.update(db, obj, update_data)
        self.cache.invalidate(office_id)
        logger.info("Office location updated", extra={'extra_data': {'office_id': office_id}})
        return OfficeLocation.model_validate(obj)

    def delete_location(self, db: Session, office_id: str) -> None:
        # FK from attendance rows blocks deletion of referenced offices
        deleted = self.repo.delete_by_id(db, office_id)
        if not deleted:
            raise not_found_error("Office location not found", office_id=office_id)
        self.cache.invalidate(office_id)
        return None
