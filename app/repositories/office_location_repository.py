"""
Office Location Repository - Data access layer for office geofences
"""
from typing import Optional, List
from sqlalchemy.orm import Session

from atams.db import BaseRepository
from app.models.office_location import OfficeLocation


class OfficeLocationRepository(BaseRepository[OfficeLocation]):
    def __init__(self):
        super().__init__(OfficeLocation)

    def get_by_id(self, db: Session, office_id: str) -> Optional[OfficeLocation]:
        """Get office location by ID using ORM"""
        return db.query(OfficeLocation).filter(OfficeLocation.ol_id == office_id).first()

    def get_locations_with_search(
        self,
        db: Session,
        search: str = "",
        skip: int = 0,
        limit: int = 100
    ) -> List[OfficeLocation]:
        """Get office locations with optional name search using ORM"""
        query = db.query(OfficeLocation)

        if search:
            query = query.filter(OfficeLocation.ol_name.ilike(f"%{search}%"))

        return query.order_by(OfficeLocation.ol_id.asc()).offset(skip).limit(limit).all()

    def count_locations_with_search(self, db: Session, search: str = "") -> int:
        """Count office locations with optional name search using native SQL"""
        if search:
            query = """
                SELECT COUNT(*)
                FROM hris.office_locations
                WHERE LOWER(ol_name) LIKE LOWER(:search)
            """
            return self.execute_raw_sql_scalar(db, query, {"search": f"%{search}%"})
        else:
            query = "SELECT COUNT(*) FROM hris.office_locations"
            return self.execute_raw_sql_scalar(db, query)

    def check_location_exists(self, db: Session, office_id: str) -> bool:
        """Check if office location exists using native SQL"""
        query = "SELECT 1 FROM hris.office_locations WHERE ol_id = :office_id LIMIT 1"
        result = self.execute_raw_sql_scalar(db, query, {"office_id": office_id})
        return result is not None

    def delete_by_id(self, db: Session, office_id: str) -> bool:
        """Delete office location by ID and return success status"""
        location = self.get_by_id(db, office_id)
        if location:
            db.delete(location)
            db.commit()
            return True
        return False
