"""
Transactional repository base

atams BaseRepository.create()/update() commit immediately. Multi-row state
transitions (approve log + create attendance) stage their writes with the
methods below and let the service commit once through
atams.transaction.transaction().
"""
from typing import Any, Dict

from sqlalchemy.orm import Session
from atams.db import BaseRepository
from atams.db.repository import ModelType


class TransactionalRepository(BaseRepository[ModelType]):
    def add(self, db: Session, obj_in: Dict[str, Any]) -> ModelType:
        """Add a new row to the current transaction and flush it (no commit)"""
        db_obj = self.model(**obj_in)
        db.add(db_obj)
        db.flush()
        return db_obj

    def stage_update(self, db: Session, db_obj: ModelType, obj_in: Dict[str, Any]) -> ModelType:
        """Apply field changes inside the current transaction (no commit)"""
        for field, value in obj_in.items():
            if hasattr(db_obj, field):
                setattr(db_obj, field, value)
        db.add(db_obj)
        db.flush()
        return db_obj
