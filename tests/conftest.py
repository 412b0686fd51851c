import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ATLAS_APP_CODE", "HRIS_TEST")
os.environ.setdefault("CRON_API_KEY", "test-cron-key")
os.environ["HOLIDAYS_FILE"] = os.path.join(os.path.dirname(__file__), "missing-holidays.json")

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from atams.db import Base
from atams.exceptions import setup_exception_handlers

import app.models  # noqa: F401  registers tables on Base.metadata
from app.services.attendance_service import AttendanceService
from app.services.cleanup_service import CleanupService
from app.services.holiday_service import HolidayCalendar
from app.services.notification_service import EventPublisher, NotificationSink
from app.services.office_location_service import OfficeLocationService
from tests.factories import EMPLOYEE, add_office


class RecordingSink(NotificationSink):
    def __init__(self):
        self.events = []

    def deliver(self, event):
        self.events.append(event)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def attach_hris_schema(dbapi_connection, connection_record):
        dbapi_connection.execute("ATTACH DATABASE ':memory:' AS hris")

    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def office(db):
    return add_office(db)


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def publisher(sink):
    return EventPublisher(sink=sink)


@pytest.fixture
def holidays(tmp_path):
    return HolidayCalendar(str(tmp_path / "holidays.json"))


@pytest.fixture
def cleanup_service(publisher):
    return CleanupService(publisher)


@pytest.fixture
def attendance_service(publisher, holidays, cleanup_service):
    return AttendanceService(
        office_service=OfficeLocationService(),
        holidays=holidays,
        publisher=publisher,
        cleanup_service=cleanup_service,
    )


@pytest.fixture
def current_user():
    return {"user": dict(EMPLOYEE)}


@pytest.fixture
def client(db, current_user):
    from app.api import deps
    from app.api.v1.api import api_router
    from app.db.session import get_db

    deps.office_cache.invalidate()

    api = FastAPI()
    setup_exception_handlers(api)
    api.include_router(api_router, prefix="/api/v1")

    def override_get_db():
        yield db

    api.dependency_overrides[get_db] = override_get_db
    api.dependency_overrides[deps.get_current_user] = lambda: current_user["user"]

    with TestClient(api) as test_client:
        yield test_client
