from datetime import date, datetime

from app.core.enums import EventType
from app.models import Attendance, WfhLog
from app.services.cleanup_service import EXPIRED_ABSENCE_NOTE
from tests.factories import add_attendance, add_wfh_log

NOW = datetime(2025, 6, 10, 0, 5)
YESTERDAY = date(2025, 6, 9)


def test_stale_pending_log_becomes_absent(db, cleanup_service, sink):
    log = add_wfh_log(db, 101, YESTERDAY)

    result = cleanup_service.process_expired_wfh_requests(db, now=NOW)

    assert result.processed_count == 1
    assert result.absent_records_created == 1
    assert result.errors == []

    db.expire_all()
    expired = db.get(WfhLog, log.wl_id)
    assert expired.wl_status == "REJECTED"
    assert expired.wl_validated_by is None
    assert expired.wl_admin_notes.startswith("Auto-rejected: Request expired")
    assert "2025-06-09" in expired.wl_admin_notes

    absent = db.query(Attendance).filter_by(at_user_id=101, at_date=YESTERDAY).one()
    assert absent.at_status == "ABSENT"
    assert absent.at_notes == EXPIRED_ABSENCE_NOTE
    assert [e.event_type for e in sink.events] == [EventType.WFH_LOG_EXPIRED]


def test_existing_attendance_is_kept(db, cleanup_service):
    add_wfh_log(db, 101, YESTERDAY)
    add_attendance(db, 101, YESTERDAY, status="PRESENT", checkin_at=datetime(2025, 6, 9, 8, 0))

    result = cleanup_service.process_expired_wfh_requests(db, now=NOW)

    assert result.processed_count == 1
    assert result.absent_records_created == 0
    rows = db.query(Attendance).all()
    assert [r.at_status for r in rows] == ["PRESENT"]


def test_second_run_changes_nothing(db, cleanup_service):
    add_wfh_log(db, 101, YESTERDAY)
    add_wfh_log(db, 102, date(2025, 6, 6))
    cleanup_service.process_expired_wfh_requests(db, now=NOW)

    second = cleanup_service.process_expired_wfh_requests(db, now=NOW)

    assert second.processed_count == 0
    assert second.absent_records_created == 0
    assert db.query(Attendance).count() == 2


def test_todays_and_decided_logs_are_left_alone(db, cleanup_service):
    today_log = add_wfh_log(db, 101, date(2025, 6, 10))
    add_wfh_log(db, 102, YESTERDAY, status="APPROVED")

    result = cleanup_service.process_expired_wfh_requests(db, now=NOW)

    assert result.processed_count == 0
    db.expire_all()
    assert db.get(WfhLog, today_log.wl_id).wl_status == "PENDING"


def test_item_failure_is_collected(db, cleanup_service, monkeypatch):
    add_wfh_log(db, 101, YESTERDAY)
    add_wfh_log(db, 102, YESTERDAY)

    original = cleanup_service.attendance_repo.add

    def failing_add(session, data):
        if data["at_user_id"] == 101:
            raise RuntimeError("disk full")
        return original(session, data)

    monkeypatch.setattr(cleanup_service.attendance_repo, "add", failing_add)

    result = cleanup_service.process_expired_wfh_requests(db, now=NOW)

    assert result.processed_count == 1
    assert len(result.errors) == 1
    assert "disk full" in result.errors[0]
    assert db.query(WfhLog).filter_by(wl_status="PENDING").count() == 1


def test_pending_stats(db, cleanup_service):
    add_wfh_log(db, 101, YESTERDAY)
    add_wfh_log(db, 102, date(2025, 6, 2), status="REJECTED", log_time=datetime(2025, 6, 2, 8, 0))
    add_wfh_log(db, 103, date(2025, 6, 10), log_time=datetime(2025, 6, 10, 0, 1))
    add_wfh_log(db, 104, date(2025, 5, 1), status="APPROVED", log_time=datetime(2025, 5, 1, 8, 0))

    stats = cleanup_service.get_wfh_pending_stats(db, now=NOW)

    assert stats.pending_count == 2
    assert stats.expired_pending_count == 1
    assert stats.total_expired_requests == 3
    assert stats.recent_count == 2
