from datetime import date, datetime

import pytest
from atams.exceptions import BadRequestException, ConflictException, NotFoundException

from app.core.enums import AttendanceStatus, Decision, EventType, RequestStatus
from app.models import Attendance, WfhLog
from app.schemas.remote_work import WfhLogCreate, WfhLogValidate
from app.services.remote_work_service import RemoteWorkService
from tests.factories import OFFICE_LAT, OFFICE_LON, add_attendance, add_leave, add_wfh_log

USER = 101
ADMIN_ID = 900
TODAY = date(2025, 6, 10)
YESTERDAY = date(2025, 6, 9)
NOW = datetime(2025, 6, 10, 11, 0)


@pytest.fixture
def service(publisher):
    return RemoteWorkService(publisher=publisher)


def wfh_payload(**overrides):
    data = {
        "wl_activity_description": "Menyusun laporan bulanan",
        "wl_evidence_ref": "evidence/laporan.png",
        "wl_lat": OFFICE_LAT,
        "wl_lon": OFFICE_LON,
    }
    data.update(overrides)
    return WfhLogCreate(**data)


def test_submit_creates_pending_log_for_today(db, service, sink):
    log = service.submit(db, USER, wfh_payload(), now=NOW)

    assert log.wl_status is RequestStatus.PENDING
    assert log.wl_log_date == TODAY
    assert log.wl_log_time == NOW
    assert sink.events[0].event_type is EventType.WFH_LOG_SUBMITTED


def test_submit_rejects_duplicate_for_same_day(db, service):
    service.submit(db, USER, wfh_payload(), now=NOW)

    with pytest.raises(ConflictException) as exc:
        service.submit(db, USER, wfh_payload(), now=datetime(2025, 6, 10, 12, 0))

    assert exc.value.details["code"] == "DUPLICATE_REMOTE_WORK"


def test_submit_rejects_when_already_checked_in(db, service):
    add_attendance(db, USER, TODAY, checkin_at=datetime(2025, 6, 10, 8, 0))

    with pytest.raises(ConflictException) as exc:
        service.submit(db, USER, wfh_payload(), now=NOW)

    assert exc.value.details["code"] == "ALREADY_CHECKED_IN"


def test_submit_rejects_future_day(db, service):
    with pytest.raises(BadRequestException) as exc:
        service.submit(db, USER, wfh_payload(wl_log_date=date(2025, 6, 11)), now=NOW)

    assert exc.value.details["code"] == "INVALID_RANGE"


def test_submit_rejects_blank_description(db, service):
    with pytest.raises(BadRequestException) as exc:
        service.submit(db, USER, wfh_payload(wl_activity_description="   a  "), now=NOW)

    assert exc.value.details["code"] == "INVALID_INPUT"


def test_submit_rejects_invalid_coordinates(db, service):
    with pytest.raises(BadRequestException) as exc:
        service.submit(db, USER, wfh_payload(wl_lon=200.0), now=NOW)

    assert exc.value.details["code"] == "INVALID_COORDINATES"


def test_linked_leave_must_cover_claimed_day(db, service):
    leave = add_leave(db, USER, date(2025, 6, 1), date(2025, 6, 5), leave_type="WFH")

    with pytest.raises(BadRequestException) as exc:
        service.submit(db, USER, wfh_payload(wl_leave_request_id=leave.lr_id), now=NOW)

    assert exc.value.details["code"] == "INVALID_RANGE"


def test_linked_leave_covering_day_is_accepted(db, service):
    leave = add_leave(db, USER, date(2025, 6, 9), date(2025, 6, 13), leave_type="WFH")

    log = service.submit(db, USER, wfh_payload(wl_leave_request_id=leave.lr_id), now=NOW)

    assert log.wl_leave_request_id == leave.lr_id


def test_approve_creates_wfh_attendance(db, service, sink):
    pending = add_wfh_log(db, USER, TODAY, log_time=datetime(2025, 6, 10, 8, 15))

    log = service.validate(db, pending.wl_id, ADMIN_ID, WfhLogValidate(decision=Decision.APPROVE), now=NOW)

    assert log.wl_status is RequestStatus.APPROVED
    assert log.wl_validated_by == ADMIN_ID
    assert log.wl_validated_at == NOW
    row = db.query(Attendance).filter_by(at_user_id=USER, at_date=TODAY).one()
    assert row.at_status == AttendanceStatus.WFH.value
    assert row.at_checkin_at == datetime(2025, 6, 10, 8, 15)
    assert row.at_notes == "Menyusun laporan"
    event = sink.events[-1]
    assert event.event_type is EventType.WFH_LOG_VALIDATED
    assert event.user_id == USER


def test_approve_with_existing_attendance_changes_nothing(db, service):
    pending = add_wfh_log(db, USER, YESTERDAY)
    add_attendance(db, USER, YESTERDAY, status="PRESENT", checkin_at=datetime(2025, 6, 9, 8, 0))

    with pytest.raises(ConflictException) as exc:
        service.validate(db, pending.wl_id, ADMIN_ID, WfhLogValidate(decision=Decision.APPROVE), now=NOW)

    assert exc.value.details["code"] == "DUPLICATE_ATTENDANCE"
    db.expire_all()
    assert db.get(WfhLog, pending.wl_id).wl_status == "PENDING"
    assert db.query(Attendance).count() == 1


def test_reject_past_day_creates_absent(db, service):
    pending = add_wfh_log(db, USER, YESTERDAY)

    log = service.validate(
        db, pending.wl_id, ADMIN_ID,
        WfhLogValidate(decision=Decision.REJECT, admin_notes="Bukti tidak valid"),
        now=NOW
    )

    assert log.wl_status is RequestStatus.REJECTED
    assert log.wl_admin_notes == "Bukti tidak valid"
    row = db.query(Attendance).filter_by(at_user_id=USER, at_date=YESTERDAY).one()
    assert row.at_status == "ABSENT"
    assert row.at_notes == "Absent - WFH request rejected"


def test_reject_today_creates_no_attendance(db, service):
    pending = add_wfh_log(db, USER, TODAY)

    service.validate(db, pending.wl_id, ADMIN_ID, WfhLogValidate(decision=Decision.REJECT), now=NOW)

    assert db.query(Attendance).count() == 0


def test_validate_twice_is_already_decided(db, service):
    pending = add_wfh_log(db, USER, TODAY)
    service.validate(db, pending.wl_id, ADMIN_ID, WfhLogValidate(decision=Decision.APPROVE), now=NOW)

    with pytest.raises(ConflictException) as exc:
        service.validate(db, pending.wl_id, ADMIN_ID, WfhLogValidate(decision=Decision.REJECT), now=NOW)

    assert exc.value.details["code"] == "ALREADY_DECIDED"


def test_validate_unknown_log(db, service):
    with pytest.raises(NotFoundException) as exc:
        service.validate(db, 999, ADMIN_ID, WfhLogValidate(decision=Decision.APPROVE), now=NOW)

    assert exc.value.details["code"] == "NOT_FOUND"


def test_pending_listing(db, service):
    add_wfh_log(db, USER, YESTERDAY)
    add_wfh_log(db, 202, TODAY, status="APPROVED")

    assert [log.wl_user_id for log in service.list_pending(db)] == [USER]
    assert service.count_pending(db) == 1
    assert len(service.list_user_logs(db, 202)) == 1


def test_approving_backdated_log_keeps_check_in_on_claimed_day(db, service):
    submitted = service.submit(db, USER, wfh_payload(wl_log_date=YESTERDAY), now=datetime(2025, 6, 10, 9, 0))

    service.validate(db, submitted.wl_id, ADMIN_ID, WfhLogValidate(decision=Decision.APPROVE), now=NOW)

    assert submitted.wl_log_time == datetime(2025, 6, 9, 0, 0)
    row = db.query(Attendance).filter_by(at_user_id=USER, at_date=YESTERDAY).one()
    assert row.at_checkin_at.date() == row.at_date
