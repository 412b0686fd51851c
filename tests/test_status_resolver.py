from datetime import date, datetime, time

from app.core.enums import AttendanceStatus, StatusSource
from app.services.status_resolver import AttendanceStatusResolver, classify_check_in
from tests.factories import add_attendance, add_leave, add_wfh_log

USER = 7
TODAY = date(2025, 6, 10)
YESTERDAY = date(2025, 6, 9)
THRESHOLD = time(10, 0)


def test_classify_before_threshold_is_present():
    assert classify_check_in(datetime(2025, 6, 10, 9, 0), THRESHOLD) is AttendanceStatus.PRESENT


def test_classify_exactly_at_threshold_is_present():
    assert classify_check_in(datetime(2025, 6, 10, 10, 0), THRESHOLD) is AttendanceStatus.PRESENT


def test_classify_after_threshold_is_late():
    assert classify_check_in(datetime(2025, 6, 10, 10, 1), THRESHOLD) is AttendanceStatus.LATE


def test_attendance_row_wins_over_leave(db):
    add_attendance(db, USER, YESTERDAY, status="LATE", checkin_at=datetime(2025, 6, 9, 10, 30))
    add_leave(db, USER, YESTERDAY, YESTERDAY)

    result = AttendanceStatusResolver().resolve_day_status(db, USER, YESTERDAY, today=TODAY)

    assert result.status is AttendanceStatus.LATE
    assert result.source is StatusSource.ATTENDANCE


def test_approved_leave_wins_over_absent(db):
    add_leave(db, USER, date(2025, 6, 2), date(2025, 6, 9))

    result = AttendanceStatusResolver().resolve_day_status(db, USER, YESTERDAY, today=TODAY)

    assert result.status is AttendanceStatus.LEAVE
    assert result.source is StatusSource.LEAVE


def test_wfh_type_leave_resolves_to_wfh(db):
    add_leave(db, USER, YESTERDAY, YESTERDAY, leave_type="WFH")

    result = AttendanceStatusResolver().resolve_day_status(db, USER, YESTERDAY, today=TODAY)

    assert result.status is AttendanceStatus.WFH


def test_pending_leave_is_ignored(db):
    add_leave(db, USER, YESTERDAY, YESTERDAY, status="PENDING")

    result = AttendanceStatusResolver().resolve_day_status(db, USER, YESTERDAY, today=TODAY)

    assert result.status is AttendanceStatus.ABSENT
    assert result.source is StatusSource.DEFAULT


def test_approved_wfh_log_without_attendance(db):
    add_wfh_log(db, USER, YESTERDAY, status="APPROVED")

    result = AttendanceStatusResolver().resolve_day_status(db, USER, YESTERDAY, today=TODAY)

    assert result.status is AttendanceStatus.WFH
    assert result.source is StatusSource.REMOTE_WORK


def test_today_without_signals_is_undetermined(db):
    result = AttendanceStatusResolver().resolve_day_status(db, USER, TODAY, today=TODAY)

    assert result.status is None
    assert result.source is StatusSource.NONE


def test_today_status_reports_pending_wfh(db):
    add_wfh_log(db, USER, TODAY)

    result = AttendanceStatusResolver().get_today_status(db, USER, now=datetime(2025, 6, 10, 11, 0))

    assert result.has_attendance is False
    assert result.has_wfh is True
    assert result.wfh_log.wl_status.value == "PENDING"
    assert result.day_status.status is None
