from datetime import date, datetime

import pytest
from atams.exceptions import BadRequestException, ConflictException, NotFoundException

from app.core.enums import Decision, EventType, LeaveType, RequestStatus
from app.models import Attendance
from app.schemas.leave_request import LeaveDecision, LeaveRequestCreate
from app.services.leave_service import LeaveService

USER = 101
ADMIN_ID = 900
NOW = datetime(2025, 6, 10, 14, 0)


@pytest.fixture
def service(publisher):
    return LeaveService(publisher=publisher)


def leave_payload(start=date(2025, 6, 16), end=date(2025, 6, 18), leave_type=LeaveType.LEAVE):
    return LeaveRequestCreate(lr_type=leave_type, lr_start_date=start, lr_end_date=end, lr_reason="Acara keluarga")


def test_submit_creates_pending(db, service, sink):
    leave = service.submit(db, USER, leave_payload(), now=NOW)

    assert leave.lr_status is RequestStatus.PENDING
    assert leave.lr_user_id == USER
    assert sink.events[0].event_type is EventType.LEAVE_REQUEST_CREATED


def test_submit_rejects_inverted_range(db, service):
    with pytest.raises(BadRequestException) as exc:
        service.submit(db, USER, leave_payload(start=date(2025, 6, 18), end=date(2025, 6, 16)), now=NOW)

    assert exc.value.details["code"] == "INVALID_RANGE"


def test_single_day_leave_is_valid(db, service):
    leave = service.submit(db, USER, leave_payload(start=date(2025, 6, 16), end=date(2025, 6, 16)), now=NOW)

    assert leave.lr_start_date == leave.lr_end_date


def test_decide_approve(db, service, sink):
    leave = service.submit(db, USER, leave_payload(), now=NOW)

    decided = service.decide(
        db, leave.lr_id, ADMIN_ID, LeaveDecision(decision=Decision.APPROVE, admin_notes="OK"), now=NOW
    )

    assert decided.lr_status is RequestStatus.APPROVED
    assert decided.lr_decided_by == ADMIN_ID
    assert decided.lr_decided_at == NOW
    assert sink.events[-1].event_type is EventType.LEAVE_STATUS_CHANGED
    assert sink.events[-1].user_id == USER
    assert db.query(Attendance).count() == 0


def test_decide_twice(db, service):
    leave = service.submit(db, USER, leave_payload(), now=NOW)
    service.decide(db, leave.lr_id, ADMIN_ID, LeaveDecision(decision=Decision.REJECT), now=NOW)

    with pytest.raises(ConflictException) as exc:
        service.decide(db, leave.lr_id, ADMIN_ID, LeaveDecision(decision=Decision.APPROVE), now=NOW)

    assert exc.value.details["code"] == "ALREADY_DECIDED"


def test_decide_unknown(db, service):
    with pytest.raises(NotFoundException):
        service.decide(db, 404, ADMIN_ID, LeaveDecision(decision=Decision.APPROVE), now=NOW)


def test_listing_by_status(db, service):
    first = service.submit(db, USER, leave_payload(), now=NOW)
    service.submit(db, USER, leave_payload(start=date(2025, 7, 1), end=date(2025, 7, 2)), now=NOW)
    service.submit(db, 202, leave_payload(leave_type=LeaveType.SICK), now=NOW)
    service.decide(db, first.lr_id, ADMIN_ID, LeaveDecision(decision=Decision.APPROVE), now=NOW)

    assert len(service.list_user_leaves(db, USER)) == 2
    assert len(service.list_user_leaves(db, USER, status="PENDING")) == 1
    assert service.count_leaves(db) == 3
    assert service.count_leaves(db, status="APPROVED") == 1
