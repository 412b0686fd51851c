"""
Notification Service - domain events and their delivery

Events are written to hris.attendance_events inside the caller's transaction
and handed to the sink only after that transaction committed. Sink failures
never fail the originating operation.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy.orm import Session
from atams.logging import get_logger

from app.core.clock import local_now
from app.core.enums import EventType
from app.repositories.attendance_event_repository import AttendanceEventRepository

logger = get_logger(__name__)


@dataclass
class DomainEvent:
    event_type: EventType
    user_id: int
    reference_id: Optional[int] = None
    payload: Dict[str, Any] = field(default_factory=dict)
    occurred_at: Optional[datetime] = None


class NotificationSink:
    """Delivery target for committed domain events"""

    def deliver(self, event: DomainEvent) -> None:
        raise NotImplementedError


class LoggingNotificationSink(NotificationSink):
    def deliver(self, event: DomainEvent) -> None:
        logger.info(
            f"Notification: {event.event_type.value}",
            extra={'extra_data': {
                'user_id': event.user_id,
                'reference_id': event.reference_id,
                **event.payload
            }}
        )


class EventPublisher:
    def __init__(self, sink: Optional[NotificationSink] = None) -> None:
        self.event_repo = AttendanceEventRepository()
        self.sink = sink or LoggingNotificationSink()

    def record(
        self,
        db: Session,
        event_type: EventType,
        user_id: int,
        reference_id: Optional[int] = None,
        payload: Optional[Dict[str, Any]] = None,
        occurred_at: Optional[datetime] = None
    ) -> DomainEvent:
        """Stage the audit row in the current transaction and return the event for dispatch"""
        event = DomainEvent(
            event_type=event_type,
            user_id=user_id,
            reference_id=reference_id,
            payload=payload or {},
            occurred_at=occurred_at or local_now()
        )
        self.event_repo.add(db, {
            "ae_user_id": user_id,
            "ae_event_type": event_type.value,
            "ae_reference_id": reference_id,
            "ae_payload": event.payload,
            "ae_occurred_at": event.occurred_at
        })
        return event

    def dispatch(self, events: Iterable[DomainEvent]) -> List[DomainEvent]:
        """Deliver committed events; returns the ones the sink rejected"""
        failed = []
        for event in events:
            try:
                self.sink.deliver(event)
            except Exception as e:
                failed.append(event)
                logger.warning(
                    f"Notification delivery failed: {str(e)}",
                    extra={'extra_data': {
                        'event_type': event.event_type.value,
                        'user_id': event.user_id,
                        'reference_id': event.reference_id
                    }}
                )
        return failed
