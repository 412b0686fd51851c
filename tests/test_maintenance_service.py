from datetime import date, datetime

import pytest
from sqlalchemy.exc import OperationalError

from app.services.maintenance_service import MaintenanceService
from app.services.scheduler_service import create_scheduler
from tests.factories import add_wfh_log


class FlakyAutoCheckout:
    def __init__(self, failures):
        self.failures = failures
        self.calls = 0

    def run(self, db, now=None):
        self.calls += 1
        if self.calls <= self.failures:
            raise OperationalError("SELECT 1", {}, Exception("connection reset"))
        return "done"


def test_expiry_sweep_reports_stats_before_and_after(db, cleanup_service):
    add_wfh_log(db, 101, date(2025, 6, 9))
    maintenance = MaintenanceService(cleanup_service=cleanup_service, auto_checkout_service=FlakyAutoCheckout(0))

    report = maintenance.run_expiry_sweep(db, now=datetime(2025, 6, 10, 0, 5))

    assert report.stats_before.expired_pending_count == 1
    assert report.results.processed_count == 1
    assert report.stats_after.expired_pending_count == 0


def test_transient_errors_are_retried_with_linear_backoff(db, cleanup_service):
    delays = []
    flaky = FlakyAutoCheckout(failures=2)
    maintenance = MaintenanceService(
        cleanup_service=cleanup_service,
        auto_checkout_service=flaky,
        max_retries=3,
        retry_delay=0.5,
        sleep=delays.append
    )

    assert maintenance.run_auto_checkout(db) == "done"
    assert flaky.calls == 3
    assert delays == [0.5, 1.0]


def test_gives_up_after_max_retries(db, cleanup_service):
    flaky = FlakyAutoCheckout(failures=5)
    maintenance = MaintenanceService(
        cleanup_service=cleanup_service,
        auto_checkout_service=flaky,
        max_retries=2,
        retry_delay=0,
        sleep=lambda _: None
    )

    with pytest.raises(OperationalError):
        maintenance.run_auto_checkout(db)
    assert flaky.calls == 2


def test_scheduler_registers_both_jobs(cleanup_service, session_factory):
    maintenance = MaintenanceService(cleanup_service=cleanup_service, auto_checkout_service=FlakyAutoCheckout(0))

    scheduler = create_scheduler(maintenance, session_factory)

    assert {job.id for job in scheduler.get_jobs()} == {"wfh_expiry_sweep", "auto_checkout"}
    assert scheduler.running is False
