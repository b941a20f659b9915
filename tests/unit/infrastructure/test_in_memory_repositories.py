"""
Unit tests for the in-memory repositories (ordering, uniqueness, thread safety).
"""

import threading
from datetime import date, datetime, timedelta, timezone

import pytest

from daily_report.crosscutting.exceptions import ReportConflictError
from daily_report.domain.entities import (
    DailyReport,
    ReportStatus,
    User,
    UserRole,
    stamp_new,
)

pytestmark = pytest.mark.unit

DAY = date(2024, 1, 15)
FIXED_NOW = datetime(2024, 1, 15, 9, 30, tzinfo=timezone.utc)


def _report(user_id: int, report_date: date = DAY, title: str = "Daily") -> DailyReport:
    return DailyReport(
        id=None,
        user_id=user_id,
        title=title,
        work_content="Worked on the in-memory store.",
        status=ReportStatus.DRAFT,
        report_date=report_date,
        timestamps=stamp_new(FIXED_NOW),
    )


# ============================================================================
# Reports
# ============================================================================


def test_save_assigns_incremental_ids(reports):
    first = reports.save(_report(1))
    second = reports.save(_report(2))

    assert (first.id, second.id) == (1, 2)


def test_duplicate_user_and_date_raises_conflict(reports):
    reports.save(_report(1))

    with pytest.raises(ReportConflictError) as excinfo:
        reports.save(_report(1, title="Other"))

    assert excinfo.value.user_id == 1
    assert excinfo.value.report_date == DAY


def test_updating_a_report_in_place_is_not_a_conflict(reports):
    saved = reports.save(_report(1))
    saved.title = "Edited"

    assert reports.save(saved).title == "Edited"


def test_moving_date_frees_the_old_slot(reports):
    saved = reports.save(_report(1))
    saved.report_date = DAY + timedelta(days=1)
    reports.save(saved)

    assert not reports.exists_for_user_and_date(1, DAY)
    assert reports.exists_for_user_and_date(1, DAY + timedelta(days=1))
    reports.save(_report(1))


def test_returned_reports_are_copies(reports):
    saved = reports.save(_report(1))
    saved.title = "Mutated outside"

    assert reports.find_by_id(saved.id).title == "Daily"


def test_find_by_user_orders_by_date_desc(reports):
    reports.save(_report(1, DAY - timedelta(days=1)))
    reports.save(_report(1, DAY))
    reports.save(_report(1, DAY - timedelta(days=5)))

    dates = [r.report_date for r in reports.find_by_user(1)]

    assert dates == sorted(dates, reverse=True)


def test_find_by_users_orders_by_date_desc_then_user(reports):
    reports.save(_report(3, DAY))
    reports.save(_report(1, DAY - timedelta(days=1)))
    reports.save(_report(2, DAY))
    reports.save(_report(9, DAY))

    rows = [(r.report_date, r.user_id) for r in reports.find_by_users([3, 1, 2])]

    assert rows == [(DAY, 2), (DAY, 3), (DAY - timedelta(days=1), 1)]
    assert reports.find_by_users([]) == []


def test_status_filter(reports):
    submitted = _report(1)
    submitted.apply_status(ReportStatus.SUBMITTED, FIXED_NOW)
    reports.save(submitted)
    reports.save(_report(1, DAY - timedelta(days=1)))

    assert len(reports.find_by_user(1, ReportStatus.SUBMITTED)) == 1
    assert len(reports.find_by_users([1], ReportStatus.DRAFT)) == 1


def test_concurrent_creates_for_same_day_store_exactly_one(reports):
    workers = 16
    barrier = threading.Barrier(workers)
    outcomes: list[str] = []
    outcomes_lock = threading.Lock()

    def _create(i: int) -> None:
        barrier.wait()
        try:
            reports.save(_report(1, title=f"attempt {i}"))
            outcome = "ok"
        except ReportConflictError:
            outcome = "conflict"
        with outcomes_lock:
            outcomes.append(outcome)

    threads = [threading.Thread(target=_create, args=(i,)) for i in range(workers)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert outcomes.count("ok") == 1
    assert outcomes.count("conflict") == workers - 1
    assert len(reports.find_by_user(1)) == 1


def test_delete_report(reports):
    saved = reports.save(_report(1))

    reports.delete(saved)
    reports.delete(saved)

    assert reports.find_by_id(saved.id) is None
    assert not reports.exists_for_user_and_date(1, DAY)


# ============================================================================
# Users
# ============================================================================


def _user(username: str, *, email=None, supervisor_id=None) -> User:
    return User(
        id=None,
        username=username,
        password_hash="hashed:secret",
        role=UserRole.EMPLOYEE,
        timestamps=stamp_new(FIXED_NOW),
        email=email,
        supervisor_id=supervisor_id,
    )


def test_user_lookups(users):
    boss = users.save(_user("boss", email="boss@example.com"))
    worker = users.save(_user("worker", supervisor_id=boss.id))

    assert users.find_by_username("worker").id == worker.id
    assert users.find_by_email("boss@example.com").id == boss.id
    assert [u.id for u in users.find_by_supervisor_id(boss.id)] == [worker.id]
    assert users.find_by_username("nobody") is None


def test_duplicate_username_or_email_is_rejected(users):
    users.save(_user("dup", email="dup@example.com"))

    with pytest.raises(ValueError):
        users.save(_user("dup"))
    with pytest.raises(ValueError):
        users.save(_user("other", email="dup@example.com"))


def test_renaming_email_updates_the_index(users):
    saved = users.save(_user("mover", email="old@example.com"))
    saved.email = "new@example.com"
    users.save(saved)

    assert users.find_by_email("old@example.com") is None
    assert users.find_by_email("new@example.com").id == saved.id


def test_deleting_a_supervisor_detaches_subordinates(users):
    boss = users.save(_user("boss"))
    worker = users.save(_user("worker", supervisor_id=boss.id))

    users.delete(boss)

    assert users.find_by_id(boss.id) is None
    assert users.find_by_id(worker.id).supervisor_id is None
