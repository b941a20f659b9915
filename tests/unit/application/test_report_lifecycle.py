"""
Unit tests for the report lifecycle use cases (create / get / update / delete).

Org (see conftest.org):
  admin(1), supervisor1(2), supervisor2(3), user1(4, sup=2), user2(5, sup=3)
"""

from datetime import date, datetime, timedelta, timezone
from unittest.mock import patch

import pytest

from daily_report.application.usecases.reports import (
    CreateReportUseCase,
    DeleteReportUseCase,
    GetReportUseCase,
    ReportErrorCode,
    ReportInput,
    UpdateReportUseCase,
)
from daily_report.crosscutting.exceptions import ReportConflictError
from daily_report.domain.entities import ReportStatus

pytestmark = pytest.mark.unit

DAY = date(2024, 1, 15)
LATER = datetime(2024, 1, 15, 18, 0, tzinfo=timezone.utc)


def _input(
    *,
    title="Daily",
    work_content="Fixed the flaky login test.",
    report_date=DAY,
    status="draft",
) -> ReportInput:
    return ReportInput(
        title=title, work_content=work_content, report_date=report_date, status=status
    )


@pytest.fixture
def create(reports, users, clock) -> CreateReportUseCase:
    return CreateReportUseCase(reports, users, clock=clock)


@pytest.fixture
def update(reports, users) -> UpdateReportUseCase:
    return UpdateReportUseCase(reports, users, clock=lambda: LATER)


# ============================================================================
# Create
# ============================================================================


def test_create_draft_report(create, org, clock):
    result = create.execute(org["employee"].id, _input())

    assert result.error is None
    report = result.report
    assert report.id is not None
    assert report.user_id == org["employee"].id
    assert report.username == "user1"
    assert report.status == ReportStatus.DRAFT
    assert report.submitted_at is None
    assert report.created_at == clock()
    assert report.updated_at == clock()


def test_create_submitted_report_sets_submitted_at(create, org, clock):
    result = create.execute(org["employee"].id, _input(status="submitted"))

    assert result.report.status == ReportStatus.SUBMITTED
    assert result.report.submitted_at == clock()


def test_second_report_same_day_is_a_conflict(create, org, reports):
    employee_id = org["employee"].id
    assert create.execute(employee_id, _input()).error is None

    result = create.execute(employee_id, _input(title="Again"))

    assert result.report is None
    assert result.error.code == ReportErrorCode.CONFLICT
    assert "2024-01-15" in result.error.message
    assert len(reports.find_by_user(employee_id)) == 1


def test_same_day_for_different_users_is_allowed(create, org):
    assert create.execute(org["employee"].id, _input()).error is None
    assert create.execute(org["peer"].id, _input()).error is None


def test_conflict_raised_by_storage_maps_to_conflict(create, org, reports):
    with patch.object(
        reports, "save", side_effect=ReportConflictError(org["employee"].id, DAY)
    ):
        result = create.execute(org["employee"].id, _input())

    assert result.error.code == ReportErrorCode.CONFLICT


def test_create_for_unknown_user(create):
    result = create.execute(999, _input())

    assert result.error.code == ReportErrorCode.UNKNOWN_USER


@pytest.mark.parametrize(
    "overrides, field",
    [
        ({"title": ""}, "title"),
        ({"title": "   "}, "title"),
        ({"title": "x" * 201}, "title"),
        ({"work_content": None}, "work_content"),
        ({"work_content": "too short"}, "work_content"),
        ({"work_content": "y" * 1001}, "work_content"),
        ({"report_date": None}, "report_date"),
        ({"status": None}, "status"),
        ({"status": "archived"}, "status"),
    ],
)
def test_invalid_input_is_rejected_before_touching_storage(
    create, org, reports, overrides, field
):
    with patch.object(reports, "exists_for_user_and_date") as exists:
        result = create.execute(org["employee"].id, _input(**overrides))

    assert result.error.code == ReportErrorCode.VALIDATION_ERROR
    assert field in {d["field"] for d in result.error.details}
    exists.assert_not_called()


def test_boundary_lengths_are_accepted(create, org):
    result = create.execute(
        org["employee"].id, _input(title="t" * 200, work_content="w" * 1000)
    )
    assert result.error is None

    result = create.execute(
        org["peer"].id, _input(work_content="w" * 10)
    )
    assert result.error is None


# ============================================================================
# Get
# ============================================================================


def test_owner_and_direct_supervisor_can_read(reports, users, org, make_report):
    report = make_report(org["employee"].id, DAY)
    get = GetReportUseCase(reports, users)

    owner_view = get.execute(report.id, org["employee"].id)
    supervisor_view = get.execute(report.id, org["supervisor"].id)

    assert owner_view.error is None
    assert supervisor_view.error is None
    assert supervisor_view.report.username == "user1"


@pytest.mark.parametrize("outsider", ["peer", "other_supervisor", "admin"])
def test_others_cannot_read(reports, users, org, make_report, outsider):
    report = make_report(org["employee"].id, DAY)

    result = GetReportUseCase(reports, users).execute(report.id, org[outsider].id)

    assert result.error.code == ReportErrorCode.FORBIDDEN


def test_get_missing_report(reports, users, org):
    result = GetReportUseCase(reports, users).execute(42, org["employee"].id)

    assert result.error.code == ReportErrorCode.NOT_FOUND


# ============================================================================
# Update
# ============================================================================


def test_owner_updates_and_submits(update, org, make_report):
    report = make_report(org["employee"].id, DAY)

    result = update.execute(
        report.id,
        org["employee"].id,
        _input(title="Updated", work_content="Shipped the export feature.", status="submitted"),
    )

    assert result.error is None
    assert result.report.title == "Updated"
    assert result.report.status == ReportStatus.SUBMITTED
    assert result.report.submitted_at == LATER
    assert result.report.updated_at == LATER
    assert result.report.created_at == report.timestamps.created_at


def test_submitted_back_to_draft_clears_submitted_at(update, org, make_report):
    report = make_report(org["employee"].id, DAY, status=ReportStatus.SUBMITTED)
    assert report.submitted_at is not None

    result = update.execute(report.id, org["employee"].id, _input(status="draft"))

    assert result.report.status == ReportStatus.DRAFT
    assert result.report.submitted_at is None


def test_resubmitting_keeps_first_submission_time(update, org, make_report):
    report = make_report(org["employee"].id, DAY, status=ReportStatus.SUBMITTED)

    result = update.execute(report.id, org["employee"].id, _input(status="submitted"))

    assert result.report.submitted_at == report.submitted_at


def test_supervisor_cannot_update(update, org, make_report, reports):
    report = make_report(org["employee"].id, DAY)

    result = update.execute(report.id, org["supervisor"].id, _input(title="Hijacked"))

    assert result.error.code == ReportErrorCode.FORBIDDEN
    assert reports.find_by_id(report.id).title == "Daily work"


def test_update_missing_report(update, org):
    result = update.execute(42, org["employee"].id, _input())

    assert result.error.code == ReportErrorCode.NOT_FOUND


def test_update_validates_before_lookup(update, org, make_report):
    report = make_report(org["employee"].id, DAY)

    result = update.execute(report.id, org["peer"].id, _input(title=""))

    assert result.error.code == ReportErrorCode.VALIDATION_ERROR


def test_moving_report_onto_an_existing_date_is_a_conflict(update, org, make_report):
    employee_id = org["employee"].id
    make_report(employee_id, DAY)
    other = make_report(employee_id, DAY + timedelta(days=1))

    result = update.execute(other.id, employee_id, _input(report_date=DAY))

    assert result.error.code == ReportErrorCode.CONFLICT


def test_moving_report_to_a_free_date(update, org, make_report, reports):
    employee_id = org["employee"].id
    report = make_report(employee_id, DAY)
    new_day = DAY - timedelta(days=3)

    result = update.execute(report.id, employee_id, _input(report_date=new_day))

    assert result.report.report_date == new_day
    assert reports.exists_for_user_and_date(employee_id, new_day)
    assert not reports.exists_for_user_and_date(employee_id, DAY)


# ============================================================================
# Delete
# ============================================================================


def test_owner_deletes_report(reports, users, org, make_report):
    report = make_report(org["employee"].id, DAY)

    result = DeleteReportUseCase(reports, users).execute(report.id, org["employee"].id)

    assert result.error is None
    assert result.deleted is True
    assert reports.find_by_id(report.id) is None
    assert not reports.exists_for_user_and_date(org["employee"].id, DAY)


def test_supervisor_cannot_delete(reports, users, org, make_report):
    report = make_report(org["employee"].id, DAY)

    result = DeleteReportUseCase(reports, users).execute(report.id, org["supervisor"].id)

    assert result.deleted is False
    assert result.error.code == ReportErrorCode.FORBIDDEN
    assert reports.find_by_id(report.id) is not None


def test_delete_missing_report(reports, users, org):
    result = DeleteReportUseCase(reports, users).execute(42, org["employee"].id)

    assert result.error.code == ReportErrorCode.NOT_FOUND
