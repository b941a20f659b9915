"""
Name: Pytest Configuration and Shared Fixtures

Responsibilities:
  - Configure test environment (APP_ENV=test => in-memory repositories)
  - Provide in-memory repositories, a fake credential verifier and a fixed clock
  - Provide user / report factories

Collaborators:
  - pytest: Test framework
  - daily_report.domain: Domain entities
  - daily_report.infrastructure.repositories.in_memory: Repositories under test

Notes:
  - Env vars are set BEFORE importing daily_report (Settings is cached)
  - Every test starts with a fresh container (reset_container)
"""

import os
from datetime import date, datetime, timezone
from typing import Callable, Optional

import pytest

os.environ["APP_ENV"] = "test"
os.environ.setdefault("JWT_SECRET", "unit-test-secret-0123456789-abcdefghij")

from daily_report.crosscutting import config as app_config  # noqa: E402

app_config.Settings.model_config["env_file"] = None

from daily_report.container import reset_container  # noqa: E402
from daily_report.domain.entities import (  # noqa: E402
    DailyReport,
    ReportStatus,
    User,
    UserRole,
    stamp_new,
)
from daily_report.infrastructure.repositories.in_memory import (  # noqa: E402
    InMemoryDailyReportRepository,
    InMemoryUserRepository,
)

FIXED_NOW = datetime(2024, 1, 15, 9, 30, tzinfo=timezone.utc)


def pytest_configure(config) -> None:
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )


@pytest.fixture(autouse=True)
def fresh_container():
    """R: Settings y singletons limpios en cada test."""
    app_config.get_settings.cache_clear()
    reset_container()
    yield
    app_config.get_settings.cache_clear()
    reset_container()


# ============================================================================
# Fakes
# ============================================================================


class FakeVerifier:
    """R: CredentialVerifier determinístico (evita el costo de argon2)."""

    def __init__(self) -> None:
        self.match_calls: list[tuple[str, str]] = []

    def hash(self, plaintext: str) -> str:
        return f"hashed:{plaintext}"

    def matches(self, plaintext: str, password_hash: str) -> bool:
        self.match_calls.append((plaintext, password_hash))
        return password_hash == f"hashed:{plaintext}"


@pytest.fixture
def verifier() -> FakeVerifier:
    return FakeVerifier()


@pytest.fixture
def clock() -> Callable[[], datetime]:
    return lambda: FIXED_NOW


# ============================================================================
# Repositories
# ============================================================================


@pytest.fixture
def users() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def reports() -> InMemoryDailyReportRepository:
    return InMemoryDailyReportRepository()


# ============================================================================
# Factories
# ============================================================================


@pytest.fixture
def make_user(users: InMemoryUserRepository) -> Callable[..., User]:
    """R: Crea y persiste un usuario (password = 'secret')."""

    def _make(
        username: str,
        role: UserRole = UserRole.EMPLOYEE,
        *,
        supervisor_id: Optional[int] = None,
        is_active: bool = True,
        password: str = "secret",
        email: Optional[str] = None,
    ) -> User:
        return users.save(
            User(
                id=None,
                username=username,
                password_hash=f"hashed:{password}",
                role=role,
                timestamps=stamp_new(FIXED_NOW),
                email=email,
                display_name=username.title(),
                supervisor_id=supervisor_id,
                is_active=is_active,
            )
        )

    return _make


@pytest.fixture
def make_report(reports: InMemoryDailyReportRepository) -> Callable[..., DailyReport]:
    """R: Crea y persiste un reporte."""

    def _make(
        user_id: int,
        report_date: date,
        *,
        status: ReportStatus = ReportStatus.DRAFT,
        title: str = "Daily work",
        work_content: str = "Worked on the reporting module all day.",
    ) -> DailyReport:
        report = DailyReport(
            id=None,
            user_id=user_id,
            title=title,
            work_content=work_content,
            status=ReportStatus.DRAFT,
            report_date=report_date,
            timestamps=stamp_new(FIXED_NOW),
        )
        report.apply_status(status, FIXED_NOW)
        return reports.save(report)

    return _make


@pytest.fixture
def org(make_user) -> dict[str, User]:
    """
    R: Organización mínima:
      admin(1), supervisor(2), otro supervisor(3), employee(4, sup=2), peer(5, sup=3)
    """
    admin = make_user("admin", UserRole.ADMIN)
    supervisor = make_user("supervisor1", UserRole.SUPERVISOR)
    other_supervisor = make_user("supervisor2", UserRole.SUPERVISOR)
    employee = make_user("user1", supervisor_id=supervisor.id)
    peer = make_user("user2", supervisor_id=other_supervisor.id)
    return {
        "admin": admin,
        "supervisor": supervisor,
        "other_supervisor": other_supervisor,
        "employee": employee,
        "peer": peer,
    }
