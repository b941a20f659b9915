"""
Name: Dev Seed Demo (Local-only)

Responsibilities:
  - Provision a local demo org: admin + supervisor + two employees
  - Include the bypass-mode debug user (user1) so AUTH_ENFORCED=false works
  - Enforce safety guard: only allowed in local environment
  - Keep operations idempotent (safe to run multiple times)

Patterns:
  - Dependency Injection (repos + hasher injected)
  - Fail-fast guard (safety boundary)
  - Idempotent provisioning (ensure-* helpers)

CRC:
  Component: ensure_dev_demo
  Collaborators:
    - UserRepository (find_by_username/save)
    - DailyReportRepository (exists_for_user_and_date/save)
    - CredentialVerifier (hash)
    - Settings (dev_seed_demo/app_env/dev_seed_password)
  Constraints:
    - Must NEVER run outside local environment
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Optional

from ..crosscutting.config import Settings
from ..crosscutting.logger import logger
from ..domain.entities import DailyReport, ReportStatus, User, UserRole, stamp_new, utcnow
from ..domain.repositories import DailyReportRepository, UserRepository
from ..identity.credentials import CredentialVerifier


@dataclass(frozen=True, slots=True)
class _SeedUser:
    """R: Usuario demo declarativo (sin efectos)."""

    username: str
    role: UserRole
    display_name: str
    supervisor: Optional[str] = None


# R: Orden importa: el supervisor se crea antes que sus subordinados.
_DEMO_USERS: tuple[_SeedUser, ...] = (
    _SeedUser(username="admin", role=UserRole.ADMIN, display_name="Admin"),
    _SeedUser(
        username="supervisor1", role=UserRole.SUPERVISOR, display_name="Supervisor One"
    ),
    _SeedUser(
        username="user1",
        role=UserRole.EMPLOYEE,
        display_name="User One",
        supervisor="supervisor1",
    ),
    _SeedUser(
        username="user2",
        role=UserRole.EMPLOYEE,
        display_name="User Two",
        supervisor="supervisor1",
    ),
)


def _assert_local_env(settings: Settings) -> None:
    env = settings.env_name
    if env != "local":
        raise RuntimeError(
            f"FATAL: DEV_SEED_DEMO is enabled but ENV is '{env}' (must be 'local'). "
            "Safety guard prevents accidental seeding."
        )


def _ensure_user(
    seed: _SeedUser,
    *,
    users: UserRepository,
    hasher: CredentialVerifier,
    password: str,
    now: datetime,
) -> User:
    existing = users.find_by_username(seed.username)
    if existing is not None:
        return existing

    supervisor_id = None
    if seed.supervisor:
        supervisor = users.find_by_username(seed.supervisor)
        supervisor_id = supervisor.id if supervisor else None

    user = users.save(
        User(
            id=None,
            username=seed.username,
            email=f"{seed.username}@local",
            password_hash=hasher.hash(password),
            role=seed.role,
            display_name=seed.display_name,
            supervisor_id=supervisor_id,
            timestamps=stamp_new(now),
        )
    )
    logger.info("Dev seed: usuario creado", extra={"username": seed.username})
    return user


def _ensure_sample_report(
    user: User, *, reports: DailyReportRepository, now: datetime
) -> None:
    yesterday = (now - timedelta(days=1)).date()
    if reports.exists_for_user_and_date(user.id, yesterday):
        return
    report = DailyReport(
        id=None,
        user_id=user.id,
        title="Demo report",
        work_content="Reviewed the backlog and paired on the login flow.",
        status=ReportStatus.DRAFT,
        report_date=yesterday,
        timestamps=stamp_new(now),
    )
    report.apply_status(ReportStatus.SUBMITTED, now)
    reports.save(report)


def ensure_dev_demo(
    settings: Settings,
    users: UserRepository,
    reports: DailyReportRepository,
    hasher: CredentialVerifier,
    *,
    clock: Callable[[], datetime] = utcnow,
) -> None:
    """No-op salvo que DEV_SEED_DEMO=true; en ese caso exige APP_ENV=local."""
    if not settings.dev_seed_demo:
        return

    _assert_local_env(settings)

    now = clock()
    seeded = {
        seed.username: _ensure_user(
            seed,
            users=users,
            hasher=hasher,
            password=settings.dev_seed_password,
            now=now,
        )
        for seed in _DEMO_USERS
    }
    _ensure_sample_report(seeded["user1"], reports=reports, now=now)
    logger.info("Dev seed demo completo", extra={"users": len(seeded)})
