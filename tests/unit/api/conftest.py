"""
Name: HTTP Test Fixtures

Responsibilities:
  - Provide a TestClient over the real app (in-memory repositories, APP_ENV=test)
  - Seed a small org into the container's user repository
  - Build Authorization headers from the container's TokenService
"""

from datetime import datetime, timezone
from typing import Callable, Optional

import pytest
from fastapi.testclient import TestClient

from daily_report.api.main import app
from daily_report.container import (
    get_credential_verifier,
    get_token_service,
    get_user_repository,
)
from daily_report.domain.entities import User, UserRole, stamp_new

_PASSWORD = "secret-pass"


@pytest.fixture
def password() -> str:
    return _PASSWORD


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


@pytest.fixture
def seed_org() -> dict[str, User]:
    """
    R: admin(1), supervisor1(2), supervisor2(3), user1(4, sup=2), user2(5, sup=3)
    """
    repo = get_user_repository()
    password_hash = get_credential_verifier().hash(_PASSWORD)
    now = datetime.now(timezone.utc)

    def _save(username: str, role: UserRole, supervisor_id: Optional[int] = None) -> User:
        return repo.save(
            User(
                id=None,
                username=username,
                password_hash=password_hash,
                role=role,
                timestamps=stamp_new(now),
                email=f"{username}@example.com",
                display_name=username.title(),
                supervisor_id=supervisor_id,
            )
        )

    admin = _save("admin", UserRole.ADMIN)
    supervisor = _save("supervisor1", UserRole.SUPERVISOR)
    other_supervisor = _save("supervisor2", UserRole.SUPERVISOR)
    employee = _save("user1", UserRole.EMPLOYEE, supervisor.id)
    peer = _save("user2", UserRole.EMPLOYEE, other_supervisor.id)
    return {
        "admin": admin,
        "supervisor": supervisor,
        "other_supervisor": other_supervisor,
        "employee": employee,
        "peer": peer,
    }


@pytest.fixture
def auth_for() -> Callable[[User], dict[str, str]]:
    def _headers(user: User) -> dict[str, str]:
        token = get_token_service().issue(user.username, user.role.value)
        return {"Authorization": f"Bearer {token}"}

    return _headers
