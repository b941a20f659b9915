"""
Unit tests for Settings validation.
"""

import pytest
from pydantic import ValidationError

from daily_report.crosscutting.config import Settings

pytestmark = pytest.mark.unit

STRONG_SECRET = "s" * 40


def test_defaults():
    settings = Settings(app_env="development")

    assert settings.auth_enforced is True
    assert settings.debug_default_username == "user1"
    assert settings.jwt_access_ttl_ms == 86_400_000
    assert settings.dev_seed_demo is False


def test_env_vars_are_read(monkeypatch):
    monkeypatch.setenv("AUTH_ENFORCED", "false")
    monkeypatch.setenv("JWT_ACCESS_TTL_MS", "1500")
    monkeypatch.setenv("DEBUG_DEFAULT_USERNAME", "tester")

    settings = Settings()

    assert settings.auth_enforced is False
    assert settings.jwt_access_ttl_ms == 1500
    assert settings.debug_default_username == "tester"


def test_ttl_must_be_positive():
    with pytest.raises(ValidationError):
        Settings(jwt_access_ttl_ms=0)


def test_debug_username_must_not_be_blank():
    with pytest.raises(ValidationError):
        Settings(debug_default_username="   ")


def test_production_requires_strong_secret():
    with pytest.raises(ValidationError, match="JWT_SECRET"):
        Settings(app_env="production", jwt_secret="dev-secret")
    with pytest.raises(ValidationError, match="32 characters"):
        Settings(app_env="production", jwt_secret="short-but-custom")


def test_production_forbids_auth_bypass():
    with pytest.raises(ValidationError, match="AUTH_ENFORCED"):
        Settings(app_env="production", jwt_secret=STRONG_SECRET, auth_enforced=False)


def test_production_with_strong_secret_is_valid():
    settings = Settings(app_env="production", jwt_secret=STRONG_SECRET)

    assert settings.is_production()
    assert not settings.is_test()


@pytest.mark.parametrize("env", ["test", "TESTING", " ci "])
def test_is_test(env):
    assert Settings(app_env=env).is_test()


def test_allowed_origins_list():
    settings = Settings(allowed_origins="http://a.test, ,http://b.test ")

    assert settings.get_allowed_origins_list() == ["http://a.test", "http://b.test"]
