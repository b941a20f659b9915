"""
Unit tests for Argon2CredentialVerifier.
"""

import pytest
from argon2 import PasswordHasher

from daily_report.identity.credentials import Argon2CredentialVerifier

pytestmark = pytest.mark.unit


@pytest.fixture
def argon() -> Argon2CredentialVerifier:
    # R: parámetros mínimos para que el test sea rápido
    return Argon2CredentialVerifier(
        PasswordHasher(time_cost=1, memory_cost=8, parallelism=1)
    )


def test_hash_then_match(argon):
    password_hash = argon.hash("password")

    assert password_hash != "password"
    assert argon.matches("password", password_hash) is True


def test_wrong_password_does_not_match(argon):
    assert argon.matches("wrong", argon.hash("password")) is False


@pytest.mark.parametrize("bad_hash", ["", "not-an-argon-hash", "$argon2id$broken"])
def test_invalid_hash_returns_false_instead_of_raising(argon, bad_hash):
    assert argon.matches("password", bad_hash) is False
