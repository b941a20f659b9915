"""
===============================================================================
USE CASE: Login (username + password -> JWT)
===============================================================================

Business Goal:
    Autenticar por username/password y emitir un token de acceso.

Why (Context / Intención):
    - Cualquier fallo devuelve el mismo INVALID_CREDENTIALS.
    - Para usuarios inexistentes se verifica igual contra un hash dummy, así el
      tiempo de respuesta no revela si el username existe.

-------------------------------------------------------------------------------
CRC CARD
-------------------------------------------------------------------------------
Class:
    LoginUseCase

Collaborators:
    - UserRepository.find_by_username
    - identity.credentials.CredentialVerifier
    - identity.tokens.TokenService.issue
===============================================================================
"""

from __future__ import annotations

from threading import Lock
from typing import Optional

from ....crosscutting.logger import logger
from ....domain.repositories import UserRepository
from ....identity.credentials import CredentialVerifier
from ....identity.tokens import TokenService
from .auth_results import LoginResult, UserSummary, invalid_credentials

_DUMMY_PASSWORD = "daily-report-dummy-password"


class LoginUseCase:
    def __init__(
        self,
        user_repository: UserRepository,
        credential_verifier: CredentialVerifier,
        token_service: TokenService,
    ) -> None:
        self._users = user_repository
        self._verifier = credential_verifier
        self._tokens = token_service
        self._dummy_hash: Optional[str] = None
        self._dummy_lock = Lock()

    def execute(self, username: str, password: str) -> LoginResult:
        normalized = (username or "").strip()
        user = self._users.find_by_username(normalized) if normalized else None

        if user is None:
            self._verifier.matches(password or "", self._get_dummy_hash())
            logger.info("Login fallido")
            return LoginResult(error=invalid_credentials())

        password_ok = self._verifier.matches(password or "", user.password_hash)
        if not password_ok or not user.is_active:
            logger.info("Login fallido", extra={"user_id": user.id})
            return LoginResult(error=invalid_credentials())

        token = self._tokens.issue(user.username, user.role.value)
        logger.info("Login exitoso", extra={"user_id": user.id})
        return LoginResult(token=token, user=UserSummary.from_user(user))

    def _get_dummy_hash(self) -> str:
        with self._dummy_lock:
            if self._dummy_hash is None:
                self._dummy_hash = self._verifier.hash(_DUMMY_PASSWORD)
            return self._dummy_hash
