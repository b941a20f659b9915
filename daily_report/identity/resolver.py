"""
===============================================================================
TARJETA CRC — identity/resolver.py
===============================================================================

Módulo:
    Identity Resolver (credenciales del request -> actor)

Responsabilidades:
    - Modo enforced: exigir token, verificarlo y cargar el usuario por `sub`.
    - Modo bypass: ignorar credenciales y cargar el usuario fijo de debug.
    - Rechazar usuarios inexistentes o inactivos en ambos modos.
    - Extraer el token desde `Authorization: Bearer <token>`.

Colaboradores:
    - identity.tokens.TokenService: verify().
    - domain.repositories.UserRepository: find_by_username().
    - interfaces/api/http/dependencies: construye RequestCredentials y traduce
      UnauthenticatedError a 401.

Decisiones de diseño:
    - El modo se pasa en el constructor (no hay flag global): dos resolvers
      con modos distintos pueden convivir.
    - Lectura pura: no modifica usuarios ni tokens.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..crosscutting.logger import logger
from ..domain.entities import User
from ..domain.repositories import UserRepository
from .tokens import ExpiredTokenError, InvalidTokenError, TokenService


class UnauthenticatedError(Exception):
    """No se pudo establecer la identidad del actor."""


@dataclass(frozen=True, slots=True)
class RequestCredentials:
    """Credenciales tal como llegan en el request (token o nada)."""

    token: Optional[str] = None


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Extrae token desde `Authorization: Bearer <token>`."""
    if not authorization:
        return None
    parts = authorization.split(None, 1)
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    token = parts[1].strip()
    return token or None


class IdentityResolver:
    def __init__(
        self,
        user_repository: UserRepository,
        token_service: TokenService,
        *,
        auth_enforced: bool,
        fallback_username: str,
    ):
        self._users = user_repository
        self._tokens = token_service
        self._auth_enforced = auth_enforced
        self._fallback_username = fallback_username

    @property
    def auth_enforced(self) -> bool:
        return self._auth_enforced

    def resolve(self, credentials: RequestCredentials) -> User:
        """
        Devuelve el actor del request.

        Raises:
            UnauthenticatedError: token ausente/inválido/expirado, usuario
                inexistente o inactivo.
        """
        if self._auth_enforced:
            username = self._username_from_token(credentials.token)
        else:
            logger.warning(
                "Auth bypass activo: usando usuario de debug",
                extra={"username": self._fallback_username},
            )
            username = self._fallback_username

        user = self._users.find_by_username(username)
        if user is None:
            logger.warning("Identidad rechazada: usuario inexistente")
            raise UnauthenticatedError("Unknown user")
        if not user.is_active:
            logger.warning(
                "Identidad rechazada: usuario inactivo", extra={"user_id": user.id}
            )
            raise UnauthenticatedError("Inactive user")
        return user

    def _username_from_token(self, token: Optional[str]) -> str:
        if not token:
            raise UnauthenticatedError("Missing bearer token")
        try:
            claims = self._tokens.verify(token)
        except ExpiredTokenError as exc:
            logger.info("Token expirado")
            raise UnauthenticatedError("Token expired") from exc
        except InvalidTokenError as exc:
            logger.warning("Token inválido")
            raise UnauthenticatedError("Token invalid") from exc
        return claims.subject
