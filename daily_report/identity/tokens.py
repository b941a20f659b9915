"""
===============================================================================
TARJETA CRC — identity/tokens.py
===============================================================================

Módulo:
    Token Service (JWT de acceso)

Responsabilidades:
    - Emitir JWT firmados (HS256) con sub=username, role, iat, exp.
    - Verificar firma, estructura, claims mínimos y expiración.
    - is_expired(): responde True también cuando el token no se puede leer.

Colaboradores:
    - crosscutting.config.Settings: jwt_secret, jwt_access_ttl_ms.
    - identity.resolver.IdentityResolver: verify() al resolver el actor.
    - application/usecases/auth.LoginUseCase: issue() al loguear.

Decisiones de diseño:
    - El reloj se inyecta (clock) para que emitir/verificar sea determinístico.
    - La expiración se compara contra ese reloj, no contra el reloj de PyJWT;
      por eso se deshabilitan verify_exp/verify_iat y se valida acá.
    - iat/exp se guardan como segundos con precisión de ms (el TTL se configura
      en ms y un TTL de 1ms tiene que funcionar).
    - No loguear tokens.
===============================================================================
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

import jwt

from ..domain.entities import TokenClaims, utcnow

JWT_ALGORITHM: str = "HS256"

CLAIM_SUB: str = "sub"
CLAIM_ROLE: str = "role"
CLAIM_IAT: str = "iat"
CLAIM_EXP: str = "exp"

_REQUIRED_CLAIMS = [CLAIM_SUB, CLAIM_ROLE, CLAIM_IAT, CLAIM_EXP]


class InvalidTokenError(Exception):
    """El token no es válido (formato, firma o claims)."""


class ExpiredTokenError(InvalidTokenError):
    """El token es válido pero ya expiró."""


def _to_epoch(moment: datetime) -> float:
    return round(moment.timestamp(), 3)


def _from_epoch(value: float) -> datetime:
    return datetime.fromtimestamp(float(value), tz=timezone.utc)


class TokenService:
    """
    Emite y verifica tokens de acceso firmados con una clave simétrica.

    El mismo servicio verifica lo que firmó; no hay rotación de claves.
    """

    def __init__(
        self,
        secret: str,
        *,
        ttl_ms: int,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        if not secret:
            raise ValueError("secret must not be empty")
        if ttl_ms <= 0:
            raise ValueError("ttl_ms must be greater than 0")
        self._secret = secret
        self._ttl = timedelta(milliseconds=ttl_ms)
        self._clock = clock or utcnow

    def issue(self, username: str, role: str) -> str:
        now = self._clock()
        payload: dict[str, object] = {
            CLAIM_SUB: username,
            CLAIM_ROLE: role,
            CLAIM_IAT: _to_epoch(now),
            CLAIM_EXP: _to_epoch(now + self._ttl),
        }
        return jwt.encode(payload, self._secret, algorithm=JWT_ALGORITHM)

    def verify(self, token: str) -> TokenClaims:
        """
        Decodifica y valida un token.

        Raises:
            ExpiredTokenError: now >= exp
            InvalidTokenError: firma/estructura/claims inválidos
        """
        claims = self._decode(token)
        if self._clock() >= claims.expires_at:
            raise ExpiredTokenError("Token expired")
        return claims

    def is_expired(self, token: str) -> bool:
        # R: fail closed; un token ilegible cuenta como expirado.
        try:
            claims = self._decode(token)
        except InvalidTokenError:
            return True
        return self._clock() >= claims.expires_at

    def _decode(self, token: str) -> TokenClaims:
        if not token:
            raise InvalidTokenError("Token is empty")
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[JWT_ALGORITHM],
                options={
                    "require": _REQUIRED_CLAIMS,
                    "verify_exp": False,
                    "verify_iat": False,
                },
            )
        except jwt.InvalidTokenError as exc:
            raise InvalidTokenError("Token is invalid") from exc

        subject = payload.get(CLAIM_SUB)
        role = payload.get(CLAIM_ROLE)
        if not isinstance(subject, str) or not subject:
            raise InvalidTokenError("Token subject is invalid")
        if not isinstance(role, str) or not role:
            raise InvalidTokenError("Token role is invalid")

        try:
            issued_at = _from_epoch(payload[CLAIM_IAT])
            expires_at = _from_epoch(payload[CLAIM_EXP])
        except (TypeError, ValueError, OverflowError) as exc:
            raise InvalidTokenError("Token timestamps are invalid") from exc

        return TokenClaims(
            subject=subject, role=role, issued_at=issued_at, expires_at=expires_at
        )
