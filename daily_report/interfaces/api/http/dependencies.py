"""
===============================================================================
TARJETA CRC — dependencies.py (Dependencias de identidad para routers)
===============================================================================

Responsabilidades:
  - Leer `Authorization: Bearer <token>` y construir RequestCredentials.
  - Resolver el actor con el IdentityResolver del container (enforced/bypass).
  - Traducir UnauthenticatedError -> 401 RFC7807.
  - Registrar actor_id en el contexto de logs.

Colaboradores:
  - identity.resolver (IdentityResolver, RequestCredentials, extract_bearer_token)
  - container.get_identity_resolver
  - crosscutting.error_responses.unauthorized
  - context.set_actor_context
===============================================================================
"""

from __future__ import annotations

from fastapi import Depends, Header, Request

from ....container import get_identity_resolver
from ....context import set_actor_context
from ....crosscutting.error_responses import unauthorized
from ....domain.entities import User
from ....identity.resolver import (
    IdentityResolver,
    RequestCredentials,
    UnauthenticatedError,
    extract_bearer_token,
)


def get_request_credentials(
    authorization: str | None = Header(None, alias="Authorization"),
) -> RequestCredentials:
    return RequestCredentials(token=extract_bearer_token(authorization))


def require_actor(
    request: Request,
    credentials: RequestCredentials = Depends(get_request_credentials),
    resolver: IdentityResolver = Depends(get_identity_resolver),
) -> User:
    """Dependency FastAPI: actor autenticado (o usuario de debug en bypass)."""
    try:
        actor = resolver.resolve(credentials)
    except UnauthenticatedError as exc:
        raise unauthorized("Autenticación requerida") from exc

    request.state.user = actor
    set_actor_context(actor.id)
    return actor
