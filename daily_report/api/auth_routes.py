"""
===============================================================================
TARJETA CRC — api/auth_routes.py (Autenticación)
===============================================================================

Responsabilidades:
  - POST /api/auth/login: username + password -> token JWT + datos del usuario.
  - POST /api/auth/validate: ¿el token del header sigue siendo válido?
  - GET  /api/auth/me: usuario actual.

Patrones aplicados:
  - Adapter / Presentation Layer: traduce HTTP <-> caso de uso.
  - Fail-safe security: cualquier fallo de login es 401 con un único mensaje.

Colaboradores:
  - application.usecases.auth (Login / ValidateSession / CurrentUser)
  - interfaces.api.http.dependencies.get_request_credentials
  - interfaces.api.http.error_mapping.raise_auth_error
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from ..application.usecases.auth import (
    CurrentUserUseCase,
    LoginUseCase,
    ValidateSessionUseCase,
)
from ..container import (
    get_current_user_use_case,
    get_login_use_case,
    get_validate_session_use_case,
)
from ..crosscutting.error_responses import OPENAPI_ERROR_RESPONSES
from ..identity.resolver import RequestCredentials
from ..interfaces.api.http.dependencies import get_request_credentials
from ..interfaces.api.http.error_mapping import raise_auth_error
from ..interfaces.api.http.schemas.users import LoginReq, LoginRes, SessionRes, UserRes

router = APIRouter(prefix="/auth", tags=["auth"], responses=OPENAPI_ERROR_RESPONSES)


@router.post("/login", response_model=LoginRes)
def login(
    req: LoginReq,
    use_case: LoginUseCase = Depends(get_login_use_case),
):
    result = use_case.execute(req.username, req.password)
    if result.error is not None:
        raise_auth_error(result.error)

    user = UserRes.from_summary(result.user)
    return LoginRes(token=result.token, **user.model_dump())


@router.post("/validate", response_model=SessionRes)
def validate_session(
    credentials: RequestCredentials = Depends(get_request_credentials),
    use_case: ValidateSessionUseCase = Depends(get_validate_session_use_case),
):
    result = use_case.execute(credentials)
    if result.error is not None:
        raise_auth_error(result.error)
    return SessionRes(valid=result.valid)


@router.get("/me", response_model=UserRes)
def me(
    credentials: RequestCredentials = Depends(get_request_credentials),
    use_case: CurrentUserUseCase = Depends(get_current_user_use_case),
):
    result = use_case.execute(credentials)
    if result.error is not None:
        raise_auth_error(result.error)
    return UserRes.from_summary(result.user)
