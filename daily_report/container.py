"""
===============================================================================
TARJETA CRC — daily_report/container.py (Composition Root / DI manual)
===============================================================================

Responsabilidades:
  - Componer dependencias (repositorios, servicios de identidad, casos de uso).
  - Exponer factories para FastAPI (Depends).
  - Mantener singletons con caching (lru_cache) para recursos compartidos.
  - Centralizar decisiones runtime basadas en Settings (test => in-memory).

Colaboradores:
  - crosscutting.config.get_settings
  - domain.repositories (puertos)
  - infrastructure.repositories (implementaciones)
  - identity.* (credenciales, tokens, resolver)
  - application.usecases.* (casos de uso)

Notas:
  - Este archivo NO contiene lógica de negocio.
  - Este archivo NO depende de FastAPI (solo expone factories).
  - En tests se limpian los caches con reset_container().
===============================================================================
"""

from __future__ import annotations

from functools import lru_cache

from .application.usecases.auth import (
    CurrentUserUseCase,
    LoginUseCase,
    ValidateSessionUseCase,
)
from .application.usecases.reports import (
    CreateReportUseCase,
    DeleteReportUseCase,
    GetReportUseCase,
    HasTodayReportUseCase,
    ListMyReportsUseCase,
    ListSubordinateReportsUseCase,
    UpdateReportUseCase,
)
from .application.usecases.users import (
    CreateUserUseCase,
    DeleteUserUseCase,
    ListUsersUseCase,
    ToggleUserActiveUseCase,
    UpdateUserUseCase,
)
from .crosscutting.config import get_settings
from .domain.repositories import DailyReportRepository, UserRepository
from .identity.credentials import Argon2CredentialVerifier, CredentialVerifier
from .identity.resolver import IdentityResolver
from .identity.tokens import TokenService
from .infrastructure.repositories import (
    InMemoryDailyReportRepository,
    InMemoryUserRepository,
    PostgresDailyReportRepository,
    PostgresUserRepository,
)

# =============================================================================
# Helpers internos
# =============================================================================


def _is_test_env() -> bool:
    """app_env ∈ {"test", "testing", "ci"} => se favorecen in-memory adapters."""
    return get_settings().is_test()


# =============================================================================
# Repositorios (singletons)
# =============================================================================


@lru_cache(maxsize=1)
def get_user_repository() -> UserRepository:
    """Repositorio de usuarios (in-memory en test; Postgres en runtime)."""
    if _is_test_env():
        return InMemoryUserRepository()
    return PostgresUserRepository()


@lru_cache(maxsize=1)
def get_report_repository() -> DailyReportRepository:
    """Repositorio de reportes (in-memory en test; Postgres en runtime)."""
    if _is_test_env():
        return InMemoryDailyReportRepository()
    return PostgresDailyReportRepository()


# =============================================================================
# Identidad
# =============================================================================


@lru_cache(maxsize=1)
def get_credential_verifier() -> CredentialVerifier:
    return Argon2CredentialVerifier()


@lru_cache(maxsize=1)
def get_token_service() -> TokenService:
    settings = get_settings()
    return TokenService(settings.jwt_secret, ttl_ms=settings.jwt_access_ttl_ms)


@lru_cache(maxsize=1)
def get_identity_resolver() -> IdentityResolver:
    """El modo (enforced / bypass) se fija acá, una vez, desde Settings."""
    settings = get_settings()
    return IdentityResolver(
        get_user_repository(),
        get_token_service(),
        auth_enforced=settings.auth_enforced,
        fallback_username=settings.debug_default_username,
    )


# =============================================================================
# Casos de uso: auth
# =============================================================================


def get_login_use_case() -> LoginUseCase:
    return LoginUseCase(
        get_user_repository(), get_credential_verifier(), get_token_service()
    )


def get_validate_session_use_case() -> ValidateSessionUseCase:
    return ValidateSessionUseCase(get_identity_resolver())


def get_current_user_use_case() -> CurrentUserUseCase:
    return CurrentUserUseCase(get_identity_resolver())


# =============================================================================
# Casos de uso: reportes
# =============================================================================


def get_create_report_use_case() -> CreateReportUseCase:
    return CreateReportUseCase(get_report_repository(), get_user_repository())


def get_update_report_use_case() -> UpdateReportUseCase:
    return UpdateReportUseCase(get_report_repository(), get_user_repository())


def get_delete_report_use_case() -> DeleteReportUseCase:
    return DeleteReportUseCase(get_report_repository(), get_user_repository())


def get_get_report_use_case() -> GetReportUseCase:
    return GetReportUseCase(get_report_repository(), get_user_repository())


def get_list_my_reports_use_case() -> ListMyReportsUseCase:
    return ListMyReportsUseCase(get_report_repository(), get_user_repository())


def get_list_subordinate_reports_use_case() -> ListSubordinateReportsUseCase:
    return ListSubordinateReportsUseCase(
        get_report_repository(), get_user_repository()
    )


def get_has_today_report_use_case() -> HasTodayReportUseCase:
    return HasTodayReportUseCase(get_report_repository())


# =============================================================================
# Casos de uso: administración de usuarios
# =============================================================================


def get_list_users_use_case() -> ListUsersUseCase:
    return ListUsersUseCase(get_user_repository())


def get_create_user_use_case() -> CreateUserUseCase:
    return CreateUserUseCase(get_user_repository(), get_credential_verifier())


def get_update_user_use_case() -> UpdateUserUseCase:
    return UpdateUserUseCase(get_user_repository(), get_credential_verifier())


def get_toggle_user_active_use_case() -> ToggleUserActiveUseCase:
    return ToggleUserActiveUseCase(get_user_repository())


def get_delete_user_use_case() -> DeleteUserUseCase:
    return DeleteUserUseCase(get_user_repository(), get_report_repository())


def reset_container() -> None:
    """Limpia singletons (tests / recarga de Settings)."""
    for factory in (
        get_user_repository,
        get_report_repository,
        get_credential_verifier,
        get_token_service,
        get_identity_resolver,
    ):
        factory.cache_clear()
