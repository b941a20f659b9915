"""
===============================================================================
USE CASES: Validate Session / Current User
===============================================================================

Ambos delegan en el IdentityResolver (que respeta el modo enforced/bypass) y
traducen UnauthenticatedError a un resultado tipado UNAUTHENTICATED.
===============================================================================
"""

from __future__ import annotations

from ....identity.resolver import (
    IdentityResolver,
    RequestCredentials,
    UnauthenticatedError,
)
from .auth_results import CurrentUserResult, SessionResult, UserSummary, unauthenticated


class ValidateSessionUseCase:
    def __init__(self, identity_resolver: IdentityResolver) -> None:
        self._resolver = identity_resolver

    def execute(self, credentials: RequestCredentials) -> SessionResult:
        try:
            self._resolver.resolve(credentials)
        except UnauthenticatedError as exc:
            return SessionResult(valid=False, error=unauthenticated(str(exc)))
        return SessionResult(valid=True)


class CurrentUserUseCase:
    def __init__(self, identity_resolver: IdentityResolver) -> None:
        self._resolver = identity_resolver

    def execute(self, credentials: RequestCredentials) -> CurrentUserResult:
        try:
            user = self._resolver.resolve(credentials)
        except UnauthenticatedError as exc:
            return CurrentUserResult(error=unauthenticated(str(exc)))
        return CurrentUserResult(user=UserSummary.from_user(user))
