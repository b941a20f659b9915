"""
===============================================================================
TARJETA CRC — interfaces/api/http/routers/users.py
===============================================================================

Class/Module:
    User Admin Router

Responsibilities:
    - Exponer /api/users (listar, crear, editar, activar/desactivar, borrar).
    - El chequeo de rol ADMIN vive en los casos de uso; acá solo se traduce
      UserError -> RFC7807 (FORBIDDEN => 403).

Collaborators:
    - application.usecases.users
    - container (factories DI)
    - dependencies.require_actor
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status

from .....application.usecases.users import (
    CreateUserUseCase,
    DeleteUserUseCase,
    ListUsersUseCase,
    ToggleUserActiveUseCase,
    UpdateUserUseCase,
)
from .....container import (
    get_create_user_use_case,
    get_delete_user_use_case,
    get_list_users_use_case,
    get_toggle_user_active_use_case,
    get_update_user_use_case,
)
from .....domain.entities import User
from ..dependencies import require_actor
from ..error_mapping import raise_user_error
from ..schemas.users import CreateUserReq, UpdateUserReq, UserRes

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=list[UserRes])
def list_users(
    actor: User = Depends(require_actor),
    use_case: ListUsersUseCase = Depends(get_list_users_use_case),
):
    result = use_case.execute(actor)
    if result.error is not None:
        raise_user_error(result.error)
    return [UserRes.from_summary(u) for u in result.users]


@router.post("", response_model=UserRes, status_code=status.HTTP_201_CREATED)
def create_user(
    req: CreateUserReq,
    actor: User = Depends(require_actor),
    use_case: CreateUserUseCase = Depends(get_create_user_use_case),
):
    result = use_case.execute(actor, req.to_input())
    if result.error is not None:
        raise_user_error(result.error)
    return UserRes.from_summary(result.user)


@router.put("/{user_id}", response_model=UserRes)
def update_user(
    user_id: int,
    req: UpdateUserReq,
    actor: User = Depends(require_actor),
    use_case: UpdateUserUseCase = Depends(get_update_user_use_case),
):
    result = use_case.execute(actor, user_id, req.to_input())
    if result.error is not None:
        raise_user_error(result.error, user_id)
    return UserRes.from_summary(result.user)


@router.post("/{user_id}/toggle-active", response_model=UserRes)
def toggle_user_active(
    user_id: int,
    actor: User = Depends(require_actor),
    use_case: ToggleUserActiveUseCase = Depends(get_toggle_user_active_use_case),
):
    result = use_case.execute(actor, user_id)
    if result.error is not None:
        raise_user_error(result.error, user_id)
    return UserRes.from_summary(result.user)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: int,
    actor: User = Depends(require_actor),
    use_case: DeleteUserUseCase = Depends(get_delete_user_use_case),
):
    result = use_case.execute(actor, user_id)
    if result.error is not None:
        raise_user_error(result.error, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
