"""
Contexto por request para correlacionar logs.

El middleware fija request_id/method/path al entrar; la dependencia de
identidad agrega actor_id cuando resuelve al usuario. El formatter JSON lee
todo con get_context_dict(). Valores vacíos significan "no disponible" y no
se emiten.
"""

from __future__ import annotations

from contextvars import ContextVar

_FIELDS = ("request_id", "method", "path", "actor_id")

_vars: dict[str, ContextVar[str]] = {
    name: ContextVar(f"daily_report_{name}", default="") for name in _FIELDS
}


def set_request_context(
    *, request_id: str = "", method: str = "", path: str = ""
) -> None:
    _vars["request_id"].set(request_id or "")
    _vars["method"].set(method or "")
    _vars["path"].set(path or "")


def set_actor_context(actor_id: int | None) -> None:
    _vars["actor_id"].set("" if actor_id is None else str(actor_id))


def get_context_dict() -> dict[str, str]:
    return {name: value for name, var in _vars.items() if (value := var.get())}


def clear_context() -> None:
    # R: obligatorio al final de cada request (workers reutilizan el contexto).
    for var in _vars.values():
        var.set("")
