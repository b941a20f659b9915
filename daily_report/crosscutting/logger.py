"""
===============================================================================
MÓDULO: Logger estructurado (JSON) con contexto de request
===============================================================================

Objetivo
--------
Cada línea de log es un objeto JSON que se puede correlacionar por
request_id / actor_id y que nunca lleva passwords, hashes ni tokens.

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  JSONFormatter + setup_logger()

Responsabilidades:
  - Serializar LogRecord -> JSON (una línea por evento)
  - Mezclar el contexto del request (context.get_context_dict)
  - Redactar claves sensibles y acotar textos largos (work_content)

Colaboradores:
  - daily_report/context.py (ContextVars)
  - crosscutting/config.py (log_level / log_json)

Reglas
------
  - Los casos de uso loguean ids, nunca el contenido del reporte completo.
  - Un Settings inválido no rompe el import del logger (default INFO/JSON).
===============================================================================
"""

from __future__ import annotations

import json
import logging
import sys
import traceback
from datetime import datetime, timezone
from typing import Any

from pydantic import ValidationError

LOGGER_NAME = "daily-report-api"

REDACTED = "***REDACTADO***"

# Claves que se redactan sin importar dónde aparezcan (extra, dicts anidados).
SENSITIVE_KEYS = frozenset(
    {
        "password",
        "password_hash",
        "jwt_secret",
        "secret",
        "token",
        "access_token",
        "authorization",
        "credentials",
    }
)

# Textos libres de usuario: se recortan más agresivamente.
_SHORT_TEXT_KEYS = frozenset({"work_content", "title"})
_SHORT_TEXT_MAX = 120
_TEXT_MAX = 2_000
_MAX_DEPTH = 4

# Atributos estándar de LogRecord (todo lo demás vino por `extra=`).
_RECORD_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__
) | {"message", "asctime", "taskName"}


def _clip(text: str, limit: int) -> str:
    return text if len(text) <= limit else f"{text[:limit]}…(+{len(text) - limit})"


def sanitize(value: Any, key: str | None = None, depth: int = 0) -> Any:
    """Devuelve una versión serializable y sin secretos de `value`."""
    if key is not None and key.lower() in SENSITIVE_KEYS:
        return REDACTED
    if depth > _MAX_DEPTH:
        return "…"

    if isinstance(value, str):
        limit = _SHORT_TEXT_MAX if key in _SHORT_TEXT_KEYS else _TEXT_MAX
        return _clip(value, limit)
    if isinstance(value, dict):
        return {str(k): sanitize(v, str(k), depth + 1) for k, v in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [sanitize(v, key, depth + 1) for v in value]
    if value is None or isinstance(value, (bool, int, float)):
        return value
    return str(value)


class JSONFormatter(logging.Formatter):
    """LogRecord -> JSON (timestamp, nivel, mensaje, contexto, extras, excepción)."""

    def format(self, record: logging.LogRecord) -> str:
        from ..context import get_context_dict

        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}:{record.funcName}:{record.lineno}",
            **get_context_dict(),
        }

        for attr, value in record.__dict__.items():
            if attr not in _RECORD_ATTRS:
                entry[attr] = sanitize(value, attr)

        if record.exc_info and record.exc_info[0] is not None:
            exc_type, exc, tb = record.exc_info
            entry["exception"] = {
                "type": exc_type.__name__,
                "message": str(exc),
                "stacktrace": traceback.format_exception(exc_type, exc, tb),
            }

        return json.dumps(entry, ensure_ascii=False, default=str)


def _level_and_format() -> tuple[int, bool]:
    try:
        from .config import get_settings

        settings = get_settings()
    except ValidationError:
        return logging.INFO, True
    level = logging.getLevelName((settings.log_level or "INFO").upper())
    return (level if isinstance(level, int) else logging.INFO), settings.log_json


def setup_logger(name: str = LOGGER_NAME) -> logging.Logger:
    """Configura (una sola vez) el logger de la app."""
    log = logging.getLogger(name)
    level, as_json = _level_and_format()
    log.setLevel(level)

    if not log.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            JSONFormatter()
            if as_json
            else logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")
        )
        log.addHandler(handler)
        log.propagate = False

    return log


logger = setup_logger()
