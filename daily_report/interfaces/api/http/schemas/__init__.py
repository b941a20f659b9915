"""Schemas HTTP (DTOs Pydantic) de la API."""

from .reports import ReportReq, ReportRes, ReportSummaryRes
from .users import (
    CreateUserReq,
    LoginReq,
    LoginRes,
    SessionRes,
    UpdateUserReq,
    UserRes,
)

__all__ = [
    "ReportReq",
    "ReportRes",
    "ReportSummaryRes",
    "UserRes",
    "LoginReq",
    "LoginRes",
    "SessionRes",
    "CreateUserReq",
    "UpdateUserReq",
]
