"""
PostgreSQL Repository Implementations.

Production persistence (psycopg 3 + psycopg_pool). Schema lives in
alembic/versions.
"""

from .daily_report import PostgresDailyReportRepository
from .user import PostgresUserRepository

__all__ = [
    "PostgresUserRepository",
    "PostgresDailyReportRepository",
]
