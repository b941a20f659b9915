"""
============================================================
TARJETA CRC
============================================================
Class: daily_report.infrastructure.repositories (Package exports)

Responsibilities:
- Exponer implementaciones concretas de repositorios (Postgres e InMemory)
  en un único punto de importación.

Collaborators:
- Repositorios Postgres (SQL crudo)
- Repositorios InMemory (testing / app_env=test)
============================================================
"""

from .in_memory import InMemoryDailyReportRepository, InMemoryUserRepository
from .postgres import PostgresDailyReportRepository, PostgresUserRepository

__all__ = [
    "InMemoryUserRepository",
    "InMemoryDailyReportRepository",
    "PostgresUserRepository",
    "PostgresDailyReportRepository",
]
