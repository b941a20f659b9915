"""
CRC — domain/repositories.py

Name
- Domain Repository Interfaces (Protocols)

Responsibilities
- Define persistence contracts for users and daily reports (ports).
- Keep the application/domain independent from infrastructure (PostgreSQL, in-memory).
- Enable dependency inversion and straightforward unit testing.

Collaborators
- domain.entities: User, DailyReport, ReportStatus
- infrastructure.repositories: postgres/*, in_memory/* implementations

Constraints
- Pure interfaces only: no side effects, no infrastructure imports, no SQL.
- Implementations MUST match method signatures exactly.

Notes
- We use typing.Protocol for structural subtyping ("duck typing").
- Outputs are concrete lists for predictable iteration/serialization.
- The (user_id, report_date) uniqueness is owned by DailyReportRepository.save:
  it raises ReportConflictError instead of persisting a duplicate.
"""

from datetime import date
from typing import List, Optional, Protocol, Sequence

from .entities import DailyReport, ReportStatus, User


class UserRepository(Protocol):
    """
    R: Interface for user persistence.

    The supervisor relationship is a plain id lookup (find_by_supervisor_id),
    one level deep.
    """

    def find_by_id(self, user_id: int) -> Optional[User]:
        """R: Get user by id (None if missing)."""
        ...

    def find_by_username(self, username: str) -> Optional[User]:
        """R: Get user by login name (exact match)."""
        ...

    def find_by_email(self, email: str) -> Optional[User]:
        ...

    def find_by_supervisor_id(self, supervisor_id: int) -> List[User]:
        """R: Direct subordinates of a supervisor, ordered by id."""
        ...

    def list_users(self) -> List[User]:
        """R: All users ordered by id."""
        ...

    def save(self, user: User) -> User:
        """
        R: Insert when user.id is None, otherwise update.

        Returns the stored user (with id assigned).
        """
        ...

    def delete(self, user: User) -> None:
        """R: Hard delete. Reports of the user are removed with it."""
        ...


class DailyReportRepository(Protocol):
    """
    R: Interface for daily report persistence.
    """

    def find_by_id(self, report_id: int) -> Optional[DailyReport]:
        ...

    def exists_for_user_and_date(self, user_id: int, report_date: date) -> bool:
        ...

    def find_by_user(
        self, user_id: int, status: Optional[ReportStatus] = None
    ) -> List[DailyReport]:
        """R: Reports of one user, report_date DESC."""
        ...

    def find_by_users(
        self, user_ids: Sequence[int], status: Optional[ReportStatus] = None
    ) -> List[DailyReport]:
        """R: Reports of several users, report_date DESC then user_id ASC."""
        ...

    def save(self, report: DailyReport) -> DailyReport:
        """
        R: Insert when report.id is None, otherwise update.

        Raises:
            ReportConflictError: another report already holds (user_id, report_date)
        """
        ...

    def delete(self, report: DailyReport) -> None:
        ...
