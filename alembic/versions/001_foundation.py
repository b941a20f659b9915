"""
============================================================
TARJETA CRC (Class / Responsibilities / Collaborators)
============================================================
Class: 001_foundation (Alembic Migration)

Responsibilities:
  - Crear el esquema base: users + daily_reports.
  - Garantizar en la DB "un reporte por usuario por día"
    (uq_daily_reports_user_id_report_date).

Collaborators:
  - PostgreSQL 14+
  - infrastructure/repositories/postgres (usa este esquema como contrato)

Policy:
  - Migración BASELINE. Evolución futura con migraciones aditivas (002+).
  - Convención de nombres:
      pk_<tabla>, uq_<tabla>_<col>, ix_<tabla>_<col>,
      fk_<tabla>_<col>__<ref_tabla>, ck_<tabla>_<col>
  - El nombre uq_daily_reports_user_id_report_date lo usa el repositorio
    para traducir UniqueViolation a conflicto; no renombrar.
============================================================
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "001_foundation"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # =========================================================
    # 1) USERS
    # =========================================================
    op.create_table(
        "users",
        sa.Column("id", sa.BigInteger, sa.Identity(always=False), nullable=False),
        sa.Column("username", sa.String(50), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("password_hash", sa.Text, nullable=False),
        sa.Column(
            "role",
            sa.String(20),
            nullable=False,
            server_default=sa.text("'employee'"),
        ),
        sa.Column("display_name", sa.String(100), nullable=True),
        # supervisor borrado => subordinados quedan sin supervisor
        sa.Column("supervisor_id", sa.BigInteger, nullable=True),
        sa.Column(
            "is_active",
            sa.Boolean,
            nullable=False,
            server_default=sa.text("true"),
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id", name="pk_users"),
        sa.UniqueConstraint("username", name="uq_users_username"),
        sa.UniqueConstraint("email", name="uq_users_email"),
        sa.ForeignKeyConstraint(
            ["supervisor_id"],
            ["users.id"],
            name="fk_users_supervisor_id__users",
            ondelete="SET NULL",
        ),
        sa.CheckConstraint(
            "role IN ('admin', 'supervisor', 'employee')",
            name="ck_users_role",
        ),
    )
    op.create_index("ix_users_supervisor_id", "users", ["supervisor_id"])

    # =========================================================
    # 2) DAILY REPORTS
    # =========================================================
    op.create_table(
        "daily_reports",
        sa.Column("id", sa.BigInteger, sa.Identity(always=False), nullable=False),
        sa.Column("user_id", sa.BigInteger, nullable=False),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("work_content", sa.Text, nullable=False),
        sa.Column(
            "status",
            sa.String(20),
            nullable=False,
            server_default=sa.text("'draft'"),
        ),
        sa.Column("report_date", sa.Date, nullable=False),
        sa.Column("submitted_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id", name="pk_daily_reports"),
        sa.UniqueConstraint(
            "user_id", "report_date", name="uq_daily_reports_user_id_report_date"
        ),
        sa.ForeignKeyConstraint(
            ["user_id"],
            ["users.id"],
            name="fk_daily_reports_user_id__users",
            ondelete="CASCADE",
        ),
        sa.CheckConstraint(
            "status IN ('draft', 'submitted')",
            name="ck_daily_reports_status",
        ),
    )
    # R: listados por fecha descendente (find_by_user / find_by_users)
    op.create_index(
        "ix_daily_reports_report_date", "daily_reports", ["report_date"]
    )
    op.create_index("ix_daily_reports_status", "daily_reports", ["status"])


def downgrade() -> None:
    op.drop_table("daily_reports")
    op.drop_table("users")
