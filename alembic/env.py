"""
Alembic runtime para daily-report.

La URL sale de Settings (DATABASE_URL), no de alembic.ini, para que app y
migraciones apunten siempre a la misma base. No hay modelos ORM: las
revisiones se escriben a mano con op.create_table/op.execute, por eso
target_metadata es None y no se usa autogenerate.
"""

from logging.config import fileConfig

from alembic import context
from sqlalchemy import create_engine, pool

from daily_report.crosscutting.config import get_settings

_DRIVER = "postgresql+psycopg"

if context.config.config_file_name is not None:
    fileConfig(context.config.config_file_name)


def database_url() -> str:
    """DATABASE_URL con el driver psycopg 3 explícito (SQLAlchemy usa psycopg2 por defecto)."""
    url = get_settings().database_url
    scheme, sep, rest = url.partition("://")
    if sep and scheme in {"postgres", "postgresql"}:
        return f"{_DRIVER}://{rest}"
    return url


def run_offline() -> None:
    context.configure(
        url=database_url(),
        target_metadata=None,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def run_online() -> None:
    engine = create_engine(database_url(), poolclass=pool.NullPool)
    try:
        with engine.connect() as connection:
            context.configure(connection=connection, target_metadata=None)
            with context.begin_transaction():
                context.run_migrations()
    finally:
        engine.dispose()


if context.is_offline_mode():
    run_offline()
else:
    run_online()
