from logging.config import fileConfig

from alembic import context
from sqlalchemy import pool
from sqlmodel import SQLModel

from app.core.config import DATABASE_URL
from app.database import build_engine
from app.models.transaction import Transaction  # noqa: F401
from app.models.user import User  # noqa: F401

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# alembic.ini deja sqlalchemy.url vacío: la URL sale del .env como en la app
if not DATABASE_URL:
    raise RuntimeError("DATABASE_URL no está definida. Verifica tu .env")
config.set_main_option("sqlalchemy.url", DATABASE_URL)

target_metadata = SQLModel.metadata


def _configure(**kwargs):
    context.configure(
        target_metadata=target_metadata,
        # detecta cambios de precisión en NUMERIC(12,2)
        compare_type=True,
        # SQLite no soporta ALTER COLUMN; se recrea la tabla
        render_as_batch=DATABASE_URL.startswith("sqlite"),
        **kwargs,
    )


def run_migrations_offline():
    _configure(url=DATABASE_URL, literal_binds=True, dialect_opts={"paramstyle": "named"})
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online():
    connectable = build_engine(DATABASE_URL, poolclass=pool.NullPool)
    with connectable.connect() as connection:
        _configure(connection=connection)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
