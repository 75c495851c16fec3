from logging.config import fileConfig

from alembic import context
from sqlalchemy import create_engine

from reorder_backend.config import settings

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

if not settings.DATABASE_URL:
    raise RuntimeError("DATABASE_URL environment variable is required to run migrations")

# The service connects with asyncpg; migrations run through sync SQLAlchemy on psycopg
config.set_main_option("sqlalchemy.url", settings.MIGRATION_DATABASE_URL)


def run_offline() -> None:
    """Emit the ordering schema as SQL without connecting."""
    context.configure(
        url=config.get_main_option("sqlalchemy.url"),
        target_metadata=None,
        literal_binds=True,
    )
    with context.begin_transaction():
        context.run_migrations()


def run_online() -> None:
    """Apply pending ordering-schema revisions against DATABASE_URL."""
    engine = create_engine(config.get_main_option("sqlalchemy.url"))
    try:
        with engine.connect() as connection:
            context.configure(connection=connection, target_metadata=None, transaction_per_migration=True)
            with context.begin_transaction():
                context.run_migrations()
    finally:
        engine.dispose()


if context.is_offline_mode():
    run_offline()
else:
    run_online()
