import asyncio
from logging.config import fileConfig

from alembic import context
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import create_async_engine

from config.settings import settings
from src.pk_admin.infrastructure import db_models as admin_models  # noqa: F401
from src.pk_asset.infrastructure import db_models as asset_models  # noqa: F401
from src.pk_common.database import Base
from src.pk_listing.infrastructure import db_models as listing_models  # noqa: F401
from src.pk_revenue.infrastructure import db_models as revenue_models  # noqa: F401
from src.pk_token.infrastructure import db_models as token_models  # noqa: F401
from src.pk_trade.infrastructure import db_models as trade_models  # noqa: F401

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# Migrations are hand-written SQL; the reference ORM metadata is registered so
# `alembic check` reports drift between the two.
target_metadata = Base.metadata


def run_migrations_offline() -> None:
    """Emit the SQL for every pending revision without a live database."""
    context.configure(
        url=settings.DATABASE_URL,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection: Connection) -> None:
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        compare_type=True,
    )
    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations() -> None:
    """Apply migrations over an asyncpg connection."""
    connectable = create_async_engine(settings.DATABASE_URL)
    async with connectable.connect() as connection:
        await connection.run_sync(do_run_migrations)
    await connectable.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_async_migrations())
