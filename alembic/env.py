"""
Alembic environment (async engine).

Every model module is imported so autogenerate sees the full metadata.
"""

import asyncio
from logging.config import fileConfig

from alembic import context
from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import async_engine_from_config

from migration_api.core.config import settings
from migration_api.core.database import Base
from migration_api.modules.activity_logs.models import ActivityLog  # noqa: F401
from migration_api.modules.app_config.models import AppConfig  # noqa: F401
from migration_api.modules.applications.models import AgentApplication, Application  # noqa: F401
from migration_api.modules.documents.models import (  # noqa: F401
    AgentStudentDocument,
    ApplicationDocument,
)
from migration_api.modules.notifications.models import Notification  # noqa: F401
from migration_api.modules.programs.models import Program  # noqa: F401
from migration_api.modules.users.models import Agent, AgentStudent, Member  # noqa: F401
from migration_api.modules.wallet.models import Wallet, WalletTransaction  # noqa: F401

config = context.config
config.set_main_option("sqlalchemy.url", settings.database_url)

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def run_migrations_offline() -> None:
    context.configure(
        url=config.get_main_option("sqlalchemy.url"),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection: Connection) -> None:
    context.configure(connection=connection, target_metadata=target_metadata)

    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations() -> None:
    connectable = async_engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    async with connectable.connect() as connection:
        await connection.run_sync(do_run_migrations)

    await connectable.dispose()


def run_migrations_online() -> None:
    asyncio.run(run_async_migrations())


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
