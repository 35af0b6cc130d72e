"""
Seed App Config Flags

Creates the default runtime feature flags (document validation for member
and agent applications). Existing values are left untouched.

Usage:
    python scripts/seed_app_config.py
"""

import asyncio
import sys
from pathlib import Path

# Add the src directory to the path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from migration_api.core.config import settings
from migration_api.modules.app_config import repository
from migration_api.modules.app_config.service import ensure_default_configs


async def seed_app_config() -> None:
    """Create missing default flags and print the resulting values."""

    engine = create_async_engine(settings.database_url, echo=False)
    async_session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with async_session() as db:
        await ensure_default_configs(db)
        await db.commit()

        print("App config flags:")
        for config in await repository.get_all(db):
            print(f"  {config.key} = {config.value}")

    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(seed_app_config())
