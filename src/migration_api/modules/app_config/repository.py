"""
App Config Repository
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from .models import AppConfig


async def get_by_key(db: AsyncSession, key: str) -> AppConfig | None:
    result = await db.execute(select(AppConfig).where(AppConfig.key == key))
    return result.scalar_one_or_none()


async def get_all(db: AsyncSession) -> list[AppConfig]:
    result = await db.execute(select(AppConfig).order_by(AppConfig.key))
    return list(result.scalars().all())


async def create(
    db: AsyncSession, key: str, value: str, description: str | None = None
) -> AppConfig:
    config = AppConfig(key=key, value=value, description=description)
    db.add(config)
    await db.flush()
    return config


async def set_value(
    db: AsyncSession, key: str, value: str, description: str | None = None
) -> AppConfig:
    """Update the flag's value, creating the row if it does not exist."""
    config = await get_by_key(db, key)
    if config is None:
        return await create(db, key, value, description or f"Configuration for {key}")

    config.value = value
    if description:
        config.description = description
    await db.flush()
    return config
