"""
App Config Service Layer

Admin read/update of runtime feature flags.
"""

import logging

from redis.asyncio import Redis
from sqlalchemy.ext.asyncio import AsyncSession

from migration_api.core.responses import ServiceResult
from migration_api.modules.app_config import repository
from migration_api.modules.app_config.provider import DEFAULT_CONFIGS, cache_key

logger = logging.getLogger(__name__)


async def ensure_default_configs(db: AsyncSession) -> None:
    """Create any missing default flag rows (flushes, does not commit)."""
    for key, value in DEFAULT_CONFIGS.items():
        if await repository.get_by_key(db, key) is None:
            await repository.create(db, key, value, f"Auto-generated default for {key}")
            logger.info(f"Initialized default config {key}={value}")


async def get_all_configs(db: AsyncSession) -> ServiceResult:
    """Return every flag as ``{key: bool}``, creating missing defaults first."""
    try:
        await ensure_default_configs(db)
        await db.commit()

        configs = {config.key: config.value == "true" for config in await repository.get_all(db)}
        for key, value in DEFAULT_CONFIGS.items():
            configs.setdefault(key, value == "true")

        return ServiceResult.ok("Configuration retrieved successfully", configs)
    except Exception as e:
        await db.rollback()
        logger.exception("Failed to retrieve configurations")
        return ServiceResult.failure(str(e) or "Failed to retrieve configurations", 500)


async def update_configs(
    db: AsyncSession,
    updates: dict[str, bool],
    *,
    redis: Redis | None = None,
) -> ServiceResult:
    """
    Set one or more flags.

    Args:
        db: Database session
        updates: Mapping of flag key to new boolean value
        redis: Optional cache client; updated keys are evicted
    """
    if not updates:
        return ServiceResult.failure("No configuration updates provided", 400)

    try:
        for key, value in updates.items():
            await repository.set_value(db, key, "true" if value else "false")
        await db.commit()
    except Exception as e:
        await db.rollback()
        logger.exception("Failed to update configurations")
        return ServiceResult.failure(str(e) or "Failed to update configurations", 500)

    if redis is not None:
        try:
            await redis.delete(*(cache_key(key) for key in updates))
        except Exception as e:
            logger.warning(f"Failed to evict config cache: {e}")

    logger.info(f"Updated configurations: {updates}")
    return ServiceResult.ok("Configurations updated successfully", dict(updates))
