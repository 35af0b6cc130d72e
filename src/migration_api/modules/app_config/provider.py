"""
Config Providers

Services read feature flags through the ConfigProvider protocol so the
source can be swapped (database-backed in the API, static in scripts and
tests).
"""

import logging
from typing import Protocol

from redis.asyncio import Redis
from sqlalchemy.ext.asyncio import AsyncSession

from migration_api.core.config import settings
from migration_api.modules.app_config import repository

logger = logging.getLogger(__name__)

REQUIRE_DOCUMENT_VALIDATION = "require_document_validation"
ADMIN_APPLICATION_DOCUMENT = "admin_application_document"

# key -> default value ("true"/"false")
DEFAULT_CONFIGS: dict[str, str] = {
    REQUIRE_DOCUMENT_VALIDATION: "true",
    ADMIN_APPLICATION_DOCUMENT: "true",
}

CACHE_KEY_PREFIX = "app_config:"


def parse_flag(value: str | None) -> bool | None:
    if value is None:
        return None
    return value == "true"


def cache_key(key: str) -> str:
    return f"{CACHE_KEY_PREFIX}{key}"


class ConfigProvider(Protocol):
    """Read-only access to boolean feature flags."""

    async def get(self, key: str) -> bool | None: ...


class StaticConfigProvider:
    """In-memory provider; unknown keys fall back to the defaults."""

    def __init__(self, values: dict[str, bool] | None = None):
        self._values = dict(values or {})

    async def get(self, key: str) -> bool | None:
        if key in self._values:
            return self._values[key]
        return parse_flag(DEFAULT_CONFIGS.get(key))


class DatabaseConfigProvider:
    """
    Provider backed by the ``app_configs`` table.

    - Known keys missing from the table are created with their default
    - Values are cached in Redis (when available) for a few minutes
    - Read errors fall back to the default value
    """

    def __init__(self, db: AsyncSession, redis: Redis | None = None):
        self.db = db
        self.redis = redis

    async def _get_cached(self, key: str) -> bool | None:
        if self.redis is None:
            return None
        try:
            return parse_flag(await self.redis.get(cache_key(key)))
        except Exception as e:
            logger.warning(f"Config cache read failed for '{key}': {e}")
            return None

    async def _set_cached(self, key: str, value: bool) -> None:
        if self.redis is None:
            return
        try:
            await self.redis.set(
                cache_key(key),
                "true" if value else "false",
                ex=settings.config_cache_ttl_seconds,
            )
        except Exception as e:
            logger.warning(f"Config cache write failed for '{key}': {e}")

    async def get(self, key: str) -> bool | None:
        cached = await self._get_cached(key)
        if cached is not None:
            return cached

        try:
            # SAVEPOINT keeps a failed read from aborting the caller's transaction
            async with self.db.begin_nested():
                config = await repository.get_by_key(self.db, key)
                if config is None:
                    if key not in DEFAULT_CONFIGS:
                        return None
                    config = await repository.create(
                        self.db,
                        key,
                        DEFAULT_CONFIGS[key],
                        f"Auto-created config for {key}",
                    )
                    logger.info(f"Created default config {key}={config.value}")
            value = config.value == "true"
        except Exception as e:
            logger.warning(f"Config read failed for '{key}', using default: {e}")
            return parse_flag(DEFAULT_CONFIGS.get(key))

        await self._set_cached(key, value)
        return value


async def is_flag_enabled(config: ConfigProvider, key: str) -> bool:
    """Resolve a flag, treating an unknown value as the key's default (or False)."""
    value = await config.get(key)
    if value is None:
        return bool(parse_flag(DEFAULT_CONFIGS.get(key)))
    return value
