"""
Config Flag Cache

Process-wide Redis client backing the app_config provider. The cache is
optional: when no client is published, every flag read goes to the
database and writes skip eviction.
"""

import logging

from redis.asyncio import Redis, from_url

from migration_api.core.config import settings

logger = logging.getLogger(__name__)

# None until a ping succeeds
redis_client: Redis | None = None


async def init_redis(url: str | None = None) -> Redis:
    """
    Connect the config cache and publish the client.

    The client is only published once it answers a ping, so a failed
    startup leaves the provider on the database path. Connection errors
    propagate to the caller, which decides whether they are fatal.
    """
    global redis_client
    client = from_url(url or settings.redis_url, encoding="utf-8", decode_responses=True)
    try:
        await client.ping()
    except Exception:
        await client.aclose()
        raise
    redis_client = client
    logger.info("Config cache connected")
    return client


async def get_redis() -> Redis | None:
    """FastAPI dependency: the published cache client, or None."""
    return redis_client


def is_redis_available() -> bool:
    return redis_client is not None


async def ping_redis() -> str:
    """
    Report cache health as ``connected``, ``not initialized`` or ``error``.
    """
    if redis_client is None:
        return "not initialized"
    try:
        await redis_client.ping()
    except Exception as e:
        logger.warning(f"Config cache ping failed: {e}")
        return "error"
    return "connected"


async def close_redis() -> None:
    """Unpublish and close the cache client."""
    global redis_client
    client, redis_client = redis_client, None
    if client is not None:
        await client.aclose()
