"""
Core module - Configuration, database, security, and service plumbing.
"""

from migration_api.core.config import get_settings, settings
from migration_api.core.database import Base, close_db, get_db, init_db
from migration_api.core.errors import ServiceError
from migration_api.core.outbox import SideEffectOutbox
from migration_api.core.redis import close_redis, get_redis, init_redis
from migration_api.core.responses import ServiceResult
from migration_api.core.security import decode_token

__all__ = [
    # Config
    "settings",
    "get_settings",
    # Database
    "Base",
    "get_db",
    "init_db",
    "close_db",
    # Redis
    "get_redis",
    "init_redis",
    "close_redis",
    # Security
    "decode_token",
    # Service plumbing
    "ServiceError",
    "ServiceResult",
    "SideEffectOutbox",
]
