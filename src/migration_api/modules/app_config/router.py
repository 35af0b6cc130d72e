"""
App Config Admin Router

Endpoints:
- GET /admin/config - List feature flags
- PUT /admin/config - Update feature flags
"""

import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from redis.asyncio import Redis
from sqlalchemy.ext.asyncio import AsyncSession

from migration_api.core.auth import CurrentUser, get_current_admin_user
from migration_api.core.database import get_db
from migration_api.core.redis import get_redis
from migration_api.modules.app_config import service

logger = logging.getLogger(__name__)

router = APIRouter()


class ConfigUpdateRequest(BaseModel):
    """Request body for PUT /admin/config."""

    configs: dict[str, bool] = Field(default_factory=dict)


@router.get("")
async def get_configs(
    admin: CurrentUser = Depends(get_current_admin_user),
    db: AsyncSession = Depends(get_db),
):
    result = await service.get_all_configs(db)
    return result.to_response()


@router.put("")
async def update_configs(
    body: ConfigUpdateRequest,
    admin: CurrentUser = Depends(get_current_admin_user),
    db: AsyncSession = Depends(get_db),
    redis: Redis | None = Depends(get_redis),
):
    logger.info(f"Admin {admin.id} updating configs: {body.configs}")
    result = await service.update_configs(db, body.configs, redis=redis)
    return result.to_response()
