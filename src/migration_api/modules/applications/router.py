"""
Member Applications Router

Endpoints:
- POST /applications - Initiate an application
- GET /applications - List the member's applications
- GET /applications/eligibility - Document eligibility per category
- GET /applications/{id} - One application with its program
"""

from fastapi import APIRouter, Depends
from redis.asyncio import Redis
from sqlalchemy.ext.asyncio import AsyncSession

from migration_api.core.auth import CurrentUser, get_current_member
from migration_api.core.database import get_db
from migration_api.core.redis import get_redis
from migration_api.modules.app_config.provider import DatabaseConfigProvider
from migration_api.modules.applications import member_service
from migration_api.modules.applications.schemas import (
    ApplicationCreate,
    ApplicationResponse,
    EligibilityResponse,
)

router = APIRouter()


@router.post("")
async def initiate_application(
    body: ApplicationCreate,
    member: CurrentUser = Depends(get_current_member),
    db: AsyncSession = Depends(get_db),
    redis: Redis | None = Depends(get_redis),
):
    result = await member_service.initiate_application(
        db, member.id, body, DatabaseConfigProvider(db, redis)
    )
    return result.to_response(ApplicationResponse)


@router.get("")
async def list_applications(
    member: CurrentUser = Depends(get_current_member),
    db: AsyncSession = Depends(get_db),
):
    result = await member_service.get_member_applications(db, member.id)
    return result.to_response(ApplicationResponse)


# Declared before /{application_id} so "eligibility" is not parsed as an id
@router.get("/eligibility")
async def check_eligibility(
    member: CurrentUser = Depends(get_current_member),
    db: AsyncSession = Depends(get_db),
):
    result = await member_service.check_eligibility(db, member.id)
    return result.to_response(EligibilityResponse)


@router.get("/{application_id}")
async def get_application(
    application_id: int,
    member: CurrentUser = Depends(get_current_member),
    db: AsyncSession = Depends(get_db),
):
    result = await member_service.get_application_status(db, member.id, application_id)
    return result.to_response(ApplicationResponse)
