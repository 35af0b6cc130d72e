"""
Agent Applications Router

Endpoints:
- POST /agent/applications - Submit an application for a student
- GET /agent/applications - List the agent's applications
- GET /agent/applications/{id} - One application
- PATCH /agent/applications/{id} - Update status or intake
- DELETE /agent/applications/{id} - Cancel (the row is kept)
"""

from fastapi import APIRouter, Depends, Query
from redis.asyncio import Redis
from sqlalchemy.ext.asyncio import AsyncSession

from migration_api.core.auth import CurrentUser, get_current_agent
from migration_api.core.database import get_db
from migration_api.core.redis import get_redis
from migration_api.modules.app_config.provider import DatabaseConfigProvider
from migration_api.modules.applications import agent_service
from migration_api.modules.applications.schemas import (
    AgentApplicationCreate,
    AgentApplicationUpdate,
    ApplicationListResponse,
    ApplicationResponse,
)

router = APIRouter()


@router.post("")
async def create_application(
    body: AgentApplicationCreate,
    agent: CurrentUser = Depends(get_current_agent),
    db: AsyncSession = Depends(get_db),
    redis: Redis | None = Depends(get_redis),
):
    result = await agent_service.create_agent_application(
        db, agent.id, body, DatabaseConfigProvider(db, redis)
    )
    return result.to_response(ApplicationResponse)


@router.get("")
async def list_applications(
    status: str | None = Query(None, description="Filter by application status"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    agent: CurrentUser = Depends(get_current_agent),
    db: AsyncSession = Depends(get_db),
):
    result = await agent_service.get_agent_applications(
        db, agent.id, status=status, page=page, limit=limit
    )
    return result.to_response(ApplicationListResponse)


@router.get("/{application_id}")
async def get_application(
    application_id: int,
    agent: CurrentUser = Depends(get_current_agent),
    db: AsyncSession = Depends(get_db),
):
    result = await agent_service.get_agent_application(db, agent.id, application_id)
    return result.to_response(ApplicationResponse)


@router.patch("/{application_id}")
async def update_application(
    application_id: int,
    body: AgentApplicationUpdate,
    agent: CurrentUser = Depends(get_current_agent),
    db: AsyncSession = Depends(get_db),
):
    result = await agent_service.update_agent_application(db, agent.id, application_id, body)
    return result.to_response(ApplicationResponse)


@router.delete("/{application_id}")
async def cancel_application(
    application_id: int,
    agent: CurrentUser = Depends(get_current_agent),
    db: AsyncSession = Depends(get_db),
):
    result = await agent_service.cancel_agent_application(db, agent.id, application_id)
    return result.to_response(ApplicationResponse)
