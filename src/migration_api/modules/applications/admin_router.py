"""
Applications Admin Router

API endpoints for admins to manage direct and agent applications and to
review uploaded documents. All endpoints require the admin role.

Endpoints:
- GET /admin/applications - List applications with filters and pagination
- GET /admin/applications/{type}/{id} - Application with applicant documents
- PATCH /admin/applications/{type}/{id}/status - Run the status transition
- POST /admin/applications/{type}/{id}/send-to-school - Mark submitted to school
- PATCH /admin/documents/{type}/{id}/status - Review a document
"""

import logging
from datetime import datetime
from typing import Literal

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from migration_api.core.auth import CurrentUser, get_current_admin_user
from migration_api.core.database import get_db
from migration_api.modules.applications import service
from migration_api.modules.applications.schemas import (
    ApplicationDetailResponse,
    ApplicationListResponse,
    ApplicationResponse,
    ApplicationStatusUpdate,
)
from migration_api.modules.documents import service as document_service
from migration_api.modules.documents.schemas import DocumentResponse, DocumentStatusUpdateRequest

logger = logging.getLogger(__name__)

router = APIRouter()
documents_router = APIRouter()


@router.get("")
async def list_applications(
    application_type: Literal["all", "direct", "agent"] = Query("all"),
    status: str | None = Query(None, description="Filter by application status"),
    payment_status: str | None = Query(None, description="Filter by payment status"),
    start_date: datetime | None = Query(None),
    end_date: datetime | None = Query(None),
    sort_order: Literal["asc", "desc"] = Query("desc"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    admin: CurrentUser = Depends(get_current_admin_user),
    db: AsyncSession = Depends(get_db),
):
    result = await service.admin_list_applications(
        db,
        application_type=application_type,
        status=status,
        payment_status=payment_status,
        start_date=start_date,
        end_date=end_date,
        sort_order=sort_order,
        page=page,
        limit=limit,
    )
    return result.to_response(ApplicationListResponse)


@router.get("/{application_type}/{application_id}")
async def get_application_detail(
    application_type: str,
    application_id: int,
    admin: CurrentUser = Depends(get_current_admin_user),
    db: AsyncSession = Depends(get_db),
):
    result = await service.admin_get_application_detail(db, application_id, application_type)
    return result.to_response(ApplicationDetailResponse)


@router.patch("/{application_type}/{application_id}/status")
async def update_application_status(
    application_type: str,
    application_id: int,
    body: ApplicationStatusUpdate,
    admin: CurrentUser = Depends(get_current_admin_user),
    db: AsyncSession = Depends(get_db),
):
    logger.info(
        f"Admin {admin.id} updating {application_type} application {application_id}: "
        f"{body.model_dump(exclude_none=True)}"
    )
    result = await service.update_application_status(
        db, application_id, application_type, body, admin_id=admin.id
    )
    return result.to_response(ApplicationResponse)


@router.post("/{application_type}/{application_id}/send-to-school")
async def send_to_school(
    application_type: str,
    application_id: int,
    admin: CurrentUser = Depends(get_current_admin_user),
    db: AsyncSession = Depends(get_db),
):
    result = await service.send_application_to_school(
        db, application_id, application_type, admin_id=admin.id
    )
    return result.to_response(ApplicationResponse)


@documents_router.patch("/{document_type}/{document_id}/status")
async def update_document_status(
    document_type: str,
    document_id: int,
    body: DocumentStatusUpdateRequest,
    admin: CurrentUser = Depends(get_current_admin_user),
    db: AsyncSession = Depends(get_db),
):
    result = await document_service.update_document_status(
        db,
        document_id,
        document_type,
        body.status,
        admin_id=admin.id,
        admin_comment=body.admin_comment,
    )
    return result.to_response(DocumentResponse)
