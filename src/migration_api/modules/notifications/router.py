"""
Notifications Router

Endpoints for members and agents to read their notifications.
The path ``user_type`` must match the authenticated user's role.
"""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from migration_api.core.auth import CurrentUser, get_current_user
from migration_api.core.database import get_db
from migration_api.modules.notifications import service
from migration_api.modules.notifications.schemas import (
    MarkAllReadResponse,
    NotificationListResponse,
    NotificationResponse,
    UnreadCountResponse,
)

router = APIRouter()


def _ensure_own_inbox(user: CurrentUser, user_type: str) -> None:
    if user.role != user_type:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail={
                "error": "FORBIDDEN",
                "message": "You can only access your own notifications.",
            },
        )


@router.get("/{user_type}")
async def list_notifications(
    user_type: str,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    status_filter: str | None = Query(None, alias="status"),
    type: str | None = Query(None),
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    _ensure_own_inbox(user, user_type)
    result = await service.get_user_notifications(
        db, user.id, user_type, page=page, limit=limit, status=status_filter, type=type
    )
    return result.to_response(NotificationListResponse)


@router.get("/{user_type}/unread-count")
async def unread_count(
    user_type: str,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    _ensure_own_inbox(user, user_type)
    result = await service.get_unread_notification_count(db, user.id, user_type)
    return result.to_response(UnreadCountResponse)


@router.patch("/{user_type}/read-all")
async def mark_all_read(
    user_type: str,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    _ensure_own_inbox(user, user_type)
    result = await service.mark_all_notifications_as_read(db, user.id, user_type)
    return result.to_response(MarkAllReadResponse)


@router.patch("/{user_type}/{notification_id}/read")
async def mark_read(
    user_type: str,
    notification_id: int,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    _ensure_own_inbox(user, user_type)
    result = await service.mark_notification_as_read(db, notification_id, user.id, user_type)
    return result.to_response(NotificationResponse)
