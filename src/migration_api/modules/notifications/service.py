"""
Notifications Service Layer

Listing and read-state management for in-app notifications. Every public
function returns a ServiceResult envelope.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from migration_api.core.errors import BadRequestError, ServiceError
from migration_api.core.responses import ServiceResult
from migration_api.modules.notifications import repository
from migration_api.modules.notifications.models import NotificationStatus
from migration_api.modules.shared.schemas import build_pagination, normalize_page
from migration_api.modules.users.models import UserType

logger = logging.getLogger(__name__)


def _validate_user_type(user_type: str) -> str:
    if user_type not in {t.value for t in UserType}:
        raise BadRequestError("Invalid user type", "INVALID_USER_TYPE")
    return user_type


async def get_user_notifications(
    db: AsyncSession,
    user_id: int,
    user_type: str,
    *,
    page: int = 1,
    limit: int = 10,
    status: str | None = None,
    type: str | None = None,
) -> ServiceResult:
    """
    Get a page of notifications for a user.

    Ordered by priority (highest first), then by creation time (newest first).
    """
    try:
        _validate_user_type(user_type)
        if status and status not in {s.value for s in NotificationStatus}:
            raise BadRequestError("Invalid notification status", "INVALID_STATUS")

        page, limit, skip = normalize_page(page, limit)
        notifications, total = await repository.get_for_user(
            db, user_id, user_type, status=status, type=type, skip=skip, limit=limit
        )

        return ServiceResult.ok(
            "Notifications retrieved successfully",
            {
                "notifications": notifications,
                "pagination": build_pagination(total, page, limit),
            },
        )
    except ServiceError as e:
        return ServiceResult.from_error(e)
    except Exception as e:
        logger.exception(f"Failed to list notifications for {user_type}:{user_id}")
        return ServiceResult.failure(str(e) or "Failed to retrieve notifications", 500)


async def mark_notification_as_read(
    db: AsyncSession, notification_id: int, user_id: int, user_type: str
) -> ServiceResult:
    """Mark one of the user's notifications as read."""
    try:
        _validate_user_type(user_type)
        notification = await repository.get_by_id_for_user(db, notification_id, user_id, user_type)
        if not notification:
            return ServiceResult.failure("Notification not found", 404)

        notification.status = NotificationStatus.READ.value
        await db.commit()
        await db.refresh(notification)

        return ServiceResult.ok("Notification marked as read", notification)
    except ServiceError as e:
        return ServiceResult.from_error(e)
    except Exception as e:
        await db.rollback()
        logger.exception(f"Failed to mark notification {notification_id} as read")
        return ServiceResult.failure(str(e) or "Failed to mark notification as read", 500)


async def mark_all_notifications_as_read(
    db: AsyncSession, user_id: int, user_type: str
) -> ServiceResult:
    """Mark every unread notification of the user as read."""
    try:
        _validate_user_type(user_type)
        updated = await repository.mark_all_read(db, user_id, user_type)
        await db.commit()

        logger.info(f"Marked {updated} notification(s) read for {user_type}:{user_id}")
        return ServiceResult.ok("All notifications marked as read", {"updated": updated})
    except ServiceError as e:
        return ServiceResult.from_error(e)
    except Exception as e:
        await db.rollback()
        logger.exception(f"Failed to mark notifications read for {user_type}:{user_id}")
        return ServiceResult.failure(str(e) or "Failed to mark notifications as read", 500)


async def get_unread_notification_count(
    db: AsyncSession, user_id: int, user_type: str
) -> ServiceResult:
    try:
        _validate_user_type(user_type)
        count = await repository.count_unread(db, user_id, user_type)
        return ServiceResult.ok("Unread count retrieved successfully", {"unread_count": count})
    except ServiceError as e:
        return ServiceResult.from_error(e)
    except Exception as e:
        logger.exception(f"Failed to count unread notifications for {user_type}:{user_id}")
        return ServiceResult.failure(str(e) or "Failed to retrieve unread count", 500)
