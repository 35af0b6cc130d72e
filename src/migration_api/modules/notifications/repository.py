"""
Notifications Repository

Database operations for in-app notifications. Writes flush but never
commit; the calling service owns the transaction.
"""

from typing import Any

from sqlalchemy import desc, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from .models import Notification, NotificationStatus


async def create_notification(
    db: AsyncSession,
    *,
    user_id: int,
    user_type: str,
    type: str,
    title: str,
    message: str,
    link: str | None = None,
    priority: int = 0,
    metadata: dict[str, Any] | None = None,
) -> Notification:
    """Insert a notification inside the caller's transaction."""
    notification = Notification(
        user_id=user_id,
        user_type=user_type,
        type=type,
        title=title,
        message=message,
        link=link,
        priority=priority,
        status=NotificationStatus.UNREAD.value,
        extra_data=metadata or {},
    )
    db.add(notification)
    await db.flush()
    return notification


async def get_for_user(
    db: AsyncSession,
    user_id: int,
    user_type: str,
    *,
    status: str | None = None,
    type: str | None = None,
    skip: int = 0,
    limit: int = 10,
) -> tuple[list[Notification], int]:
    """
    Page through a user's notifications, highest priority first, then newest.

    Returns:
        Tuple of (notifications, total count matching filters)
    """
    query = select(Notification).where(
        Notification.user_id == user_id,
        Notification.user_type == user_type,
    )
    if status:
        query = query.where(Notification.status == status)
    if type:
        query = query.where(Notification.type == type)

    total_result = await db.execute(select(func.count()).select_from(query.subquery()))
    total = total_result.scalar() or 0

    query = (
        query.order_by(desc(Notification.priority), desc(Notification.created_at))
        .offset(skip)
        .limit(limit)
    )
    result = await db.execute(query)
    return list(result.scalars().all()), total


async def get_by_id_for_user(
    db: AsyncSession, notification_id: int, user_id: int, user_type: str
) -> Notification | None:
    result = await db.execute(
        select(Notification).where(
            Notification.id == notification_id,
            Notification.user_id == user_id,
            Notification.user_type == user_type,
        )
    )
    return result.scalar_one_or_none()


async def mark_all_read(db: AsyncSession, user_id: int, user_type: str) -> int:
    """Mark every unread notification as read. Returns the number of rows updated."""
    result = await db.execute(
        update(Notification)
        .where(
            Notification.user_id == user_id,
            Notification.user_type == user_type,
            Notification.status == NotificationStatus.UNREAD.value,
        )
        .values(status=NotificationStatus.READ.value)
    )
    return result.rowcount or 0


async def count_unread(db: AsyncSession, user_id: int, user_type: str) -> int:
    result = await db.execute(
        select(func.count(Notification.id)).where(
            Notification.user_id == user_id,
            Notification.user_type == user_type,
            Notification.status == NotificationStatus.UNREAD.value,
        )
    )
    return result.scalar() or 0
