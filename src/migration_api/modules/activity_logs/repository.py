"""
Activity Log Repository

Best-effort audit writes. The insert runs inside a SAVEPOINT so a failure
only rolls back the log row, never the caller's transaction.
"""

import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from .models import ActivityLog

logger = logging.getLogger(__name__)


async def record_activity(
    db: AsyncSession,
    *,
    activity: str,
    details: dict[str, Any] | None = None,
    admin_id: int | None = None,
    entity_type: str | None = None,
    entity_id: int | None = None,
) -> ActivityLog | None:
    """
    Record an activity entry.

    Returns:
        The created ActivityLog, or None if the write failed
    """
    try:
        async with db.begin_nested():
            entry = ActivityLog(
                activity=activity,
                details=details,
                admin_id=admin_id,
                entity_type=entity_type,
                entity_id=entity_id,
            )
            db.add(entry)
            await db.flush()
        return entry
    except Exception as e:
        logger.warning(f"Failed to record activity '{activity}': {e}")
        return None
