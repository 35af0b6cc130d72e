"""
Member Onboarding Service

Read-only onboarding progress for members.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from migration_api.core.responses import ServiceResult
from migration_api.modules.users.profile import (
    ONBOARDING_FIELDS,
    is_onboarding_complete,
    missing_onboarding_fields,
)
from migration_api.modules.users.repository import MemberRepository

logger = logging.getLogger(__name__)


async def get_onboarding_status(db: AsyncSession, member_id: int) -> ServiceResult:
    """
    Report how much of the onboarding profile the member has filled in.

    Empty strings count as pending, so the percentage only reaches 100
    when ``is_complete`` is true.
    """
    try:
        member = await MemberRepository.get_by_id(db, member_id)
        if member is None:
            return ServiceResult.failure("Member not found", 404)

        pending = missing_onboarding_fields(member)
        completed = [field for field in ONBOARDING_FIELDS if field not in pending]

        return ServiceResult.ok(
            "Onboarding status retrieved",
            {
                "is_complete": is_onboarding_complete(member),
                "completion_percentage": round(len(completed) / len(ONBOARDING_FIELDS) * 100),
                "completed_fields": completed,
                "pending_fields": pending,
            },
        )
    except Exception as e:
        logger.exception(f"Failed to read onboarding status for member {member_id}")
        return ServiceResult.failure(str(e) or "Error fetching onboarding status", 500)
