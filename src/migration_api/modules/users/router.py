"""
Onboarding Router

Endpoints:
- GET /onboarding/status - Profile completion for the current member
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from migration_api.core.auth import CurrentUser, get_current_member
from migration_api.core.database import get_db
from migration_api.modules.users import service
from migration_api.modules.users.schemas import OnboardingStatusResponse

router = APIRouter()


@router.get("/status")
async def get_onboarding_status(
    member: CurrentUser = Depends(get_current_member),
    db: AsyncSession = Depends(get_db),
):
    result = await service.get_onboarding_status(db, member.id)
    return result.to_response(OnboardingStatusResponse)
