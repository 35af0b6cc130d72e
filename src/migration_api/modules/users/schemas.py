"""
User Schemas
"""

from pydantic import BaseModel


class OnboardingStatusResponse(BaseModel):
    """Onboarding progress for the current member."""

    is_complete: bool
    completion_percentage: int
    completed_fields: list[str]
    pending_fields: list[str]
