"""
Unit tests for the member onboarding status read.
"""

from datetime import date
from unittest.mock import AsyncMock, patch

import pytest

from migration_api.modules.users.models import Member
from migration_api.modules.users.service import get_onboarding_status

SERVICE = "migration_api.modules.users.service"


@pytest.fixture
def onboarded_member():
    return Member(
        id=7,
        email="ada@example.com",
        first_name="Ada",
        last_name="Obi",
        phone="+2348000000000",
        gender="female",
        dob=date(2000, 5, 17),
        home_address="12 Marina Road",
        home_city="Lagos",
        home_state="Lagos",
        home_country="Nigeria",
        nationality="Nigerian",
        id_type="passport",
        id_number="A1234567",
        id_scan_front="https://files.example.com/id-front.jpg",
    )


class TestGetOnboardingStatus:
    """Tests for get_onboarding_status function."""

    @pytest.mark.asyncio
    async def test_fully_onboarded(self, mock_db, onboarded_member):
        """A member with every onboarding field filled is complete at 100%."""
        with patch(f"{SERVICE}.MemberRepository") as mock_members:
            mock_members.get_by_id = AsyncMock(return_value=onboarded_member)
            result = await get_onboarding_status(mock_db, 7)

        assert result.success is True
        assert result.data["is_complete"] is True
        assert result.data["completion_percentage"] == 100
        assert result.data["pending_fields"] == []
        assert len(result.data["completed_fields"]) == 11

    @pytest.mark.asyncio
    async def test_partial_progress(self, mock_db, onboarded_member):
        """Missing and empty fields are pending and lower the percentage."""
        onboarded_member.id_scan_front = None
        onboarded_member.home_city = ""

        with patch(f"{SERVICE}.MemberRepository") as mock_members:
            mock_members.get_by_id = AsyncMock(return_value=onboarded_member)
            result = await get_onboarding_status(mock_db, 7)

        assert result.data["is_complete"] is False
        assert result.data["pending_fields"] == ["home_city", "id_scan_front"]
        assert result.data["completion_percentage"] == 82
        assert "home_city" not in result.data["completed_fields"]

    @pytest.mark.asyncio
    async def test_member_not_found(self, mock_db):
        """Unknown members get a 404."""
        with patch(f"{SERVICE}.MemberRepository") as mock_members:
            mock_members.get_by_id = AsyncMock(return_value=None)
            result = await get_onboarding_status(mock_db, 99)

        assert result.status_code == 404
        assert result.message == "Member not found"
