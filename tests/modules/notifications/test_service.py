"""
Unit tests for the notifications service.
"""

from unittest.mock import AsyncMock, patch

import pytest

from migration_api.modules.notifications.models import Notification
from migration_api.modules.notifications.service import (
    get_unread_notification_count,
    get_user_notifications,
    mark_all_notifications_as_read,
    mark_notification_as_read,
)

SERVICE = "migration_api.modules.notifications.service"


@pytest.fixture
def unread_notification():
    return Notification(
        id=12,
        user_id=7,
        user_type="member",
        type="application",
        title="Application Approved!",
        message="Your application has been approved.",
        priority=1,
        status="unread",
    )


class TestGetUserNotifications:
    """Tests for get_user_notifications function."""

    @pytest.mark.asyncio
    async def test_invalid_user_type(self, mock_db):
        """Only members and agents have notification feeds."""
        result = await get_user_notifications(mock_db, 7, "admin")

        assert result.status_code == 400
        assert result.message == "Invalid user type"

    @pytest.mark.asyncio
    async def test_invalid_status_filter(self, mock_db):
        """Reject status filters other than read and unread."""
        result = await get_user_notifications(mock_db, 7, "member", status="archived")

        assert result.status_code == 400

    @pytest.mark.asyncio
    async def test_page_is_forwarded_with_filters(self, mock_db, unread_notification):
        """Filters and paging reach the repository and pagination is computed."""
        with patch(f"{SERVICE}.repository") as mock_repo:
            mock_repo.get_for_user = AsyncMock(return_value=([unread_notification], 11))
            result = await get_user_notifications(
                mock_db, 7, "member", page=2, limit=10, status="unread", type="application"
            )

        assert result.data["notifications"] == [unread_notification]
        assert result.data["pagination"]["total_pages"] == 2
        mock_repo.get_for_user.assert_awaited_once_with(
            mock_db, 7, "member", status="unread", type="application", skip=10, limit=10
        )


class TestReadState:
    """Tests for read-state updates and the unread counter."""

    @pytest.mark.asyncio
    async def test_mark_one_read(self, mock_db, unread_notification):
        """Successfully mark a single notification as read."""
        with patch(f"{SERVICE}.repository") as mock_repo:
            mock_repo.get_by_id_for_user = AsyncMock(return_value=unread_notification)
            result = await mark_notification_as_read(mock_db, 12, 7, "member")

        assert result.success is True
        assert unread_notification.status == "read"
        mock_db.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_mark_someone_elses_notification(self, mock_db):
        """Another user's notification id gives 404."""
        with patch(f"{SERVICE}.repository") as mock_repo:
            mock_repo.get_by_id_for_user = AsyncMock(return_value=None)
            result = await mark_notification_as_read(mock_db, 12, 8, "member")

        assert result.status_code == 404
        assert result.message == "Notification not found"
        mock_db.commit.assert_not_called()

    @pytest.mark.asyncio
    async def test_mark_all_read(self, mock_db):
        """Report how many notifications were marked read."""
        with patch(f"{SERVICE}.repository") as mock_repo:
            mock_repo.mark_all_read = AsyncMock(return_value=3)
            result = await mark_all_notifications_as_read(mock_db, 3, "agent")

        assert result.data == {"updated": 3}
        mock_repo.mark_all_read.assert_awaited_once_with(mock_db, 3, "agent")
        mock_db.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_mark_all_read_failure_rolls_back(self, mock_db):
        """Roll back when the bulk update fails."""
        with patch(f"{SERVICE}.repository") as mock_repo:
            mock_repo.mark_all_read = AsyncMock(side_effect=RuntimeError("connection reset"))
            result = await mark_all_notifications_as_read(mock_db, 3, "agent")

        assert result.status_code == 500
        mock_db.rollback.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_unread_count(self, mock_db):
        """Return the unread counter for the user."""
        with patch(f"{SERVICE}.repository") as mock_repo:
            mock_repo.count_unread = AsyncMock(return_value=5)
            result = await get_unread_notification_count(mock_db, 7, "member")

        assert result.data == {"unread_count": 5}
