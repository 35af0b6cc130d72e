"""
Unit tests for document uploads and admin review.
"""

from unittest.mock import AsyncMock, patch

import pytest

from migration_api.modules.documents.models import AgentStudentDocument, ApplicationDocument
from migration_api.modules.documents.service import (
    add_member_document,
    add_student_document,
    get_student_documents,
    update_document_status,
)

SERVICE = "migration_api.modules.documents.service"


@pytest.fixture
def member_document():
    return ApplicationDocument(
        id=1,
        member_id=7,
        document_type="olevelPin",
        document_path="https://files.example.com/olevel-pin.pdf",
        status="pending",
    )


@pytest.fixture
def student_document():
    return AgentStudentDocument(
        id=2,
        student_id=11,
        agent_id=3,
        document_type="resume",
        document_path="https://files.example.com/resume.pdf",
        status="pending",
    )


class TestUploads:
    """Tests for member and agent-student document uploads."""

    @pytest.mark.asyncio
    async def test_invalid_type_rejected(self, mock_db):
        """Reject document types outside the known set."""
        with patch(f"{SERVICE}.repository") as mock_repo:
            mock_repo.upsert_member_document = AsyncMock()
            result = await add_member_document(mock_db, 7, "selfie", "path")

        assert result.status_code == 400
        mock_repo.upsert_member_document.assert_not_called()

    @pytest.mark.asyncio
    async def test_first_upload_returns_201(self, mock_db, member_document):
        """Successfully upload a new document with a 201."""
        with patch(f"{SERVICE}.repository") as mock_repo:
            mock_repo.upsert_member_document = AsyncMock(return_value=(member_document, True))
            result = await add_member_document(mock_db, 7, "olevelPin", "path")

        assert result.status_code == 201
        assert result.data is member_document
        mock_db.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_reupload_returns_200(self, mock_db, member_document):
        """Replacing an existing document returns 200."""
        with patch(f"{SERVICE}.repository") as mock_repo:
            mock_repo.upsert_member_document = AsyncMock(return_value=(member_document, False))
            result = await add_member_document(mock_db, 7, "olevelPin", "path")

        assert result.status_code == 200
        assert result.message == "Document updated successfully"

    @pytest.mark.asyncio
    async def test_student_must_belong_to_agent(self, mock_db):
        """Agents cannot upload for students they do not manage."""
        with (
            patch(f"{SERVICE}.repository") as mock_repo,
            patch(f"{SERVICE}.AgentStudentRepository") as mock_students,
        ):
            mock_students.get_for_agent = AsyncMock(return_value=None)
            mock_repo.upsert_student_document = AsyncMock()
            result = await add_student_document(mock_db, 3, 11, "resume", "path")

        assert result.status_code == 404
        mock_repo.upsert_student_document.assert_not_called()

    @pytest.mark.asyncio
    async def test_list_student_documents_checks_owner(self, mock_db):
        """Listing another agent's student documents gives 404."""
        with patch(f"{SERVICE}.AgentStudentRepository") as mock_students:
            mock_students.get_for_agent = AsyncMock(return_value=None)
            result = await get_student_documents(mock_db, 3, 11)

        assert result.status_code == 404


class TestUpdateDocumentStatus:
    """Tests for update_document_status function."""

    @pytest.mark.asyncio
    async def test_invalid_document_type(self, mock_db):
        """Reject an owner type other than direct or agent."""
        result = await update_document_status(mock_db, 1, "bogus", "approved")

        assert result.status_code == 400
        assert result.message == "Invalid document type"
        mock_db.get.assert_not_called()

    @pytest.mark.asyncio
    async def test_invalid_status(self, mock_db):
        """Reject review statuses outside pending, approved and rejected."""
        result = await update_document_status(mock_db, 1, "direct", "archived")

        assert result.status_code == 400

    @pytest.mark.asyncio
    async def test_document_not_found(self, mock_db):
        """Unknown document ids give 404."""
        with patch(f"{SERVICE}.repository") as mock_repo:
            mock_repo.get_document_by_id = AsyncMock(return_value=None)
            result = await update_document_status(mock_db, 1, "direct", "approved")

        assert result.status_code == 404
        mock_db.commit.assert_not_called()

    @pytest.mark.asyncio
    async def test_approval_notifies_member(self, mock_db, member_document):
        """Approving a member document notifies that member."""
        with (
            patch(f"{SERVICE}.repository") as mock_repo,
            patch(f"{SERVICE}.notification_repository") as mock_notifications,
            patch(f"{SERVICE}.record_activity", new_callable=AsyncMock),
        ):
            mock_repo.get_document_by_id = AsyncMock(return_value=member_document)
            mock_repo.set_review_status = AsyncMock()
            mock_notifications.create_notification = AsyncMock()

            result = await update_document_status(
                mock_db, 1, "direct", "approved", admin_id=9
            )

        assert result.success is True
        mock_repo.set_review_status.assert_awaited_once_with(
            mock_db, member_document, "approved", reviewed_by=9, admin_comment=None
        )
        kwargs = mock_notifications.create_notification.call_args.kwargs
        assert kwargs["user_id"] == 7
        assert kwargs["user_type"] == "member"
        assert kwargs["title"] == "Document Approved"
        assert kwargs["priority"] == 2
        assert "Olevel Pin" in kwargs["message"]
        mock_db.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_rejection_notifies_agent_with_reason(self, mock_db, student_document):
        """Rejecting a student document notifies the agent and includes the reason."""
        with (
            patch(f"{SERVICE}.repository") as mock_repo,
            patch(f"{SERVICE}.notification_repository") as mock_notifications,
            patch(f"{SERVICE}.record_activity", new_callable=AsyncMock),
        ):
            mock_repo.get_document_by_id = AsyncMock(return_value=student_document)
            mock_repo.set_review_status = AsyncMock()
            mock_notifications.create_notification = AsyncMock()

            await update_document_status(
                mock_db, 2, "agent", "rejected", admin_comment="Blurry scan"
            )

        kwargs = mock_notifications.create_notification.call_args.kwargs
        assert kwargs["user_id"] == 3
        assert kwargs["user_type"] == "agent"
        assert kwargs["title"] == "Document Rejected"
        assert kwargs["message"].endswith("Reason: Blurry scan")

    @pytest.mark.asyncio
    async def test_reset_to_pending_sends_no_notification(self, mock_db, member_document):
        """Moving a document back to pending is silent."""
        with (
            patch(f"{SERVICE}.repository") as mock_repo,
            patch(f"{SERVICE}.notification_repository") as mock_notifications,
            patch(f"{SERVICE}.record_activity", new_callable=AsyncMock),
        ):
            mock_repo.get_document_by_id = AsyncMock(return_value=member_document)
            mock_repo.set_review_status = AsyncMock()
            mock_notifications.create_notification = AsyncMock()

            result = await update_document_status(mock_db, 1, "direct", "pending")

        assert result.success is True
        mock_notifications.create_notification.assert_not_called()

    @pytest.mark.asyncio
    async def test_notification_failure_rolls_back(self, mock_db, member_document):
        """Roll back the status change when the notification insert fails."""
        with (
            patch(f"{SERVICE}.repository") as mock_repo,
            patch(f"{SERVICE}.notification_repository") as mock_notifications,
            patch(f"{SERVICE}.record_activity", new_callable=AsyncMock),
        ):
            mock_repo.get_document_by_id = AsyncMock(return_value=member_document)
            mock_repo.set_review_status = AsyncMock()
            mock_notifications.create_notification = AsyncMock(side_effect=RuntimeError("boom"))

            result = await update_document_status(mock_db, 1, "direct", "approved")

        assert result.status_code == 500
        mock_db.rollback.assert_awaited_once()
        mock_db.commit.assert_not_called()
