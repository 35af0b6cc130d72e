"""
Documents Service Layer

Upload bookkeeping and admin review of documents. Storage is external:
callers pass the already-stored path or URL.

Review flow (update_document_status):
1. Validate the document type (direct/agent) and the review status
2. Load the document
3. Apply the status and review stamps
4. For approved/rejected outcomes, notify the owning user
   (member for direct documents, agent for student documents)
5. Commit; any failure rolls back the whole review
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from migration_api.core.errors import BadRequestError, NotFoundError, ServiceError
from migration_api.core.responses import ServiceResult
from migration_api.modules.activity_logs.repository import record_activity
from migration_api.modules.documents import repository
from migration_api.modules.documents.models import (
    AgentStudentDocument,
    ApplicationDocument,
    DocumentStatus,
)
from migration_api.modules.documents.requirements import (
    VALID_DOCUMENT_TYPES,
    format_document_name,
)
from migration_api.modules.notifications import repository as notification_repository
from migration_api.modules.notifications.models import NotificationType
from migration_api.modules.users.models import UserType
from migration_api.modules.users.repository import AgentStudentRepository

logger = logging.getLogger(__name__)

DOCUMENT_OWNER_TYPES = {repository.DIRECT, repository.AGENT}
REVIEW_OUTCOMES = {DocumentStatus.APPROVED.value, DocumentStatus.REJECTED.value}


def _validate_document_type_name(document_type: str) -> None:
    if document_type not in VALID_DOCUMENT_TYPES:
        raise BadRequestError(
            f"Invalid document type. Valid types: {', '.join(sorted(VALID_DOCUMENT_TYPES))}",
            "INVALID_DOCUMENT_TYPE",
        )


async def add_member_document(
    db: AsyncSession, member_id: int, document_type: str, document_path: str
) -> ServiceResult:
    """
    Record a member's upload, replacing any previous document of the same type.

    A replaced document goes back to pending review.
    """
    try:
        _validate_document_type_name(document_type)
        document, created = await repository.upsert_member_document(
            db, member_id, document_type, document_path
        )
        await db.commit()
        await db.refresh(document)
    except ServiceError as e:
        return ServiceResult.from_error(e)
    except Exception as e:
        await db.rollback()
        logger.exception(f"Failed to save document {document_type} for member {member_id}")
        return ServiceResult.failure(str(e) or "Failed to upload document", 500)

    logger.info(
        f"{'Created' if created else 'Replaced'} {document_type} document for member {member_id}"
    )
    if created:
        return ServiceResult.ok("Document uploaded successfully", document, status_code=201)
    return ServiceResult.ok("Document updated successfully", document)


async def add_student_document(
    db: AsyncSession,
    agent_id: int,
    student_id: int,
    document_type: str,
    document_path: str,
) -> ServiceResult:
    """Record an agent's upload for one of their students."""
    try:
        _validate_document_type_name(document_type)

        student = await AgentStudentRepository.get_for_agent(db, student_id, agent_id)
        if not student:
            raise NotFoundError("Student not found or doesn't belong to agent", "STUDENT_NOT_FOUND")

        document, created = await repository.upsert_student_document(
            db, agent_id, student_id, document_type, document_path
        )
        await db.commit()
        await db.refresh(document)
    except ServiceError as e:
        return ServiceResult.from_error(e)
    except Exception as e:
        await db.rollback()
        logger.exception(f"Failed to save document {document_type} for student {student_id}")
        return ServiceResult.failure(str(e) or "Failed to upload document", 500)

    if created:
        return ServiceResult.ok("Document uploaded successfully", document, status_code=201)
    return ServiceResult.ok("Document updated successfully", document)


async def get_member_documents(db: AsyncSession, member_id: int) -> ServiceResult:
    try:
        documents = await repository.get_member_documents(db, member_id)
        return ServiceResult.ok("Documents retrieved successfully", documents)
    except Exception as e:
        logger.exception(f"Failed to list documents for member {member_id}")
        return ServiceResult.failure(str(e) or "Failed to retrieve documents", 500)


async def get_student_documents(db: AsyncSession, agent_id: int, student_id: int) -> ServiceResult:
    try:
        student = await AgentStudentRepository.get_for_agent(db, student_id, agent_id)
        if not student:
            return ServiceResult.failure("Student not found or doesn't belong to agent", 404)

        documents = await repository.get_student_documents(db, student_id)
        return ServiceResult.ok("Documents retrieved successfully", documents)
    except Exception as e:
        logger.exception(f"Failed to list documents for student {student_id}")
        return ServiceResult.failure(str(e) or "Failed to retrieve documents", 500)


def _review_notification(
    document: ApplicationDocument | AgentStudentDocument,
    status: str,
    admin_comment: str | None,
) -> dict:
    """Build the notification for an approved/rejected document."""
    name = format_document_name(document.document_type)

    if isinstance(document, AgentStudentDocument):
        user_id, user_type = document.agent_id, UserType.AGENT.value
        link = f"/agent/students/{document.student_id}/documents"
    else:
        user_id, user_type = document.member_id, UserType.MEMBER.value
        link = "/member/documents"

    if status == DocumentStatus.APPROVED.value:
        title = "Document Approved"
        message = f'Your "{name}" document has been approved.'
    else:
        title = "Document Rejected"
        message = f'Your "{name}" document has been rejected.'
        if admin_comment:
            message += f" Reason: {admin_comment}"

    return {
        "user_id": user_id,
        "user_type": user_type,
        "type": NotificationType.DOCUMENT.value,
        "title": title,
        "message": message,
        "link": link,
        "priority": 2,
        "metadata": {
            "document_id": document.id,
            "document_type": document.document_type,
            "status": status,
            "action": f"document_{status}",
        },
    }


async def update_document_status(
    db: AsyncSession,
    document_id: int,
    document_type: str,
    status: str,
    *,
    admin_id: int | None = None,
    admin_comment: str | None = None,
) -> ServiceResult:
    """
    Apply an admin review decision to a single document.

    Args:
        db: Database session
        document_id: Document primary key
        document_type: "direct" (member document) or "agent" (student document)
        status: pending, approved or rejected
        admin_id: Reviewing admin
        admin_comment: Optional reviewer comment (shown on rejection)
    """
    if document_type not in DOCUMENT_OWNER_TYPES:
        return ServiceResult.failure("Invalid document type", 400)
    if status not in {s.value for s in DocumentStatus}:
        return ServiceResult.failure("Invalid document status", 400)

    try:
        document = await repository.get_document_by_id(db, document_id, document_type)
        if not document:
            await db.rollback()
            return ServiceResult.failure("Document not found", 404)

        old_status = document.status
        await repository.set_review_status(
            db, document, status, reviewed_by=admin_id, admin_comment=admin_comment
        )

        await record_activity(
            db,
            activity="document_status_updated",
            details={"from": old_status, "to": status, "document_type": document.document_type},
            admin_id=admin_id,
            entity_type=f"{document_type}_document",
            entity_id=document.id,
        )

        if status in REVIEW_OUTCOMES:
            await notification_repository.create_notification(
                db, **_review_notification(document, status, admin_comment)
            )

        await db.commit()
        await db.refresh(document)

        logger.info(f"Document {document_type}:{document_id} status {old_status} -> {status}")
        return ServiceResult.ok("Document status updated successfully", document)

    except Exception as e:
        await db.rollback()
        logger.exception(f"Failed to update document {document_type}:{document_id}")
        return ServiceResult.failure(str(e) or "Failed to update document status", 500)
