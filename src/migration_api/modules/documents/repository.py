"""
Documents Repository

Database operations for member and agent-student documents. Writes flush
but never commit.
"""

from datetime import UTC, datetime

from sqlalchemy import distinct, select
from sqlalchemy.ext.asyncio import AsyncSession

from .models import AgentStudentDocument, ApplicationDocument, DocumentStatus

DIRECT = "direct"
AGENT = "agent"


async def get_uploaded_document_types(
    db: AsyncSession, owner_id: int, owner_kind: str = "member"
) -> set[str]:
    """Distinct document types uploaded by a member ("member") or agent student ("student")."""
    if owner_kind == "student":
        query = select(distinct(AgentStudentDocument.document_type)).where(
            AgentStudentDocument.student_id == owner_id
        )
    else:
        query = select(distinct(ApplicationDocument.document_type)).where(
            ApplicationDocument.member_id == owner_id
        )

    result = await db.execute(query)
    return set(result.scalars().all())


async def get_member_documents(db: AsyncSession, member_id: int) -> list[ApplicationDocument]:
    result = await db.execute(
        select(ApplicationDocument)
        .where(ApplicationDocument.member_id == member_id)
        .order_by(ApplicationDocument.document_type)
    )
    return list(result.scalars().all())


async def get_student_documents(db: AsyncSession, student_id: int) -> list[AgentStudentDocument]:
    result = await db.execute(
        select(AgentStudentDocument)
        .where(AgentStudentDocument.student_id == student_id)
        .order_by(AgentStudentDocument.document_type)
    )
    return list(result.scalars().all())


def _reset_for_reupload(document: ApplicationDocument | AgentStudentDocument, path: str) -> None:
    document.document_path = path
    document.status = DocumentStatus.PENDING.value
    document.admin_comment = None
    document.reviewed_by = None
    document.reviewed_at = None


async def upsert_member_document(
    db: AsyncSession, member_id: int, document_type: str, document_path: str
) -> tuple[ApplicationDocument, bool]:
    """
    Create or overwrite the member's document of this type.

    Returns:
        Tuple of (document, created)
    """
    result = await db.execute(
        select(ApplicationDocument).where(
            ApplicationDocument.member_id == member_id,
            ApplicationDocument.document_type == document_type,
        )
    )
    document = result.scalar_one_or_none()

    created = document is None
    if created:
        document = ApplicationDocument(
            member_id=member_id,
            document_type=document_type,
            document_path=document_path,
            status=DocumentStatus.PENDING.value,
        )
        db.add(document)
    else:
        _reset_for_reupload(document, document_path)

    await db.flush()
    return document, created


async def upsert_student_document(
    db: AsyncSession, agent_id: int, student_id: int, document_type: str, document_path: str
) -> tuple[AgentStudentDocument, bool]:
    """
    Create or overwrite the student's document of this type.

    Returns:
        Tuple of (document, created)
    """
    result = await db.execute(
        select(AgentStudentDocument).where(
            AgentStudentDocument.student_id == student_id,
            AgentStudentDocument.document_type == document_type,
        )
    )
    document = result.scalar_one_or_none()

    created = document is None
    if created:
        document = AgentStudentDocument(
            agent_id=agent_id,
            student_id=student_id,
            document_type=document_type,
            document_path=document_path,
            status=DocumentStatus.PENDING.value,
        )
        db.add(document)
    else:
        _reset_for_reupload(document, document_path)

    await db.flush()
    return document, created


async def get_document_by_id(
    db: AsyncSession, document_id: int, document_type: str
) -> ApplicationDocument | AgentStudentDocument | None:
    """Load a document by id from the direct or agent table."""
    model = AgentStudentDocument if document_type == AGENT else ApplicationDocument
    return await db.get(model, document_id)


async def set_review_status(
    db: AsyncSession,
    document: ApplicationDocument | AgentStudentDocument,
    status: str,
    *,
    reviewed_by: int | None = None,
    admin_comment: str | None = None,
):
    """Apply an admin review decision to a document."""
    document.status = status
    document.reviewed_by = reviewed_by
    document.reviewed_at = datetime.now(UTC)
    if admin_comment is not None:
        document.admin_comment = admin_comment
    await db.flush()
    return document
