"""
Document Models

Uploaded documents for members (direct applications) and for agent-managed
students. At most one row exists per (owner, document_type); re-uploads
overwrite it.
"""

import enum
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from migration_api.modules.shared import BaseModel


class DocumentStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class _ReviewedDocumentMixin:
    """Columns shared by member and student documents."""

    document_type: Mapped[str] = mapped_column(String(50), nullable=False)
    document_path: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=DocumentStatus.PENDING.value,
    )
    admin_comment: Mapped[str | None] = mapped_column(Text, nullable=True)
    reviewed_by: Mapped[int | None] = mapped_column(Integer, nullable=True)
    reviewed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)


class ApplicationDocument(_ReviewedDocumentMixin, BaseModel):
    """A document uploaded by a member."""

    __tablename__ = "application_documents"

    member_id: Mapped[int] = mapped_column(
        ForeignKey("members.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    __table_args__ = (
        UniqueConstraint("member_id", "document_type", name="uq_application_documents_member_type"),
    )

    def __repr__(self) -> str:
        return f"<ApplicationDocument(id={self.id}, member_id={self.member_id}, type={self.document_type})>"


class AgentStudentDocument(_ReviewedDocumentMixin, BaseModel):
    """A document uploaded by an agent for one of their students."""

    __tablename__ = "agent_student_documents"

    student_id: Mapped[int] = mapped_column(
        ForeignKey("agent_students.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    agent_id: Mapped[int] = mapped_column(
        ForeignKey("agents.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    __table_args__ = (
        UniqueConstraint("student_id", "document_type", name="uq_agent_student_documents_student_type"),
    )

    def __repr__(self) -> str:
        return f"<AgentStudentDocument(id={self.id}, student_id={self.student_id}, type={self.document_type})>"
