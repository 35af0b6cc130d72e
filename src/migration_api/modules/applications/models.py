"""
Application Models

Direct (member-owned) and agent-submitted program applications. Both tables
share the same lifecycle columns and are mutated only through the status
transition engine in service.py.
"""

import enum
from datetime import datetime
from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, func
from sqlalchemy.orm import Mapped, declared_attr, mapped_column, relationship

from migration_api.modules.programs.models import Program
from migration_api.modules.shared import BaseModel


class ApplicationType(str, enum.Enum):
    DIRECT = "direct"
    AGENT = "agent"


class PaymentStatus(str, enum.Enum):
    UNPAID = "Unpaid"
    PAID = "Paid"
    REFUNDED = "refunded"


class ApplicationStatus(str, enum.Enum):
    """
    Known status values. The column is free-form, so values outside this
    set are stored as given.
    """

    PENDING = "pending"
    IN_REVIEW = "in_review"
    PROCESSING = "processing"
    APPROVED = "approved"
    REJECTED = "rejected"
    ON_HOLD = "on_hold"
    SUBMITTED_TO_SCHOOL = "submitted_to_school"
    CANCELLED = "cancelled"
    COMPLETED = "completed"
    WITHDRAWN = "withdrawn"


# Statuses that no longer count toward a member's active application limit
INACTIVE_STATUSES = frozenset(
    {
        ApplicationStatus.REJECTED.value,
        ApplicationStatus.WITHDRAWN.value,
        ApplicationStatus.COMPLETED.value,
        ApplicationStatus.CANCELLED.value,
    }
)


class _ApplicationLifecycleMixin:
    """Columns shared by both application tables."""

    program_id: Mapped[int] = mapped_column(
        ForeignKey("programs.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    program_category: Mapped[str | None] = mapped_column(String(50), nullable=True)

    application_stage: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    payment_status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=PaymentStatus.UNPAID.value,
    )
    application_status: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        default=ApplicationStatus.PENDING.value,
        index=True,
    )
    intake: Mapped[str | None] = mapped_column(String(50), nullable=True)

    application_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    application_status_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    @declared_attr
    def program(cls) -> Mapped[Program]:
        return relationship(Program, lazy="selectin")


class Application(_ApplicationLifecycleMixin, BaseModel):
    """An application a member submitted directly."""

    __tablename__ = "applications"

    member_id: Mapped[int] = mapped_column(
        ForeignKey("members.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    application_type = ApplicationType.DIRECT.value

    def __repr__(self) -> str:
        return (
            f"<Application(id={self.id}, member_id={self.member_id}, "
            f"status={self.application_status}, payment={self.payment_status})>"
        )


class AgentApplication(_ApplicationLifecycleMixin, BaseModel):
    """
    An application an agent submitted for one of their students.

    ``member_id`` references the agent_students row (the applicant).
    """

    __tablename__ = "agent_applications"

    agent_id: Mapped[int] = mapped_column(
        ForeignKey("agents.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    member_id: Mapped[int] = mapped_column(
        ForeignKey("agent_students.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    application_type = ApplicationType.AGENT.value

    __table_args__ = (Index("ix_agent_applications_agent_status", "agent_id", "application_status"),)

    def __repr__(self) -> str:
        return (
            f"<AgentApplication(id={self.id}, agent_id={self.agent_id}, "
            f"student_id={self.member_id}, status={self.application_status})>"
        )
