"""
User Models

Members (students applying directly), agents, and the student records
agents manage on behalf of their clients.
"""

import enum
from datetime import date
from sqlalchemy import Date, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from migration_api.modules.shared import BaseModel


class UserType(str, enum.Enum):
    """Owner kinds for wallets and notifications."""

    MEMBER = "member"
    AGENT = "agent"


class Member(BaseModel):
    """
    A student using the platform directly.

    Profile fields are nullable because members fill them in after sign-up;
    the profile completeness checker decides when the profile is usable.
    """

    __tablename__ = "members"

    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    other_names: Mapped[str | None] = mapped_column(String(100), nullable=True)

    # Profile
    phone: Mapped[str | None] = mapped_column(String(20), nullable=True)
    dob: Mapped[date | None] = mapped_column(Date, nullable=True)
    gender: Mapped[str | None] = mapped_column(String(20), nullable=True)
    nationality: Mapped[str | None] = mapped_column(String(100), nullable=True)

    # Identification
    id_type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    id_number: Mapped[str | None] = mapped_column(String(100), nullable=True)
    id_scan_front: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Home address
    home_address: Mapped[str | None] = mapped_column(String(500), nullable=True)
    home_city: Mapped[str | None] = mapped_column(String(100), nullable=True)
    home_zip_code: Mapped[str | None] = mapped_column(String(20), nullable=True)
    home_state: Mapped[str | None] = mapped_column(String(100), nullable=True)
    home_country: Mapped[str | None] = mapped_column(String(100), nullable=True)

    def __repr__(self) -> str:
        return f"<Member(id={self.id}, email={self.email})>"

    @property
    def full_name(self) -> str:
        """Return member's full name."""
        return f"{self.first_name} {self.last_name}"


class Agent(BaseModel):
    """A recruitment agent submitting applications for managed students."""

    __tablename__ = "agents"

    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    company_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    contact_person: Mapped[str] = mapped_column(String(200), nullable=False)
    phone: Mapped[str | None] = mapped_column(String(20), nullable=True)

    students: Mapped[list["AgentStudent"]] = relationship(
        "AgentStudent",
        back_populates="agent",
        lazy="raise",
    )

    def __repr__(self) -> str:
        return f"<Agent(id={self.id}, email={self.email})>"

    @property
    def display_name(self) -> str:
        return self.contact_person or self.company_name or self.email


class AgentStudent(BaseModel):
    """A student record owned by an agent."""

    __tablename__ = "agent_students"

    # ON DELETE CASCADE: students are meaningless without their agent
    agent_id: Mapped[int] = mapped_column(
        ForeignKey("agents.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(20), nullable=True)
    nationality: Mapped[str | None] = mapped_column(String(100), nullable=True)

    agent: Mapped["Agent"] = relationship("Agent", back_populates="students", lazy="selectin")

    def __repr__(self) -> str:
        return f"<AgentStudent(id={self.id}, agent_id={self.agent_id})>"

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
