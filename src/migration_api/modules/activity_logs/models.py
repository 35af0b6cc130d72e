"""
Activity Log Models

Audit trail of admin and system actions.
"""

from typing import Any

from sqlalchemy import Index, Integer, String
from sqlalchemy.dialects.postgresql import JSON
from sqlalchemy.orm import Mapped, mapped_column

from migration_api.modules.shared import BaseModel


class ActivityLog(BaseModel):
    """A single recorded action against an entity."""

    __tablename__ = "activity_logs"

    activity: Mapped[str] = mapped_column(String(255), nullable=False)
    details: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    admin_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    entity_type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    entity_id: Mapped[int | None] = mapped_column(Integer, nullable=True)

    __table_args__ = (Index("ix_activity_logs_entity", "entity_type", "entity_id"),)

    def __repr__(self) -> str:
        return f"<ActivityLog(id={self.id}, activity={self.activity})>"
