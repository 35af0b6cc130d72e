"""
Notification Models

In-app notifications shown to members and agents. They record events;
they are never the source of truth for application state.
"""

import enum
from typing import Any

from sqlalchemy import Index, Integer, String, Text
from sqlalchemy.dialects.postgresql import JSON
from sqlalchemy.orm import Mapped, mapped_column

from migration_api.modules.shared import BaseModel


class NotificationStatus(str, enum.Enum):
    UNREAD = "unread"
    READ = "read"


class NotificationType(str, enum.Enum):
    APPLICATION = "application"
    PAYMENT = "payment"
    DOCUMENT = "document"
    WALLET = "wallet"
    SYSTEM = "system"


class Notification(BaseModel):
    """A notification addressed to one (user_id, user_type)."""

    __tablename__ = "notifications"

    user_id: Mapped[int] = mapped_column(Integer, nullable=False)
    user_type: Mapped[str] = mapped_column(String(20), nullable=False)
    type: Mapped[str] = mapped_column(String(50), nullable=False)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    link: Mapped[str | None] = mapped_column(String(500), nullable=True)
    status: Mapped[str] = mapped_column(
        String(10),
        nullable=False,
        default=NotificationStatus.UNREAD.value,
    )
    priority: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # "metadata" is reserved on declarative classes
    extra_data: Mapped[dict[str, Any] | None] = mapped_column("metadata", JSON, nullable=True)

    __table_args__ = (
        Index("ix_notifications_user", "user_id", "user_type", "status"),
    )

    def __repr__(self) -> str:
        return f"<Notification(id={self.id}, user={self.user_type}:{self.user_id}, type={self.type})>"
