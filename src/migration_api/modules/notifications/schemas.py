"""
Notification Schemas
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from migration_api.modules.shared.schemas import Pagination


class NotificationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    user_type: str
    type: str
    title: str
    message: str
    link: str | None = None
    status: str
    priority: int
    metadata: dict[str, Any] | None = Field(default=None, validation_alias="extra_data")
    created_at: datetime | None = None


class NotificationListResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    notifications: list[NotificationResponse]
    pagination: Pagination


class UnreadCountResponse(BaseModel):
    unread_count: int


class MarkAllReadResponse(BaseModel):
    updated: int
