"""
Document Schemas
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class DocumentUploadRequest(BaseModel):
    """Upload metadata; the file itself is already in storage."""

    document_type: str = Field(..., min_length=1, max_length=50)
    document_path: str = Field(..., min_length=1, max_length=2000)


class DocumentStatusUpdateRequest(BaseModel):
    status: Literal["pending", "approved", "rejected"]
    admin_comment: str | None = Field(None, max_length=2000)


class DocumentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    document_type: str
    document_path: str
    status: str
    admin_comment: str | None = None
    reviewed_by: int | None = None
    reviewed_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
