"""
Application Schemas

Pydantic schemas for request validation and response serialization.
"""

from datetime import datetime
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from migration_api.modules.documents.schemas import DocumentResponse
from migration_api.modules.programs.models import ProgramCategory
from migration_api.modules.shared.schemas import Pagination

PaymentStatusValue = Literal["Unpaid", "Paid", "refunded"]


class ApplicationCreate(BaseModel):
    """Request body for POST /applications."""

    program_id: int = Field(..., ge=1)
    # Must match the program when given
    program_category: ProgramCategory | None = None
    intake: str | None = Field(None, max_length=50)

    @field_validator("program_category", mode="before")
    @classmethod
    def normalize_category(cls, value):
        if isinstance(value, str):
            return value.strip().lower()
        return value


class AgentApplicationCreate(ApplicationCreate):
    """Request body for POST /agent/applications."""

    student_id: int = Field(..., ge=1)


class ApplicationStatusUpdate(BaseModel):
    """
    Partial update applied by the transition engine.

    Fields left as None are not changed.
    """

    application_status: str | None = Field(None, min_length=1, max_length=50)
    payment_status: PaymentStatusValue | None = None
    application_stage: int | None = Field(None, ge=1)
    intake: str | None = Field(None, max_length=50)


class AgentApplicationUpdate(BaseModel):
    """Fields an agent may change on their own application."""

    application_status: str | None = Field(None, min_length=1, max_length=50)
    intake: str | None = Field(None, max_length=50)


class ProgramSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    program_name: str
    school_name: str
    category: str
    degree: str | None = None
    application_fee: Decimal | None = None


class ApplicationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    application_type: str
    member_id: int
    agent_id: int | None = None
    program_id: int
    program_category: str | None = None
    application_stage: int
    payment_status: str
    application_status: str
    intake: str | None = None
    application_date: datetime | None = None
    application_status_date: datetime | None = None
    program: ProgramSummary | None = None
    created_at: datetime | None = None


class ApplicationListResponse(BaseModel):
    applications: list[ApplicationResponse]
    pagination: Pagination


class ApplicationDetailResponse(BaseModel):
    application: ApplicationResponse
    documents: list[DocumentResponse]


class CategoryEligibility(BaseModel):
    is_eligible: bool
    missing_documents: list[str]
    message: str


class EligibilityResponse(BaseModel):
    undergraduate: CategoryEligibility
    postgraduate: CategoryEligibility
