"""
Member Applications Service

Application initiation and read operations for members applying directly.

Initiation checks, in order:
1. Member exists
2. Fewer than ``settings.max_active_applications`` active applications
3. Profile is complete
4. Program exists (its category drives the document checklist)
5. Required documents are uploaded, when require_document_validation is on
"""

import logging
from datetime import UTC, datetime

from sqlalchemy.ext.asyncio import AsyncSession

from migration_api.core.config import settings
from migration_api.core.errors import (
    BadRequestError,
    NotFoundError,
    PreconditionFailedError,
    ServiceError,
)
from migration_api.core.responses import ServiceResult
from migration_api.modules.app_config.provider import (
    REQUIRE_DOCUMENT_VALIDATION,
    ConfigProvider,
    is_flag_enabled,
)
from migration_api.modules.applications import repository
from migration_api.modules.applications.models import (
    Application,
    ApplicationStatus,
    PaymentStatus,
)
from migration_api.modules.applications.schemas import ApplicationCreate
from migration_api.modules.applications.service import resolve_program_category
from migration_api.modules.documents import repository as document_repository
from migration_api.modules.documents.requirements import (
    OWNER_MEMBER,
    ensure_required_documents,
    find_missing_documents,
    format_document_name,
    get_required_documents,
)
from migration_api.modules.programs.models import ProgramCategory
from migration_api.modules.programs.repository import ProgramRepository
from migration_api.modules.users.profile import format_field_name, missing_profile_fields
from migration_api.modules.users.repository import MemberRepository

logger = logging.getLogger(__name__)

ELIGIBILITY_CATEGORIES = (ProgramCategory.UNDERGRADUATE.value, ProgramCategory.POSTGRADUATE.value)


async def initiate_application(
    db: AsyncSession,
    member_id: int,
    data: ApplicationCreate,
    config: ConfigProvider,
) -> ServiceResult:
    """
    Create a pending, unpaid application after all eligibility checks pass.

    Args:
        db: Database session
        member_id: Applying member
        data: Program, optional category (must match the program) and intake
        config: Source for the require_document_validation flag

    Returns:
        ServiceResult with the created application (201)
    """
    try:
        member = await MemberRepository.get_by_id(db, member_id)
        if member is None:
            raise NotFoundError("Member not found", "MEMBER_NOT_FOUND")

        limit = settings.max_active_applications
        active = await repository.count_active_for_member(db, member_id)
        if active >= limit:
            raise BadRequestError(
                f"Maximum active applications ({limit}) reached", "MAX_ACTIVE_APPLICATIONS"
            )

        missing_fields = missing_profile_fields(member)
        if missing_fields:
            raise PreconditionFailedError(
                "Please complete your profile before applying",
                "PROFILE_INCOMPLETE",
                title="Incomplete profile",
                items=[format_field_name(field) for field in missing_fields],
                help="Fill in the listed fields on your profile page, then try again.",
            )

        program = await ProgramRepository.get_by_id(db, data.program_id)
        if program is None:
            raise NotFoundError("Program not found", "PROGRAM_NOT_FOUND")

        category = resolve_program_category(program, data.program_category)

        if await is_flag_enabled(config, REQUIRE_DOCUMENT_VALIDATION):
            await ensure_required_documents(db, member_id, category, owner_kind=OWNER_MEMBER)
        else:
            logger.info(f"Document validation disabled, skipping check for member {member_id}")

        application = await repository.create_application(
            db,
            Application,
            member_id=member_id,
            program_id=program.id,
            program_category=category,
            application_stage=1,
            payment_status=PaymentStatus.UNPAID.value,
            application_status=ApplicationStatus.PENDING.value,
            intake=data.intake,
            application_date=datetime.now(UTC),
        )
        application.program = program

        await db.commit()
        await db.refresh(application)

    except ServiceError as e:
        await db.rollback()
        return ServiceResult.from_error(e)
    except Exception as e:
        await db.rollback()
        logger.exception(f"Failed to initiate application for member {member_id}")
        return ServiceResult.failure(str(e) or "Error initiating application", 500)

    logger.info(
        f"Member {member_id} initiated application {application.id} for program {program.id}"
    )
    return ServiceResult.ok("Application initiated successfully", application, status_code=201)


async def get_application_status(
    db: AsyncSession, member_id: int, application_id: int
) -> ServiceResult:
    """Return one of the member's own applications with its program."""
    try:
        application = await repository.get_member_application(db, application_id, member_id)
        if application is None:
            return ServiceResult.failure("Application not found", 404)
        return ServiceResult.ok("Application details retrieved", application)
    except Exception as e:
        logger.exception(f"Failed to load application {application_id} for member {member_id}")
        return ServiceResult.failure(str(e) or "Error retrieving application details", 500)


async def get_member_applications(db: AsyncSession, member_id: int) -> ServiceResult:
    try:
        applications = await repository.list_for_member(db, member_id)
        return ServiceResult.ok("Applications retrieved successfully", applications)
    except Exception as e:
        logger.exception(f"Failed to list applications for member {member_id}")
        return ServiceResult.failure(str(e) or "Error retrieving applications", 500)


async def check_eligibility(db: AsyncSession, member_id: int) -> ServiceResult:
    """
    Report, for each category, whether the member's uploads satisfy its checklist.

    Missing documents are returned as display names (olevelPin -> Olevel Pin).
    """
    try:
        uploaded = await document_repository.get_uploaded_document_types(
            db, member_id, OWNER_MEMBER
        )

        eligibility = {}
        for category in ELIGIBILITY_CATEGORIES:
            missing = find_missing_documents(get_required_documents(category), uploaded)
            is_eligible = not missing
            eligibility[category] = {
                "is_eligible": is_eligible,
                "missing_documents": [format_document_name(doc) for doc in missing],
                "message": (
                    f"Eligible for {category} programs"
                    if is_eligible
                    else f"Missing required documents for {category} programs"
                ),
            }

        return ServiceResult.ok("Eligibility check completed", eligibility)
    except Exception as e:
        logger.exception(f"Eligibility check failed for member {member_id}")
        return ServiceResult.failure(str(e) or "Error checking eligibility", 500)
