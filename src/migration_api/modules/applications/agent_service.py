"""
Agent Applications Service

Agents submit and manage applications for the students they own. Status
changes go through the shared transition engine with agent ownership
enforced.
"""

import logging
from datetime import UTC, datetime

from sqlalchemy.ext.asyncio import AsyncSession

from migration_api.core.errors import NotFoundError, ServiceError
from migration_api.core.responses import ServiceResult
from migration_api.modules.app_config.provider import (
    ADMIN_APPLICATION_DOCUMENT,
    ConfigProvider,
    is_flag_enabled,
)
from migration_api.modules.applications import repository
from migration_api.modules.applications.models import (
    AgentApplication,
    ApplicationStatus,
    ApplicationType,
    PaymentStatus,
)
from migration_api.modules.applications.schemas import (
    AgentApplicationCreate,
    AgentApplicationUpdate,
    ApplicationStatusUpdate,
)
from migration_api.modules.applications.service import (
    resolve_program_category,
    update_application_status,
)
from migration_api.modules.documents.requirements import OWNER_STUDENT, ensure_required_documents
from migration_api.modules.programs.repository import ProgramRepository
from migration_api.modules.shared.schemas import build_pagination, normalize_page
from migration_api.modules.users.repository import AgentStudentRepository

logger = logging.getLogger(__name__)


async def create_agent_application(
    db: AsyncSession,
    agent_id: int,
    data: AgentApplicationCreate,
    config: ConfigProvider,
) -> ServiceResult:
    """
    Submit an application for one of the agent's students.

    The document check is gated by the admin_application_document flag.
    """
    try:
        student = await AgentStudentRepository.get_for_agent(db, data.student_id, agent_id)
        if student is None:
            raise NotFoundError(
                "Student not found or doesn't belong to agent", "STUDENT_NOT_FOUND"
            )

        program = await ProgramRepository.get_by_id(db, data.program_id)
        if program is None:
            raise NotFoundError("Program not found", "PROGRAM_NOT_FOUND")

        category = resolve_program_category(program, data.program_category)

        if await is_flag_enabled(config, ADMIN_APPLICATION_DOCUMENT):
            await ensure_required_documents(db, student.id, category, owner_kind=OWNER_STUDENT)

        application = await repository.create_application(
            db,
            AgentApplication,
            agent_id=agent_id,
            member_id=student.id,
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
        logger.exception(f"Failed to create application for agent {agent_id}")
        return ServiceResult.failure(str(e) or "Error creating application", 500)

    logger.info(
        f"Agent {agent_id} created application {application.id} for student {student.id}"
    )
    return ServiceResult.ok("Application created successfully", application, status_code=201)


async def get_agent_application(
    db: AsyncSession, agent_id: int, application_id: int
) -> ServiceResult:
    try:
        application = await repository.get_application(
            db, AgentApplication, application_id, agent_id=agent_id
        )
        if application is None:
            return ServiceResult.failure("Application not found", 404)
        return ServiceResult.ok("Application retrieved successfully", application)
    except Exception as e:
        logger.exception(f"Failed to load application {application_id} for agent {agent_id}")
        return ServiceResult.failure(str(e) or "Error retrieving application", 500)


async def get_agent_applications(
    db: AsyncSession,
    agent_id: int,
    *,
    status: str | None = None,
    page: int = 1,
    limit: int = 10,
) -> ServiceResult:
    """Page through the agent's applications, newest first."""
    try:
        page, limit, skip = normalize_page(page, limit)
        applications, total = await repository.list_for_agent(
            db, agent_id, status=status, skip=skip, limit=limit
        )
        return ServiceResult.ok(
            "Applications retrieved successfully",
            {
                "applications": applications,
                "pagination": build_pagination(total, page, limit),
            },
        )
    except Exception as e:
        logger.exception(f"Failed to list applications for agent {agent_id}")
        return ServiceResult.failure(str(e) or "Error retrieving applications", 500)


async def update_agent_application(
    db: AsyncSession,
    agent_id: int,
    application_id: int,
    data: AgentApplicationUpdate,
) -> ServiceResult:
    return await update_application_status(
        db,
        application_id,
        ApplicationType.AGENT.value,
        ApplicationStatusUpdate(**data.model_dump(exclude_none=True)),
        agent_id=agent_id,
    )


async def cancel_agent_application(
    db: AsyncSession, agent_id: int, application_id: int
) -> ServiceResult:
    """Cancel an application; the row is kept with status cancelled."""
    result = await update_application_status(
        db,
        application_id,
        ApplicationType.AGENT.value,
        ApplicationStatusUpdate(application_status=ApplicationStatus.CANCELLED.value),
        agent_id=agent_id,
    )
    if result.success:
        result.message = "Application cancelled successfully"
    return result
