"""
Applications Repository

Database operations for direct and agent applications. Functions that work
on both tables take the model class as a parameter. Writes flush but never
commit.
"""

from datetime import datetime

from sqlalchemy import asc, desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from .models import INACTIVE_STATUSES, AgentApplication, Application

ApplicationModel = type[Application] | type[AgentApplication]


async def get_application(
    db: AsyncSession,
    model: ApplicationModel,
    application_id: int,
    *,
    agent_id: int | None = None,
) -> Application | AgentApplication | None:
    """
    Load an application with its program.

    Args:
        db: Database session
        model: Application or AgentApplication
        application_id: Primary key
        agent_id: When given, only match agent applications owned by this agent

    Returns:
        The application, or None if missing or owned by another agent
    """
    query = select(model).options(selectinload(model.program)).where(model.id == application_id)
    if agent_id is not None:
        query = query.where(AgentApplication.agent_id == agent_id)

    result = await db.execute(query)
    return result.scalar_one_or_none()


async def get_member_application(
    db: AsyncSession, application_id: int, member_id: int
) -> Application | None:
    result = await db.execute(
        select(Application)
        .options(selectinload(Application.program))
        .where(Application.id == application_id, Application.member_id == member_id)
    )
    return result.scalar_one_or_none()


async def create_application(
    db: AsyncSession, model: ApplicationModel, **values
) -> Application | AgentApplication:
    """Insert an application row and flush to get its id."""
    application = model(**values)
    db.add(application)
    await db.flush()
    return application


async def count_active_for_member(db: AsyncSession, member_id: int) -> int:
    """Count a member's applications whose status still counts as active."""
    result = await db.execute(
        select(func.count(Application.id)).where(
            Application.member_id == member_id,
            Application.application_status.not_in(INACTIVE_STATUSES),
        )
    )
    return result.scalar() or 0


async def list_for_member(db: AsyncSession, member_id: int) -> list[Application]:
    result = await db.execute(
        select(Application)
        .options(selectinload(Application.program))
        .where(Application.member_id == member_id)
        .order_by(desc(Application.application_date), desc(Application.id))
    )
    return list(result.scalars().all())


async def list_for_agent(
    db: AsyncSession,
    agent_id: int,
    *,
    status: str | None = None,
    skip: int = 0,
    limit: int = 10,
) -> tuple[list[AgentApplication], int]:
    """
    Page through an agent's applications, newest first.

    Returns:
        Tuple of (applications, total count matching filters)
    """
    query = select(AgentApplication).where(AgentApplication.agent_id == agent_id)
    if status:
        query = query.where(AgentApplication.application_status == status)

    total_result = await db.execute(select(func.count()).select_from(query.subquery()))
    total = total_result.scalar() or 0

    result = await db.execute(
        query.options(selectinload(AgentApplication.program))
        .order_by(desc(AgentApplication.application_date), desc(AgentApplication.id))
        .offset(skip)
        .limit(limit)
    )
    return list(result.scalars().all()), total


async def get_applications_for_admin(
    db: AsyncSession,
    model: ApplicationModel,
    *,
    status: str | None = None,
    payment_status: str | None = None,
    start_date: datetime | None = None,
    end_date: datetime | None = None,
    sort_order: str = "desc",
    skip: int = 0,
    limit: int = 10,
) -> tuple[list[Application | AgentApplication], int]:
    """
    Get applications of one kind with filters, sorting and pagination.

    Args:
        db: Database session
        model: Application or AgentApplication
        status: Filter by application status (optional)
        payment_status: Filter by payment status (optional)
        start_date: Only applications submitted on or after this time (optional)
        end_date: Only applications submitted on or before this time (optional)
        sort_order: asc or desc on application_date. Default: desc (newest first)
        skip: Number of records to skip
        limit: Maximum records to return

    Returns:
        Tuple of (list of applications, total count matching filters)
    """
    query = select(model)

    if status:
        query = query.where(model.application_status == status)
    if payment_status:
        query = query.where(model.payment_status == payment_status)
    if start_date:
        query = query.where(model.application_date >= start_date)
    if end_date:
        query = query.where(model.application_date <= end_date)

    total_result = await db.execute(select(func.count()).select_from(query.subquery()))
    total = total_result.scalar() or 0

    direction = asc if sort_order.lower() == "asc" else desc
    query = (
        query.options(selectinload(model.program))
        .order_by(direction(model.application_date), direction(model.id))
        .offset(skip)
        .limit(limit)
    )

    result = await db.execute(query)
    return list(result.scalars().all()), total
