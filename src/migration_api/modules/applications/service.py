"""
Application Status Transition Engine

The single entry point that mutates an application's lifecycle fields, for
both direct and agent applications.

update_application_status flow (one database transaction):
1. Resolve the owner kind (direct/agent); an unknown type fails before any
   database access
2. Load the application with its program (404 if missing, or owned by a
   different agent when ``agent_id`` is given)
3. Apply the partial update and stamp application_status_date
4. On a move into payment_status=refunded:
   - credit the application fee to the member's wallet
   - force application_status=cancelled unless a status was supplied
5. Record an activity log entry (best-effort, SAVEPOINT)
6. On a status change, insert the owner's notification and queue an email
7. On a refund, insert the refund notification and queue a refund email
8. Commit, then dispatch queued emails

Any failure before the commit rolls back every write (application, wallet,
ledger, notifications) and drops the queued emails.
"""

import logging
from datetime import UTC, datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from migration_api.core.email import send_application_status_update, send_refund_notification
from migration_api.core.errors import BadRequestError, ServiceError
from migration_api.core.outbox import SideEffectOutbox
from migration_api.core.responses import ServiceResult
from migration_api.modules.activity_logs.repository import record_activity
from migration_api.modules.applications import repository
from migration_api.modules.applications.models import (
    AgentApplication,
    Application,
    ApplicationStatus,
    PaymentStatus,
)
from migration_api.modules.applications.owners import (
    AgentOwner,
    DirectOwner,
    OwnerKind,
    Recipient,
    get_owner_kind,
)
from migration_api.modules.applications.schemas import ApplicationStatusUpdate
from migration_api.modules.documents import repository as document_repository
from migration_api.modules.notifications import repository as notification_repository
from migration_api.modules.notifications.models import NotificationType
from migration_api.modules.programs.models import Program, ProgramCategory
from migration_api.modules.shared.schemas import build_pagination, normalize_page
from migration_api.modules.wallet import repository as wallet_repository
from migration_api.modules.wallet import service as wallet_service
from migration_api.modules.wallet.models import TransactionType

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("application_status", "payment_status", "application_stage", "intake")

# status -> (title, message)
STATUS_MESSAGES: dict[str, tuple[str, str]] = {
    ApplicationStatus.PENDING.value: (
        "Application Pending",
        "Your application is pending and will be reviewed soon.",
    ),
    ApplicationStatus.IN_REVIEW.value: (
        "Application Under Review",
        "Your application is now being reviewed by our team.",
    ),
    ApplicationStatus.PROCESSING.value: (
        "Application Processing",
        "Your application is being processed.",
    ),
    ApplicationStatus.APPROVED.value: (
        "Application Approved!",
        "Congratulations! Your application has been approved.",
    ),
    ApplicationStatus.REJECTED.value: (
        "Application Rejected",
        "Unfortunately, your application has been rejected.",
    ),
    ApplicationStatus.ON_HOLD.value: (
        "Application On Hold",
        "Your application has been placed on hold. We will contact you with next steps.",
    ),
    ApplicationStatus.SUBMITTED_TO_SCHOOL.value: (
        "Application Submitted to School",
        "Your application has been submitted to the school for consideration.",
    ),
    ApplicationStatus.CANCELLED.value: (
        "Application Cancelled",
        "Your application has been cancelled.",
    ),
    ApplicationStatus.COMPLETED.value: (
        "Application Completed",
        "Your application process is complete.",
    ),
}


def get_status_message(status: str) -> tuple[str, str]:
    """Return (title, message) for a status, with generic copy for unknown values."""
    return STATUS_MESSAGES.get(
        status,
        ("Application Status Updated", f"Your application status has been updated to {status}"),
    )


def _collect_changes(updates: ApplicationStatusUpdate | dict[str, Any]) -> dict[str, Any]:
    """Keep only updatable fields that were actually supplied."""
    if isinstance(updates, BaseModel):
        updates = updates.model_dump(exclude_none=True)
    return {
        field: value
        for field, value in updates.items()
        if field in UPDATABLE_FIELDS and value is not None
    }


def _audit_value(value: Any) -> Any:
    if isinstance(value, Decimal):
        return str(value)
    return value


def _program_name(application: Application | AgentApplication) -> str:
    program = application.program
    return program.program_name if program else f"Program #{application.program_id}"


def resolve_program_category(program: Program, requested: ProgramCategory | None) -> str:
    """
    Return the program's category, which selects the document checklist.

    Raises:
        BadRequestError: If a requested category disagrees with the program
    """
    category = program.category.lower()
    if requested is not None and requested.value != category:
        raise BadRequestError(
            f"Program category mismatch: program {program.id} is {category}, not {requested.value}",
            "PROGRAM_CATEGORY_MISMATCH",
        )
    return category


async def _refund_application_fee(
    db: AsyncSession, owner: OwnerKind, application: Application | AgentApplication
) -> Decimal:
    """
    Credit the application fee back to the wallet the owner adapter picks.

    A missing or zero fee still creates the wallet but writes no ledger entry.

    Returns:
        The refunded amount
    """
    fee = application.program.application_fee if application.program else None
    amount = Decimal(fee) if fee is not None else Decimal("0.00")

    user_id, user_type = owner.refund_wallet(application)
    if amount > 0:
        await wallet_service.credit(
            db,
            user_id,
            user_type,
            amount,
            TransactionType.REFUND.value,
            application_id=application.id,
            description=f"Refund of application fee for application #{application.id}",
        )
    else:
        await wallet_repository.find_or_create_wallet(db, user_id, user_type)
        logger.info(f"Application {application.id} has no fee to refund")

    return amount


async def _notify_status_change(
    db: AsyncSession,
    outbox: SideEffectOutbox,
    owner: OwnerKind,
    application: Application | AgentApplication,
    old_status: str,
    recipient: Recipient | None,
) -> None:
    status = application.application_status
    title, message = get_status_message(status)

    await notification_repository.create_notification(
        db,
        user_id=owner.notify_user_id(application),
        user_type=owner.notify_user_type,
        type=NotificationType.APPLICATION.value,
        title=title,
        message=message,
        link=f"/{owner.portal}/applications/{application.id}",
        priority=1,
        metadata={
            "application_id": application.id,
            "application_type": owner.application_type,
            "old_status": old_status,
            "new_status": status,
            "action": "status_changed",
        },
    )

    if recipient is None:
        logger.warning(
            f"No email recipient for {owner.application_type} application {application.id}"
        )
        return

    outbox.add(
        "application_status_email",
        send_application_status_update,
        to_email=recipient.email,
        recipient_name=recipient.name,
        application_id=application.id,
        program_name=_program_name(application),
        title=title,
        message=message,
        portal=owner.portal,
    )


async def _notify_refund(
    db: AsyncSession,
    outbox: SideEffectOutbox,
    owner: OwnerKind,
    application: Application | AgentApplication,
    amount: Decimal,
    recipient: Recipient | None,
) -> None:
    program_name = _program_name(application)

    await notification_repository.create_notification(
        db,
        user_id=owner.notify_user_id(application),
        user_type=owner.notify_user_type,
        type=NotificationType.WALLET.value,
        title="Application Fee Refunded",
        message=(
            f"The application fee of {amount:.2f} for {program_name} "
            f"has been refunded to the wallet."
        ),
        link=f"/{owner.portal}/wallet",
        priority=2,
        metadata={
            "application_id": application.id,
            "application_type": owner.application_type,
            "amount": str(amount),
            "action": "refund",
        },
    )

    if recipient is None:
        logger.warning(f"No refund email recipient for application {application.id}")
        return

    outbox.add(
        "refund_email",
        send_refund_notification,
        to_email=recipient.email,
        recipient_name=recipient.name,
        application_id=application.id,
        program_name=program_name,
        amount=amount,
    )


async def update_application_status(
    db: AsyncSession,
    application_id: int,
    application_type: str,
    updates: ApplicationStatusUpdate | dict[str, Any],
    *,
    admin_id: int | None = None,
    agent_id: int | None = None,
) -> ServiceResult:
    """
    Apply a partial lifecycle update to an application.

    Args:
        db: Database session (committed or rolled back here)
        application_id: Application primary key
        application_type: "direct" or "agent"
        updates: application_status, payment_status, application_stage, intake
        admin_id: Acting admin, recorded in the activity log
        agent_id: Acting agent; restricts the lookup to that agent's applications

    Returns:
        ServiceResult with the updated application
    """
    try:
        owner = get_owner_kind(application_type)
    except ServiceError as e:
        return ServiceResult.from_error(e)

    changes = _collect_changes(updates)
    outbox = SideEffectOutbox()

    try:
        application = await repository.get_application(
            db, owner.model, application_id, agent_id=agent_id
        )
        if application is None:
            await db.rollback()
            return ServiceResult.failure("Application not found", 404)

        old_status = application.application_status
        old_payment_status = application.payment_status

        for field, value in changes.items():
            setattr(application, field, value)
        application.application_status_date = datetime.now(UTC)

        refunded = (
            changes.get("payment_status") == PaymentStatus.REFUNDED.value
            and old_payment_status != PaymentStatus.REFUNDED.value
        )
        refund_amount = Decimal("0.00")
        if refunded:
            refund_amount = await _refund_application_fee(db, owner, application)
            if "application_status" not in changes:
                application.application_status = ApplicationStatus.CANCELLED.value

        await db.flush()

        new_status = application.application_status
        status_changed = new_status != old_status

        await record_activity(
            db,
            activity="application_status_updated",
            details={
                "application_type": owner.application_type,
                "from_status": old_status,
                "to_status": new_status,
                "from_payment_status": old_payment_status,
                "to_payment_status": application.payment_status,
                "changes": {k: _audit_value(v) for k, v in changes.items()},
                "refund_amount": _audit_value(refund_amount) if refunded else None,
                "agent_id": agent_id,
            },
            admin_id=admin_id,
            entity_type=f"{owner.application_type}_application",
            entity_id=application.id,
        )

        if status_changed or refunded:
            recipient = await owner.resolve_recipient(db, application)
            if status_changed:
                await _notify_status_change(db, outbox, owner, application, old_status, recipient)
            if refunded:
                await _notify_refund(db, outbox, owner, application, refund_amount, recipient)

        await db.commit()
        await db.refresh(application)

    except Exception as e:
        await db.rollback()
        outbox.discard()
        logger.exception(f"Failed to update {application_type} application {application_id}")
        return ServiceResult.failure(str(e) or "Failed to update application status", 500)

    logger.info(
        f"{owner.application_type} application {application_id}: "
        f"status {old_status} -> {new_status}, payment {old_payment_status} -> "
        f"{application.payment_status}"
    )

    await outbox.dispatch()
    return ServiceResult.ok("Application status updated successfully", application)


async def send_application_to_school(
    db: AsyncSession,
    application_id: int,
    application_type: str,
    *,
    admin_id: int | None = None,
) -> ServiceResult:
    """Mark an application as submitted to the school."""
    result = await update_application_status(
        db,
        application_id,
        application_type,
        ApplicationStatusUpdate(application_status=ApplicationStatus.SUBMITTED_TO_SCHOOL.value),
        admin_id=admin_id,
    )
    if result.success:
        result.message = "Application sent to school successfully"
    return result


# ============================================
# Admin queries
# ============================================

ALL_TYPES = "all"


async def admin_list_applications(
    db: AsyncSession,
    *,
    application_type: str = ALL_TYPES,
    status: str | None = None,
    payment_status: str | None = None,
    start_date: datetime | None = None,
    end_date: datetime | None = None,
    sort_order: str = "desc",
    page: int = 1,
    limit: int = 10,
) -> ServiceResult:
    """
    List applications of one or both kinds.

    With ``application_type="all"`` both tables are queried for the first
    ``page * limit`` rows, merged by application_date and sliced, so the
    page is exact across the two tables.
    """
    try:
        if application_type == ALL_TYPES:
            owners: list[OwnerKind] = [DirectOwner, AgentOwner]
        else:
            owners = [get_owner_kind(application_type)]

        page, limit, skip = normalize_page(page, limit)
        filters = {
            "status": status,
            "payment_status": payment_status,
            "start_date": start_date,
            "end_date": end_date,
            "sort_order": sort_order,
        }

        if len(owners) == 1:
            applications, total = await repository.get_applications_for_admin(
                db, owners[0].model, skip=skip, limit=limit, **filters
            )
        else:
            merged: list[Application | AgentApplication] = []
            total = 0
            for owner in owners:
                rows, count = await repository.get_applications_for_admin(
                    db, owner.model, skip=0, limit=skip + limit, **filters
                )
                merged.extend(rows)
                total += count

            merged.sort(
                key=lambda app: (app.application_date, app.id),
                reverse=sort_order.lower() != "asc",
            )
            applications = merged[skip : skip + limit]

        return ServiceResult.ok(
            "Applications retrieved successfully",
            {
                "applications": applications,
                "pagination": build_pagination(total, page, limit),
            },
        )
    except ServiceError as e:
        return ServiceResult.from_error(e)
    except Exception as e:
        logger.exception("Failed to list applications for admin")
        return ServiceResult.failure(str(e) or "Failed to retrieve applications", 500)


async def admin_get_application_detail(
    db: AsyncSession, application_id: int, application_type: str
) -> ServiceResult:
    """Return an application together with its applicant's documents."""
    try:
        owner = get_owner_kind(application_type)

        application = await repository.get_application(db, owner.model, application_id)
        if application is None:
            return ServiceResult.failure("Application not found", 404)

        if owner is AgentOwner:
            documents = await document_repository.get_student_documents(db, application.member_id)
        else:
            documents = await document_repository.get_member_documents(db, application.member_id)

        return ServiceResult.ok(
            "Application details retrieved successfully",
            {"application": application, "documents": documents},
        )
    except ServiceError as e:
        return ServiceResult.from_error(e)
    except Exception as e:
        logger.exception(f"Failed to load {application_type} application {application_id}")
        return ServiceResult.failure(str(e) or "Failed to retrieve application", 500)

