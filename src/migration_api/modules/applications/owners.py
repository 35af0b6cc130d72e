"""
Application Owner Adapters

Direct and agent applications share one transition engine. The adapter for
each variant knows which table to use, who receives notifications, which
wallet a refund credits and how to resolve the email recipient.
"""

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from migration_api.core.errors import InvalidApplicationTypeError
from migration_api.modules.applications.models import (
    AgentApplication,
    Application,
    ApplicationType,
)
from migration_api.modules.users.models import UserType
from migration_api.modules.users.repository import AgentRepository, MemberRepository


@dataclass
class Recipient:
    email: str
    name: str


class DirectOwner:
    """Member-owned applications; the member is notified."""

    application_type = ApplicationType.DIRECT.value
    model = Application
    portal = "member"
    notify_user_type = UserType.MEMBER.value

    @staticmethod
    def notify_user_id(application: Application) -> int:
        return application.member_id

    @staticmethod
    def refund_wallet(application: Application) -> tuple[int, str]:
        return application.member_id, UserType.MEMBER.value

    @staticmethod
    async def resolve_recipient(db: AsyncSession, application: Application) -> Recipient | None:
        member = await MemberRepository.get_by_id(db, application.member_id)
        if member is None or not member.email:
            return None
        return Recipient(email=member.email, name=member.full_name)


class AgentOwner:
    """Agent-submitted applications; the submitting agent is notified."""

    application_type = ApplicationType.AGENT.value
    model = AgentApplication
    portal = "agent"
    notify_user_type = UserType.AGENT.value

    @staticmethod
    def notify_user_id(application: AgentApplication) -> int:
        return application.agent_id

    @staticmethod
    def refund_wallet(application: AgentApplication) -> tuple[int, str]:
        # member_id holds an agent_students id here, which is not a members id
        return application.agent_id, UserType.AGENT.value

    @staticmethod
    async def resolve_recipient(
        db: AsyncSession, application: AgentApplication
    ) -> Recipient | None:
        agent = await AgentRepository.get_by_id(db, application.agent_id)
        if agent is None or not agent.email:
            return None
        return Recipient(email=agent.email, name=agent.display_name)


OwnerKind = type[DirectOwner] | type[AgentOwner]

_OWNERS: dict[str, OwnerKind] = {
    DirectOwner.application_type: DirectOwner,
    AgentOwner.application_type: AgentOwner,
}


def get_owner_kind(application_type: str) -> OwnerKind:
    """
    Look up the adapter for an application type.

    Raises:
        InvalidApplicationTypeError: If the type is neither direct nor agent
    """
    owner = _OWNERS.get(application_type)
    if owner is None:
        raise InvalidApplicationTypeError()
    return owner
