"""
User Repository

Database lookups for members, agents and agent-managed students.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from migration_api.modules.users.models import Agent, AgentStudent, Member


class MemberRepository:
    """Repository for member database operations."""

    @staticmethod
    async def get_by_id(db: AsyncSession, member_id: int) -> Member | None:
        """
        Get a member by ID.

        Args:
            db: Database session
            member_id: Member primary key

        Returns:
            Member instance or None if not found
        """
        return await db.get(Member, member_id)


class AgentRepository:
    """Repository for agent database operations."""

    @staticmethod
    async def get_by_id(db: AsyncSession, agent_id: int) -> Agent | None:
        return await db.get(Agent, agent_id)


class AgentStudentRepository:
    """Repository for agent-managed student records."""

    @staticmethod
    async def get_for_agent(
        db: AsyncSession, student_id: int, agent_id: int
    ) -> AgentStudent | None:
        """
        Get a student only if it belongs to the given agent.

        Returns:
            AgentStudent instance or None if missing or owned by another agent
        """
        result = await db.execute(
            select(AgentStudent).where(
                AgentStudent.id == student_id,
                AgentStudent.agent_id == agent_id,
            )
        )
        return result.scalar_one_or_none()
