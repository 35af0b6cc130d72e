"""
Program Repository

Database operations for programs.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from migration_api.modules.programs.models import Program


class ProgramRepository:
    """Repository for program database operations."""

    @staticmethod
    async def get_by_id(db: AsyncSession, program_id: int) -> Program | None:
        """
        Get a program by ID.

        Args:
            db: Database session
            program_id: Program primary key

        Returns:
            Program instance or None if not found
        """
        return await db.get(Program, program_id)
