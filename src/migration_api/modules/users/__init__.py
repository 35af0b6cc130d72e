"""
Users module - Members, agents and agent-managed students.
"""

from migration_api.modules.users.models import Agent, AgentStudent, Member, UserType
from migration_api.modules.users.repository import (
    AgentRepository,
    AgentStudentRepository,
    MemberRepository,
)

__all__ = [
    "Agent",
    "AgentStudent",
    "Member",
    "UserType",
    "AgentRepository",
    "AgentStudentRepository",
    "MemberRepository",
]
