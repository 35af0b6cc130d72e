"""
Applications module - Direct and agent applications and the status
transition engine.
"""

from migration_api.modules.applications.admin_router import (
    documents_router as admin_documents_router,
)
from migration_api.modules.applications.admin_router import router as admin_router
from migration_api.modules.applications.agent_router import router as agent_router
from migration_api.modules.applications.router import router

__all__ = ["router", "agent_router", "admin_router", "admin_documents_router"]
