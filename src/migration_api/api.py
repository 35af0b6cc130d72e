from fastapi import APIRouter

from migration_api.modules.app_config import router as app_config_router
from migration_api.modules.applications import (
    admin_documents_router,
    admin_router,
    agent_router,
)
from migration_api.modules.applications import router as applications_router
from migration_api.modules.documents.router import agent_router as student_documents_router
from migration_api.modules.documents.router import router as documents_router
from migration_api.modules.notifications import router as notifications_router
from migration_api.modules.users.router import router as onboarding_router
from migration_api.modules.wallet import router as wallet_router

api_router = APIRouter()

api_router.include_router(applications_router, prefix="/applications", tags=["Applications"])
api_router.include_router(documents_router, prefix="/documents", tags=["Documents"])
api_router.include_router(onboarding_router, prefix="/onboarding", tags=["Onboarding"])

api_router.include_router(
    agent_router, prefix="/agent/applications", tags=["Agent - Applications"]
)
api_router.include_router(
    student_documents_router, prefix="/agent/students", tags=["Agent - Student Documents"]
)

api_router.include_router(
    admin_router,
    prefix="/admin/applications",
    tags=["Admin - Applications"],
)
api_router.include_router(
    admin_documents_router,
    prefix="/admin/documents",
    tags=["Admin - Documents"],
)
api_router.include_router(app_config_router, prefix="/admin/config", tags=["Admin - Config"])

api_router.include_router(wallet_router, prefix="/wallet", tags=["Wallet"])
api_router.include_router(notifications_router, prefix="/notifications", tags=["Notifications"])
