"""
Notifications module - In-app notifications for members and agents.
"""

from migration_api.modules.notifications.router import router

__all__ = ["router"]
