"""
App config module - Runtime feature flags.
"""

from migration_api.modules.app_config.router import router

__all__ = ["router"]
