"""
Programs module - Study programs and their fees.
"""

from migration_api.modules.programs.models import Program, ProgramCategory
from migration_api.modules.programs.repository import ProgramRepository

__all__ = ["Program", "ProgramCategory", "ProgramRepository"]
