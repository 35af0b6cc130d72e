"""
Program Models

Study programs members and agents apply to.
"""

import enum
from datetime import date
from decimal import Decimal

from sqlalchemy import Date, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from migration_api.modules.shared import BaseModel


class ProgramCategory(str, enum.Enum):
    """Categories accepted when creating an application."""

    UNDERGRADUATE = "undergraduate"
    POSTGRADUATE = "postgraduate"
    PHD = "phd"


class Program(BaseModel):
    """A program offered by a partner school."""

    __tablename__ = "programs"

    program_name: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    school_name: Mapped[str] = mapped_column(String(200), nullable=False)
    degree: Mapped[str | None] = mapped_column(String(100), nullable=True)
    degree_level: Mapped[str | None] = mapped_column(String(50), nullable=True)
    category: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    location: Mapped[str | None] = mapped_column(String(200), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Fees (2 decimal places)
    tuition_fee: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)
    application_fee: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)

    application_deadline: Mapped[date | None] = mapped_column(Date, nullable=True)

    def __repr__(self) -> str:
        return f"<Program(id={self.id}, name={self.program_name}, category={self.category})>"
