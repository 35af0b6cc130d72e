"""
App Config Models

Runtime key/value flags editable by admins without a deploy.
"""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from migration_api.modules.shared import BaseModel


class AppConfig(BaseModel):
    """A single configuration flag. Values are stored as "true"/"false"."""

    __tablename__ = "app_configs"

    key: Mapped[str] = mapped_column(String(100), unique=True, index=True, nullable=False)
    value: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<AppConfig(key={self.key}, value={self.value})>"

    @property
    def enabled(self) -> bool:
        return self.value == "true"
