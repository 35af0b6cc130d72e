"""
Wallet Models

Platform-held balances per (user_id, user_type) and their append-only
transaction ledger.
"""

import enum
from decimal import Decimal

from sqlalchemy import ForeignKey, Index, Integer, Numeric, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from migration_api.modules.shared import BaseModel


class TransactionType(str, enum.Enum):
    REFUND = "refund"
    COMMISSION = "commission"
    WITHDRAWAL = "withdrawal"


class TransactionStatus(str, enum.Enum):
    PENDING = "Pending"
    COMPLETED = "Completed"


class Wallet(BaseModel):
    """
    One balance per (user_id, user_type).

    ``balance`` only changes through WalletTransaction rows and an atomic
    SQL increment, so it always equals the sum of the ledger.
    """

    __tablename__ = "wallets"

    user_id: Mapped[int] = mapped_column(Integer, nullable=False)
    user_type: Mapped[str] = mapped_column(String(20), nullable=False)
    balance: Mapped[Decimal] = mapped_column(
        Numeric(10, 2),
        nullable=False,
        default=Decimal("0.00"),
        server_default="0",
    )

    # Ledger pages are read through the repository
    transactions: Mapped[list["WalletTransaction"]] = relationship(
        "WalletTransaction",
        back_populates="wallet",
        lazy="raise",
    )

    __table_args__ = (
        UniqueConstraint("user_id", "user_type", name="uq_wallets_user"),
    )

    def __repr__(self) -> str:
        return f"<Wallet(id={self.id}, user={self.user_type}:{self.user_id}, balance={self.balance})>"


class WalletTransaction(BaseModel):
    """Immutable ledger entry. Rows are never updated or deleted."""

    __tablename__ = "wallet_transactions"

    wallet_id: Mapped[int] = mapped_column(
        ForeignKey("wallets.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[int] = mapped_column(Integer, nullable=False)
    user_type: Mapped[str] = mapped_column(String(20), nullable=False)
    type: Mapped[str] = mapped_column(String(20), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=TransactionStatus.PENDING.value,
    )
    application_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    wallet: Mapped["Wallet"] = relationship("Wallet", back_populates="transactions", lazy="raise")

    __table_args__ = (
        Index("ix_wallet_transactions_application", "application_id", "type"),
    )

    def __repr__(self) -> str:
        return (
            f"<WalletTransaction(id={self.id}, wallet_id={self.wallet_id}, "
            f"type={self.type}, amount={self.amount})>"
        )
