"""
Wallet Schemas
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict

from migration_api.modules.shared.schemas import Pagination


class WalletBalanceResponse(BaseModel):
    user_id: int
    user_type: str
    balance: Decimal


class WalletTransactionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    type: str
    amount: Decimal
    status: str
    application_id: int | None = None
    description: str | None = None
    created_at: datetime | None = None


class WalletTransactionListResponse(BaseModel):
    transactions: list[WalletTransactionResponse]
    pagination: Pagination
