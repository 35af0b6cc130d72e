"""
Wallet Router

Read-only wallet endpoints for members and agents.
"""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from migration_api.core.auth import CurrentUser, get_current_user
from migration_api.core.database import get_db
from migration_api.modules.wallet import service
from migration_api.modules.wallet.schemas import (
    WalletBalanceResponse,
    WalletTransactionListResponse,
)

router = APIRouter()


def _ensure_own_wallet(user: CurrentUser, user_type: str) -> None:
    if user.role != user_type:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail={"error": "FORBIDDEN", "message": "You can only access your own wallet."},
        )


@router.get("/{user_type}/balance")
async def get_balance(
    user_type: str,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    _ensure_own_wallet(user, user_type)
    result = await service.get_wallet_balance(db, user.id, user_type)
    return result.to_response(WalletBalanceResponse)


@router.get("/{user_type}/transactions")
async def list_transactions(
    user_type: str,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    _ensure_own_wallet(user, user_type)
    result = await service.get_wallet_transactions(db, user.id, user_type, page=page, limit=limit)
    return result.to_response(WalletTransactionListResponse)
