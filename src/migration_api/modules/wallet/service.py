"""
Wallet Ledger Service

Credits wallets and reads balances. ``credit`` participates in the caller's
transaction and never commits; the read operations return ServiceResult
envelopes.

Ledger rules:
- Every balance change is paired with exactly one WalletTransaction row
- The balance is incremented in SQL (``balance = balance + amount``), never
  read-modify-written in Python, so concurrent credits cannot lose updates
- Ledger rows are append-only
"""

import logging
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from migration_api.core.errors import BadRequestError, ServiceError
from migration_api.core.responses import ServiceResult
from migration_api.modules.shared.schemas import build_pagination, normalize_page
from migration_api.modules.users.models import UserType
from migration_api.modules.wallet import repository
from migration_api.modules.wallet.models import TransactionStatus, WalletTransaction

logger = logging.getLogger(__name__)


async def credit(
    db: AsyncSession,
    user_id: int,
    user_type: str,
    amount: Decimal,
    transaction_type: str,
    *,
    application_id: int | None = None,
    description: str | None = None,
) -> WalletTransaction:
    """
    Credit a user's wallet inside the caller's transaction.

    Args:
        db: Database session (not committed here)
        user_id: Wallet owner id
        user_type: member or agent
        amount: Positive amount to credit
        transaction_type: Ledger type, e.g. refund or commission
        application_id: Related application, if any
        description: Free-text ledger description

    Returns:
        The created WalletTransaction

    Raises:
        BadRequestError: If amount is not positive
    """
    amount = Decimal(amount)
    if amount <= 0:
        raise BadRequestError("Credit amount must be positive", "INVALID_AMOUNT")

    wallet = await repository.find_or_create_wallet(db, user_id, user_type)
    transaction = await repository.add_transaction(
        db,
        wallet=wallet,
        amount=amount,
        type=transaction_type,
        status=TransactionStatus.COMPLETED.value,
        application_id=application_id,
        description=description,
    )
    await repository.increment_balance(db, wallet.id, amount)

    logger.info(
        f"Credited {amount} to wallet {wallet.id} ({user_type}:{user_id}), "
        f"type={transaction_type}, application={application_id}"
    )
    return transaction


def _validate_user_type(user_type: str) -> None:
    if user_type not in {t.value for t in UserType}:
        raise BadRequestError("Invalid user type", "INVALID_USER_TYPE")


async def get_wallet_balance(db: AsyncSession, user_id: int, user_type: str) -> ServiceResult:
    """Return the wallet balance, 0.00 when the user has no wallet yet."""
    try:
        _validate_user_type(user_type)
        wallet = await repository.get_wallet(db, user_id, user_type)
        balance = wallet.balance if wallet else Decimal("0.00")

        return ServiceResult.ok(
            "Wallet balance retrieved successfully",
            {"user_id": user_id, "user_type": user_type, "balance": balance},
        )
    except ServiceError as e:
        return ServiceResult.from_error(e)
    except Exception as e:
        logger.exception(f"Failed to read wallet balance for {user_type}:{user_id}")
        return ServiceResult.failure(str(e) or "Failed to retrieve wallet balance", 500)


async def get_wallet_transactions(
    db: AsyncSession,
    user_id: int,
    user_type: str,
    *,
    page: int = 1,
    limit: int = 10,
) -> ServiceResult:
    """Return a page of ledger entries, newest first."""
    try:
        _validate_user_type(user_type)
        page, limit, skip = normalize_page(page, limit)

        wallet = await repository.get_wallet(db, user_id, user_type)
        if wallet is None:
            transactions, total = [], 0
        else:
            transactions, total = await repository.get_transactions(
                db, wallet.id, skip=skip, limit=limit
            )

        return ServiceResult.ok(
            "Wallet transactions retrieved successfully",
            {
                "transactions": transactions,
                "pagination": build_pagination(total, page, limit),
            },
        )
    except ServiceError as e:
        return ServiceResult.from_error(e)
    except Exception as e:
        logger.exception(f"Failed to list wallet transactions for {user_type}:{user_id}")
        return ServiceResult.failure(str(e) or "Failed to retrieve wallet transactions", 500)
