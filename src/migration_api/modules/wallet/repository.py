"""
Wallet Repository

Database operations for wallets and their ledger. Writes flush but never
commit; the caller's transaction owns the unit of work.
"""

import logging
from decimal import Decimal

from sqlalchemy import desc, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from .models import TransactionStatus, Wallet, WalletTransaction

logger = logging.getLogger(__name__)


async def get_wallet(db: AsyncSession, user_id: int, user_type: str) -> Wallet | None:
    result = await db.execute(
        select(Wallet).where(Wallet.user_id == user_id, Wallet.user_type == user_type)
    )
    return result.scalar_one_or_none()


async def find_or_create_wallet(db: AsyncSession, user_id: int, user_type: str) -> Wallet:
    """
    Return the user's wallet, creating it with a zero balance if needed.

    The insert runs in a SAVEPOINT; if a concurrent request created the
    wallet first, the unique constraint fires and the existing row is read.
    """
    wallet = await get_wallet(db, user_id, user_type)
    if wallet:
        return wallet

    try:
        async with db.begin_nested():
            wallet = Wallet(user_id=user_id, user_type=user_type, balance=Decimal("0.00"))
            db.add(wallet)
            await db.flush()
        logger.info(f"Created wallet {wallet.id} for {user_type}:{user_id}")
        return wallet
    except IntegrityError:
        logger.info(f"Wallet for {user_type}:{user_id} created concurrently, re-reading")
        wallet = await get_wallet(db, user_id, user_type)
        if wallet is None:
            raise
        return wallet


async def add_transaction(
    db: AsyncSession,
    *,
    wallet: Wallet,
    amount: Decimal,
    type: str,
    status: str = TransactionStatus.COMPLETED.value,
    application_id: int | None = None,
    description: str | None = None,
) -> WalletTransaction:
    """Append a ledger entry for the wallet."""
    transaction = WalletTransaction(
        wallet_id=wallet.id,
        user_id=wallet.user_id,
        user_type=wallet.user_type,
        type=type,
        amount=amount,
        status=status,
        application_id=application_id,
        description=description,
    )
    db.add(transaction)
    await db.flush()
    return transaction


async def increment_balance(db: AsyncSession, wallet_id: int, amount: Decimal) -> None:
    """Atomic ``balance = balance + amount`` evaluated by the database."""
    await db.execute(
        update(Wallet).where(Wallet.id == wallet_id).values(balance=Wallet.balance + amount)
    )


async def get_transactions(
    db: AsyncSession, wallet_id: int, *, skip: int = 0, limit: int = 10
) -> tuple[list[WalletTransaction], int]:
    """
    Page through a wallet's ledger, newest first.

    Returns:
        Tuple of (transactions, total count)
    """
    query = select(WalletTransaction).where(WalletTransaction.wallet_id == wallet_id)

    total_result = await db.execute(select(func.count()).select_from(query.subquery()))
    total = total_result.scalar() or 0

    result = await db.execute(
        query.order_by(desc(WalletTransaction.created_at), desc(WalletTransaction.id))
        .offset(skip)
        .limit(limit)
    )
    return list(result.scalars().all()), total
