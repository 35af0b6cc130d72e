"""
Wallet module - Per-user balances and the append-only ledger.
"""

from migration_api.modules.wallet.router import router

__all__ = ["router"]
