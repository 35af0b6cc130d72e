"""
Side-Effect Outbox

Collects side-effect intents (emails) while a database transaction is open
and dispatches them only after the transaction commits. A failed delivery
is logged and never propagates to the caller.
"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger(__name__)


@dataclass
class OutboxItem:
    """A single deferred side effect."""

    name: str
    send: Callable[..., Awaitable[Any]]
    kwargs: dict[str, Any] = field(default_factory=dict)


class SideEffectOutbox:
    """In-memory outbox scoped to one unit of work."""

    def __init__(self) -> None:
        self._items: list[OutboxItem] = []

    def add(self, name: str, send: Callable[..., Awaitable[Any]], **kwargs: Any) -> None:
        """Queue a side effect to run after commit."""
        self._items.append(OutboxItem(name=name, send=send, kwargs=kwargs))

    @property
    def pending(self) -> list[OutboxItem]:
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def discard(self) -> None:
        """Drop every queued side effect (used after a rollback)."""
        if self._items:
            logger.debug(f"Discarding {len(self._items)} outbox item(s)")
        self._items.clear()

    async def dispatch(self) -> int:
        """
        Run every queued side effect in order.

        Returns:
            Number of side effects that reported success
        """
        items, self._items = self._items, []
        delivered = 0

        for item in items:
            try:
                result = await item.send(**item.kwargs)
            except Exception as e:
                logger.error(f"Outbox side effect '{item.name}' failed: {e}", exc_info=True)
                continue

            if result is False:
                logger.warning(f"Outbox side effect '{item.name}' reported failure")
                continue

            delivered += 1

        return delivered
