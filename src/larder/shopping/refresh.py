"""
Larder - Shopping List Refresh.

Runs the full reconcile whenever something may have changed: a screen
gaining focus, a realtime change on one of the user's tables, or an edit to
the library. Every refresh recomputes from scratch. When refreshes overlap,
only the most recently started one may publish its result, and nothing is
published after close().
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from larder.shopping.alerts import COOKED_NOTICE_MESSAGE, AlertTracker, shopping_notice_message
from larder.shopping.reconcile import ShoppingList, build_shopping_list

logger = logging.getLogger(__name__)

FetchSavedDishes = Callable[[str], Awaitable[list[dict]]]
FetchLibrary = Callable[[str], Awaitable[dict | None]]
FetchCount = Callable[[str], Awaitable[int]]

# Realtime tables that invalidate each list
SHOPPING_TABLES = frozenset({"saved_dishes", "user_library"})
COOKED_TABLES = frozenset({"cooked_dishes"})


class ShoppingRefresher:
    """
    Recompute a user's shopping list with stale-result suppression.

    Args:
        user_id: Whose data to read
        fetch_saved_dishes: async user_id -> saved dish rows
        fetch_library: async user_id -> library row or None
        on_result: Called with each fresh ShoppingList
    """

    def __init__(
        self,
        user_id: str,
        fetch_saved_dishes: FetchSavedDishes,
        fetch_library: FetchLibrary,
        on_result: Callable[[ShoppingList], None] | None = None,
    ):
        self.user_id = user_id
        self.fetch_saved_dishes = fetch_saved_dishes
        self.fetch_library = fetch_library
        self.on_result = on_result
        self.latest: ShoppingList | None = None
        self._generation = 0
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    async def refresh(self) -> ShoppingList | None:
        """
        Fetch both inputs in parallel and reconcile.

        Returns:
            The new ShoppingList, or None if a newer refresh started (or the
            refresher was closed) while this one was waiting on I/O.

        Raises:
            Whatever the fetch callables raise.
        """
        if self._closed:
            return None

        self._generation += 1
        generation = self._generation

        saved, library = await asyncio.gather(
            self.fetch_saved_dishes(self.user_id),
            self.fetch_library(self.user_id),
        )

        if self._closed or generation != self._generation:
            logger.debug(f"Dropping stale shopping refresh #{generation} for {self.user_id}")
            return None

        result = build_shopping_list(saved, library)
        self.latest = result
        if self.on_result is not None:
            self.on_result(result)
        return result

    def close(self) -> None:
        """Stop publishing results (screen unmounted, user signed out)."""
        self._closed = True


class AlertCoordinator:
    """
    Keeps the shopping and cooked badges current for one user.

    Notices are delivered through `notify(title, message)`; how they are
    shown is up to the caller.
    """

    def __init__(
        self,
        user_id: str,
        fetch_saved_dishes: FetchSavedDishes,
        fetch_library: FetchLibrary,
        fetch_cooked_count: FetchCount,
        notify: Callable[[str, str], None] | None = None,
    ):
        self.user_id = user_id
        self.notify = notify
        self.fetch_cooked_count = fetch_cooked_count
        self.shopping = AlertTracker(on_increase=self._shopping_increased)
        self.cooked = AlertTracker(on_increase=self._cooked_increased)
        self.refresher = ShoppingRefresher(
            user_id,
            fetch_saved_dishes,
            fetch_library,
            on_result=lambda result: self.shopping.observe(result.count),
        )
        self._cooked_generation = 0

    async def refresh_shopping(self) -> ShoppingList | None:
        return await self.refresher.refresh()

    async def refresh_cooked(self) -> int | None:
        """Recount cooked dishes; returns None when superseded or closed."""
        if self.refresher.closed:
            return None
        self._cooked_generation += 1
        generation = self._cooked_generation
        count = await self.fetch_cooked_count(self.user_id)
        if self.refresher.closed or generation != self._cooked_generation:
            return None
        self.cooked.observe(count)
        return count

    async def refresh_all(self) -> None:
        await asyncio.gather(self.refresh_shopping(), self.refresh_cooked())

    async def handle_change(self, table: str) -> Any:
        """Dispatch a realtime change notification for one of the user's tables."""
        if table in SHOPPING_TABLES:
            return await self.refresh_shopping()
        if table in COOKED_TABLES:
            return await self.refresh_cooked()
        logger.debug(f"Ignoring change on unrelated table {table}")
        return None

    def close(self) -> None:
        self.refresher.close()

    def _shopping_increased(self, delta: int) -> None:
        if self.notify is not None:
            self.notify("Shopping List Updated", shopping_notice_message(delta))

    def _cooked_increased(self, delta: int) -> None:
        if self.notify is not None:
            self.notify("Cooked Dishes Updated", COOKED_NOTICE_MESSAGE)
