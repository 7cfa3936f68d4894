"""
Larder - Badge Alerts.

Tracks a count (needed ingredients, cooked dishes) across recomputes and
decides when the user should be told it went up.

States:
    UNINITIALIZED    nothing observed yet; the first count is the baseline
    IDLE             the user has seen the current count
    PENDING_INCREASE the count rose since the user last looked

The increase notice fires once, on entering PENDING_INCREASE. Further
increases while pending only update the badge and delta.
"""

import logging
from collections.abc import Callable
from enum import Enum

logger = logging.getLogger(__name__)


class AlertState(Enum):
    UNINITIALIZED = "uninitialized"
    IDLE = "idle"
    PENDING_INCREASE = "pending_increase"


def shopping_notice_message(delta: int) -> str:
    """User-facing text for new shopping list items."""
    label = "new ingredient" if delta <= 1 else f"{delta} new ingredients"
    return f"{label} were added to your Shopping List. Open the Shopping tab to review them."


COOKED_NOTICE_MESSAGE = "You have new dishes in your Cooked list."


class AlertTracker:
    """
    Badge state machine for one counted list.

    Args:
        on_increase: Called with the delta when the count first rises
            above what the user has seen.
    """

    def __init__(self, on_increase: Callable[[int], None] | None = None):
        self.on_increase = on_increase
        self.reset()

    def reset(self) -> None:
        """Forget everything (user signed out or switched)."""
        self.state = AlertState.UNINITIALIZED
        self.badge = 0
        self.delta = 0
        self.last_seen = 0

    @property
    def pending(self) -> bool:
        return self.state is AlertState.PENDING_INCREASE

    def observe(self, count: int) -> AlertState:
        """Feed a freshly computed count and return the resulting state."""
        if self.state is AlertState.UNINITIALIZED:
            self.last_seen = count
            self.badge = count
            self.delta = 0
            self.state = AlertState.IDLE
            return self.state

        if count < self.last_seen:
            self.last_seen = count
            self.delta = 0
            self.state = AlertState.IDLE
        elif count > self.last_seen:
            self.delta = count - self.last_seen
            if self.state is not AlertState.PENDING_INCREASE:
                self.state = AlertState.PENDING_INCREASE
                self._notify(self.delta)

        self.badge = count
        return self.state

    def acknowledge(self) -> None:
        """The user opened the list; the current badge becomes the baseline."""
        if self.state is AlertState.UNINITIALIZED:
            return
        self.last_seen = self.badge
        self.delta = 0
        self.state = AlertState.IDLE

    def _notify(self, delta: int) -> None:
        logger.debug(f"Count increased by {delta}")
        if self.on_increase is not None:
            self.on_increase(delta)
