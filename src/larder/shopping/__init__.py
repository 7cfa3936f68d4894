"""
Larder - Shopping list.

Reconciliation of saved dishes against the library, badge alerts, and
refresh coordination.
"""

from larder.shopping.alerts import AlertState, AlertTracker, shopping_notice_message
from larder.shopping.reconcile import (
    ShoppingList,
    build_shopping_list,
    compute_needed,
    group_needed,
    needed_count,
)
from larder.shopping.refresh import AlertCoordinator, ShoppingRefresher

__all__ = [
    "AlertCoordinator",
    "AlertState",
    "AlertTracker",
    "ShoppingList",
    "ShoppingRefresher",
    "build_shopping_list",
    "compute_needed",
    "group_needed",
    "needed_count",
    "shopping_notice_message",
]
