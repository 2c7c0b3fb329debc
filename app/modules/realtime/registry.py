"""Thread-safe registry of change-notification subscriptions.

A notification only says "table X changed for workshop Y"; subscribers are
expected to re-fetch. Every subscribe() returns a handle that must be released,
either explicitly with unsubscribe() or by using it as a context manager.
"""
import itertools
import logging
import threading
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)

# Tables a workshop detail view watches
WATCHED_TABLES = (
    "workshops",
    "workshop_tasks",
    "workshop_groups",
    "group_members",
    "user_workshops",
    "workshop_judges",
    "workshop_leaderboard",
    "announcements",
)


@dataclass(frozen=True)
class ChangeEvent:
    table: str
    workshop_id: Optional[str] = None


Callback = Callable[[ChangeEvent], None]


class Subscription:
    def __init__(self, registry: "NotificationRegistry", subscription_id: int, table: str, workshop_id: Optional[str]):
        self._registry = registry
        self.id = subscription_id
        self.table = table
        self.workshop_id = workshop_id

    @property
    def active(self) -> bool:
        return self._registry.is_registered(self.id)

    def unsubscribe(self) -> None:
        """Release the subscription. Safe to call more than once."""
        self._registry._remove(self.id)

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.unsubscribe()


class NotificationRegistry:
    def __init__(self):
        self._lock = threading.Lock()
        self._ids = itertools.count(1)
        self._subscribers: Dict[int, Tuple[str, Optional[str], Callback]] = {}

    def subscribe(self, table: str, callback: Callback, workshop_id: Optional[str] = None) -> Subscription:
        """Watch a table, optionally only rows of one workshop (workshop_id=eq filter)."""
        with self._lock:
            subscription_id = next(self._ids)
            self._subscribers[subscription_id] = (table, workshop_id, callback)
        logger.debug(f"Subscribed {subscription_id} to {table} (workshop={workshop_id})")
        return Subscription(self, subscription_id, table, workshop_id)

    def _remove(self, subscription_id: int) -> None:
        with self._lock:
            removed = self._subscribers.pop(subscription_id, None)
        if removed is not None:
            logger.debug(f"Unsubscribed {subscription_id}")

    def is_registered(self, subscription_id: int) -> bool:
        with self._lock:
            return subscription_id in self._subscribers

    def subscriber_count(self, table: Optional[str] = None) -> int:
        with self._lock:
            if table is None:
                return len(self._subscribers)
            return sum(1 for t, _, _ in self._subscribers.values() if t == table)

    def notify(self, table: str, workshop_id: Optional[str] = None) -> int:
        """Signal a change. Returns how many subscribers were called.

        Unfiltered subscribers hear every change on the table; filtered ones only
        hear changes for their workshop. A change without a workshop id reaches
        every subscriber of the table.
        """
        event = ChangeEvent(table=table, workshop_id=workshop_id)
        with self._lock:
            targets: List[Callback] = [
                callback for t, wid, callback in self._subscribers.values()
                if t == table and (wid is None or workshop_id is None or wid == workshop_id)
            ]
        for callback in targets:
            try:
                callback(event)
            except Exception as e:
                logger.warning(f"Change listener failed for {table}: {e}")
        return len(targets)


registry = NotificationRegistry()
