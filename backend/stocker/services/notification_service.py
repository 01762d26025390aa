"""In-process toast notifications.

A single bus per process holds the latest toasts (newest first, at most
TOAST_LIMIT) and calls every subscribed listener with the new list after
each change.
"""
from typing import Callable, List, Optional

from stocker.constants import ToastVariant
from stocker.schemas import Toast
from stocker.utils.logger import get_logger

logger = get_logger("notifications")

TOAST_LIMIT = 3

Listener = Callable[[List[Toast]], None]


class NotificationBus:
    def __init__(self, limit: int = TOAST_LIMIT):
        self.limit = limit
        self._toasts: List[Toast] = []
        self._listeners: List[Listener] = []
        self._count = 0

    @property
    def toasts(self) -> List[Toast]:
        return list(self._toasts)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register listener; returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _next_id(self) -> str:
        self._count += 1
        return str(self._count)

    def _publish(self) -> None:
        snapshot = self.toasts
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception as e:
                logger.error(f"Notification listener failed: {e}", exc_info=True)

    def notify(
        self,
        title: str,
        description: Optional[str] = None,
        variant: ToastVariant = ToastVariant.DEFAULT,
    ) -> Toast:
        toast = Toast(id=self._next_id(), title=title, description=description, variant=variant)
        self._toasts = [toast, *self._toasts][: self.limit]
        self._publish()
        return toast

    def update(self, toast_id: str, **changes) -> Optional[Toast]:
        updated = None
        for i, t in enumerate(self._toasts):
            if t.id == toast_id:
                updated = t.model_copy(update=changes)
                self._toasts[i] = updated
        if updated:
            self._publish()
        return updated

    def dismiss(self, toast_id: Optional[str] = None) -> List[Toast]:
        """Close one toast (or all when toast_id is None); returns those closed."""
        closed = []
        for i, t in enumerate(self._toasts):
            if toast_id is None or t.id == toast_id:
                self._toasts[i] = t.model_copy(update={"open": False})
                closed.append(self._toasts[i])
        if closed:
            self._publish()
        return closed

    def remove(self, toast_id: Optional[str] = None) -> None:
        if toast_id is None:
            self._toasts = []
        else:
            self._toasts = [t for t in self._toasts if t.id != toast_id]
        self._publish()


bus = NotificationBus()


def log_toasts(toasts: List[Toast]) -> None:
    if toasts:
        latest = toasts[0]
        logger.debug(f"[TOAST] {latest.variant.value}: {latest.title} - {latest.description or ''}")
