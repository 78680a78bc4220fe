import logging
from typing import Any, Callable

log = logging.getLogger("legend.event_bus")


class EventBus:
    """Lifecycle notifications from the application to outer layers.

    The application publishes ``state_entered``, ``state_exited`` and
    ``state_changed``; the display listens so snapshots carry the name of
    the state that drew them. Publishing happens on the frame loop only.
    """

    def __init__(self):
        self._subscribers: dict[str, list[Callable]] = {}

    def subscribe(self, event_type: str, callback: Callable) -> None:
        self._subscribers.setdefault(event_type, []).append(callback)
        log.debug("Subscribed to '%s': %s", event_type, _callback_name(callback))

    def unsubscribe(self, event_type: str, callback: Callable) -> None:
        # Bound methods are rebuilt on each attribute access, so compare by equality
        callbacks = self._subscribers.get(event_type)
        if callbacks:
            self._subscribers[event_type] = [cb for cb in callbacks if cb != callback]

    def has_subscribers(self, event_type: str) -> bool:
        return bool(self._subscribers.get(event_type))

    def publish(self, event_type: str, data: Any = None) -> None:
        for callback in list(self._subscribers.get(event_type, [])):
            try:
                callback(data)
            except Exception:
                log.exception(
                    "Error in event handler for '%s': %s",
                    event_type,
                    _callback_name(callback),
                )


def _callback_name(callback: Callable) -> str:
    return getattr(callback, "__qualname__", None) or repr(callback)
