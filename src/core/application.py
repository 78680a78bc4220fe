"""Top-level state dispatcher.

The application owns a :class:`StateRegistry` and the identifier of the
one state that is currently live. Every tick the frame driver calls
``update(delta)`` then ``render(delta)``; both resolve the current
identifier through the registry and forward to exactly one state.

Exceptions raised by a state are never caught here. They propagate to
the driver, which decides whether the loop can continue.
"""

from __future__ import annotations
import logging
import math
from typing import TYPE_CHECKING

from core.errors import ApplicationStateError
from core.registry import StateRegistry
from states.base import State

if TYPE_CHECKING:
    from core.event_bus import EventBus
    from engine.graphics import Canvas

log = logging.getLogger("legend.application")


def _check_delta(delta: float) -> float:
    if isinstance(delta, bool) or not isinstance(delta, (int, float)):
        raise TypeError(f"delta must be a number, got {type(delta).__name__}")
    if not (math.isfinite(delta) and delta >= 0):
        raise ValueError(f"delta must be finite and non-negative, got {delta!r}")
    return delta


class Application:
    """Holds the state registry and dispatches ticks to the current state."""

    def __init__(self, game_states: StateRegistry, initial_identifier: str,
                 event_bus: EventBus | None = None):
        # Fail at construction rather than on the first tick
        game_states.lookup(initial_identifier)
        self.game_states = game_states
        self.event_bus = event_bus
        self._current_identifier = initial_identifier
        self._started = False

    @property
    def current_identifier(self) -> str:
        return self._current_identifier

    @property
    def current_state(self) -> State:
        return self.game_states.lookup(self._current_identifier)

    @property
    def started(self) -> bool:
        return self._started

    # --- Lifecycle ---

    def start(self) -> None:
        """Enter the initial state. Must run once before the first tick."""
        if self._started:
            raise ApplicationStateError("application already started")
        state = self.current_state
        state.enter()
        self._started = True
        log.info("Entered initial state '%s'", self._current_identifier)
        self._publish("state_entered", {"state": self._current_identifier})

    def transition(self, new_identifier: str) -> None:
        """Make ``new_identifier`` the current state.

        Calls ``exit()`` on the outgoing state and ``enter()`` on the
        incoming one. The target is validated before anything changes.

        If ``exit()`` raises, the outgoing state stays current. If the
        incoming ``enter()`` raises, no state is live: the application
        drops back to unstarted and ticks fail until ``start()`` enters
        the new state again.
        """
        self._require_started("transition")
        incoming = self.game_states.lookup(new_identifier)
        previous = self._current_identifier
        if new_identifier == previous:
            return

        self.current_state.exit()
        self._publish("state_exited", {"state": previous})
        self._current_identifier = new_identifier
        self._started = False
        incoming.enter()
        self._started = True
        log.info("State %s → %s", previous, new_identifier)
        self._publish("state_entered", {"state": new_identifier})
        self._publish("state_changed", {"previous": previous, "current": new_identifier})

    # --- Per-tick dispatch ---

    def update(self, delta: float) -> None:
        _check_delta(delta)
        self._require_started("update")
        self.current_state.update(delta)

    def render(self, delta: float) -> None:
        _check_delta(delta)
        self._require_started("render")
        self.current_state.render(delta)

    def _require_started(self, operation: str) -> None:
        if not self._started:
            raise ApplicationStateError(f"{operation}() called before start()")

    def _publish(self, event_type: str, data: dict) -> None:
        if self.event_bus is not None:
            self.event_bus.publish(event_type, data)


def create_application(graphics: Canvas, initial_identifier: str = "title",
                       event_bus: EventBus | None = None) -> Application:
    """Build the registry and return an application with its state entered."""
    app = Application(StateRegistry.new(graphics), initial_identifier, event_bus)
    app.start()
    return app
