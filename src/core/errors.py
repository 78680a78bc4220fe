"""Error types raised by the state-dispatch core."""


class LegendError(Exception):
    """Base class for all errors raised by the core."""


class UnknownStateError(LegendError, KeyError):
    """An identifier does not resolve to any registered state."""

    def __init__(self, identifier: str, known: tuple[str, ...] = ()):
        self.identifier = identifier
        self.known = tuple(known)
        super().__init__(identifier)

    def __str__(self) -> str:
        known = ", ".join(self.known) or "<none>"
        return f"unknown state '{self.identifier}' (known: {known})"


class ApplicationStateError(LegendError, RuntimeError):
    """Lifecycle calls were made out of order (e.g. update before start)."""
