"""Base class for application states.

Each state is one mutually-exclusive mode of the running application
(title screen, gameplay, pause menu...). The application forwards the
per-tick ``update``/``render`` calls to whichever state is current.
"""


class State:
    """Base class for all application states."""

    name: str = "base"

    def enter(self) -> None:
        """Called once when this state becomes current, before any tick."""

    def exit(self) -> None:
        """Called when the application transitions away from this state."""

    def update(self, delta: float) -> None:
        """Advance this state by ``delta`` seconds."""

    def render(self, delta: float) -> None:
        """Draw this state's frame."""
