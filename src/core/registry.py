"""Fixed mapping from state identifier to state instance."""

from __future__ import annotations
import logging
from types import MappingProxyType
from typing import TYPE_CHECKING, Iterator, Mapping

from core.errors import UnknownStateError
from states.base import State

if TYPE_CHECKING:
    from engine.graphics import Canvas

log = logging.getLogger("legend.registry")


class StateRegistry:
    """Read-only collection of named states, built once at startup."""

    def __init__(self, states: Mapping[str, State]):
        checked: dict[str, State] = {}
        for identifier, state in states.items():
            if not isinstance(identifier, str) or not identifier:
                raise ValueError(f"invalid state identifier: {identifier!r}")
            if not isinstance(state, State):
                raise TypeError(
                    f"state '{identifier}' is {type(state).__name__}, not a State"
                )
            checked[identifier] = state
        self._states = MappingProxyType(checked)

    @classmethod
    def new(cls, graphics: Canvas) -> StateRegistry:
        """Construct every known state and register it under its name."""
        from states.title import TitleState

        states = [TitleState(graphics)]
        registry = cls({state.name: state for state in states})
        log.info("State registry built: %s", ", ".join(registry.identifiers))
        return registry

    def lookup(self, identifier: str) -> State:
        try:
            return self._states[identifier]
        except KeyError:
            raise UnknownStateError(identifier, self.identifiers) from None

    @property
    def identifiers(self) -> tuple[str, ...]:
        return tuple(sorted(self._states))

    @property
    def states(self) -> Mapping[str, State]:
        return self._states

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._states

    def __len__(self) -> int:
        return len(self._states)

    def __iter__(self) -> Iterator[str]:
        return iter(self._states)
