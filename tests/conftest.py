"""Shared fixtures: recording states and a small canvas."""

from __future__ import annotations

import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "src"))

from core.registry import StateRegistry  # noqa: E402
from engine.graphics import Canvas  # noqa: E402
from states.base import State  # noqa: E402


class RecordingState(State):
    """Stub state that logs every lifecycle call into a shared list."""

    def __init__(self, name: str, calls: list[str] | None = None, tag: bool = False):
        self.name = name
        self.calls = calls if calls is not None else []
        self._prefix = f"{name}." if tag else ""

    def enter(self) -> None:
        self.calls.append(f"{self._prefix}enter")

    def exit(self) -> None:
        self.calls.append(f"{self._prefix}exit")

    def update(self, delta: float) -> None:
        self.calls.append(f"{self._prefix}update({delta})")

    def render(self, delta: float) -> None:
        self.calls.append(f"{self._prefix}render({delta})")


@pytest.fixture()
def title() -> RecordingState:
    return RecordingState("title")


@pytest.fixture()
def shared_calls() -> list[str]:
    return []


@pytest.fixture()
def two_states(shared_calls) -> StateRegistry:
    return StateRegistry({
        "title": RecordingState("title", shared_calls, tag=True),
        "play": RecordingState("play", shared_calls, tag=True),
    })


@pytest.fixture()
def canvas() -> Canvas:
    return Canvas(32, 20)
