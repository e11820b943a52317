"""Shared fixtures: scripted keyboard input and a fake clock."""

from __future__ import annotations

import sys
from collections.abc import Callable, Iterable

import pytest

import mindfulness


class FakeClock:
    """Monotonic clock that only moves when something sleeps."""

    def __init__(self) -> None:
        self.now = 0.0

    def monotonic(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock(monkeypatch: pytest.MonkeyPatch) -> FakeClock:
    fake = FakeClock()
    monkeypatch.setattr(mindfulness, "_now", fake.monotonic)
    monkeypatch.setattr(mindfulness, "_pause", fake.sleep)
    return fake


@pytest.fixture
def feed(monkeypatch: pytest.MonkeyPatch) -> Callable[[Iterable[str]], None]:
    """Script the answers ``input()`` returns. Running out raises EOFError."""

    def _feed(answers: Iterable[str]) -> None:
        remaining = iter(answers)

        def fake_input(prompt: str = "") -> str:
            sys.stdout.write(prompt)
            try:
                return next(remaining)
            except StopIteration:
                raise EOFError from None

        monkeypatch.setattr("builtins.input", fake_input)

    return _feed
