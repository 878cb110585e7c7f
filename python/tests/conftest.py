"""Shared fixtures: a manually driven ticker and seeded sessions."""

from __future__ import annotations

import random
from typing import Callable

import pytest

from backend.engine.gamegenerator import Shuffler
from backend.engine.gamestate import Session


class FakeTicker:
    """Ticker whose ticks are delivered by calling ``fire()``."""

    def __init__(self, callback: Callable[[], None]) -> None:
        self.callback = callback
        self.started = False
        self.cancelled = False

    def start(self) -> None:
        self.started = True

    def cancel(self) -> None:
        self.cancelled = True

    def fire(self, times: int = 1) -> None:
        for _ in range(times):
            self.callback()


class FakeTickerFactory:
    def __init__(self) -> None:
        self.tickers: list[FakeTicker] = []

    def __call__(self, callback: Callable[[], None]) -> FakeTicker:
        ticker = FakeTicker(callback)
        self.tickers.append(ticker)
        return ticker

    @property
    def last(self) -> FakeTicker:
        return self.tickers[-1]


@pytest.fixture
def tickers() -> FakeTickerFactory:
    return FakeTickerFactory()


@pytest.fixture
def make_session(tickers: FakeTickerFactory) -> Callable[..., Session]:
    """Build a session with a seeded shuffler and fake ticks."""

    def _make(move_count: int | None = None, seed: int = 0) -> Session:
        shuffler = Shuffler(rng=random.Random(seed), move_count=move_count)
        return Session(shuffler=shuffler, ticker_factory=tickers)

    return _make
