"""Cancellable once-per-interval callback used for the game clock."""

from __future__ import annotations

import threading
from typing import Callable, Protocol


class Ticker(Protocol):
    def start(self) -> None: ...

    def cancel(self) -> None: ...


TickerFactory = Callable[[Callable[[], None]], Ticker]


class RepeatingTicker:
    """Calls *callback* every *interval* seconds on a daemon thread.

    ``cancel()`` waits for the thread to exit, so once it returns no
    further callback can start.
    """

    def __init__(self, interval: float, callback: Callable[[], None]) -> None:
        self.interval = interval
        self._callback = callback
        self._stopped = threading.Event()
        self._thread: threading.Thread | None = None

    def start(self) -> None:
        if self._thread is not None:
            return
        self._thread = threading.Thread(
            target=self._run, name="puzzle-ticker", daemon=True
        )
        self._thread.start()

    def cancel(self) -> None:
        self._stopped.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join()

    @property
    def running(self) -> bool:
        return self._thread is not None and not self._stopped.is_set()

    def _run(self) -> None:
        while not self._stopped.wait(self.interval):
            self._callback()
