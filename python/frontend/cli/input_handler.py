"""Single-keypress reader for the terminal frontend.

Arrow keys, WASD and the game's command letters are read without
requiring Enter, on Unix (tty+termios) and Windows (msvcrt).
"""

from __future__ import annotations

import os
import sys


# -- low-level character readers -----------------------------------------------


def _getch_unix() -> str:
    import termios
    import tty

    fd = sys.stdin.fileno()
    old = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        ch = sys.stdin.read(1)
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old)
    return ch


def _getch_windows() -> str:
    import msvcrt  # type: ignore[import-not-found]

    return msvcrt.getch().decode("utf-8", errors="ignore")


_getch = _getch_windows if os.name == "nt" else _getch_unix


# -- action mapping ------------------------------------------------------------

_KEY_MAP: dict[str, str] = {
    "w": "up",
    "s": "down",
    "a": "left",
    "d": "right",
    "q": "quit",
    "\x03": "quit",  # Ctrl-C
    "r": "restart",
    "n": "new",
    "1": "easy",
    "2": "medium",
    "3": "hard",
    "\r": "enter",
    "\n": "enter",
}

_ARROW_MAP: dict[str, str] = {
    "A": "up",
    "B": "down",
    "C": "right",
    "D": "left",
}


def resolve(ch: str) -> str:
    """Map a raw character to its action string."""
    action = _KEY_MAP.get(ch.lower()) if ch.isalpha() else _KEY_MAP.get(ch)
    if action is not None:
        return action
    return ch if ch.isprintable() else ""


# -- public API ----------------------------------------------------------------


def get_key() -> str:
    """Block for one keypress and return its action.

    Actions: "up" "down" "left" "right", "restart", "new", "easy",
    "medium", "hard", "enter", "quit" (q / Ctrl-C / Escape), any other
    printable character as itself, or "" for unrecognised keys.
    """
    ch = _getch()

    # Unix arrow keys arrive as ESC [ A/B/C/D
    if ch == "\x1b":
        if _getch() == "[":
            return _ARROW_MAP.get(_getch(), "")
        return "quit"

    return resolve(ch)


def get_key_timeout(timeout: float) -> str | None:
    """Like ``get_key`` but returns ``None`` after *timeout* seconds.

    Uses unbuffered ``os.read`` so ``select`` still sees the remaining
    bytes of an arrow-key escape sequence.
    """
    if os.name == "nt":
        import msvcrt  # type: ignore[import-not-found]
        import time

        end = time.monotonic() + timeout
        while time.monotonic() < end:
            if msvcrt.kbhit():
                return get_key()
            time.sleep(0.02)
        return None

    import select
    import termios
    import tty

    fd = sys.stdin.fileno()

    def read_ready(wait: float) -> str | None:
        ready, _, _ = select.select([fd], [], [], wait)
        if not ready:
            return None
        return os.read(fd, 1).decode("utf-8", errors="ignore")

    old = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        ch = read_ready(timeout)
        if ch is None:
            return None
        if ch != "\x1b":
            return resolve(ch)
        if read_ready(0.1) != "[":
            return "quit"  # bare Escape
        return _ARROW_MAP.get(read_ready(0.1) or "", "")
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old)
