"""Session tests: move counting, clock gating and restart semantics."""

from __future__ import annotations

import time

import pytest

from backend.engine.gamegenerator import Shuffler
from backend.engine.gamestate import RepeatingTicker, Session
from backend.errors import InvalidDefinition, NoPuzzleLoaded
from backend.models.puzzle import MoveResult, PuzzleDefinition, Tile


def _illegal_index(session: Session) -> int:
    """Return an index that is neither the empty slot nor adjacent to it."""
    grid = session.grid
    for index in range(grid.size):
        if index != grid.empty_index and not grid.can_move(index):
            return index
    raise AssertionError("every cell is adjacent to the empty slot")


def _legal_index(session: Session) -> int:
    """Return a movable index whose move does not solve the puzzle."""
    grid = session.grid
    empty = grid.empty_index
    for index in sorted(grid.neighbors(empty)):
        grid.move(index)
        solves = grid.is_solved()
        grid.move(empty)
        if not solves:
            return index
    raise AssertionError("every legal move solves the puzzle")


# -- loading ------------------------------------------------------------------


def test_unloaded_session(make_session) -> None:
    session = make_session()
    assert not session.is_loaded
    assert not session.is_solved
    assert session.move_count == 0
    assert session.elapsed_seconds == 0
    with pytest.raises(NoPuzzleLoaded):
        session.apply_move(0)
    with pytest.raises(NoPuzzleLoaded):
        session.restart()
    with pytest.raises(NoPuzzleLoaded):
        session.arrangement
    with pytest.raises(NoPuzzleLoaded):
        session.empty_index


def test_load_without_shuffle_is_solved(make_session) -> None:
    session = make_session(move_count=0)
    session.load(PuzzleDefinition.numbered(3, 3))
    assert session.is_loaded
    assert session.is_solved
    assert session.empty_index == 8
    assert (session.move_count, session.elapsed_seconds, session.timer_running) == (0, 0, False)


def test_invalid_definition_keeps_previous_puzzle(make_session) -> None:
    session = make_session(move_count=0)
    session.load(PuzzleDefinition.numbered(2, 2))
    bad = PuzzleDefinition(rows=3, cols=3, tiles=(Tile(0),))
    with pytest.raises(InvalidDefinition):
        session.load(bad)
    assert session.definition.rows == 2


# -- 3×3 scenario --------------------------------------------------------------


def test_one_step_shuffle_then_undo(make_session) -> None:
    session = make_session(move_count=1, seed=11)
    session.load(PuzzleDefinition.numbered(3, 3))
    assert session.empty_index in {5, 7}
    assert not session.is_solved

    assert session.apply_move(8) is MoveResult.SOLVED
    assert session.is_solved
    assert session.move_count == 1
    assert not session.timer_running


def test_replaying_the_walk_solves(make_session) -> None:
    session = make_session(move_count=60, seed=3)
    session.load(PuzzleDefinition.numbered(4, 4))
    steps = Shuffler.undo_sequence(session.grid, session.last_walk)

    results = [session.apply_move(index) for index in steps]
    assert MoveResult.ILLEGAL not in results
    assert session.is_solved
    assert results[-1] is MoveResult.SOLVED
    assert session.move_count == len(steps)


# -- move counting ------------------------------------------------------------


def test_move_count_only_counts_accepted_moves(make_session, tickers) -> None:
    session = make_session(move_count=20, seed=1)
    session.load(PuzzleDefinition.numbered(4, 4))

    for _ in range(5):
        assert session.apply_move(_illegal_index(session)) is MoveResult.ILLEGAL
        assert session.apply_move(session.empty_index) is MoveResult.ILLEGAL
    assert session.move_count == 0
    assert session.elapsed_seconds == 0
    assert not session.timer_running
    assert tickers.tickers == []

    for expected in range(1, 4):
        session.apply_move(_legal_index(session))
        assert session.move_count == expected


# -- clock --------------------------------------------------------------------


def test_first_accepted_move_starts_clock(make_session, tickers) -> None:
    session = make_session(move_count=20, seed=2)
    session.load(PuzzleDefinition.numbered(3, 3))

    session.apply_move(_legal_index(session))
    assert session.timer_running
    assert len(tickers.tickers) == 1
    assert tickers.last.started

    tickers.last.fire(3)
    assert session.elapsed_seconds == 3

    session.apply_move(_legal_index(session))
    assert len(tickers.tickers) == 1


def test_solving_freezes_the_clock(make_session, tickers) -> None:
    session = make_session(move_count=1, seed=4)
    session.load(PuzzleDefinition.numbered(3, 3))
    start = session.empty_index
    away = min(n for n in session.grid.neighbors(start) if n != 8)

    assert session.apply_move(away) is MoveResult.MOVED
    assert session.apply_move(start) is MoveResult.MOVED
    ticker = tickers.last
    ticker.fire(2)
    assert session.elapsed_seconds == 2

    assert session.apply_move(8) is MoveResult.SOLVED
    assert ticker.cancelled
    assert not session.timer_running
    assert session.is_solved

    # Late ticks from the stopped ticker are ignored.
    ticker.fire(5)
    assert session.elapsed_seconds == 2
    assert session.move_count == 3


def test_moves_after_solving_keep_clock_frozen(make_session, tickers) -> None:
    session = make_session(move_count=1, seed=9)
    session.load(PuzzleDefinition.numbered(2, 3))
    assert session.apply_move(5) is MoveResult.SOLVED
    assert len(tickers.tickers) == 1

    assert session.apply_move(4) is MoveResult.MOVED
    assert session.move_count == 2
    assert not session.timer_running
    assert len(tickers.tickers) == 1
    assert session.elapsed_seconds == 0


def test_restart_resets_progress_and_drops_old_ticks(make_session, tickers) -> None:
    session = make_session(move_count=30, seed=5)
    session.load(PuzzleDefinition.numbered(3, 3))
    session.apply_move(_legal_index(session))
    old = tickers.last
    old.fire(4)

    session.restart()
    assert old.cancelled
    assert (session.move_count, session.elapsed_seconds, session.timer_running) == (0, 0, False)

    old.fire(3)
    assert session.elapsed_seconds == 0

    session.apply_move(_legal_index(session))
    assert tickers.last is not old
    tickers.last.fire()
    assert session.elapsed_seconds == 1


def test_load_replaces_running_puzzle(make_session, tickers) -> None:
    session = make_session(move_count=30, seed=6)
    session.load(PuzzleDefinition.numbered(3, 3))
    session.apply_move(_legal_index(session))
    old = tickers.last

    session.load(PuzzleDefinition.numbered(4, 4, puzzle_id="next"))
    assert old.cancelled
    assert session.definition.puzzle_id == "next"
    assert (session.move_count, session.elapsed_seconds, session.timer_running) == (0, 0, False)


def test_close_stops_the_clock(make_session, tickers) -> None:
    with make_session(move_count=30, seed=8) as session:
        session.load(PuzzleDefinition.numbered(3, 3))
        session.apply_move(_legal_index(session))
        ticker = tickers.last

    assert ticker.cancelled
    assert not session.timer_running
    ticker.fire()
    assert session.elapsed_seconds == 0


# -- real ticker --------------------------------------------------------------


def test_repeating_ticker_stops_on_cancel() -> None:
    calls: list[int] = []
    ticker = RepeatingTicker(0.01, lambda: calls.append(1))
    ticker.start()
    time.sleep(0.1)
    ticker.cancel()
    stopped_at = len(calls)
    assert stopped_at > 0
    assert not ticker.running

    time.sleep(0.05)
    assert len(calls) == stopped_at


def test_session_with_real_ticker_freezes_after_solve() -> None:
    shuffler = Shuffler(move_count=1)
    session = Session(shuffler=shuffler, ticker_factory=lambda cb: RepeatingTicker(0.01, cb))
    session.load(PuzzleDefinition.numbered(1, 3))
    assert session.empty_index == 1

    assert session.apply_move(0) is MoveResult.MOVED
    time.sleep(0.1)
    assert session.timer_running
    assert session.elapsed_seconds > 0

    assert session.apply_move(1) is MoveResult.MOVED
    assert session.apply_move(2) is MoveResult.SOLVED
    frozen = session.elapsed_seconds
    time.sleep(0.05)
    assert session.elapsed_seconds == frozen
    session.close()
