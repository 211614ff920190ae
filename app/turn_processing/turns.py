from __future__ import annotations

from app.api.models import MAX_LIVE_MARKS, GameState, GameStatus, Mark


def opponent_of(mark: Mark) -> Mark:
    return Mark.O if mark == Mark.X else Mark.X


def history_for(*, state: GameState, mark: Mark) -> list[int]:
    """Return the live move history list for `mark` (the stored list, not a copy)."""

    return state.x_history if mark == Mark.X else state.o_history


def vanish_pending(*, state: GameState) -> bool:
    """Whether the player to move will lose their oldest mark on their next move.

    Only meaningful while the game is in progress; a finished game accepts no moves.
    """

    if state.status != GameStatus.in_progress:
        return False
    return len(history_for(state=state, mark=state.current_player)) == MAX_LIVE_MARKS


def advance_turn(*, state: GameState) -> None:
    state.current_player = opponent_of(state.current_player)
