from __future__ import annotations

import logging
from dataclasses import dataclass, field

from app.api.models import (
    MAX_LIVE_MARKS,
    Cell,
    CellView,
    GameEvent,
    GameOverEvent,
    GameResult,
    GameState,
    GameStatus,
    GameView,
    RejectReason,
    VanishEvent,
)
from app.core.board import empty_cells, evaluate_board
from app.core.game_state_text import board_to_text, result_banner, vanish_warning_text
from app.fsm import GameFSM
from app.turn_processing.turns import advance_turn, history_for, vanish_pending
from app.turn_processing.validators import DEFAULT_MOVE_PIPELINE, ValidationContext, ValidatorPipeline

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MoveOutcome:
    """Result of `GameEngine.apply_move`.

    - `accepted`: False means nothing changed; `rejected_reason` says why.
    - `events`: vanish and/or game-over events, in the order they happened.
    """

    accepted: bool
    rejected_reason: RejectReason | None = None
    events: list[GameEvent] = field(default_factory=list)


class GameEngine:
    """Vanishing tic-tac-toe: each player keeps at most three marks on the board.

    One engine per game session. The engine owns its GameState; callers read
    `view()` (or a `snapshot()`) and submit moves, they never mutate state.
    """

    def __init__(self, state: GameState | None = None, *, pipeline: ValidatorPipeline = DEFAULT_MOVE_PIPELINE):
        self._state = state if state is not None else GameState()
        self._pipeline = pipeline
        self._fsm = GameFSM(self._state)

    @property
    def state(self) -> GameState:
        return self._state

    def snapshot(self) -> GameState:
        return self._state.model_copy(deep=True)

    def apply_move(self, index: int) -> MoveOutcome:
        state = self._state

        reason = self._pipeline.first_rejection(ctx=ValidationContext(index=index), state=state)
        if reason is not None:
            return MoveOutcome(accepted=False, rejected_reason=reason)

        mover = state.current_player
        events: list[GameEvent] = []

        state.placement_seq += 1
        state.board[index] = Cell(mark=mover, placed_at=state.placement_seq)
        state.move_count += 1

        history = history_for(state=state, mark=mover)
        history.append(index)
        if len(history) > MAX_LIVE_MARKS:
            vanished = history.pop(0)
            state.board[vanished] = Cell()
            events.append(VanishEvent(player=mover, vanished_index=vanished))
            logger.debug("%s placed at %d; oldest mark at %d vanished", mover.value, index, vanished)
        else:
            logger.debug("%s placed at %d", mover.value, index)

        outcome = evaluate_board(state.board)
        if outcome.status == GameStatus.won:
            self._fsm.declare_win()
            self._fsm.sync_status_to_model()
            state.winner = outcome.winner
            state.winning_line = outcome.line
            events.append(GameOverEvent(result=GameResult.win, winner=outcome.winner))
        elif outcome.status == GameStatus.draw:
            self._fsm.declare_draw()
            self._fsm.sync_status_to_model()
            events.append(GameOverEvent(result=GameResult.draw))
        else:
            advance_turn(state=state)

        if outcome.is_terminal:
            logger.debug("game over (%s)\n%s", outcome.status.value, board_to_text(state.board))

        return MoveOutcome(accepted=True, events=events)

    def reset(self) -> None:
        self._state = GameState()
        self._fsm = GameFSM(self._state)

    def vanish_warning(self) -> bool:
        return vanish_pending(state=self._state)

    def vanish_warning_message(self) -> str | None:
        if not self.vanish_warning():
            return None
        return vanish_warning_text(self._state.current_player)

    def legal_moves(self) -> list[int]:
        if not self._fsm.accepts_moves:
            return []
        return empty_cells(self._state.board)

    def view(self) -> GameView:
        s = self._state
        return GameView(
            board=[CellView(mark=c.mark) for c in s.board],
            current_player=s.current_player,
            status=s.status,
            winner=s.winner,
            winning_line=s.winning_line,
            result_banner=result_banner(s),
            vanish_warning=self.vanish_warning(),
            vanish_warning_message=self.vanish_warning_message(),
            legal_moves=self.legal_moves(),
            move_count=s.move_count,
        )
