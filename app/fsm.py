from __future__ import annotations

from statemachine import State, StateMachine

from app.api.models import GameState, GameStatus


class GameFSM(StateMachine):
    """FSM wrapper around GameState.status.

    - phases: in progress -> won | draw
    - both end states are final; a reset builds a fresh GameState and a fresh FSM.
    - the engine mutates the board; the FSM only guards status transitions.
    """

    in_progress = State(
        GameStatus.in_progress.value,
        value=GameStatus.in_progress.value,
        initial=True,
    )
    won = State(GameStatus.won.value, value=GameStatus.won.value, final=True)
    drawn = State(GameStatus.draw.value, value=GameStatus.draw.value, final=True)

    declare_win = in_progress.to(won)
    declare_draw = in_progress.to(drawn)

    def __init__(self, game: GameState):
        self.game = game
        super().__init__(start_value=game.status.value)

    @property
    def accepts_moves(self) -> bool:
        return self.current_state == self.in_progress

    def sync_status_to_model(self) -> None:
        self.game.status = GameStatus(str(self.current_state.value))
