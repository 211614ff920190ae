from __future__ import annotations

from enum import StrEnum
from typing import Annotated, Literal
from uuid import UUID

from pydantic import BaseModel, Field, StrictInt

BOARD_CELLS = 9
MAX_LIVE_MARKS = 3


class Mark(StrEnum):
    X = "X"
    O = "O"


class GameStatus(StrEnum):
    in_progress = "in_progress"
    won = "won"
    draw = "draw"


class GameResult(StrEnum):
    win = "win"
    draw = "draw"


class RejectReason(StrEnum):
    game_over = "game_over"
    out_of_range = "out_of_range"
    cell_occupied = "cell_occupied"


class Cell(BaseModel):
    mark: Mark | None = None

    # Placement counter; only used to tell which mark is oldest. 0 when empty.
    placed_at: int = 0


def _empty_board() -> list[Cell]:
    return [Cell() for _ in range(BOARD_CELLS)]


class GameState(BaseModel):
    """Authoritative engine state. Only GameEngine mutates it."""

    board: list[Cell] = Field(default_factory=_empty_board, min_length=BOARD_CELLS, max_length=BOARD_CELLS)

    # Oldest first; capped at MAX_LIVE_MARKS by the vanishing rule.
    x_history: list[int] = Field(default_factory=list)
    o_history: list[int] = Field(default_factory=list)

    current_player: Mark = Mark.X
    status: GameStatus = GameStatus.in_progress

    # Set only when status == won.
    winner: Mark | None = None
    winning_line: tuple[int, int, int] | None = None

    placement_seq: int = 0
    move_count: int = 0


class VanishEvent(BaseModel):
    type: Literal["vanish"] = "vanish"
    player: Mark
    vanished_index: int


class GameOverEvent(BaseModel):
    type: Literal["game_over"] = "game_over"
    result: GameResult
    winner: Mark | None = None


GameEvent = Annotated[VanishEvent | GameOverEvent, Field(discriminator="type")]


class Notification(BaseModel):
    """Toast-style text for a GameEvent. Display is up to the client."""

    title: str
    description: str
    duration_ms: int


class CellView(BaseModel):
    mark: Mark | None = None


class GameView(BaseModel):
    """Read-only snapshot handed to the rendering layer."""

    board: list[CellView]
    current_player: Mark
    status: GameStatus
    winner: Mark | None = None
    winning_line: tuple[int, int, int] | None = None
    result_banner: str | None = None
    vanish_warning: bool
    vanish_warning_message: str | None = None
    legal_moves: list[int]
    move_count: int


class MoveRequest(BaseModel):
    # Strict: "4", true and 2.0 are schema errors. No range constraint; the engine rejects out-of-range indices.
    index: StrictInt


class MoveResponse(BaseModel):
    accepted: bool
    rejected_reason: RejectReason | None = None
    state: GameView
    events: list[GameEvent] = Field(default_factory=list)
    notifications: list[Notification] = Field(default_factory=list)


class VanishWarningResponse(BaseModel):
    vanish_warning: bool
    message: str | None = None


class SessionResponse(BaseModel):
    session_id: UUID
    state: GameView
