from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from app.api.models import BOARD_CELLS, Cell, GameStatus, Mark

# Evaluation order matters: the first complete line wins.
WIN_LINES: tuple[tuple[int, int, int], ...] = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),  # rows
    (0, 3, 6), (1, 4, 7), (2, 5, 8),  # columns
    (0, 4, 8), (2, 4, 6),  # diagonals
)


@dataclass(frozen=True, slots=True)
class BoardOutcome:
    status: GameStatus
    winner: Mark | None = None
    line: tuple[int, int, int] | None = None

    @property
    def is_terminal(self) -> bool:
        return self.status != GameStatus.in_progress


IN_PROGRESS = BoardOutcome(status=GameStatus.in_progress)


def in_range(index: int) -> bool:
    return 0 <= index < BOARD_CELLS


def empty_cells(board: Sequence[Cell]) -> list[int]:
    return [i for i, cell in enumerate(board) if cell.mark is None]


def evaluate_board(board: Sequence[Cell]) -> BoardOutcome:
    """Terminal check for a board, after any vanish in the same move.

    A complete line beats a full board, so a move that both fills the last
    cell and completes a line is a win.
    """

    for line in WIN_LINES:
        a, b, c = line
        mark = board[a].mark
        if mark is not None and mark == board[b].mark == board[c].mark:
            return BoardOutcome(status=GameStatus.won, winner=mark, line=line)

    if all(cell.mark is not None for cell in board):
        return BoardOutcome(status=GameStatus.draw)

    return IN_PROGRESS
