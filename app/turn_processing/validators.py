from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from app.api.models import GameState, GameStatus, RejectReason
from app.core.board import in_range


@dataclass(frozen=True, slots=True)
class ValidationContext:
    """Inputs available to validators."""

    index: int


class MoveValidator(ABC):
    """A small, composable check for an incoming move.

    Validators return a reason instead of raising: a rejected move is a silent
    no-op for the caller.
    """

    @abstractmethod
    def validate(self, *, ctx: ValidationContext, state: GameState) -> RejectReason | None:
        raise NotImplementedError


@dataclass(frozen=True, slots=True)
class InProgressValidator(MoveValidator):
    """Deny every move once the game is won or drawn."""

    def validate(self, *, ctx: ValidationContext, state: GameState) -> RejectReason | None:
        if state.status != GameStatus.in_progress:
            return RejectReason.game_over
        return None


@dataclass(frozen=True, slots=True)
class IndexRangeValidator(MoveValidator):
    def validate(self, *, ctx: ValidationContext, state: GameState) -> RejectReason | None:
        if not in_range(ctx.index):
            return RejectReason.out_of_range
        return None


@dataclass(frozen=True, slots=True)
class EmptyCellValidator(MoveValidator):
    """Only empty cells can take a mark. Must run after IndexRangeValidator."""

    def validate(self, *, ctx: ValidationContext, state: GameState) -> RejectReason | None:
        if state.board[ctx.index].mark is not None:
            return RejectReason.cell_occupied
        return None


@dataclass(frozen=True, slots=True)
class ValidatorPipeline:
    validators: tuple[MoveValidator, ...]

    def first_rejection(self, *, ctx: ValidationContext, state: GameState) -> RejectReason | None:
        for v in self.validators:
            reason = v.validate(ctx=ctx, state=state)
            if reason is not None:
                return reason
        return None


DEFAULT_MOVE_PIPELINE = ValidatorPipeline(
    validators=(
        InProgressValidator(),
        IndexRangeValidator(),
        EmptyCellValidator(),
    )
)
