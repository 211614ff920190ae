from __future__ import annotations

from collections.abc import Sequence

from app.api.models import (
    Cell,
    GameEvent,
    GameOverEvent,
    GameResult,
    GameState,
    GameStatus,
    Mark,
    Notification,
    VanishEvent,
)

DEFAULT_NOTIFICATION_MS = 3_000

RULES_TEXT = (
    "Place your mark (X or O) in any empty cell. When a player places their fourth mark, "
    "their first placed mark will disappear."
)


def vanish_warning_text(mark: Mark) -> str:
    return f"{mark.value}'s next move will make their first mark vanish!"


def notification_for_event(event: GameEvent, *, duration_ms: int = DEFAULT_NOTIFICATION_MS) -> Notification:
    """Toast text for an engine event."""

    if isinstance(event, VanishEvent):
        p = event.player.value
        return Notification(
            title=f"{p}'s First Move Vanished",
            description=f"Player {p}'s first placed mark has disappeared!",
            duration_ms=duration_ms,
        )

    if isinstance(event, GameOverEvent):
        if event.result == GameResult.draw or event.winner is None:
            description = "It's a draw!"
        else:
            description = f"Player {event.winner.value} wins!"
        return Notification(title="Game Over", description=description, duration_ms=duration_ms)

    raise ValueError(f"Unknown event: {event!r}")


def notifications_for_events(
    events: Sequence[GameEvent],
    *,
    duration_ms: int = DEFAULT_NOTIFICATION_MS,
) -> list[Notification]:
    return [notification_for_event(e, duration_ms=duration_ms) for e in events]


def result_banner(state: GameState) -> str | None:
    """Heading shown under the board once the game has ended."""

    if state.status == GameStatus.draw:
        return "It's a Draw!"
    if state.status == GameStatus.won and state.winner is not None:
        return f"Player {state.winner.value} Wins!"
    return None


def board_to_text(board: Sequence[Cell]) -> str:
    """Plain 3x3 rendering, handy for logs and test failure output."""

    rows = []
    for r in range(3):
        rows.append("|".join(board[r * 3 + c].mark or " " for c in range(3)))
    return "\n-+-+-\n".join(rows)
