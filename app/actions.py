from __future__ import annotations

from dataclasses import dataclass, field
from uuid import UUID

import redis

from app.api.models import GameEvent, GameView, Notification, RejectReason
from app.core.game_state_text import notifications_for_events
from app.game_store import require_session, save_session
from app.infra.settings import Settings
from app.lock import session_lock


@dataclass(frozen=True, slots=True)
class ActionResult:
    """Result of running one engine operation against a stored session."""

    view: GameView
    accepted: bool = True
    rejected_reason: RejectReason | None = None
    events: list[GameEvent] = field(default_factory=list)
    notifications: list[Notification] = field(default_factory=list)


def dispatch_move(*, r: redis.Redis, session_id: UUID, index: int, settings: Settings) -> ActionResult:
    """Entry point for a cell click.

    Applies a move by:
    - acquiring the per-session lock
    - loading the engine from the session store
    - applying the move (rejections are silent no-ops)
    - persisting state and turning events into notifications
    """

    with session_lock(r=r, session_id=str(session_id)):
        engine = require_session(r=r, session_id=session_id)
        outcome = engine.apply_move(index)
        save_session(r=r, session_id=session_id, engine=engine, ttl_seconds=settings.session_ttl_seconds)

        return ActionResult(
            view=engine.view(),
            accepted=outcome.accepted,
            rejected_reason=outcome.rejected_reason,
            events=outcome.events,
            notifications=notifications_for_events(outcome.events, duration_ms=settings.notification_ms),
        )


def dispatch_reset(*, r: redis.Redis, session_id: UUID, settings: Settings) -> ActionResult:
    with session_lock(r=r, session_id=str(session_id)):
        engine = require_session(r=r, session_id=session_id)
        engine.reset()
        save_session(r=r, session_id=session_id, engine=engine, ttl_seconds=settings.session_ttl_seconds)
        return ActionResult(view=engine.view())
