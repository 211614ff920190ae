from __future__ import annotations

import logging
from uuid import UUID, uuid4

import redis

from app.api.models import GameState
from app.core.engine import GameEngine

logger = logging.getLogger(__name__)

SESSION_KEY_PREFIX = "vanishing:session:"  # + {uuid}


class SessionNotFoundError(ValueError):
    pass


def _session_key(session_id: UUID) -> str:
    return f"{SESSION_KEY_PREFIX}{session_id}"


def save_session(*, r: redis.Redis, session_id: UUID, engine: GameEngine, ttl_seconds: int) -> None:
    # Every write refreshes the TTL; an idle session simply expires.
    r.set(_session_key(session_id), engine.state.model_dump_json(), ex=ttl_seconds)


def create_session(*, r: redis.Redis, ttl_seconds: int) -> tuple[UUID, GameEngine]:
    session_id = uuid4()
    engine = GameEngine()
    save_session(r=r, session_id=session_id, engine=engine, ttl_seconds=ttl_seconds)
    logger.info("session %s created", session_id)
    return session_id, engine


def get_session(*, r: redis.Redis, session_id: UUID) -> GameEngine | None:
    raw = r.get(_session_key(session_id))
    if not raw:
        return None
    return GameEngine(GameState.model_validate_json(raw))


def require_session(*, r: redis.Redis, session_id: UUID) -> GameEngine:
    engine = get_session(r=r, session_id=session_id)
    if engine is None:
        raise SessionNotFoundError("Session not found")
    return engine


def delete_session(*, r: redis.Redis, session_id: UUID) -> bool:
    removed = bool(r.delete(_session_key(session_id)))
    if removed:
        logger.info("session %s discarded", session_id)
    return removed
