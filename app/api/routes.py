from __future__ import annotations

from uuid import UUID

import redis
from fastapi import APIRouter, Depends, HTTPException, Response, status

from app.actions import dispatch_move, dispatch_reset
from app.api.deps import get_redis, get_settings
from app.api.models import (
    GameView,
    MoveRequest,
    MoveResponse,
    SessionResponse,
    VanishWarningResponse,
)
from app.game_store import SessionNotFoundError, create_session, delete_session, get_session
from app.infra.settings import Settings
from app.lock import SessionBusyError

router = APIRouter()


def _http_error(e: ValueError) -> HTTPException:
    if isinstance(e, SessionNotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    if isinstance(e, SessionBusyError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))


@router.get("/healthcheck")
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


@router.post("/session", response_model=SessionResponse, status_code=status.HTTP_201_CREATED)
async def create_session_route(
    r: redis.Redis = Depends(get_redis),
    settings: Settings = Depends(get_settings),
) -> SessionResponse:
    session_id, engine = create_session(r=r, ttl_seconds=settings.session_ttl_seconds)
    return SessionResponse(session_id=session_id, state=engine.view())


@router.get("/session/{session_id}", response_model=GameView)
async def get_session_route(session_id: UUID, r: redis.Redis = Depends(get_redis)) -> GameView:
    engine = get_session(r=r, session_id=session_id)
    if engine is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Session not found")
    return engine.view()


@router.post("/session/{session_id}/move", response_model=MoveResponse)
async def move_route(
    session_id: UUID,
    payload: MoveRequest,
    r: redis.Redis = Depends(get_redis),
    settings: Settings = Depends(get_settings),
) -> MoveResponse:
    try:
        result = dispatch_move(r=r, session_id=session_id, index=payload.index, settings=settings)
    except ValueError as e:
        raise _http_error(e) from e

    return MoveResponse(
        accepted=result.accepted,
        rejected_reason=result.rejected_reason,
        state=result.view,
        events=result.events,
        notifications=result.notifications,
    )


@router.post("/session/{session_id}/reset", response_model=GameView)
async def reset_route(
    session_id: UUID,
    r: redis.Redis = Depends(get_redis),
    settings: Settings = Depends(get_settings),
) -> GameView:
    try:
        result = dispatch_reset(r=r, session_id=session_id, settings=settings)
    except ValueError as e:
        raise _http_error(e) from e
    return result.view


@router.get("/session/{session_id}/vanish-warning", response_model=VanishWarningResponse)
async def vanish_warning_route(session_id: UUID, r: redis.Redis = Depends(get_redis)) -> VanishWarningResponse:
    engine = get_session(r=r, session_id=session_id)
    if engine is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Session not found")
    return VanishWarningResponse(vanish_warning=engine.vanish_warning(), message=engine.vanish_warning_message())


@router.delete("/session/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_session_route(session_id: UUID, r: redis.Redis = Depends(get_redis)) -> Response:
    """The hosting view unmounted: discard the session's game."""

    if not delete_session(r=r, session_id=session_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Session not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
