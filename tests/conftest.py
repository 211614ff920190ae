from __future__ import annotations

from collections.abc import Generator

import fakeredis
import pytest
from fastapi.testclient import TestClient

from app.core.engine import GameEngine


@pytest.fixture(autouse=True)
def _hermetic_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep tests independent of whatever the developer has exported locally."""

    for name in ("VANISHING_SESSION_TTL_SECONDS", "VANISHING_NOTIFICATION_MS", "VANISHING_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture()
def engine() -> GameEngine:
    return GameEngine()


@pytest.fixture()
def client_and_redis() -> Generator[tuple[TestClient, fakeredis.FakeRedis], None, None]:
    """FastAPI TestClient wired to an in-memory fakeredis."""

    from app.api.deps import get_redis
    from app.main import app

    r = fakeredis.FakeRedis(decode_responses=True)

    def _override() -> Generator[fakeredis.FakeRedis, None, None]:
        yield r

    app.dependency_overrides[get_redis] = _override
    with TestClient(app) as c:
        yield c, r
    app.dependency_overrides.clear()
