from __future__ import annotations

from collections.abc import Generator

import redis

from app.infra.redis_client import create_redis
from app.infra.settings import Settings, settings_from_env


def get_redis() -> Generator[redis.Redis, None, None]:
    client = create_redis()
    try:
        yield client
    finally:
        client.close()


def get_settings() -> Settings:
    return settings_from_env()
