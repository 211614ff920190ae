from __future__ import annotations

from contextlib import contextmanager
from uuid import uuid4

import redis

# Delete the key only while it still holds our token.
_RELEASE_LUA = """
if redis.call("get", KEYS[1]) == ARGV[1] then
    return redis.call("del", KEYS[1])
end
return 0
"""


class SessionBusyError(ValueError):
    pass


@contextmanager
def session_lock(*, r: redis.Redis, session_id: str, ttl_ms: int = 5_000):
    """Per-session lock so one engine only ever sees one operation at a time.

    Never waited on: a second request for the same session while one is in
    flight fails fast with SessionBusyError.

    Each holder sets a unique token and releases through a compare-and-delete
    script, so a holder that outlived `ttl_ms` won't drop a lock someone else
    has since taken.
    """

    key = f"lock:session:{session_id}"
    token = uuid4().hex
    acquired = r.set(key, token, nx=True, px=ttl_ms)
    if not acquired:
        raise SessionBusyError("Session is busy")
    try:
        yield
    finally:
        r.register_script(_RELEASE_LUA)(keys=[key], args=[token])
