from __future__ import annotations

import fakeredis
import pytest
from fastapi.testclient import TestClient


def _new_session(client: TestClient) -> str:
    resp = client.post("/session")
    assert resp.status_code == 201
    return resp.json()["session_id"]


def _move(client: TestClient, sid: str, index: int) -> dict:
    resp = client.post(f"/session/{sid}/move", json={"index": index})
    assert resp.status_code == 200
    return resp.json()


def test_healthcheck_and_info(client_and_redis: tuple[TestClient, fakeredis.FakeRedis]) -> None:
    client, _ = client_and_redis
    assert client.get("/healthcheck").json() == {"status": "ok"}

    info = client.get("/info").json()
    assert info["name"] == "vanishing-tic-tac-toe"
    assert "fourth mark" in info["rules"]


def test_create_session_returns_fresh_view(client_and_redis: tuple[TestClient, fakeredis.FakeRedis]) -> None:
    client, r = client_and_redis

    resp = client.post("/session")
    assert resp.status_code == 201
    data = resp.json()

    state = data["state"]
    assert state["board"] == [{"mark": None}] * 9
    assert state["current_player"] == "X"
    assert state["status"] == "in_progress"
    assert state["vanish_warning"] is False
    assert state["legal_moves"] == list(range(9))

    key = f"vanishing:session:{data['session_id']}"
    assert r.exists(key)
    assert 0 < r.ttl(key) <= 3600


def test_full_game_flow(client_and_redis: tuple[TestClient, fakeredis.FakeRedis]) -> None:
    client, _ = client_and_redis
    sid = _new_session(client)

    for index in (0, 3, 1, 4):
        body = _move(client, sid, index)
        assert body["accepted"] is True
        assert body["events"] == []
        assert body["notifications"] == []

    body = _move(client, sid, 2)
    assert body["accepted"] is True
    assert body["events"] == [{"type": "game_over", "result": "win", "winner": "X"}]
    assert body["notifications"] == [{"title": "Game Over", "description": "Player X wins!", "duration_ms": 3000}]

    state = body["state"]
    assert state["status"] == "won"
    assert state["winner"] == "X"
    assert state["winning_line"] == [0, 1, 2]
    assert state["result_banner"] == "Player X Wins!"
    assert state["legal_moves"] == []

    # Game over: further moves are silent no-ops.
    after = _move(client, sid, 8)
    assert after["accepted"] is False
    assert after["rejected_reason"] == "game_over"
    assert after["state"] == state

    # State survives between requests.
    assert client.get(f"/session/{sid}").json() == state

    reset = client.post(f"/session/{sid}/reset")
    assert reset.status_code == 200
    fresh = reset.json()
    assert fresh["status"] == "in_progress"
    assert fresh["board"] == [{"mark": None}] * 9
    assert fresh["current_player"] == "X"
    assert fresh["move_count"] == 0


def test_vanish_over_http(client_and_redis: tuple[TestClient, fakeredis.FakeRedis]) -> None:
    client, _ = client_and_redis
    sid = _new_session(client)

    for index in (0, 4, 1, 7, 3, 8):
        _move(client, sid, index)

    warning = client.get(f"/session/{sid}/vanish-warning").json()
    assert warning == {"vanish_warning": True, "message": "X's next move will make their first mark vanish!"}

    body = _move(client, sid, 2)
    assert body["events"] == [{"type": "vanish", "player": "X", "vanished_index": 0}]
    assert body["notifications"][0]["title"] == "X's First Move Vanished"
    assert body["state"]["board"][0] == {"mark": None}
    assert body["state"]["status"] == "in_progress"
    assert body["state"]["current_player"] == "O"


def test_invalid_moves_are_silent(client_and_redis: tuple[TestClient, fakeredis.FakeRedis]) -> None:
    client, _ = client_and_redis
    sid = _new_session(client)
    first = _move(client, sid, 4)

    for index, reason in ((4, "cell_occupied"), (9, "out_of_range"), (-2, "out_of_range")):
        body = _move(client, sid, index)
        assert body["accepted"] is False
        assert body["rejected_reason"] == reason
        assert body["state"] == first["state"]


def test_malformed_move_body(client_and_redis: tuple[TestClient, fakeredis.FakeRedis]) -> None:
    client, _ = client_and_redis
    sid = _new_session(client)

    for body in ({"index": "middle"}, {"index": "4"}, {"index": True}, {"index": 2.5}, {"index": 2.0}, {}):
        resp = client.post(f"/session/{sid}/move", json=body)
        assert resp.status_code == 422, body

    # Nothing was placed.
    state = client.get(f"/session/{sid}").json()
    assert state["move_count"] == 0
    assert all(cell["mark"] is None for cell in state["board"])


def test_unknown_session_404(client_and_redis: tuple[TestClient, fakeredis.FakeRedis]) -> None:
    client, _ = client_and_redis
    missing = "00000000-0000-0000-0000-000000000000"

    assert client.get(f"/session/{missing}").status_code == 404
    assert client.post(f"/session/{missing}/move", json={"index": 0}).status_code == 404
    assert client.post(f"/session/{missing}/reset").status_code == 404
    assert client.get(f"/session/{missing}/vanish-warning").status_code == 404
    assert client.delete(f"/session/{missing}").status_code == 404


def test_busy_session_409(client_and_redis: tuple[TestClient, fakeredis.FakeRedis]) -> None:
    client, r = client_and_redis
    sid = _new_session(client)

    r.set(f"lock:session:{sid}", "other-request")
    resp = client.post(f"/session/{sid}/move", json={"index": 0})
    assert resp.status_code == 409
    assert resp.json()["detail"] == "Session is busy"

    r.delete(f"lock:session:{sid}")
    assert _move(client, sid, 0)["accepted"] is True


def test_delete_discards_session(client_and_redis: tuple[TestClient, fakeredis.FakeRedis]) -> None:
    client, r = client_and_redis
    sid = _new_session(client)
    _move(client, sid, 0)

    resp = client.delete(f"/session/{sid}")
    assert resp.status_code == 204
    assert not r.exists(f"vanishing:session:{sid}")
    assert client.get(f"/session/{sid}").status_code == 404


def test_sessions_are_independent(client_and_redis: tuple[TestClient, fakeredis.FakeRedis]) -> None:
    client, _ = client_and_redis
    a = _new_session(client)
    b = _new_session(client)

    _move(client, a, 4)

    assert client.get(f"/session/{a}").json()["board"][4] == {"mark": "X"}
    assert client.get(f"/session/{b}").json()["board"][4] == {"mark": None}


def test_notification_duration_from_env(
    client_and_redis: tuple[TestClient, fakeredis.FakeRedis],
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    client, _ = client_and_redis
    monkeypatch.setenv("VANISHING_NOTIFICATION_MS", "1500")
    sid = _new_session(client)

    for index in (0, 3, 1, 4):
        _move(client, sid, index)
    body = _move(client, sid, 2)

    assert body["notifications"][0]["duration_ms"] == 1500
