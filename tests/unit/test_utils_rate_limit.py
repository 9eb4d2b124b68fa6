import time

import pytest
from fastapi import FastAPI, Depends, HTTPException, Request
from fastapi.testclient import TestClient

from bistro.utils.rate_limit import local_hit, optional_rate_limit, prune_expired, rate_limit_health_info


def _make_app(times=2, seconds=60):
    app = FastAPI()

    @app.get("/limitedA", dependencies=[Depends(optional_rate_limit(times, seconds))])
    def limited_a():
        return {"ok": True}

    @app.get("/limitedB", dependencies=[Depends(optional_rate_limit(times, seconds))])
    def limited_b():
        return {"ok": True}

    @app.get("/rl_info")
    def rl_info(request: Request):
        return rate_limit_health_info(request)

    return app


def test_rate_limit_fallback_blocks_after_limit(monkeypatch):
    monkeypatch.setenv("LOCAL_RATE_LIMIT_FALLBACK", "1")
    client = TestClient(_make_app(times=2, seconds=60))

    assert client.get("/limitedA").status_code == 200
    assert client.get("/limitedA").status_code == 200
    r3 = client.get("/limitedA")
    assert r3.status_code == 429
    assert r3.json() == {"detail": "Too Many Requests"}


def test_rate_limit_is_per_path_and_bearer_token(monkeypatch):
    monkeypatch.setenv("LOCAL_RATE_LIMIT_FALLBACK", "1")
    client = TestClient(_make_app(times=1, seconds=60))
    alice = {"Authorization": "Bearer token-alice"}
    bob = {"Authorization": "Bearer token-bob"}

    assert client.get("/limitedA", headers=alice).status_code == 200
    assert client.get("/limitedA", headers=alice).status_code == 429
    # autre chemin, autre compteur
    assert client.get("/limitedB", headers=alice).status_code == 200
    # autre jeton, autre compteur
    assert client.get("/limitedA", headers=bob).status_code == 200


def test_rate_limit_disabled_flag_allows_everything(monkeypatch):
    monkeypatch.delenv("LOCAL_RATE_LIMIT_FALLBACK", raising=False)
    app = _make_app(times=1, seconds=60)
    app.state.rate_limit_enabled = False
    client = TestClient(app)

    for _ in range(5):
        assert client.get("/limitedA").status_code == 200


def test_rate_limit_health_info_reports_state(monkeypatch):
    monkeypatch.delenv("LOCAL_RATE_LIMIT_FALLBACK", raising=False)
    app = _make_app()
    app.state.rate_limit_enabled = False
    client = TestClient(app)

    info = client.get("/rl_info").json()
    assert info["enabled"] is False
    assert "ready" in info


def test_prune_expired_drops_keys_outside_their_window():
    now = time.time()
    store = {
        "ip:1.1.1.1:/payments": (60, [now - 120]),
        "ip:2.2.2.2:/payments": (60, [now - 10]),
        "ip:3.3.3.3:/jwt": (600, [now - 120]),
        "ip:4.4.4.4:/jwt": (60, []),
    }

    prune_expired(store, now)

    assert sorted(store) == ["ip:2.2.2.2:/payments", "ip:3.3.3.3:/jwt"]


def test_local_counter_does_not_grow_with_expired_clients(monkeypatch):
    monkeypatch.setattr("bistro.utils.rate_limit.PRUNE_THRESHOLD", 2)
    stale = time.time() - 3600
    store = {f"ip:10.0.0.{i}:/payments": (60, [stale]) for i in range(50)}

    local_hit(store, "ip:192.168.1.1:/payments", times=1, seconds=60)

    assert list(store) == ["ip:192.168.1.1:/payments"]


def test_local_counter_blocks_after_limit():
    store = {}
    local_hit(store, "k", times=1, seconds=60)
    with pytest.raises(HTTPException) as exc:
        local_hit(store, "k", times=1, seconds=60)
    assert exc.value.status_code == 429
