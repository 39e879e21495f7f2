import pytest

import main
from algorithms import REGISTRY
from engine import ManualScheduler
from settings import load_settings


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setattr(main, "make_scheduler", ManualScheduler)
    main.drop_contexts()
    main.app.config["TESTING"] = True
    with main.app.test_client() as c:
        yield c
    main.drop_contexts()


def _run(client, algo="bubble_sort", values="3, 2, 1", **params):
    return client.post("/api/run", json={"algo": algo, "values": values, "params": params})


def test_index_page(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert b"DSA Visualizer" in resp.data
    assert b'id="values-input"' in resp.data


def test_algorithm_listing(client):
    data = client.get("/api/algorithms").get_json()
    assert len(data["algorithms"]) == len(REGISTRY)
    assert "sorting" in data["families"]


def test_algorithm_listing_filters_by_tag(client):
    data = client.get("/api/algorithms?tag=recursion").get_json()
    keys = [a["key"] for a in data["algorithms"]]
    assert keys == ["rec_reverse", "rec_search", "rec_palindrome", "rec_remove"]
    assert all("recursion" in a["tags"] for a in data["algorithms"])
    assert client.get("/api/algorithms?tag=nonexistent").get_json()["algorithms"] == []


def test_run_loads_the_trace(client):
    resp = _run(client)
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["total_steps"] == 10
    assert data["current_step"] == 0
    assert data["status"]["state"] == "ready"
    assert data["result"]["sorted"] == [1, 2, 3]
    assert data["svg"].startswith("<svg")


def test_run_rejects_bad_input(client):
    resp = _run(client, values="3, x")
    assert resp.status_code == 400
    assert "error" in resp.get_json()
    assert _run(client, algo="warp_sort").status_code == 404


def test_run_uses_the_selected_algorithm(client):
    assert client.post("/api/config/algo", json={"algo_key": "pair_sum"}).status_code == 200
    resp = client.post("/api/run", json={"values": "1, 3, 5, 7", "params": {"target": 8}})
    assert resp.status_code == 200
    assert resp.get_json()["result"]["sum"] == 8


def test_stepping_requires_a_run(client):
    for path in ("/api/step/next", "/api/step/prev", "/api/step/goto", "/api/play"):
        assert client.post(path, json={}).status_code == 409
    assert client.get("/api/trace").status_code == 409


def test_step_navigation(client):
    _run(client)
    data = client.post("/api/step/next").get_json()
    assert data["current_step"] == 1 and data["moved"] is True

    data = client.post("/api/step/goto", json={"index": 1000}).get_json()
    assert data["current_step"] == 9
    assert data["terminal"] is True
    assert data["status"]["state"] == "finished"

    data = client.post("/api/step/next").get_json()
    assert data["moved"] is False and data["current_step"] == 9

    data = client.post("/api/step/prev").get_json()
    assert data["current_step"] == 8
    assert data["status"]["state"] == "paused"

    assert client.post("/api/step/goto", json={"index": "3"}).status_code == 400


def test_play_and_pause(client):
    _run(client)
    assert client.post("/api/play").get_json()["status"]["state"] == "running"
    assert client.get("/api/state").get_json()["status"]["running"] is True
    assert client.post("/api/pause").get_json()["status"]["state"] == "paused"


def test_speed_config(client):
    assert client.post("/api/config/speed", json={"speed": "fast"}).get_json()["interval_ms"] == 150
    assert client.post("/api/config/speed", json={"speed": "warp"}).status_code == 400

    data = client.post("/api/config/speed", json={"interval_ms": 5}).get_json()
    assert data == {"speed": "custom", "interval_ms": 20}
    assert client.post("/api/config/speed", json={"interval_ms": "x"}).status_code == 400


def test_selecting_an_algorithm_resets_playback(client):
    _run(client)
    assert client.post("/api/config/algo", json={"algo_key": "nope"}).status_code == 404

    data = client.post("/api/config/algo", json={"algo_key": "ll_reverse"}).get_json()
    assert data["status"]["state"] == "idle"
    assert 'data-param' not in data["input_form"]
    assert client.get("/api/state").get_json()["current_step"] is None


def test_compare(client):
    resp = client.post("/api/compare", json={
        "left": "bubble_sort", "right": "selection_sort", "values": "1, 2, 3, 4",
    })
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["comparison"]["winner_steps"] == "Bubble Sort"
    assert "comparison-table" in data["html"]

    assert client.post("/api/compare", json={"left": "bubble_sort"}).status_code == 400
    assert client.post("/api/compare", json={
        "left": "bubble_sort", "right": "binary_search", "values": "1, 2",
    }).status_code == 400


def test_trace_export(client):
    _run(client)
    data = client.get("/api/trace").get_json()
    assert data["algo_key"] == "bubble_sort"
    assert len(data["steps"]) == 10


def test_reset(client):
    _run(client)
    data = client.post("/api/reset").get_json()
    assert data["status"]["state"] == "idle"
    assert data["total_steps"] == 0
    assert client.get("/api/trace").status_code == 409


def test_sessions_are_isolated(client):
    _run(client)
    with main.app.test_client() as other:
        assert other.get("/api/state").get_json()["status"]["state"] == "idle"
    assert client.get("/api/state").get_json()["status"]["state"] == "ready"


def _only_controller():
    (ctx,) = main._contexts.values()
    return ctx.controller


def test_read_only_requests_do_not_create_sessions(client):
    for _ in range(50):
        with main.app.test_client() as fresh:
            assert fresh.get("/api/state").get_json()["status"]["state"] == "idle"
            assert fresh.get("/").status_code == 200
    assert len(main._contexts) == 0


def test_session_registry_is_bounded(client, monkeypatch):
    monkeypatch.setenv("DSAVIZ_MAX_SESSIONS", "3")
    load_settings.cache_clear()
    _run(client)
    first = _only_controller()

    for _ in range(5):
        with main.app.test_client() as other:
            assert _run(other).status_code == 200
    assert len(main._contexts) == 3

    # the oldest session was dropped and its playback stopped
    assert first.status()["state"] == "idle"
    assert client.get("/api/state").get_json()["status"]["state"] == "idle"


def test_recent_sessions_survive_eviction(client, monkeypatch):
    monkeypatch.setenv("DSAVIZ_MAX_SESSIONS", "2")
    load_settings.cache_clear()
    _run(client)
    with main.app.test_client() as other:
        _run(other)
        client.get("/api/state")  # touch: `other` is now the oldest
        with main.app.test_client() as third:
            _run(third)
        assert other.get("/api/state").get_json()["status"]["state"] == "idle"
    assert client.get("/api/state").get_json()["status"]["state"] == "ready"


def test_idle_sessions_expire(client, monkeypatch):
    now = [1000.0]
    monkeypatch.setattr(main, "_clock", lambda: now[0])
    _run(client)
    ctrl = _only_controller()

    now[0] += load_settings().session_idle_s / 2
    assert client.get("/api/state").get_json()["status"]["state"] == "ready"

    now[0] += load_settings().session_idle_s + 1
    with main.app.test_client() as other:
        other.get("/api/state")
    assert len(main._contexts) == 0
    assert ctrl.status()["state"] == "idle"
