import pytest

import game
import server


@pytest.fixture
def client():
    server.SESSIONS.clear()
    server.app.config["TESTING"] = True
    with server.app.test_client() as c:
        yield c
    server.SESSIONS.clear()


def bootstrap(client, sid=None):
    resp = client.post("/api/bootstrap", json={"sid": sid} if sid else {})
    assert resp.status_code == 200
    return resp.get_json()


def test_bootstrap_creates_session_with_hidden_draw(client):
    data = bootstrap(client)
    sid = data["sid"]
    g = data["state"]["game"]
    assert sid in server.SESSIONS
    assert "draw" not in g
    assert g["draw_count"] == 40
    assert len(g["room"]) == 4
    assert g["status"] == "started"
    assert 0 <= data["state"]["seed"] < 100_000


def test_bootstrap_reuses_known_session(client):
    sid = bootstrap(client)["sid"]
    server.SESSIONS[sid]["game"]["health"] = 7
    again = bootstrap(client, sid)
    assert again["sid"] == sid
    assert again["state"]["game"]["health"] == 7


def test_bootstrap_unknown_sid_starts_fresh(client):
    data = bootstrap(client, "sid_gone")
    assert data["sid"] != "sid_gone"


def test_action_plays_card(client):
    sid = bootstrap(client)["sid"]
    seed = server.SESSIONS[sid]["seed"]
    resp = client.post("/api/action", json={"sid": sid, "action": {"type": "AVOID_ROOM"}})
    assert resp.status_code == 200
    g = resp.get_json()["state"]["game"]
    assert g["last_room_avoided"] is True
    assert g["can_avoid"] is False
    assert server.SESSIONS[sid]["seed"] == seed


def test_action_without_sid_is_rejected(client):
    resp = client.post("/api/action", json={"action": {"type": "RESTART"}})
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "missing sid"


def test_malformed_action_reports_toast(client):
    sid = bootstrap(client)["sid"]
    before = game.deep(server.SESSIONS[sid]["game"])
    resp = client.post("/api/action", json={"sid": sid, "action": {"type": "PLAY_CARD", "slot": "x"}})
    assert resp.status_code == 200
    assert resp.get_json()["state"]["ui"]["toast"] == "Ошибка: ValueError"
    assert server.SESSIONS[sid]["game"] == before


def test_content_and_ping(client):
    data = client.get("/api/content").get_json()
    assert data["deck_size"] == 44
    assert len(data["deck"]) == 44
    assert data["card_types"] == ["monster", "weapon", "potion"]
    assert client.get("/api/ping").get_json() == {"ok": True}


def test_static_pages(client):
    resp = client.get("/")
    assert resp.status_code == 200
    resp.close()
    resp = client.get("/rules")
    assert resp.status_code == 200
    assert "Scoundrel" in resp.get_data(as_text=True)
    resp.close()


def test_non_dict_action_reports_toast(client):
    sid = bootstrap(client)["sid"]
    before = game.deep(server.SESSIONS[sid]["game"])
    resp = client.post("/api/action", json={"sid": sid, "action": ["PLAY_CARD"]})
    assert resp.status_code == 200
    assert resp.get_json()["state"]["ui"]["toast"] == "Ошибка: неверный формат действия"
    assert server.SESSIONS[sid]["game"] == before


def test_non_dict_body_is_rejected(client):
    resp = client.post("/api/action", json=["sid", "action"])
    assert resp.status_code == 400


def test_unknown_sid_action_does_not_create_sessions(client):
    for i in range(50):
        resp = client.post("/api/action", json={"sid": f"junk{i}", "action": {"type": "RESTART"}})
        assert resp.status_code == 404
        assert resp.get_json()["error"] == "unknown sid"
    assert len(server.SESSIONS) == 0


def test_oldest_sessions_are_evicted(client, monkeypatch):
    monkeypatch.setattr(server, "MAX_SESSIONS", 3)
    sids = [bootstrap(client)["sid"] for _ in range(5)]
    assert len(server.SESSIONS) == 3
    assert sids[0] not in server.SESSIONS
    assert sids[-1] in server.SESSIONS
    resp = client.post("/api/action", json={"sid": sids[0], "action": {"type": "RESTART"}})
    assert resp.status_code == 404


def test_keyboard_ignores_modifier_combos(client):
    resp = client.get("/")
    html = resp.get_data(as_text=True)
    resp.close()
    assert "if (e.ctrlKey || e.metaKey || e.altKey) return;" in html
