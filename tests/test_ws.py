import pytest
from fastapi.testclient import TestClient
from starlette.websockets import WebSocketDisconnect

from sketchroom.main import create_app
from sketchroom.settings import Settings


@pytest.fixture
def client():
    app = create_app(settings=Settings(START_DELAY_SEC=60, LOG_LEVEL="WARNING"))
    with TestClient(app) as c:
        yield c


def _drain(ws, n):
    return [ws.receive_json() for _ in range(n)]


def test_health(client):
    res = client.get("/health")
    assert res.status_code == 200
    assert res.json() == {"ok": True, "rooms": 0, "connections": 0}


def test_foreign_origin_refused(client):
    with pytest.raises(WebSocketDisconnect):
        with client.websocket_connect("/ws", headers={"origin": "http://evil.example"}) as ws:
            ws.receive_json()


def test_bad_json(client):
    with client.websocket_connect("/ws") as ws:
        assert ws.receive_json()["type"] == "hello"
        ws.send_text("{not json")
        err = ws.receive_json()
        assert err["type"] == "error"
        assert err["code"] == "BAD_MESSAGE"


def test_two_players_chat_and_draw(client):
    with client.websocket_connect("/ws") as a, client.websocket_connect("/ws") as b:
        assert a.receive_json()["type"] == "hello"
        b.receive_json()

        a.send_json({"type": "create_room", "code": "PARTY", "name": "Ann"})
        joined, updated, hello = _drain(a, 3)
        assert joined["type"] == "room_joined"
        assert updated["type"] == "players_updated"
        assert hello["text"] == "Ann joined!"

        b.send_json({"type": "join_room", "code": "party", "name": "Bob"})
        joined_b = b.receive_json()
        assert joined_b["code"] == "PARTY"
        assert [p["name"] for p in joined_b["players"]] == ["Ann", "Bob"]
        _drain(b, 2)
        assert [e["type"] for e in _drain(a, 2)] == ["players_updated", "message"]

        b.send_json({"type": "draw", "x0": 1, "y0": 1, "x1": 5, "y1": 5, "color": "#000", "size": 3})
        stroke = a.receive_json()
        assert stroke["type"] == "draw"
        assert "exclude" not in stroke

        a.send_json({"type": "chat_message", "text": "hi bob"})
        assert b.receive_json() == {"type": "message", "user": "Ann", "text": "hi bob"}
        assert a.receive_json()["text"] == "hi bob"

        rooms = client.get("/admin/rooms").json()["rooms"]
        assert rooms[0]["room_code"] == "PARTY"
        assert rooms[0]["players"] == 2
        assert rooms[0]["pending"] == "start"


def test_leaving_player_is_announced(client):
    with client.websocket_connect("/ws") as a:
        a.receive_json()
        a.send_json({"type": "create_room", "code": "BYEBYE", "name": "Ann"})
        _drain(a, 3)

        with client.websocket_connect("/ws") as b:
            b.receive_json()
            b.send_json({"type": "join_room", "code": "BYEBYE", "name": "Bob"})
            _drain(b, 3)
            _drain(a, 2)

        left, updated = _drain(a, 2)
        assert left["text"] == "Bob left"
        assert [p["name"] for p in updated["players"]] == ["Ann"]


def test_admin_close(client):
    assert client.post("/admin/rooms/NOPE/close").status_code == 404

    with client.websocket_connect("/ws") as a:
        a.receive_json()
        a.send_json({"type": "create_room", "code": "SHUT", "name": "Ann"})
        _drain(a, 3)

        res = client.post("/admin/rooms/SHUT/close")
        assert res.json() == {"ok": True, "room_code": "SHUT"}
        assert a.receive_json()["text"] == "Room closed by admin"

    assert client.get("/health").json()["rooms"] == 0


def test_infinite_rounds_fall_back_to_default(client):
    with client.websocket_connect("/ws") as ws:
        ws.receive_json()
        # json.dumps writes the bare Infinity literal
        ws.send_json({"type": "create_room", "code": "ABC123", "name": "Ann", "rounds": float("inf")})
        joined = ws.receive_json()
        assert joined["type"] == "room_joined"
        assert joined["max_rounds"] == 6
