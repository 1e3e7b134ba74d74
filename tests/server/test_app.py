"""End-to-end tests for beadboard.server.app over the FastAPI test client."""

from fastapi.testclient import TestClient

from beadboard.server.app import app
from beadboard.server.config import get_settings
from beadboard.server.relay import RELAYS
from conftest import BLUE, place_frame


def test_healthz():
    with TestClient(app) as client:
        assert client.get("/healthz").json() == {"ok": True}


def test_viewer_page():
    with TestClient(app) as client:
        resp = client.get("/viewer/demo")
        assert resp.status_code == 200
        assert "beadboard viewer: demo" in resp.text
        assert "/ws/" in resp.text


def test_board_info_before_anyone_joins():
    settings = get_settings()
    with TestClient(app) as client:
        info = client.get("/boards/empty").json()
    assert info == {"board": "empty", "cols": settings.grid_cols, "rows": settings.grid_rows, "peers": 0}


class TestWebsocket:
    def test_hello_first(self):
        settings = get_settings()
        with TestClient(app) as client:
            with client.websocket_connect("/ws/hi") as ws:
                hello = ws.receive_json()
        assert hello == {"t": "hello", "board": "hi", "cols": settings.grid_cols, "rows": settings.grid_rows}

    def test_default_board(self):
        with TestClient(app) as client:
            with client.websocket_connect("/ws") as ws:
                hello = ws.receive_json()
        assert hello["board"] == get_settings().default_board

    def test_place_reaches_other_client(self):
        frame = place_frame(5, 5)
        with TestClient(app) as client:
            with client.websocket_connect("/ws/e2e") as a, client.websocket_connect("/ws/e2e") as b:
                a.receive_json()
                b.receive_json()
                assert client.get("/boards/e2e").json()["peers"] == 2

                a.send_text(frame)
                assert b.receive_text() == frame

    def test_malformed_dropped_then_valid_forwarded(self):
        frame = place_frame(1, 2, BLUE)
        with TestClient(app) as client:
            with client.websocket_connect("/ws/mal") as a, client.websocket_connect("/ws/mal") as b:
                a.receive_json()
                b.receive_json()
                a.send_text("garbage")
                a.send_text(place_frame(999, 0))
                a.send_text(frame)
                assert b.receive_text() == frame

    def test_binary_frame_accepted(self):
        frame = place_frame(3, 3)
        with TestClient(app) as client:
            with client.websocket_connect("/ws/bin") as a, client.websocket_connect("/ws/bin") as b:
                a.receive_json()
                b.receive_json()
                a.send_bytes(frame.encode("utf-8"))
                assert b.receive_text() == frame

    def test_boards_are_isolated(self):
        with TestClient(app) as client:
            with client.websocket_connect("/ws/one") as a, client.websocket_connect("/ws/two") as other:
                with client.websocket_connect("/ws/one") as b:
                    a.receive_json()
                    other.receive_json()
                    b.receive_json()
                    a.send_text(place_frame(0, 0))
                    assert b.receive_json()["gx"] == 0
                    assert client.get("/boards/two").json()["peers"] == 1

    def test_disconnect_removes_peer(self):
        with TestClient(app) as client:
            with client.websocket_connect("/ws/bye") as a:
                a.receive_json()
                with client.websocket_connect("/ws/bye") as b:
                    b.receive_json()
                    assert client.get("/boards/bye").json()["peers"] == 2
                assert client.get("/boards/bye").json()["peers"] == 1
            assert client.get("/boards/bye").json()["peers"] == 0

    def test_non_utf8_binary_dropped(self):
        frame = place_frame(6, 6)
        with TestClient(app) as client:
            with client.websocket_connect("/ws/utf") as a, client.websocket_connect("/ws/utf") as b:
                a.receive_json()
                b.receive_json()
                a.send_bytes(b'{"t":"place","gx":1,"gy":1,"r":1,"g":1,"b":1,"who":"\xff"}')
                a.send_text(frame)
                assert b.receive_text() == frame

    def test_idle_boards_are_forgotten(self):
        with TestClient(app) as client:
            for i in range(20):
                with client.websocket_connect(f"/ws/b{i}") as ws:
                    ws.receive_json()
            with client.websocket_connect("/ws/live") as ws:
                ws.receive_json()
                assert set(RELAYS) == {"live"}
            assert RELAYS == {}
