from __future__ import annotations

from fastapi import FastAPI, WebSocket, WebSocketDisconnect
from fastapi.responses import HTMLResponse

from beadboard.protocol.messages import Hello

from .config import get_settings
from .relay import RELAYS, get_relay, release_relay
from .viewer_page import render_viewer_html

app = FastAPI()


@app.get("/healthz")
def healthz():
    return {"ok": True}


@app.get("/boards/{board_id}")
def board_info(board_id: str):
    settings = get_settings()
    relay = RELAYS.get(board_id)
    return {
        "board": board_id,
        "cols": relay.cols if relay else settings.grid_cols,
        "rows": relay.rows if relay else settings.grid_rows,
        "peers": len(relay.peers) if relay else 0,
    }


@app.get("/viewer/{board_id}", response_class=HTMLResponse)
def viewer(board_id: str):
    # NOTE: developer tool; real clients are separate apps.
    settings = get_settings()
    return HTMLResponse(render_viewer_html(board_id, settings.grid_cols, settings.grid_rows))


@app.websocket("/ws")
async def ws_default(ws: WebSocket):
    await _serve(get_settings().default_board, ws)


@app.websocket("/ws/{board_id}")
async def ws(board_id: str, ws: WebSocket):
    await _serve(board_id, ws)


async def _serve(board_id: str, ws: WebSocket) -> None:
    await ws.accept()
    relay = await get_relay(board_id)

    # Greet before registering so the hello is always the first frame; no
    # backlog follows, the peer only sees placements from here on.
    hello = Hello(board=board_id, cols=relay.cols, rows=relay.rows)
    await ws.send_text(hello.model_dump_json())
    # An idle board may have been released while the hello was in flight.
    relay = await get_relay(board_id)
    peer = relay.connect(ws)

    try:
        while True:
            message = await ws.receive()
            if message["type"] == "websocket.disconnect":
                break
            raw = message.get("text")
            if raw is None:
                raw = message.get("bytes") or b""
            relay.on_event(peer, raw)
    except WebSocketDisconnect:
        pass
    finally:
        await relay.disconnect(peer)
        await release_relay(board_id)


def main() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run("beadboard.server.app:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
