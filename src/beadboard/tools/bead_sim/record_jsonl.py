from __future__ import annotations

import argparse
import asyncio
import json
import time
from pathlib import Path
from typing import Optional

import websockets

from beadboard.client.grid_store import GridStore
from beadboard.client.rendering import save_board_png
from beadboard.client.sync import SyncClient


def _now_ms() -> int:
    return int(time.time() * 1000)


async def record(
    ws_url: str,
    out_path: Path,
    *,
    echo: bool,
    png_path: Optional[Path] = None,
    png_every: int = 50,
) -> None:
    """
    Record board traffic as JSONL ({"ts": <ms>, "msg": {...}} per line).

    With `png_path`, frames are also applied to a local `GridStore` and a PNG
    snapshot of it is rewritten every `png_every` frames.
    """
    out_path.parent.mkdir(parents=True, exist_ok=True)
    store = GridStore()
    # Not connected through run_once; only used for its inbound handling.
    sync = SyncClient(ws_url, store)
    seen = 0
    with out_path.open("a", encoding="utf-8") as f:
        async with websockets.connect(ws_url, max_size=2**22) as ws:
            while True:
                raw = await ws.recv()
                if isinstance(raw, bytes):
                    raw = raw.decode("utf-8", errors="replace")
                msg = json.loads(raw)
                if echo:
                    t = msg.get("t") if isinstance(msg, dict) else None
                    print(f"[record] t={t} msg={msg}")
                f.write(json.dumps({"ts": _now_ms(), "msg": msg}, ensure_ascii=False) + "\n")
                f.flush()

                if png_path is not None:
                    sync.handle_message(raw)
                    seen += 1
                    if seen % max(1, png_every) == 0:
                        save_board_png(store, png_path)


def main() -> None:
    ap = argparse.ArgumentParser(description="Record board traffic to a JSONL file.")
    ap.add_argument("--ws", required=True, help="WebSocket URL, e.g. ws://127.0.0.1:8000/ws/lobby")
    ap.add_argument("--out", required=True, help="Output JSONL path")
    ap.add_argument("--print", action="store_true", help="Print received messages to stdout")
    ap.add_argument("--png", default=None, help="Also keep a PNG snapshot of the board here")
    ap.add_argument("--png-every", type=int, default=50, help="Rewrite the PNG every N frames")
    args = ap.parse_args()

    asyncio.run(
        record(
            args.ws,
            Path(args.out),
            echo=args.print,
            png_path=Path(args.png) if args.png else None,
            png_every=args.png_every,
        )
    )


if __name__ == "__main__":
    main()
