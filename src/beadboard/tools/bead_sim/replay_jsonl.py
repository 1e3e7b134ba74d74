from __future__ import annotations

import argparse
import asyncio
import json
from pathlib import Path

import websockets

from beadboard.protocol.constants import T_PLACE
from beadboard.protocol.messages import dumps


def load_events(jsonl_path: Path) -> list[tuple[int | None, dict]]:
    """
    Read recorded JSONL.

    Accepted line formats:
      - record_jsonl.py output: {"ts": <ms>, "msg": {...}}
      - or raw messages per line: {...}
    Only `place` messages are kept; hellos and blank lines are skipped.
    """
    events: list[tuple[int | None, dict]] = []
    for line in jsonl_path.read_text(encoding="utf-8").splitlines():
        if not line.strip():
            continue
        obj = json.loads(line)
        if isinstance(obj, dict) and "msg" in obj and isinstance(obj["msg"], dict):
            ts = obj.get("ts")
            ts_ms = int(ts) if isinstance(ts, (int, float)) else None
            msg = obj["msg"]
        elif isinstance(obj, dict):
            ts_ms, msg = None, obj
        else:
            continue
        if msg.get("t") == T_PLACE:
            events.append((ts_ms, msg))
    return events


async def replay(
    ws_url: str,
    jsonl_path: Path,
    *,
    speed: float = 1.0,
    default_dt_ms: int = 0,
) -> int:
    """Replay recorded placements into a board; returns how many were sent."""
    events = load_events(jsonl_path)
    sent = 0
    async with websockets.connect(ws_url, max_size=2**22) as ws:
        await ws.recv()  # hello
        prev_ts: int | None = None
        for ts, msg in events:
            if ts is not None and prev_ts is not None:
                dt_ms = max(0, ts - prev_ts)
            else:
                dt_ms = default_dt_ms

            prev_ts = ts if ts is not None else prev_ts
            if dt_ms:
                await asyncio.sleep((dt_ms / 1000.0) / max(0.01, speed))

            await ws.send(dumps(msg))
            sent += 1
    return sent


def main() -> None:
    ap = argparse.ArgumentParser(description="Replay recorded placements into a board websocket.")
    ap.add_argument("--ws", required=True, help="WebSocket URL, e.g. ws://127.0.0.1:8000/ws/lobby")
    ap.add_argument("--in", dest="inp", required=True, help="Input JSONL path")
    ap.add_argument("--speed", type=float, default=1.0, help="Speed multiplier (2.0 = 2x faster)")
    ap.add_argument("--default-dt-ms", type=int, default=0, help="Delay between messages if no timestamps")
    args = ap.parse_args()

    n = asyncio.run(
        replay(
            args.ws,
            Path(args.inp),
            speed=args.speed,
            default_dt_ms=args.default_dt_ms,
        )
    )
    print(f"[replay] sent {n} placements")


if __name__ == "__main__":
    main()
