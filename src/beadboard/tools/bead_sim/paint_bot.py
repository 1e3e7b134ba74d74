from __future__ import annotations

import argparse
import asyncio
import random
import time
from typing import Optional

from beadboard.client.cursor import ShakeDetector, TiltCursor
from beadboard.client.grid_store import GridStore
from beadboard.client.palette import Palette
from beadboard.client.sync import SyncClient
from beadboard.protocol.messages import Place


class BotPainter:
    """
    Simulated phone: random tilt walks the cursor, random jolts shake the
    palette to a new color, and every move drops a bead at the cursor.
    """

    def __init__(self, store: GridStore, *, rng: Optional[random.Random] = None, shake_p: float = 0.02) -> None:
        self.store = store
        self.rng = rng or random.Random()
        self.shake_p = shake_p
        self.cursor = TiltCursor(store.cols, store.rows)
        self.shake = ShakeDetector()
        self.palette = Palette()
        store.on_reset(self.cursor.resize)

    def tick(self, now_ms: float) -> Optional[Place]:
        self.cursor.tilt(self.rng.uniform(-30, 30), self.rng.uniform(-30, 30))
        if self.rng.random() < self.shake_p:
            jolt = self.rng.uniform(18, 30)
            if self.shake.feed(jolt, 0.0, 0.0, now_ms):
                self.palette.randomize(self.rng)
        if not self.cursor.step(now_ms):
            return None
        return self.store.place(self.cursor.gx, self.cursor.gy, self.palette.current)


async def run_bot(ws_url: str, *, hz: float, seed: Optional[int]) -> None:
    store = GridStore()
    sync = SyncClient(ws_url, store)
    bot = BotPainter(store, rng=random.Random(seed))
    conn = asyncio.create_task(sync.run_forever())
    try:
        while True:
            await asyncio.sleep(1.0 / max(0.1, hz))
            if sync.connected:
                bot.tick(time.monotonic() * 1000)
    finally:
        conn.cancel()


def main() -> None:
    ap = argparse.ArgumentParser(description="Random-walk bead painter (load/demo client).")
    ap.add_argument("--ws", required=True, help="WebSocket URL, e.g. ws://127.0.0.1:8000/ws/lobby")
    ap.add_argument("--hz", type=float, default=10.0, help="Ticks per second")
    ap.add_argument("--seed", type=int, default=None, help="RNG seed")
    args = ap.parse_args()

    asyncio.run(run_bot(args.ws, hz=args.hz, seed=args.seed))


if __name__ == "__main__":
    main()
