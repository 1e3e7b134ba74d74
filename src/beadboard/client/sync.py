from __future__ import annotations

import asyncio
import json
from typing import Callable, Optional

import websockets
from pydantic import ValidationError

from beadboard.protocol.constants import T_HELLO, T_PLACE
from beadboard.protocol.messages import Hello, Place, parse_place

from .grid_store import GridStore


class SyncClient:
    """
    Websocket side of a `GridStore`.

    Local placements leave through `emit` (wired as the store's emitter);
    inbound `place` frames are applied via `store.on_remote_event`. A `hello`
    carrying different dimensions resets the store. Nothing is acknowledged
    and nothing is retried: emits while disconnected are dropped.
    """

    def __init__(
        self,
        url: str,
        store: GridStore,
        *,
        on_status: Optional[Callable[[bool], None]] = None,
        reconnect_s: float = 1.0,
        outbox_max: int = 1024,
        debug: bool = False,
    ) -> None:
        self.url = url
        self.store = store
        self.on_status = on_status
        self.reconnect_s = reconnect_s
        self.outbox_max = outbox_max
        self.debug = debug
        self.connected = False
        self.board: Optional[str] = None
        self._outbox: Optional[asyncio.Queue[str]] = None
        store.emit = self.emit

    def emit(self, event: Place) -> None:
        if not self.connected or self._outbox is None:
            self._log(f"offline; dropped place {event.cell}")
            return
        try:
            self._outbox.put_nowait(event.to_wire())
        except asyncio.QueueFull:
            self._log(f"outbox full; dropped place {event.cell}")

    def handle_message(self, raw: str | bytes) -> bool:
        """Apply one inbound frame; False if it was ignored."""
        try:
            msg = json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError):
            self._log(f"drop non-json frame: {raw[:120]!r}")
            return False
        if not isinstance(msg, dict):
            return False

        t = msg.get("t")
        if t == T_HELLO:
            try:
                hello = Hello.model_validate(msg)
            except ValidationError:
                return False
            self.board = hello.board
            if (hello.cols, hello.rows) != (self.store.cols, self.store.rows):
                self.store.reset(hello.cols, hello.rows)
            return True

        if t == T_PLACE:
            place = parse_place(msg)
            if place is None:
                self._log(f"drop malformed place: {msg!r}")
                return False
            return self.store.on_remote_event(place)

        return False

    async def run_once(self) -> None:
        """
        One connection lifetime. Returns when the relay closes the socket;
        raises whatever broke the receive or send side.
        """
        async with websockets.connect(self.url, ping_interval=20, ping_timeout=20) as ws:
            outbox: asyncio.Queue[str] = asyncio.Queue(maxsize=self.outbox_max)
            self._outbox = outbox
            self._set_status(True)
            tasks = [
                asyncio.create_task(self._send_loop(ws, outbox)),
                asyncio.create_task(self._recv_loop(ws)),
            ]
            try:
                # Either side ending takes the whole connection down.
                await asyncio.wait(tasks, return_when=asyncio.FIRST_COMPLETED)
            finally:
                self._outbox = None
                self._set_status(False)
                for task in tasks:
                    task.cancel()
                results = await asyncio.gather(*tasks, return_exceptions=True)
        for result in results:
            if isinstance(result, Exception):
                raise result

    async def run_forever(self) -> None:
        while True:
            try:
                await self.run_once()
            except Exception as e:
                # best-effort reconnect loop; the next hello re-sizes the store
                print(f"[sync] error: {e!r}; reconnecting in {self.reconnect_s}s")
            await asyncio.sleep(self.reconnect_s)

    async def _recv_loop(self, ws) -> None:
        async for raw in ws:
            self.handle_message(raw)

    async def _send_loop(self, ws, outbox: asyncio.Queue[str]) -> None:
        while True:
            data = await outbox.get()
            await ws.send(data)

    def _set_status(self, connected: bool) -> None:
        self.connected = connected
        if self.on_status is not None:
            self.on_status(connected)

    def _log(self, text: str) -> None:
        if self.debug:
            print(f"[sync] {text}")
