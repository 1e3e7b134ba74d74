from __future__ import annotations

import asyncio
import contextlib
import uuid
from dataclasses import dataclass, field
from typing import Optional, Protocol

from beadboard.protocol.messages import Place, parse_place

from .config import get_settings


class Connection(Protocol):
    async def send_text(self, data: str) -> None: ...


def _peer_id() -> str:
    return f"p_{uuid.uuid4().hex[:10]}"


@dataclass(eq=False)
class Peer:
    """One live participant: its transport plus a private FIFO outbox."""

    conn: Connection
    outbox: asyncio.Queue[str]
    id: str = field(default_factory=_peer_id)
    task: Optional[asyncio.Task[None]] = None
    dropped: int = 0

    def offer(self, data: str) -> bool:
        try:
            self.outbox.put_nowait(data)
        except asyncio.QueueFull:
            self.dropped += 1
            return False
        return True


@dataclass
class Relay:
    """
    Fan-out for one board.

    Holds no grid, only the live peers. Broadcasting never awaits a peer: each
    event is queued per target and a per-peer sender task does the I/O, so a
    slow or dead peer cannot hold up the rest.
    """

    board: str
    cols: int
    rows: int
    queue_max: int = 1024
    debug: bool = False
    peers: dict[str, Peer] = field(default_factory=dict)

    def connect(self, conn: Connection) -> Peer:
        peer = Peer(conn=conn, outbox=asyncio.Queue(maxsize=self.queue_max))
        self.peers[peer.id] = peer
        peer.task = asyncio.create_task(self._pump(peer))
        self._log(f"connect {peer.id} (peers={len(self.peers)})")
        return peer

    async def disconnect(self, peer: Peer) -> None:
        self.peers.pop(peer.id, None)
        task, peer.task = peer.task, None
        if task is not None and not task.done():
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task
        self._log(f"disconnect {peer.id} (peers={len(self.peers)})")

    def on_event(self, origin: Peer, raw: str | bytes) -> Optional[Place]:
        """Validate one inbound frame and forward it verbatim; None means dropped."""
        if isinstance(raw, bytes):
            try:
                raw = raw.decode("utf-8")
            except UnicodeDecodeError:
                self._log(f"drop non-utf8 frame from {origin.id} ({len(raw)} bytes)")
                return None
        place = parse_place(raw, self.cols, self.rows)
        if place is None:
            self._log(f"drop malformed from {origin.id}: {raw[:120]!r}")
            return None
        self.broadcast_except_origin(origin.id, raw)
        return place

    def broadcast_except_origin(self, origin_id: Optional[str], data: str) -> int:
        queued = 0
        # Snapshot: peers may come and go while we iterate.
        for peer in list(self.peers.values()):
            if peer.id == origin_id:
                continue
            if peer.offer(data):
                queued += 1
            else:
                self._log(f"outbox full for {peer.id}; dropped (total={peer.dropped})")
        return queued

    async def _pump(self, peer: Peer) -> None:
        while True:
            data = await peer.outbox.get()
            try:
                await peer.conn.send_text(data)
            except Exception as e:
                # Dead transport: stop targeting it. The websocket handler
                # still runs its own disconnect when its receive loop ends.
                self.peers.pop(peer.id, None)
                self._log(f"send to {peer.id} failed: {e!r}; removed")
                return

    def _log(self, text: str) -> None:
        if self.debug:
            print(f"[relay:{self.board}] {text}")


RELAYS: dict[str, Relay] = {}
LOCK = asyncio.Lock()


async def get_relay(board_id: str) -> Relay:
    async with LOCK:
        if board_id not in RELAYS:
            settings = get_settings()
            RELAYS[board_id] = Relay(
                board=board_id,
                cols=settings.grid_cols,
                rows=settings.grid_rows,
                queue_max=settings.peer_queue_max,
                debug=settings.debug_log_msgs,
            )
        return RELAYS[board_id]


async def release_relay(board_id: str) -> bool:
    """Forget a board once its last peer has left; True if it was removed."""
    async with LOCK:
        relay = RELAYS.get(board_id)
        if relay is None or relay.peers:
            return False
        del RELAYS[board_id]
        return True
