"""
beadboard - Test Configuration and Fixtures

Fake transports and common placements shared by all test modules.
"""

import asyncio

import pytest

from beadboard.client.grid_store import GridStore
from beadboard.server.relay import RELAYS

RED = (255, 0, 0)
BLUE = (0, 0, 255)


class FakeConn:
    """Stand-in for a websocket: records frames, optionally fails or stalls."""

    def __init__(self, *, fail: bool = False, stall: bool = False) -> None:
        self.sent: list[str] = []
        self.fail = fail
        self.stall = stall
        self._gate = asyncio.Event() if stall else None

    async def send_text(self, data: str) -> None:
        if self.fail:
            raise RuntimeError("connection reset")
        if self._gate is not None:
            await self._gate.wait()
        self.sent.append(data)


async def drain(rounds: int = 20) -> None:
    """Let per-peer sender tasks run."""
    for _ in range(rounds):
        await asyncio.sleep(0)


def place_frame(gx: int, gy: int, color=RED) -> str:
    r, g, b = color
    return f'{{"t":"place","gx":{gx},"gy":{gy},"r":{r},"g":{g},"b":{b}}}'


@pytest.fixture
def store() -> GridStore:
    return GridStore(64, 36)


@pytest.fixture(autouse=True)
def fresh_relays():
    RELAYS.clear()
    yield
    RELAYS.clear()
