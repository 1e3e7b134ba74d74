from __future__ import annotations

import math
from dataclasses import dataclass

# Sensor tuning (ms / degrees / m/s^2)
MOVE_INTERVAL_MS = 120
TILT_DEADZONE = 10.0
SHAKE_COOLDOWN_MS = 700
SHAKE_THRESHOLD = 17.0
MIN_CELL_PX = 4


def _step(v: float, deadzone: float) -> int:
    if v > deadzone:
        return 1
    if v < -deadzone:
        return -1
    return 0


@dataclass
class BoardMetrics:
    """Uniform square cells, board centered in the viewport."""

    cols: int
    rows: int
    width: int
    height: int

    @property
    def cell_size(self) -> int:
        size = math.floor(min(self.width / self.cols, self.height / self.rows))
        return max(size, MIN_CELL_PX)

    @property
    def origin(self) -> tuple[int, int]:
        cs = self.cell_size
        return ((self.width - cs * self.cols) // 2, (self.height - cs * self.rows) // 2)

    def point_to_cell(self, px: float, py: float) -> tuple[int, int]:
        # May land outside the board; `GridStore.place` ignores those.
        ox, oy = self.origin
        cs = self.cell_size
        return (math.floor((px - ox) / cs), math.floor((py - oy) / cs))


class TiltCursor:
    """
    Grid cursor driven by device tilt.

    gamma (left/right) moves x, beta (front/back) moves y; one cell per step,
    at most once per `interval_ms`, clamped to the board.
    """

    def __init__(
        self,
        cols: int,
        rows: int,
        *,
        interval_ms: int = MOVE_INTERVAL_MS,
        deadzone: float = TILT_DEADZONE,
    ) -> None:
        self.cols = cols
        self.rows = rows
        self.gx = cols // 2
        self.gy = rows // 2
        self.gamma = 0.0
        self.beta = 0.0
        self.interval_ms = interval_ms
        self.deadzone = deadzone
        self._last_move_ms: float | None = None

    def tilt(self, gamma: float, beta: float) -> None:
        self.gamma = gamma
        self.beta = beta

    def resize(self, cols: int, rows: int) -> None:
        self.cols = cols
        self.rows = rows
        self.gx = min(self.gx, cols - 1)
        self.gy = min(self.gy, rows - 1)

    def step(self, now_ms: float) -> bool:
        """Advance by current tilt; True if the cursor moved."""
        if self._last_move_ms is not None and now_ms - self._last_move_ms < self.interval_ms:
            return False
        dx = _step(self.gamma, self.deadzone)
        dy = _step(self.beta, self.deadzone)
        if dx == 0 and dy == 0:
            return False
        self.gx = max(0, min(self.cols - 1, self.gx + dx))
        self.gy = max(0, min(self.rows - 1, self.gy + dy))
        self._last_move_ms = now_ms
        return True


class ShakeDetector:
    def __init__(self, *, threshold: float = SHAKE_THRESHOLD, cooldown_ms: int = SHAKE_COOLDOWN_MS) -> None:
        self.threshold = threshold
        self.cooldown_ms = cooldown_ms
        self._last_shake_ms: float | None = None

    def feed(self, ax: float, ay: float, az: float, now_ms: float) -> bool:
        """True when this sample counts as a (new) shake."""
        mag = math.sqrt(ax * ax + ay * ay + az * az)
        if mag <= self.threshold:
            return False
        if self._last_shake_ms is not None and now_ms - self._last_shake_ms <= self.cooldown_ms:
            return False
        self._last_shake_ms = now_ms
        return True
