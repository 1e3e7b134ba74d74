from __future__ import annotations

import threading
from typing import Callable, Iterator, Optional

from beadboard.protocol.constants import DEFAULT_COLS, DEFAULT_ROWS
from beadboard.protocol.messages import Color, Place

CellListener = Callable[[int, int, Color], None]
ResetListener = Callable[[int, int], None]
Emitter = Callable[[Place], None]


class GridStore:
    """
    Local view of every painted cell on one board.

    Local and remote placements go through the same `apply_placement`, so the
    color of a cell is always that of the last placement applied here
    (last-applied-wins, no timestamps). Unpainted cells are not stored.

    - **emit**: outbound hook, called with each successful local placement
    - listeners added with `on_cell` get `(x, y, color)` after every apply
    - listeners added with `on_reset` get `(cols, rows)` after `reset`
    """

    def __init__(
        self,
        cols: int = DEFAULT_COLS,
        rows: int = DEFAULT_ROWS,
        *,
        emit: Optional[Emitter] = None,
    ) -> None:
        self._check_dims(cols, rows)
        self.cols = cols
        self.rows = rows
        self.emit = emit
        self._cells: dict[tuple[int, int], Color] = {}
        self._lock = threading.Lock()
        self._cell_listeners: list[CellListener] = []
        self._reset_listeners: list[ResetListener] = []

    @staticmethod
    def _check_dims(cols: int, rows: int) -> None:
        if cols <= 0 or rows <= 0:
            raise ValueError(f"grid dimensions must be positive, got {cols}x{rows}")

    def on_cell(self, fn: CellListener) -> None:
        self._cell_listeners.append(fn)

    def on_reset(self, fn: ResetListener) -> None:
        self._reset_listeners.append(fn)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.cols and 0 <= y < self.rows

    def apply_placement(self, event: Place) -> None:
        color = event.color
        with self._lock:
            self._cells[event.cell] = color
        for fn in self._cell_listeners:
            fn(event.gx, event.gy, color)

    def place(self, x: int, y: int, color: tuple[int, int, int]) -> Optional[Place]:
        """
        Paint a cell from local input.

        Out-of-bounds cells are ignored (returns None). Otherwise the placement
        is applied here first, then handed to `emit`; it is never rolled back.
        """
        if not self.in_bounds(x, y):
            return None
        event = Place.at(x, y, color)
        self.apply_placement(event)
        if self.emit is not None:
            self.emit(event)
        return event

    def on_remote_event(self, event: Place) -> bool:
        # Dimensions may have changed locally since the peer sent this.
        if not self.in_bounds(event.gx, event.gy):
            return False
        self.apply_placement(event)
        return True

    def reset(self, cols: int, rows: int) -> None:
        self._check_dims(cols, rows)
        with self._lock:
            self.cols = cols
            self.rows = rows
            self._cells.clear()
        for fn in self._reset_listeners:
            fn(cols, rows)

    def get(self, x: int, y: int) -> Optional[Color]:
        with self._lock:
            return self._cells.get((x, y))

    def cells(self) -> dict[tuple[int, int], Color]:
        with self._lock:
            return dict(self._cells)

    def __len__(self) -> int:
        with self._lock:
            return len(self._cells)

    def __iter__(self) -> Iterator[tuple[tuple[int, int], Color]]:
        return iter(self.cells().items())
