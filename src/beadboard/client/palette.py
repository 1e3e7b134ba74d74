from __future__ import annotations

import random
from typing import Optional

from beadboard.protocol.messages import Color

PALETTE: tuple[str, ...] = (
    "#000000", "#1b1b1b", "#4d4d4d", "#8e8e93", "#c7c7cc", "#ffffff",
    "#7f1d1d", "#ef4444", "#fb7185", "#be123c",
    "#7c2d12", "#f97316", "#fb923c", "#f59e0b",
    "#78350f", "#facc15", "#fde047", "#fff7b2",
    "#14532d", "#22c55e", "#86efac", "#064e3b",
    "#065f46", "#14b8a6", "#5eead4", "#0f766e",
    "#1e3a8a", "#3b82f6", "#93c5fd", "#0ea5e9",
    "#312e81", "#8b5cf6",
)

DEFAULT_INDEX = 7


def hex_to_rgb(hex_color: str) -> Color:
    h = hex_color.strip().lstrip("#")
    if len(h) != 6:
        raise ValueError(f"expected #rrggbb, got {hex_color!r}")
    return Color(int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16))


def rgb_to_hex(color: tuple[int, int, int]) -> str:
    r, g, b = color
    return f"#{r:02x}{g:02x}{b:02x}"


class Palette:
    """Currently selected color; what `place(x, y)` intents paint with."""

    def __init__(self, colors: tuple[str, ...] = PALETTE, index: int = DEFAULT_INDEX) -> None:
        if not colors:
            raise ValueError("palette is empty")
        self.colors = colors
        self.index = index % len(colors)
        self.current: Color = hex_to_rgb(colors[self.index])

    @property
    def current_hex(self) -> str:
        return self.colors[self.index]

    def select(self, hex_color: str) -> Color:
        """Select a palette entry by hex (case-insensitive)."""
        wanted = hex_color.lower()
        for i, c in enumerate(self.colors):
            if c.lower() == wanted:
                self.index = i
                self.current = hex_to_rgb(c)
                return self.current
        raise ValueError(f"{hex_color!r} is not in the palette")

    def randomize(self, rng: Optional[random.Random] = None) -> Color:
        rng = rng or random
        self.index = rng.randrange(len(self.colors))
        self.current = hex_to_rgb(self.colors[self.index])
        return self.current
