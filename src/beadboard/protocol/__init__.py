from .constants import (
    CHANNEL_MAX,
    DEFAULT_BOARD,
    DEFAULT_COLS,
    DEFAULT_ROWS,
    T_HELLO,
    T_PLACE,
)
from .messages import Color, Hello, Place, dumps, parse_place

__all__ = [
    "CHANNEL_MAX",
    "DEFAULT_BOARD",
    "DEFAULT_COLS",
    "DEFAULT_ROWS",
    "T_HELLO",
    "T_PLACE",
    "Color",
    "Hello",
    "Place",
    "dumps",
    "parse_place",
]
