from __future__ import annotations

import json
from typing import Annotated, Any, Literal, NamedTuple, Optional, TypeAlias, Union

from pydantic import BaseModel, Field, ValidationError

# Grid coordinates are plain non-negative ints; the upper bound depends on the
# board, so it is checked by `Place.within` rather than by the schema.
# Channels are 8-bit. Strict mode keeps bools, floats and numeric strings out.
Coord: TypeAlias = Annotated[int, Field(ge=0, strict=True)]
Channel: TypeAlias = Annotated[int, Field(ge=0, le=255, strict=True)]


class Color(NamedTuple):
    r: int
    g: int
    b: int


class Hello(BaseModel):
    t: Literal["hello"] = "hello"
    board: str
    cols: int
    rows: int


class Place(BaseModel):
    """A complete statement "cell (gx, gy) is now color (r, g, b)"."""

    t: Literal["place"]
    gx: Coord
    gy: Coord
    r: Channel
    g: Channel
    b: Channel

    @classmethod
    def at(cls, x: int, y: int, color: tuple[int, int, int]) -> "Place":
        r, g, b = color
        return cls(t="place", gx=x, gy=y, r=r, g=g, b=b)

    @property
    def cell(self) -> tuple[int, int]:
        return (self.gx, self.gy)

    @property
    def color(self) -> Color:
        return Color(self.r, self.g, self.b)

    def within(self, cols: int, rows: int) -> bool:
        return self.gx < cols and self.gy < rows

    def to_wire(self) -> str:
        return dumps(self.model_dump())


InboundMsg: TypeAlias = Place
OutboundMsg: TypeAlias = Union[Hello, Place]


def dumps(msg: dict[str, Any]) -> str:
    return json.dumps(msg, separators=(",", ":"), ensure_ascii=False)


def parse_place(
    raw: str | bytes | dict[str, Any],
    cols: Optional[int] = None,
    rows: Optional[int] = None,
) -> Optional[Place]:
    """
    Validate one inbound frame as a placement.

    Returns the parsed `Place`, or None when the frame should be discarded:
    invalid JSON, another message type, a field outside the schema, or (when
    `cols`/`rows` are given) a cell outside the board.
    """
    try:
        if isinstance(raw, dict):
            place = Place.model_validate(raw)
        else:
            place = Place.model_validate_json(raw)
    except ValidationError:
        return None
    if cols is not None and rows is not None and not place.within(cols, rows):
        return None
    return place
