from __future__ import annotations

import base64
import io
from pathlib import Path

from PIL import Image, ImageDraw

from .grid_store import GridStore

BACKGROUND = (240, 240, 240)
GRID_LINE = (220, 220, 220)


def render_board_image(store: GridStore, *, cell_px: int = 10) -> Image.Image:
    """
    Draw the store as a pegboard image.

    - one `cell_px` square per cell, grid lines between cells
    - painted cells inset by 1px to mimic bead gaps (when the cell is big enough)
    """
    cell_px = max(1, cell_px)
    w = store.cols * cell_px
    h = store.rows * cell_px
    img = Image.new("RGB", (w, h), BACKGROUND)
    draw = ImageDraw.Draw(img)

    if cell_px >= 3:
        for x in range(0, w, cell_px):
            draw.line([(x, 0), (x, h - 1)], fill=GRID_LINE)
        for y in range(0, h, cell_px):
            draw.line([(0, y), (w - 1, y)], fill=GRID_LINE)

    inset = 1 if cell_px >= 3 else 0
    for (gx, gy), color in store:
        x0 = gx * cell_px + inset
        y0 = gy * cell_px + inset
        x1 = (gx + 1) * cell_px - 1 - inset
        y1 = (gy + 1) * cell_px - 1 - inset
        draw.rectangle([x0, y0, x1, y1], fill=tuple(color))
    return img


def save_board_png(store: GridStore, path: Path, *, cell_px: int = 10) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    render_board_image(store, cell_px=cell_px).save(path, format="PNG", optimize=True)
    return path


def render_board_png_b64(store: GridStore, *, cell_px: int = 10) -> str:
    """PNG snapshot as base64 (no data-url prefix)."""
    bio = io.BytesIO()
    render_board_image(store, cell_px=cell_px).save(bio, format="PNG", optimize=True)
    return base64.b64encode(bio.getvalue()).decode("ascii")
