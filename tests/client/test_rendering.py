"""Tests for beadboard.client.rendering: PNG snapshots via Pillow."""

import base64
import io

from PIL import Image

from beadboard.client.grid_store import GridStore
from beadboard.client.rendering import BACKGROUND, render_board_image, render_board_png_b64, save_board_png
from conftest import RED


def test_image_size_matches_board():
    img = render_board_image(GridStore(8, 4), cell_px=5)
    assert img.size == (40, 20)


def test_painted_cell_center_has_color():
    store = GridStore(8, 4)
    store.place(2, 1, RED)
    img = render_board_image(store, cell_px=10)
    assert img.getpixel((25, 15)) == RED
    assert img.getpixel((55, 35)) == BACKGROUND


def test_tiny_cells_fill_whole_pixel():
    store = GridStore(4, 4)
    store.place(3, 3, RED)
    img = render_board_image(store, cell_px=1)
    assert img.getpixel((3, 3)) == RED


def test_png_b64_decodes():
    store = GridStore(4, 4)
    store.place(0, 0, RED)
    raw = base64.b64decode(render_board_png_b64(store, cell_px=4))
    assert raw.startswith(b"\x89PNG")
    assert Image.open(io.BytesIO(raw)).size == (16, 16)


def test_save_png(tmp_path):
    store = GridStore(4, 4)
    out = save_board_png(store, tmp_path / "snap" / "board.png", cell_px=2)
    assert out.exists()
    assert Image.open(out).size == (8, 8)
