"""Raster previews of a board and image-to-board conversion."""

from __future__ import annotations

import numpy as np
from PIL import Image

from golfile_format.codec import MAX_SQUARES
from golfile_format.models import Settings


def _rgba_array(color) -> np.ndarray:
    return np.array([color.r, color.g, color.b, color.a], dtype=np.uint8)


def render_preview(settings: Settings, cell_px: int = 8, gap_px: int = 1) -> Image.Image:
    """Draw every square as a ``cell_px`` block separated by background-colored gaps."""
    if cell_px < 1:
        raise ValueError("cell_px must be at least 1")
    if gap_px < 0:
        raise ValueError("gap_px must be non-negative")

    rows, columns = settings.squares.shape
    pitch = cell_px + gap_px
    height = rows * pitch + gap_px
    width = columns * pitch + gap_px

    canvas = np.empty((height, width, 4), dtype=np.uint8)
    canvas[:, :] = _rgba_array(settings.background_color)

    colors = np.where(
        settings.squares[..., None],
        _rgba_array(settings.square_color_on),
        _rgba_array(settings.square_color_off),
    ).astype(np.uint8)
    block = np.repeat(np.repeat(colors, cell_px, axis=0), cell_px, axis=1)

    offsets = np.arange(cell_px)
    row_idx = (np.arange(rows)[:, None] * pitch + gap_px + offsets[None, :]).ravel()
    col_idx = (np.arange(columns)[:, None] * pitch + gap_px + offsets[None, :]).ravel()
    canvas[np.ix_(row_idx, col_idx)] = block

    return Image.fromarray(canvas)


def squares_from_image(
    image: Image.Image,
    columns: int | None = None,
    rows: int | None = None,
    threshold: int = 128,
) -> np.ndarray:
    """Map an image onto a grid; pixels at or above ``threshold`` luminance are on."""
    gray = image.convert("L")
    columns = columns or gray.width
    rows = rows or gray.height
    if not (0 < columns <= MAX_SQUARES and 0 < rows <= MAX_SQUARES):
        raise ValueError(f"Grid size must be within 1..{MAX_SQUARES}")
    if (columns, rows) != gray.size:
        gray = gray.resize((columns, rows), Image.Resampling.NEAREST)
    return np.asarray(gray, dtype=np.uint8) >= threshold


def apply_image(
    settings: Settings,
    image: Image.Image,
    columns: int | None = None,
    rows: int | None = None,
    threshold: int = 128,
) -> None:
    squares = squares_from_image(image, columns=columns, rows=rows, threshold=threshold)
    settings.resize(squares.shape[1], squares.shape[0])
    settings.squares[:, :] = squares
