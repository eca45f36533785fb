"""Binary codec for .gol board files.

Layout (big-endian throughout):

    offset  size  field
    0       4     magic ``gol!``
    4       2     grid width (u16)
    6       2     grid height (u16)
    8       4     updates per second (f32)
    12      4     background color (RGBA)
    16      1     starting view tag (0 = fit grid to screen, 1 = center)
    17      4     zoom (f32) for center, zero filled otherwise
    21      4     square color when off (RGBA)
    25      4     square color when on (RGBA)
    29      7     terminator: ``0x00`` then ``\\gol!/``
    36      w*h   one byte per square, row-major, nonzero = on
"""

from __future__ import annotations

import logging
import struct
from dataclasses import dataclass
from typing import BinaryIO

import numpy as np

from .errors import NotValidFileError, UnexpectedEndOfBytesError
from .models import RGBA, Settings, StartingView, StartingViewKind, to_f32


MAGIC = b"gol!"
TERMINATOR_LEAD = 0x00
TERMINATOR = b"\\gol!/"
MAX_SQUARES = 0xFFFF

_PRELUDE = struct.Struct(">4sHHf4sBf4s4sB6s")
PRELUDE_LENGTH = _PRELUDE.size

_logger = logging.getLogger("golfile.codec")


@dataclass(frozen=True)
class Prelude:
    """Validated fixed-size header of a .gol file."""

    squares_x: int
    squares_y: int
    updates_sec: float
    background_color: RGBA
    starting_view: StartingView
    square_color_off: RGBA
    square_color_on: RGBA

    @property
    def cell_count(self) -> int:
        return self.squares_x * self.squares_y

    @property
    def file_length(self) -> int:
        return PRELUDE_LENGTH + self.cell_count


def decode_prelude(data: bytes) -> Prelude:
    if len(data) < PRELUDE_LENGTH:
        raise UnexpectedEndOfBytesError(PRELUDE_LENGTH, len(data))

    (
        magic,
        squares_x,
        squares_y,
        updates_sec,
        background,
        view_tag,
        zoom,
        color_off,
        color_on,
        lead,
        terminator,
    ) = _PRELUDE.unpack_from(data, 0)

    if magic != MAGIC:
        raise NotValidFileError("bad magic")
    if squares_x == 0 or squares_y == 0:
        raise NotValidFileError("grid dimensions must be non-zero")
    if updates_sec == 0.0:
        raise NotValidFileError("updates per second must be non-zero")
    if view_tag not in (StartingViewKind.FIT_GRID_TO_SCREEN, StartingViewKind.CENTER):
        raise NotValidFileError(f"unknown starting view tag 0x{view_tag:02X}")
    if lead != TERMINATOR_LEAD:
        raise NotValidFileError("prelude terminator must start with a zero byte")
    if terminator != TERMINATOR:
        raise NotValidFileError("bad prelude terminator")

    return Prelude(
        squares_x=squares_x,
        squares_y=squares_y,
        updates_sec=updates_sec,
        background_color=RGBA.from_bytes(background),
        starting_view=StartingView(StartingViewKind(view_tag), zoom),
        square_color_off=RGBA.from_bytes(color_off),
        square_color_on=RGBA.from_bytes(color_on),
    )


def decode(data: bytes) -> Settings:
    """Parse a complete .gol buffer, raising on the first violated rule."""
    prelude = decode_prelude(data)

    available = len(data) - PRELUDE_LENGTH
    if available < prelude.cell_count:
        raise UnexpectedEndOfBytesError(prelude.file_length, len(data))
    if available > prelude.cell_count:
        _logger.debug(
            "ignoring trailing bytes",
            extra={"event": "trailing_bytes", "count": available - prelude.cell_count},
        )

    cells = np.frombuffer(data, dtype=np.uint8, count=prelude.cell_count, offset=PRELUDE_LENGTH)
    squares = (cells != 0).reshape((prelude.squares_y, prelude.squares_x))

    return Settings(
        squares=squares,
        updates_sec=prelude.updates_sec,
        background_color=prelude.background_color,
        square_color_off=prelude.square_color_off,
        square_color_on=prelude.square_color_on,
        starting_view=prelude.starting_view,
    )


def validate(settings: Settings) -> None:
    """Reject a model the decoder would refuse to read back."""
    if settings.squares.ndim != 2:
        raise NotValidFileError("squares must be a two-dimensional array")
    if not (0 < settings.squares_x <= MAX_SQUARES and 0 < settings.squares_y <= MAX_SQUARES):
        raise NotValidFileError(f"grid dimensions must be within 1..{MAX_SQUARES}")
    if to_f32(settings.updates_sec) == 0.0:
        raise NotValidFileError("updates per second must be non-zero")


def encode_prelude(settings: Settings) -> bytes:
    view = settings.starting_view
    return _PRELUDE.pack(
        MAGIC,
        settings.squares_x,
        settings.squares_y,
        to_f32(settings.updates_sec),
        settings.background_color.to_bytes(),
        int(view.kind),
        view.zoom if view.is_center else 0.0,
        settings.square_color_off.to_bytes(),
        settings.square_color_on.to_bytes(),
        TERMINATOR_LEAD,
        TERMINATOR,
    )


def encode(settings: Settings) -> bytes:
    validate(settings)
    return encode_prelude(settings) + (settings.squares != 0).astype(np.uint8).tobytes(order="C")


def write_to(settings: Settings, sink: BinaryIO) -> int:
    payload = encode(settings)
    sink.write(payload)
    return len(payload)
