"""Typed models for the persisted board and its display settings."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

import numpy as np


def to_f32(value: float) -> float:
    """Round a Python float to the nearest 32-bit float the file can hold."""
    return float(np.float32(value))


@dataclass(frozen=True)
class RGBA:
    r: int
    g: int
    b: int
    a: int = 255

    def __post_init__(self) -> None:
        for name in ("r", "g", "b", "a"):
            value = getattr(self, name)
            if not 0 <= int(value) <= 255:
                raise ValueError(f"Channel {name} must be within 0..255, got {value}")
            object.__setattr__(self, name, int(value))

    def to_bytes(self) -> bytes:
        return bytes([self.r, self.g, self.b, self.a])

    @classmethod
    def from_bytes(cls, data: bytes) -> RGBA:
        if len(data) != 4:
            raise ValueError("RGBA needs exactly 4 bytes")
        return cls(data[0], data[1], data[2], data[3])

    def to_floats(self) -> tuple[float, float, float, float]:
        return (self.r / 255, self.g / 255, self.b / 255, self.a / 255)


class StartingViewKind(IntEnum):
    FIT_GRID_TO_SCREEN = 0x00
    CENTER = 0x01


@dataclass(frozen=True)
class StartingView:
    """Initial camera policy: fit the whole grid, or center it at a zoom factor."""

    kind: StartingViewKind = StartingViewKind.FIT_GRID_TO_SCREEN
    zoom: float = 0.0

    def __post_init__(self) -> None:
        kind = StartingViewKind(self.kind)
        object.__setattr__(self, "kind", kind)
        # The fit variant carries no payload.
        zoom = to_f32(self.zoom) if kind is StartingViewKind.CENTER else 0.0
        object.__setattr__(self, "zoom", zoom)

    @classmethod
    def fit_grid_to_screen(cls) -> StartingView:
        return cls(StartingViewKind.FIT_GRID_TO_SCREEN)

    @classmethod
    def center(cls, zoom: float) -> StartingView:
        return cls(StartingViewKind.CENTER, zoom)

    @property
    def is_center(self) -> bool:
        return self.kind is StartingViewKind.CENTER


DEFAULT_SQUARES = 5
DEFAULT_UPDATES_SEC = 2.0
DEFAULT_BACKGROUND = RGBA(3, 3, 26, 255)
DEFAULT_SQUARE_OFF = RGBA(40, 40, 48, 255)
DEFAULT_SQUARE_ON = RGBA(240, 240, 240, 255)


def empty_squares(columns: int, rows: int) -> np.ndarray:
    return np.zeros((rows, columns), dtype=bool)


@dataclass(eq=False)
class Settings:
    """Complete persisted state of a board.

    ``squares`` is a boolean array of shape ``(rows, columns)`` indexed
    ``[row, column]``; the grid dimensions are read from its shape. Mutators
    perform no range checks, the codec rejects invalid values on both read
    and write.
    """

    squares: np.ndarray = field(default_factory=lambda: empty_squares(DEFAULT_SQUARES, DEFAULT_SQUARES))
    updates_sec: float = DEFAULT_UPDATES_SEC
    background_color: RGBA = DEFAULT_BACKGROUND
    square_color_off: RGBA = DEFAULT_SQUARE_OFF
    square_color_on: RGBA = DEFAULT_SQUARE_ON
    starting_view: StartingView = field(default_factory=StartingView.fit_grid_to_screen)

    def __post_init__(self) -> None:
        squares = np.asarray(self.squares, dtype=bool)
        if squares.ndim != 2:
            raise ValueError("squares must be a two-dimensional array")
        self.squares = squares
        self.updates_sec = to_f32(self.updates_sec)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Settings):
            return NotImplemented
        return (
            self.squares.shape == other.squares.shape
            and bool(np.array_equal(self.squares, other.squares))
            and self.updates_sec == other.updates_sec
            and self.background_color == other.background_color
            and self.square_color_off == other.square_color_off
            and self.square_color_on == other.square_color_on
            and self.starting_view == other.starting_view
        )

    def __repr__(self) -> str:
        return (
            f"Settings(squares_x={self.squares_x}, squares_y={self.squares_y}, "
            f"live={self.live_count()}, updates_sec={self.updates_sec}, "
            f"background_color={self.background_color}, square_color_off={self.square_color_off}, "
            f"square_color_on={self.square_color_on}, starting_view={self.starting_view})"
        )

    @property
    def squares_x(self) -> int:
        return int(self.squares.shape[1])

    @property
    def squares_y(self) -> int:
        return int(self.squares.shape[0])

    def resize(self, columns: int, rows: int) -> None:
        """Replace the cell field with an all-off one; prior cells are dropped."""
        self.squares = empty_squares(columns, rows)

    def set_updates_sec(self, updates_sec: float) -> None:
        self.updates_sec = to_f32(updates_sec)

    def set_background_color(self, color: RGBA) -> None:
        self.background_color = color

    def set_square_color_off(self, color: RGBA) -> None:
        self.square_color_off = color

    def set_square_color_on(self, color: RGBA) -> None:
        self.square_color_on = color

    def set_starting_view(self, view: StartingView) -> None:
        self.starting_view = view

    def square(self, row: int, column: int) -> bool:
        return bool(self.squares[row, column])

    def set_square(self, row: int, column: int, on: bool) -> None:
        self.squares[row, column] = bool(on)

    def toggle_square(self, row: int, column: int) -> bool:
        self.squares[row, column] = not self.squares[row, column]
        return bool(self.squares[row, column])

    def live_count(self) -> int:
        return int(np.count_nonzero(self.squares))

    def copy(self) -> Settings:
        return Settings(
            squares=self.squares.copy(),
            updates_sec=self.updates_sec,
            background_color=self.background_color,
            square_color_off=self.square_color_off,
            square_color_on=self.square_color_on,
            starting_view=self.starting_view,
        )
