"""Read and write .gol files on disk."""

from __future__ import annotations

import logging
from pathlib import Path

from .codec import decode, encode
from .errors import GolFileError, GolFileIOError
from .models import Settings


GOL_SUFFIX = ".gol"

_logger = logging.getLogger("golfile.storage")


def _read_bytes(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except InterruptedError:
        # A single transparent retry, a second interruption surfaces to the caller.
        _logger.info("read interrupted, retrying", extra={"event": "read_retry"})
        return path.read_bytes()


def read_raw(path: Path | str) -> bytes:
    path = Path(path)
    try:
        return _read_bytes(path)
    except OSError as exc:
        raise GolFileIOError(f"could not read {path}: {exc}") from exc


def read_settings(path: Path | str) -> Settings:
    path = Path(path)
    settings = decode(read_raw(path))
    _logger.info(
        f"loaded {path.name} ({settings.squares_x}x{settings.squares_y})",
        extra={"event": "file_loaded"},
    )
    return settings


def write_settings(settings: Settings, path: Path | str) -> Path:
    path = Path(path)
    payload = encode(settings)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(payload)
    except OSError as exc:
        raise GolFileIOError(f"could not write {path}: {exc}") from exc
    _logger.info(f"saved {path.name} ({len(payload)} bytes)", extra={"event": "file_saved"})
    return path


def load_or_default(path: Path | str | None) -> Settings:
    """Load a board, falling back to the defaults when the file is missing or broken."""
    if path is None:
        return Settings()
    try:
        return read_settings(path)
    except GolFileError as exc:
        _logger.warning(f"falling back to default board: {exc}", extra={"event": "load_fallback"})
        return Settings()
