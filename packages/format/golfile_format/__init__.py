"""Binary .gol file format for Game of Life boards and their display settings."""

from .codec import PRELUDE_LENGTH, Prelude, decode, decode_prelude, encode, validate, write_to
from .errors import GolFileError, GolFileIOError, NotValidFileError, UnexpectedEndOfBytesError
from .models import RGBA, Settings, StartingView, StartingViewKind
from .storage import GOL_SUFFIX, load_or_default, read_raw, read_settings, write_settings

__all__ = [
    "GOL_SUFFIX",
    "GolFileError",
    "GolFileIOError",
    "NotValidFileError",
    "PRELUDE_LENGTH",
    "Prelude",
    "RGBA",
    "Settings",
    "StartingView",
    "StartingViewKind",
    "UnexpectedEndOfBytesError",
    "decode",
    "decode_prelude",
    "encode",
    "load_or_default",
    "read_raw",
    "read_settings",
    "validate",
    "write_settings",
    "write_to",
]
