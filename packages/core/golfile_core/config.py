"""Persistent app settings schema and load/save helpers."""

from __future__ import annotations

import json
import math
import os
import platform
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from golfile_format import Settings, StartingView
from golfile_format.codec import MAX_SQUARES


CONFIG_VERSION = 2
DEFAULT_UPDATES_SEC = 2.0


@dataclass
class GridConfig:
    squares_x: int = 5
    squares_y: int = 5
    updates_sec: float = DEFAULT_UPDATES_SEC
    starting_zoom: float | None = None


@dataclass
class FilesConfig:
    last_path: str | None = None
    recent: list[str] = field(default_factory=list)
    max_recent: int = 10


@dataclass
class LoggingConfig:
    keep_log_files: int = 7
    level: str = "INFO"


@dataclass
class AppConfig:
    config_version: int = CONFIG_VERSION
    grid: GridConfig = field(default_factory=GridConfig)
    files: FilesConfig = field(default_factory=FilesConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def config_root() -> Path:
    system = platform.system()
    if system == "Windows":
        base = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
        return base / "Golfile"
    if system == "Darwin":
        return Path.home() / "Library" / "Application Support" / "Golfile"
    return Path.home() / ".config" / "golfile"


def config_path() -> Path:
    return config_root() / "config.json"


def clamp_dimension(value: int) -> int:
    return max(1, min(MAX_SQUARES, int(value)))


def clamp_updates_sec(value: float, fallback: float = DEFAULT_UPDATES_SEC) -> float:
    value = float(value)
    if value == 0.0 or not math.isfinite(value):
        return fallback
    return value


def _merge(dataclass_type, raw: dict[str, Any]):
    defaults = dataclass_type()  # type: ignore[misc]
    for k, v in raw.items():
        if hasattr(defaults, k):
            setattr(defaults, k, v)
    return defaults


def _normalize_grid(cfg: AppConfig) -> None:
    cfg.grid.squares_x = clamp_dimension(cfg.grid.squares_x)
    cfg.grid.squares_y = clamp_dimension(cfg.grid.squares_y)
    cfg.grid.updates_sec = clamp_updates_sec(cfg.grid.updates_sec)
    if cfg.grid.starting_zoom is not None:
        zoom = float(cfg.grid.starting_zoom)
        cfg.grid.starting_zoom = zoom if math.isfinite(zoom) and zoom > 0 else None


def _normalize_files(cfg: AppConfig) -> None:
    cfg.files.max_recent = max(1, min(50, int(cfg.files.max_recent)))
    recent = [str(p) for p in (cfg.files.recent or [])]
    cfg.files.recent = list(dict.fromkeys(recent))[: cfg.files.max_recent]


def _normalize_logging(cfg: AppConfig) -> None:
    cfg.logging.keep_log_files = max(2, int(cfg.logging.keep_log_files))
    level = str(cfg.logging.level).upper()
    cfg.logging.level = level if level in ("DEBUG", "INFO", "WARNING", "ERROR") else "INFO"


def _migrate(raw: dict[str, Any]) -> dict[str, Any]:
    version = int(raw.get("config_version", 1))
    data = dict(raw)

    if version < 2:
        # v1 kept the grid defaults flat at the top level and a single last_file.
        grid = dict(data.get("grid", {}) or {})
        for key in ("squares_x", "squares_y", "updates_sec"):
            if key in data:
                grid.setdefault(key, data.pop(key))
        data["grid"] = grid
        files = dict(data.get("files", {}) or {})
        last_file = data.pop("last_file", None)
        if last_file:
            files.setdefault("last_path", last_file)
            files.setdefault("recent", [last_file])
        data["files"] = files
        data["config_version"] = 2

    return data


def load_config(path: Path | None = None) -> AppConfig:
    path = path or config_path()
    if not path.exists():
        return AppConfig()

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return AppConfig()
    if not isinstance(raw, dict):
        return AppConfig()

    data = _migrate(raw)
    cfg = AppConfig(
        config_version=int(data.get("config_version", CONFIG_VERSION)),
        grid=_merge(GridConfig, data.get("grid", {})),
        files=_merge(FilesConfig, data.get("files", {})),
        logging=_merge(LoggingConfig, data.get("logging", {})),
    )

    _normalize_grid(cfg)
    _normalize_files(cfg)
    _normalize_logging(cfg)
    return cfg


def save_config(cfg: AppConfig, path: Path | None = None) -> Path:
    cfg.config_version = CONFIG_VERSION
    path = path or config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(asdict(cfg), indent=2, sort_keys=True), encoding="utf-8")
    return path


def remember_file(cfg: AppConfig, path: Path | str) -> None:
    entry = str(Path(path).expanduser().resolve())
    cfg.files.last_path = entry
    recent = [p for p in cfg.files.recent if p != entry]
    cfg.files.recent = [entry, *recent][: cfg.files.max_recent]


def new_settings(cfg: AppConfig) -> Settings:
    settings = Settings()
    settings.resize(cfg.grid.squares_x, cfg.grid.squares_y)
    settings.set_updates_sec(cfg.grid.updates_sec)
    if cfg.grid.starting_zoom is not None:
        settings.set_starting_view(StartingView.center(cfg.grid.starting_zoom))
    return settings
