import json
import sys
import tempfile
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "core"))
sys.path.insert(0, str(ROOT / "packages" / "format"))

from golfile_core.config import (
    AppConfig,
    clamp_dimension,
    clamp_updates_sec,
    load_config,
    new_settings,
    remember_file,
    save_config,
)
from golfile_format import codec


class ConfigTests(unittest.TestCase):
    def test_load_default_when_missing(self):
        with tempfile.TemporaryDirectory() as tmp:
            cfg = load_config(Path(tmp) / "missing.json")
            self.assertIsInstance(cfg, AppConfig)
            self.assertEqual(cfg.grid.squares_x, 5)
            self.assertEqual(cfg.grid.updates_sec, 2.0)
            self.assertIsNone(cfg.files.last_path)

    def test_broken_json_gives_defaults(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            path.write_text("{not json", encoding="utf-8")
            self.assertEqual(load_config(path), AppConfig())

    def test_save_and_reload(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            cfg = load_config(path)
            cfg.grid.squares_x = 64
            cfg.grid.starting_zoom = 1.25
            save_config(cfg, path)
            reloaded = load_config(path)
            self.assertEqual(reloaded.grid.squares_x, 64)
            self.assertEqual(reloaded.grid.starting_zoom, 1.25)

    def test_normalizes_out_of_range_values(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            raw = {
                "config_version": 2,
                "grid": {"squares_x": 0, "squares_y": 70000, "updates_sec": 0.0, "starting_zoom": -1},
                "logging": {"level": "chatty", "keep_log_files": 0},
            }
            path.write_text(json.dumps(raw), encoding="utf-8")
            cfg = load_config(path)
            self.assertEqual(cfg.grid.squares_x, 1)
            self.assertEqual(cfg.grid.squares_y, 65535)
            self.assertEqual(cfg.grid.updates_sec, 2.0)
            self.assertIsNone(cfg.grid.starting_zoom)
            self.assertEqual(cfg.logging.level, "INFO")
            self.assertEqual(cfg.logging.keep_log_files, 2)

    def test_migrate_v1_shape(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            old = {"squares_x": 12, "updates_sec": 4.0, "last_file": "/tmp/a.gol"}
            path.write_text(json.dumps(old), encoding="utf-8")
            cfg = load_config(path)
            self.assertEqual(cfg.config_version, 2)
            self.assertEqual(cfg.grid.squares_x, 12)
            self.assertEqual(cfg.grid.updates_sec, 4.0)
            self.assertEqual(cfg.files.last_path, "/tmp/a.gol")
            self.assertEqual(cfg.files.recent, ["/tmp/a.gol"])

    def test_remember_file_keeps_most_recent_first(self):
        cfg = AppConfig()
        cfg.files.max_recent = 2
        with tempfile.TemporaryDirectory() as tmp:
            a, b, c = (Path(tmp).resolve() / name for name in ("a.gol", "b.gol", "c.gol"))
            for p in (a, b, a, c):
                remember_file(cfg, p)
            self.assertEqual(cfg.files.recent, [str(c), str(a)])
            self.assertEqual(cfg.files.last_path, str(c))

    def test_clamps(self):
        self.assertEqual(clamp_dimension(-4), 1)
        self.assertEqual(clamp_dimension(1 << 20), 65535)
        self.assertEqual(clamp_updates_sec(0.0), 2.0)
        self.assertEqual(clamp_updates_sec(float("nan")), 2.0)
        self.assertEqual(clamp_updates_sec(-3.0), -3.0)

    def test_dimension_limit_matches_codec(self):
        self.assertEqual(clamp_dimension(codec.MAX_SQUARES + 1), codec.MAX_SQUARES)
        self.assertEqual(clamp_dimension(codec.MAX_SQUARES), codec.MAX_SQUARES)

    def test_new_settings_uses_grid_defaults(self):
        cfg = AppConfig()
        cfg.grid.squares_x = 9
        cfg.grid.squares_y = 4
        cfg.grid.updates_sec = 8.0
        cfg.grid.starting_zoom = 2.0
        settings = new_settings(cfg)
        self.assertEqual((settings.squares_x, settings.squares_y), (9, 4))
        self.assertEqual(settings.updates_sec, 8.0)
        self.assertTrue(settings.starting_view.is_center)


if __name__ == "__main__":
    unittest.main()
