import json
import logging
import sys
import tempfile
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "core"))
sys.path.insert(0, str(ROOT / "packages" / "format"))

from golfile_core.logging_setup import configure_logging, get_logger


class LoggingSetupTests(unittest.TestCase):
    def tearDown(self):
        logger = get_logger()
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)

    def test_json_lines_with_event(self):
        with tempfile.TemporaryDirectory() as tmp:
            logger = configure_logging(console=False, directory=Path(tmp))
            self.assertIs(configure_logging(console=False, directory=Path(tmp)), logger)
            logging.getLogger("golfile.storage").info("saved", extra={"event": "file_saved"})
            for handler in logger.handlers:
                handler.flush()

            lines = (Path(tmp) / "golfile.log").read_text(encoding="utf-8").splitlines()
            records = [json.loads(line) for line in lines]
            self.assertEqual(records[0]["event"], "logging_configured")
            self.assertEqual(records[-1]["logger"], "golfile.storage")
            self.assertEqual(records[-1]["event"], "file_saved")
            self.assertEqual(len(logger.handlers), 1)
            self.tearDown()

    def test_only_known_extra_fields_are_written(self):
        with tempfile.TemporaryDirectory() as tmp:
            logger = configure_logging(console=False, directory=Path(tmp))
            logger.info("read", extra={"event": "file_read", "count": 3, "path": "board.gol"})
            for handler in logger.handlers:
                handler.flush()

            last = json.loads((Path(tmp) / "golfile.log").read_text(encoding="utf-8").splitlines()[-1])
            self.assertEqual((last["event"], last["count"]), ("file_read", 3))
            self.assertNotIn("path", last)
            self.tearDown()


if __name__ == "__main__":
    unittest.main()
