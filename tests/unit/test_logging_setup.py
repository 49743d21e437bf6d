import json
import logging
import sys
import tempfile
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "capture"))
sys.path.insert(0, str(ROOT / "packages" / "device_protocol"))
sys.path.insert(0, str(ROOT / "packages" / "core"))

from ambientled_core.logging_setup import ConsoleFormatter, JsonFormatter, configure_logging, get_logger


class LoggingSetupTests(unittest.TestCase):
    def tearDown(self):
        logger = get_logger()
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)

    def test_json_lines_with_event(self):
        with tempfile.TemporaryDirectory() as tmp:
            logger = configure_logging(console=False, directory=Path(tmp))
            logging.getLogger("ambientled.device").info("port opened", extra={"event": "serial_open"})
            for handler in logger.handlers:
                handler.flush()
            lines = (Path(tmp) / "ambientled.log").read_text(encoding="utf-8").splitlines()
            rows = [json.loads(line) for line in lines]
            self.assertEqual(rows[0]["event"], "logging_configured")
            self.assertEqual(rows[-1]["logger"], "ambientled.device")
            self.assertEqual(rows[-1]["event"], "serial_open")
            self.tearDown()

    def test_configure_is_idempotent(self):
        with tempfile.TemporaryDirectory() as tmp:
            first = configure_logging(console=False, directory=Path(tmp))
            count = len(first.handlers)
            configure_logging(console=False, directory=Path(tmp))
            self.assertEqual(len(first.handlers), count)
            self.tearDown()


    def test_json_carries_structured_fields(self):
        record = logging.makeLogRecord(
            {
                "name": "ambientled.cli",
                "levelname": "INFO",
                "msg": "status %s",
                "args": ("arduino",),
                "event": "status",
                "device": "arduino",
                "cycles": 12,
                "overruns": 1,
            }
        )
        row = json.loads(JsonFormatter().format(record))
        self.assertEqual(row["msg"], "status arduino")
        self.assertEqual(row["event"], "status")
        self.assertEqual((row["device"], row["cycles"], row["overruns"]), ("arduino", 12, 1))
        self.assertNotIn("args", row)
        self.assertNotIn("levelno", row)

    def test_crash_id_reaches_log_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            logger = configure_logging(console=False, directory=Path(tmp))
            try:
                raise RuntimeError("boom")
            except RuntimeError:
                logger.critical(
                    "uncaught exception %s",
                    "abc",
                    exc_info=True,
                    extra={"event": "uncaught_exception", "crash_id": "abc"},
                )
            for handler in logger.handlers:
                handler.flush()
            row = json.loads((Path(tmp) / "ambientled.log").read_text(encoding="utf-8").splitlines()[-1])
            self.assertEqual(row["crash_id"], "abc")
            self.assertIn("RuntimeError: boom", row["exc"])
            self.tearDown()

    def test_console_appends_fields(self):
        record = logging.makeLogRecord(
            {"name": "ambientled.cli", "levelname": "INFO", "msg": "status pi", "event": "status", "cycles": 3}
        )
        self.assertEqual(ConsoleFormatter().format(record), "INFO ambientled.cli status pi cycles=3")


if __name__ == "__main__":
    unittest.main()
