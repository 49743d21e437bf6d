import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "apps" / "host"))
sys.path.insert(0, str(ROOT / "packages" / "core"))
sys.path.insert(0, str(ROOT / "packages" / "device_protocol"))
sys.path.insert(0, str(ROOT / "packages" / "capture"))

from ambientled_app.cli import build_parser


class CliTests(unittest.TestCase):
    def test_run_command(self):
        parser = build_parser()
        args = parser.parse_args(["run", "--device", "arduino", "--device", "pi", "--paused"])
        self.assertEqual(args.command, "run")
        self.assertEqual(args.device, ["arduino", "pi"])
        self.assertTrue(args.paused)

    def test_geometry_command(self):
        parser = build_parser()
        args = parser.parse_args(["geometry", "--name", "edge"])
        self.assertEqual(args.command, "geometry")
        self.assertEqual(args.name, "edge")

    def test_geometry_rejects_unknown(self):
        parser = build_parser()
        with self.assertRaises(SystemExit):
            parser.parse_args(["geometry", "--name", "ring"])

    def test_clear_requires_device(self):
        parser = build_parser()
        args = parser.parse_args(["clear", "--device", "arduino"])
        self.assertEqual(args.device, "arduino")
        with self.assertRaises(SystemExit):
            parser.parse_args(["clear"])


if __name__ == "__main__":
    unittest.main()
