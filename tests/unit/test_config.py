import json
import sys
import tempfile
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "capture"))
sys.path.insert(0, str(ROOT / "packages" / "device_protocol"))
sys.path.insert(0, str(ROOT / "packages" / "core"))

from ambientled_core.config import AppConfig, ConfigError, load_config, save_config


class ConfigTests(unittest.TestCase):
    def test_load_default_when_missing(self):
        with tempfile.TemporaryDirectory() as tmp:
            cfg = load_config(Path(tmp) / "missing.json")
            self.assertIsInstance(cfg, AppConfig)
            self.assertEqual([d.name for d in cfg.devices], ["arduino", "pi"])
            arduino = cfg.device("arduino")
            self.assertEqual((arduino.geometry, arduino.channel, arduino.baud), ("perimeter", "serial", 38400))
            pi = cfg.device("pi")
            self.assertEqual((pi.geometry, pi.channel, pi.host, pi.tcp_port), ("edge", "network", "10.0.2.10", 5163))

    def test_save_and_reload(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            cfg = load_config(path)
            cfg.refresh.interval_ms = 50
            cfg.device("arduino").port_hint = "leonardo"
            save_config(cfg, path)
            reloaded = load_config(path)
            self.assertEqual(reloaded.refresh.interval_ms, 50)
            self.assertEqual(reloaded.device("arduino").port_hint, "leonardo")

    def test_normalizes_ranges(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            raw = {
                "refresh": {"interval_ms": 1},
                "devices": [{"name": "desk", "geometry": "edge", "channel": "network", "host": "pi.local", "gamma": 9}],
            }
            path.write_text(json.dumps(raw), encoding="utf-8")
            cfg = load_config(path)
            self.assertEqual(cfg.refresh.interval_ms, 5)
            self.assertEqual(cfg.device("desk").gamma, 3.0)
            self.assertEqual(len(cfg.devices), 1)

    def test_rejects_unknown_geometry(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            path.write_text(json.dumps({"devices": [{"name": "x", "geometry": "ring"}]}), encoding="utf-8")
            with self.assertRaises(ConfigError):
                load_config(path)

    def test_rejects_network_without_host(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            path.write_text(json.dumps({"devices": [{"name": "x", "channel": "network"}]}), encoding="utf-8")
            with self.assertRaises(ConfigError):
                load_config(path)

    def test_unreadable_file_falls_back(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            path.write_text("{not json", encoding="utf-8")
            self.assertEqual(load_config(path).refresh.interval_ms, 33)


if __name__ == "__main__":
    unittest.main()
