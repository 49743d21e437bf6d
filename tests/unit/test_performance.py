import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "capture"))
sys.path.insert(0, str(ROOT / "packages" / "device_protocol"))
sys.path.insert(0, str(ROOT / "packages" / "core"))

from ambientled_core.performance import CycleStats, ResourceMonitor


class PerformanceTests(unittest.TestCase):
    def test_overrun_counting(self):
        stats = CycleStats()
        self.assertFalse(stats.record(0.010, 0.033))
        self.assertTrue(stats.record(0.050, 0.033))
        self.assertEqual(stats.cycles, 2)
        self.assertEqual(stats.overruns, 1)
        self.assertEqual(stats.last_s, 0.050)
        self.assertGreater(stats.avg_s, 0.010)

    def test_resource_sample_shape(self):
        sample = ResourceMonitor().sample()
        self.assertGreaterEqual(sample.cpu_percent, 0.0)
        self.assertGreater(sample.rss_mb, 0.0)


if __name__ == "__main__":
    unittest.main()
