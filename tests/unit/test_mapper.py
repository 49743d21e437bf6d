import sys
import unittest
from pathlib import Path

import numpy as np

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "capture"))
sys.path.insert(0, str(ROOT / "packages" / "device_protocol"))
sys.path.insert(0, str(ROOT / "packages" / "core"))

from ambientled_capture import LedColor, gamma_table
from ambientled_core.geometry import edge_geometry, perimeter_geometry
from ambientled_core.mapper import LedMapper
from ambientled_core.scheduler import PauseFlag


class FakeSampler:
    def __init__(self, fill=None):
        self.fill = fill or (lambda region: np.zeros((region.height, region.width, 3), dtype=np.uint8))
        self.captures = []

    def capture(self, region):
        self.captures.append(region)
        return self.fill(region)


def _row_gradient(region):
    buf = np.zeros((region.height, region.width, 3), dtype=np.uint8)
    buf[..., 0] = (np.arange(region.height) % 256)[:, None]
    return buf


class LedMapperTests(unittest.TestCase):
    def test_edge_uniform_color(self):
        sampler = FakeSampler(lambda r: np.full((r.height, r.width, 3), (10, 20, 30), dtype=np.uint8))
        frame = LedMapper(edge_geometry(), sampler).refresh()
        self.assertEqual(len(frame), 288)
        self.assertTrue(all(c == LedColor(10, 20, 30) for c in frame))

    def test_each_region_captured_once(self):
        sampler = FakeSampler()
        geo = perimeter_geometry()
        LedMapper(geo, sampler).refresh()
        self.assertEqual(sampler.captures, [geo.absolute_region(s) for s in geo.strips])

    def test_pause_skips_capture(self):
        sampler = FakeSampler()
        pause = PauseFlag(paused=True)
        mapper = LedMapper(edge_geometry(), sampler)
        self.assertIsNone(mapper.refresh(pause))
        self.assertEqual(sampler.captures, [])
        pause.set(False)
        self.assertIsNotNone(mapper.refresh(pause))
        self.assertEqual(len(sampler.captures), 2)

    def test_perimeter_left_strip_rows(self):
        frame = LedMapper(perimeter_geometry(), FakeSampler(_row_gradient)).refresh()
        table = gamma_table(2.2)
        # index 0 samples rows 2106..2142 (every other row), i.e. 58..94 after the modulo
        bottom_rows = np.arange(2106, 2106 + 38, 2) % 256
        self.assertEqual(int(bottom_rows.mean()), 76)
        self.assertEqual(frame[0], LedColor(int(table[76]), 0, 0))
        top_rows = np.arange(0, 38, 2)
        self.assertEqual(int(top_rows.mean()), 18)
        self.assertEqual(frame[54], LedColor(int(table[18]), 0, 0))

    def test_frame_is_new_value_each_cycle(self):
        sampler = FakeSampler()
        sampler.fill = lambda r: np.full((r.height, r.width, 3), len(sampler.captures), dtype=np.uint8)
        mapper = LedMapper(edge_geometry(), sampler)
        first = mapper.refresh()
        second = mapper.refresh()
        self.assertEqual(first[0], LedColor(1, 1, 1))
        self.assertEqual(first[144], LedColor(2, 2, 2))
        self.assertEqual(second[0], LedColor(3, 3, 3))
        self.assertIsNot(first, second)


if __name__ == "__main__":
    unittest.main()
