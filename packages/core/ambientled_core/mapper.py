"""Capture-and-average cycle that turns screen strips into an LED frame."""

from __future__ import annotations

import logging

import numpy as np

from ambientled_capture import BLACK, DEFAULT_GAMMA, LedColor, LedFrame, RegionSampler, average

from .geometry import DeviceGeometry
from .scheduler import PauseFlag


logger = logging.getLogger("ambientled.mapper")


class LedMapper:
    def __init__(self, geometry: DeviceGeometry, sampler: RegionSampler, gamma: float = DEFAULT_GAMMA) -> None:
        self.geometry = geometry
        self.sampler = sampler
        self.gamma = gamma

    def capture(self) -> dict[str, np.ndarray]:
        """Capture every strip region once."""
        buffers: dict[str, np.ndarray] = {}
        for strip in self.geometry.strips:
            buffers[strip.name] = self.sampler.capture(self.geometry.absolute_region(strip))
        return buffers

    def render(self, buffers: dict[str, np.ndarray]) -> LedFrame:
        colors: list[LedColor] = [BLACK] * self.geometry.led_count
        for strip in self.geometry.strips:
            buffer = buffers[strip.name]
            for a in strip.assignments():
                colors[a.index] = average(
                    buffer,
                    a.x,
                    a.y,
                    a.width,
                    a.height,
                    stride=strip.stride,
                    flags=strip.flags,
                    gamma=self.gamma,
                )
        return LedFrame.from_colors(colors)

    def refresh(self, pause: PauseFlag | None = None) -> LedFrame | None:
        """Produce the next frame, or ``None`` without capturing when paused."""
        if pause is not None and pause.is_set():
            return None
        frame = self.render(self.capture())
        logger.debug("rendered %d leds for %s", len(frame), self.geometry.name)
        return frame
