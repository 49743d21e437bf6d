"""One device's mapper, channel, pause flag and scheduler wired together."""

from __future__ import annotations

import logging

from ambientled_capture import LedFrame, RegionSampler, ScreenGrabSampler, display_size
from ambientled_device import LedChannel, NetworkLedChannel, NetworkParams, SerialLedChannel

from .config import ConfigError, DeviceConfig
from .geometry import DeviceGeometry, get_geometry
from .mapper import LedMapper
from .scheduler import PauseFlag, RefreshScheduler


logger = logging.getLogger("ambientled.pipeline")


class DevicePipeline:
    def __init__(
        self,
        name: str,
        mapper: LedMapper,
        channel: LedChannel,
        pause: PauseFlag | None = None,
        interval_s: float = 1 / 30,
    ) -> None:
        if mapper.geometry.led_count > channel.led_count:
            raise ValueError(
                f"{name}: geometry has {mapper.geometry.led_count} LEDs, channel drives {channel.led_count}"
            )
        self.name = name
        self.mapper = mapper
        self.channel = channel
        self.pause = pause or PauseFlag()
        self.scheduler = RefreshScheduler(self.run_cycle, interval_s, name=name)
        self.last_frame: LedFrame | None = None
        self._shut_down = False

    def run_cycle(self) -> LedFrame | None:
        frame = self.mapper.refresh(self.pause)
        if frame is None:
            return None
        self.channel.push(frame)
        self.last_frame = frame
        return frame

    def start(self) -> None:
        self.scheduler.start()

    def shutdown(self, timeout: float | None = 5.0) -> None:
        """Stop refreshing, then blank and release the device."""
        if self._shut_down:
            return
        self.scheduler.stop(timeout)
        if self.scheduler.is_running:
            raise RuntimeError(f"{self.name}: refresh cycle still running, refusing to close channel")
        self._shut_down = True
        logger.info("shutting down %s", self.name, extra={"event": "pipeline_shutdown"})
        self.channel.close()


def build_sampler(device: DeviceConfig, geometry: DeviceGeometry) -> ScreenGrabSampler:
    """Configured display size wins; otherwise follow-display geometries read the live screen."""
    width, height = device.display_width, device.display_height
    if geometry.follow_display and not (width and height):
        live_width, live_height = display_size()
        width = width or live_width
        height = height or live_height
    scale_x = (width or geometry.reference_width) / geometry.reference_width
    scale_y = (height or geometry.reference_height) / geometry.reference_height
    return ScreenGrabSampler(scale_x=scale_x, scale_y=scale_y, anchor_x=geometry.origin_x, anchor_y=geometry.origin_y)


def build_channel(device: DeviceConfig, led_count: int) -> LedChannel:
    if device.channel == "serial":
        return SerialLedChannel(
            name_hint=device.port_hint,
            led_count=led_count,
            baud=device.baud,
            port=device.port,
        )
    if device.channel == "network":
        if not device.host:
            raise ConfigError(f"{device.name}: network devices need host")
        params = NetworkParams(
            max_brightness=device.max_brightness,
            led_count=led_count,
            mul_r=device.mul_r,
            mul_g=device.mul_g,
            mul_b=device.mul_b,
            lerp=device.lerp,
            rate=device.rate,
        )
        return NetworkLedChannel(device.host, device.tcp_port, params)
    raise ConfigError(f"{device.name}: unknown channel {device.channel!r}")


def build_pipeline(
    device: DeviceConfig,
    interval_ms: int,
    sampler: RegionSampler | None = None,
    channel: LedChannel | None = None,
    pause: PauseFlag | None = None,
) -> DevicePipeline:
    geometry = get_geometry(device.geometry)
    mapper = LedMapper(geometry, sampler or build_sampler(device, geometry), gamma=device.gamma)
    channel = channel or build_channel(device, geometry.led_count)
    return DevicePipeline(device.name, mapper, channel, pause=pause, interval_s=interval_ms / 1000)
