"""Shared write/flush/clear/close semantics for LED device channels."""

from __future__ import annotations

import logging

from ambientled_capture.models import LedFrame

from .errors import ChannelClosedError
from .models import ChannelState, WriteStats


logger = logging.getLogger("ambientled.device")


class LedChannel:
    """Owns one device connection and exposes a framed write primitive.

    Subclasses implement ``_stage`` (buffer one LED update), ``_send`` (push
    staged bytes to the wire) and ``_release`` (drop the connection).
    A channel has a single writer; callers must not overlap cycles.
    """

    name = "led"

    def __init__(self, led_count: int) -> None:
        if led_count <= 0:
            raise ValueError("LED count must be positive")
        self.led_count = led_count
        self.state = ChannelState.DISCONNECTED
        self.stats = WriteStats()

    def _stage(self, index: int, r: int, g: int, b: int) -> None:
        raise NotImplementedError

    def _send(self) -> int:
        raise NotImplementedError

    def _release(self) -> None:
        raise NotImplementedError

    def _ensure_open(self) -> None:
        if self.state != ChannelState.OPEN:
            raise ChannelClosedError(f"{self.name} channel is {self.state.value.lower()}")

    def write(self, index: int, r: int, g: int, b: int) -> None:
        self._ensure_open()
        if not 0 <= index < self.led_count:
            raise ValueError(f"LED index {index} outside 0..{self.led_count - 1}")
        self._stage(index, r & 0xFF, g & 0xFF, b & 0xFF)
        self.stats.frames_written += 1

    def flush(self) -> None:
        self._ensure_open()
        self.stats.bytes_flushed += self._send()
        self.stats.flushes += 1

    def clear(self) -> None:
        for i in range(self.led_count):
            self.write(i, 0x00, 0x00, 0x00)

    def push(self, frame: LedFrame) -> None:
        if len(frame) > self.led_count:
            raise ValueError(f"Frame has {len(frame)} LEDs, channel drives {self.led_count}")
        for i, color in enumerate(frame):
            self.write(i, color.r, color.g, color.b)
        self.flush()

    def close(self) -> None:
        """Blank the strip twice, flush, then release the connection.

        The release always runs. A blanking failure is re-raised after it and
        wins over a failing release, which is then only logged.
        """
        self._ensure_open()
        logger.info("closing %s channel", self.name, extra={"event": "channel_close"})
        try:
            self.clear()
            self.clear()
            self.flush()
        except BaseException:
            self.state = ChannelState.CLOSED
            try:
                self._release()
            except Exception:
                logger.warning(
                    "release of %s channel failed after blanking error",
                    self.name,
                    exc_info=True,
                    extra={"event": "channel_release_failed"},
                )
            raise
        self.state = ChannelState.CLOSED
        self._release()
