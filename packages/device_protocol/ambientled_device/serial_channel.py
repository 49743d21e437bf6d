"""Serial LED protocol for the microcontroller-driven strip.

Each LED update is five bytes with no delimiter or checksum::

    [index high][index low][R][G][B]

The deployed firmware reads the high byte as ``(index << 8)`` truncated to a
byte, so it is always zero and only indices 0..255 are addressable.
"""

from __future__ import annotations

import logging

from .channel import LedChannel
from .models import ChannelState
from .transport import DEFAULT_BAUD, SerialTransport, find_port


logger = logging.getLogger("ambientled.device.serial")

FRAME_SIZE = 5
MAX_INDEX = 0xFF


def encode_update(index: int, r: int, g: int, b: int) -> bytes:
    if not 0 <= index <= MAX_INDEX:
        raise ValueError(f"Serial framing addresses 0..{MAX_INDEX}, got {index}")
    return bytes(
        [
            (index << 8) & 0xFF,
            index & 0xFF,
            r & 0xFF,
            g & 0xFF,
            b & 0xFF,
        ]
    )


class SerialLedChannel(LedChannel):
    name = "serial"

    def __init__(
        self,
        name_hint: str | None = None,
        led_count: int = 180,
        baud: int = DEFAULT_BAUD,
        port: str | None = None,
        transport: SerialTransport | None = None,
    ) -> None:
        super().__init__(led_count)
        if led_count - 1 > MAX_INDEX:
            raise ValueError(f"Serial framing supports at most {MAX_INDEX + 1} LEDs")
        if not port:
            if not name_hint:
                raise ValueError("Either a port or a port description hint is required")
            port = find_port(name_hint).device
        self.port = port
        self.baud = baud
        self._transport = transport or SerialTransport()
        self._pending = bytearray()

        logger.info("opening serial strip on %s", port, extra={"event": "serial_open"})
        self._transport.open(port=port, baud=baud)
        self.state = ChannelState.OPEN

    @property
    def pending(self) -> bytes:
        return bytes(self._pending)

    def _stage(self, index: int, r: int, g: int, b: int) -> None:
        self._pending += encode_update(index, r, g, b)

    def _send(self) -> int:
        payload = bytes(self._pending)
        self._pending.clear()
        written = self._transport.write(payload) if payload else 0
        self._transport.flush_output()
        return written

    def _release(self) -> None:
        self._pending.clear()
        self._transport.close()
