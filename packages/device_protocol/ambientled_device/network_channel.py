"""TCP channel for the Raspberry Pi LED daemon."""

from __future__ import annotations

import logging
import socket
import struct
from typing import Any, Callable

from .channel import LedChannel
from .errors import ChannelIOError
from .models import ChannelState, NetworkParams


logger = logging.getLogger("ambientled.device.network")

_PARAMS = struct.Struct(">IIffffI")


def encode_params(params: NetworkParams) -> bytes:
    return _PARAMS.pack(
        params.max_brightness,
        params.led_count,
        params.mul_r,
        params.mul_g,
        params.mul_b,
        params.lerp,
        params.rate,
    )


class NetworkLedChannel(LedChannel):
    """Streams whole RGB frames to the daemon after a parameter handshake.

    The stream carries no frame boundaries, so a failed send drops the
    socket. The next flush reconnects and repeats the handshake before
    sending the whole staged frame.
    """

    name = "network"

    def __init__(
        self,
        host: str,
        port: int,
        params: NetworkParams | None = None,
        timeout_s: float = 2.0,
        connect: Callable[..., Any] | None = None,
    ) -> None:
        self.params = params or NetworkParams()
        super().__init__(self.params.led_count)
        self.host = host
        self.port = port
        self.timeout_s = timeout_s
        self.reconnects = 0
        self._connect_fn = connect or socket.create_connection
        self._sock: Any | None = None
        self._frame = bytearray(self.led_count * 3)
        self._dirty = False
        self._connect()
        self.state = ChannelState.OPEN

    def _connect(self) -> None:
        logger.info("connecting to %s:%s", self.host, self.port, extra={"event": "network_open"})
        try:
            sock = self._connect_fn((self.host, self.port), self.timeout_s)
        except OSError as exc:
            raise ChannelIOError(f"Failed to connect to {self.host}:{self.port}: {exc}") from exc
        try:
            sock.sendall(encode_params(self.params))
        except OSError as exc:
            sock.close()
            raise ChannelIOError(f"Handshake with {self.host}:{self.port} failed: {exc}") from exc
        self._sock = sock

    def _drop(self) -> None:
        sock, self._sock = self._sock, None
        if sock is None:
            return
        try:
            sock.shutdown(socket.SHUT_RDWR)
        except OSError:
            logger.debug("socket already disconnected", exc_info=True)
        finally:
            sock.close()

    @property
    def connected(self) -> bool:
        return self._sock is not None

    def _stage(self, index: int, r: int, g: int, b: int) -> None:
        self._frame[index * 3 : index * 3 + 3] = bytes((r, g, b))
        self._dirty = True

    def _send(self) -> int:
        if not self._dirty:
            return 0
        if self._sock is None:
            self._connect()
            self.reconnects += 1
        payload = bytes(self._frame)
        try:
            self._sock.sendall(payload)
        except OSError as exc:
            logger.warning(
                "send to %s:%s failed, dropping connection",
                self.host,
                self.port,
                extra={"event": "network_send_failed", "host": self.host, "port": self.port},
            )
            self._drop()
            raise ChannelIOError(str(exc)) from exc
        self._dirty = False
        return len(payload)

    def _release(self) -> None:
        self._drop()
