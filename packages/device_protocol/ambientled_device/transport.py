"""Serial transport abstraction for LED microcontroller communication."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import serial
from serial.tools import list_ports

from .errors import ChannelIOError, DeviceNotFoundError
from .models import SerialDevice


DEFAULT_BAUD = 38400


@dataclass
class SerialConfig:
    port: str
    baud: int = DEFAULT_BAUD
    timeout_ms: int = 500


class SerialTransport:
    """Thin wrapper over pyserial with the 8N1 settings the firmware expects."""

    def __init__(self) -> None:
        self._serial: Any | None = None
        self.config: SerialConfig | None = None

    @property
    def is_open(self) -> bool:
        return bool(self._serial and self._serial.is_open)

    def open(self, port: str, baud: int = DEFAULT_BAUD, timeout_ms: int = 500) -> None:
        if self.is_open:
            return
        self.config = SerialConfig(port=port, baud=baud, timeout_ms=timeout_ms)
        try:
            self._serial = serial.Serial(
                port=port,
                baudrate=baud,
                bytesize=serial.EIGHTBITS,
                parity=serial.PARITY_NONE,
                stopbits=serial.STOPBITS_ONE,
                timeout=max(timeout_ms, 1) / 1000,
                write_timeout=max(timeout_ms, 1) / 1000,
            )
        except serial.SerialException as exc:
            raise ChannelIOError(f"Failed to open {port}: {exc}") from exc

    def close(self) -> None:
        if self._serial is not None:
            try:
                self._serial.close()
            finally:
                self._serial = None

    def write(self, payload: bytes) -> int:
        if not self.is_open:
            raise ChannelIOError("Serial port is not open")
        try:
            return int(self._serial.write(payload))
        except serial.SerialException as exc:
            raise ChannelIOError(str(exc)) from exc

    def flush_output(self) -> None:
        if not self.is_open:
            raise ChannelIOError("Serial port is not open")
        try:
            self._serial.flush()
        except serial.SerialException as exc:
            raise ChannelIOError(str(exc)) from exc

    @staticmethod
    def discover() -> list[SerialDevice]:
        devices: list[SerialDevice] = []
        for item in list_ports.comports():
            devices.append(
                SerialDevice(
                    device=item.device,
                    description=item.description,
                    hwid=item.hwid,
                    vid=item.vid,
                    pid=item.pid,
                )
            )
        return devices


def find_port(hint: str, devices: list[SerialDevice] | None = None) -> SerialDevice:
    """Pick the first port whose description contains ``hint``, ignoring case."""
    candidates = SerialTransport.discover() if devices is None else devices
    for d in candidates:
        if d.matches(hint):
            return d
    raise DeviceNotFoundError(hint)
