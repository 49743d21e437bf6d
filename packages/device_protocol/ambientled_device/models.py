"""Typed models for LED device discovery and channel state."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ChannelState(str, Enum):
    DISCONNECTED = "Disconnected"
    OPEN = "Open"
    CLOSED = "Closed"


@dataclass(frozen=True)
class SerialDevice:
    device: str
    description: str
    hwid: str
    vid: int | None
    pid: int | None

    def matches(self, hint: str) -> bool:
        return hint.lower() in (self.description or "").lower()


@dataclass(frozen=True)
class NetworkParams:
    """Parameter block the Raspberry Pi LED daemon expects on connect."""

    max_brightness: int = 230
    led_count: int = 144
    mul_r: float = 1.0
    mul_g: float = 1.0
    mul_b: float = 1.0
    lerp: float = 0.5
    rate: int = 60


@dataclass
class WriteStats:
    frames_written: int = 0
    bytes_flushed: int = 0
    flushes: int = 0
