"""Exception hierarchy for LED device channels."""

from __future__ import annotations


class LedDeviceError(Exception):
    """Base class for device channel failures."""


class DeviceNotFoundError(LedDeviceError):
    """No port or endpoint matched the configured device."""

    def __init__(self, hint: str) -> None:
        super().__init__(f"Couldn't find serial port matching: {hint}")
        self.hint = hint


class ChannelClosedError(LedDeviceError):
    """The channel was used after its connection was released."""


class ChannelIOError(LedDeviceError):
    """Writing or flushing the underlying connection failed."""
