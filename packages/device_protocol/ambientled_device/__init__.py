"""Device channels for serial and network driven LED strips."""

from .channel import LedChannel
from .errors import ChannelClosedError, ChannelIOError, DeviceNotFoundError, LedDeviceError
from .models import ChannelState, NetworkParams, SerialDevice, WriteStats
from .network_channel import NetworkLedChannel, encode_params
from .serial_channel import SerialLedChannel, encode_update
from .transport import DEFAULT_BAUD, SerialTransport, find_port

__all__ = [
    "ChannelClosedError",
    "ChannelIOError",
    "ChannelState",
    "DEFAULT_BAUD",
    "DeviceNotFoundError",
    "LedChannel",
    "LedDeviceError",
    "NetworkLedChannel",
    "NetworkParams",
    "SerialDevice",
    "SerialLedChannel",
    "SerialTransport",
    "WriteStats",
    "encode_params",
    "encode_update",
    "find_port",
]
