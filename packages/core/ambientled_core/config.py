"""Persistent host settings schema and load/save helpers."""

from __future__ import annotations

import json
import logging
import os
import platform
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from .geometry import GEOMETRIES


CONFIG_VERSION = 1
CHANNELS = ("serial", "network")

logger = logging.getLogger("ambientled.config")


class ConfigError(ValueError):
    """A configured device cannot be built as described."""


@dataclass
class RefreshConfig:
    interval_ms: int = 33


@dataclass
class LoggingConfig:
    keep_files: int = 7
    console: bool = True


@dataclass
class DeviceConfig:
    name: str = "arduino"
    geometry: str = "perimeter"
    channel: str = "serial"
    enabled: bool = True
    # serial
    port_hint: str | None = "arduino"
    port: str | None = None
    baud: int = 38400
    # network
    host: str | None = None
    tcp_port: int = 5163
    max_brightness: int = 230
    mul_r: float = 1.0
    mul_g: float = 1.0
    mul_b: float = 1.0
    lerp: float = 0.5
    rate: int = 60
    # sampling
    display_width: int | None = None
    display_height: int | None = None
    gamma: float = 2.2


def default_devices() -> list[DeviceConfig]:
    return [
        DeviceConfig(),
        DeviceConfig(
            name="pi",
            geometry="edge",
            channel="network",
            port_hint=None,
            host="10.0.2.10",
            tcp_port=5163,
            max_brightness=230,
        ),
    ]


@dataclass
class AppConfig:
    config_version: int = CONFIG_VERSION
    refresh: RefreshConfig = field(default_factory=RefreshConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    devices: list[DeviceConfig] = field(default_factory=default_devices)

    def device(self, name: str) -> DeviceConfig:
        for d in self.devices:
            if d.name == name:
                return d
        raise ConfigError(f"No device named {name!r} in config")


def config_root() -> Path:
    system = platform.system()
    if system == "Windows":
        base = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
        return base / "AmbientLed"
    if system == "Darwin":
        return Path.home() / "Library" / "Application Support" / "AmbientLed"
    return Path.home() / ".config" / "ambientled"


def config_path() -> Path:
    return config_root() / "config.json"


def _merge(dataclass_type, raw: dict[str, Any]):
    defaults = dataclass_type()  # type: ignore[misc]
    for k, v in raw.items():
        if hasattr(defaults, k):
            setattr(defaults, k, v)
    return defaults


def _normalize_refresh(cfg: AppConfig) -> None:
    cfg.refresh.interval_ms = max(5, min(1000, int(cfg.refresh.interval_ms)))


def _normalize_logging(cfg: AppConfig) -> None:
    cfg.logging.keep_files = max(2, int(cfg.logging.keep_files))


def _normalize_device(device: DeviceConfig) -> None:
    if device.geometry not in GEOMETRIES:
        raise ConfigError(f"{device.name}: unknown geometry {device.geometry!r}")
    if device.channel not in CHANNELS:
        raise ConfigError(f"{device.name}: unknown channel {device.channel!r}")
    if device.channel == "serial" and not (device.port or device.port_hint):
        raise ConfigError(f"{device.name}: serial devices need port or port_hint")
    if device.channel == "network" and not device.host:
        raise ConfigError(f"{device.name}: network devices need host")
    device.gamma = float(max(1.0, min(3.0, float(device.gamma))))
    device.max_brightness = max(0, min(255, int(device.max_brightness)))
    device.lerp = float(max(0.0, min(1.0, float(device.lerp))))


def load_config(path: Path | None = None) -> AppConfig:
    path = path or config_path()
    if not path.exists():
        return AppConfig()

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("ignoring unreadable config %s: %s", path, exc)
        return AppConfig()

    devices_raw = raw.get("devices")
    cfg = AppConfig(
        config_version=int(raw.get("config_version", CONFIG_VERSION)),
        refresh=_merge(RefreshConfig, raw.get("refresh", {})),
        logging=_merge(LoggingConfig, raw.get("logging", {})),
        devices=default_devices() if devices_raw is None else [_merge(DeviceConfig, d) for d in devices_raw],
    )

    names = [d.name for d in cfg.devices]
    if len(set(names)) != len(names):
        raise ConfigError(f"Device names must be unique: {names}")

    _normalize_refresh(cfg)
    _normalize_logging(cfg)
    for device in cfg.devices:
        _normalize_device(device)
    return cfg


def save_config(cfg: AppConfig, path: Path | None = None) -> Path:
    cfg.config_version = CONFIG_VERSION
    path = path or config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(asdict(cfg), indent=2, sort_keys=True), encoding="utf-8")
    return path
