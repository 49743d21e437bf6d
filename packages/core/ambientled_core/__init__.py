"""Core host services: geometry, mapping, scheduling, settings, and logging."""

from .config import AppConfig, ConfigError, DeviceConfig, load_config, save_config
from .geometry import DeviceGeometry, LedAssignment, StripLayout, edge_geometry, get_geometry, perimeter_geometry
from .mapper import LedMapper
from .performance import CycleStats, ResourceMonitor, ResourceSample
from .pipeline import DevicePipeline, build_channel, build_pipeline, build_sampler
from .scheduler import PauseFlag, RefreshScheduler

__all__ = [
    "AppConfig",
    "ConfigError",
    "CycleStats",
    "DeviceConfig",
    "DeviceGeometry",
    "DevicePipeline",
    "LedAssignment",
    "LedMapper",
    "PauseFlag",
    "RefreshScheduler",
    "ResourceMonitor",
    "ResourceSample",
    "StripLayout",
    "build_channel",
    "build_pipeline",
    "build_sampler",
    "edge_geometry",
    "get_geometry",
    "load_config",
    "perimeter_geometry",
    "save_config",
]
