"""Screen capture and color averaging for ambient LED strips."""

from .averager import DEFAULT_GAMMA, NO_FLAGS, SampleFlags, average, gamma_table
from .models import BLACK, LedColor, LedFrame, ScreenRegion
from .sampler import RegionSampler, ScreenGrabSampler, display_size

__all__ = [
    "BLACK",
    "DEFAULT_GAMMA",
    "LedColor",
    "LedFrame",
    "NO_FLAGS",
    "RegionSampler",
    "SampleFlags",
    "ScreenGrabSampler",
    "ScreenRegion",
    "average",
    "display_size",
    "gamma_table",
]
