"""Screen region capture backed by Pillow ImageGrab."""

from __future__ import annotations

import logging
from typing import Protocol

import numpy as np
from PIL import Image, ImageGrab

from .models import ScreenRegion


logger = logging.getLogger("ambientled.capture")


class RegionSampler(Protocol):
    def capture(self, region: ScreenRegion) -> np.ndarray: ...


class ScreenGrabSampler:
    """Grabs virtual-desktop regions and returns them at reference scale.

    Regions are expressed at a reference resolution. ``scale_x``/``scale_y``
    map them onto the live display, and the grab is resized back so callers
    always index the buffer in reference pixels. Offsets along each axis are
    scaled relative to ``anchor_x``/``anchor_y`` (the monitor origin), which
    stays in live virtual-desktop coordinates.
    """

    def __init__(
        self,
        scale_x: float = 1.0,
        scale_y: float = 1.0,
        anchor_x: int = 0,
        anchor_y: int = 0,
    ) -> None:
        if scale_x <= 0 or scale_y <= 0:
            raise ValueError("Scale factors must be positive")
        self.scale_x = scale_x
        self.scale_y = scale_y
        self.anchor_x = anchor_x
        self.anchor_y = anchor_y

    def live_bbox(self, region: ScreenRegion) -> tuple[int, int, int, int]:
        left = self.anchor_x + round((region.x - self.anchor_x) * self.scale_x)
        top = self.anchor_y + round((region.y - self.anchor_y) * self.scale_y)
        right = left + max(1, round(region.width * self.scale_x))
        bottom = top + max(1, round(region.height * self.scale_y))
        return (left, top, right, bottom)

    def capture(self, region: ScreenRegion) -> np.ndarray:
        bbox = self.live_bbox(region)
        image = ImageGrab.grab(bbox=bbox, all_screens=True)
        if image.mode != "RGB":
            image = image.convert("RGB")
        if image.size != (region.width, region.height):
            image = image.resize((region.width, region.height), Image.Resampling.BILINEAR)
        logger.debug("captured region %s as %s", bbox, image.size)
        return np.asarray(image, dtype=np.uint8)


def display_size() -> tuple[int, int]:
    """Size of the primary display as the grabber sees it."""
    width, height = ImageGrab.grab().size
    logger.info("detected display %dx%d", width, height, extra={"event": "display_detected"})
    return width, height
