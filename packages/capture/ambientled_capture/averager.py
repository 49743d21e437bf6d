"""Strided spatial averaging of capture buffer sub-rectangles."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

import numpy as np

from .models import LedColor


DEFAULT_GAMMA = 2.2


@dataclass(frozen=True)
class SampleFlags:
    reverse_x: bool = False
    reverse_y: bool = False
    correct: bool = False


NO_FLAGS = SampleFlags()


@lru_cache(maxsize=16)
def gamma_table(gamma: float = DEFAULT_GAMMA) -> np.ndarray:
    levels = np.arange(256, dtype=np.float64) / 255.0
    table = np.round(255.0 * np.power(levels, gamma))
    table = table.astype(np.uint8)
    table.setflags(write=False)
    return table


def axis_positions(origin: int, length: int, stride: int, reverse: bool) -> np.ndarray:
    """Sampled coordinates along one axis.

    Reversed scans start at the far edge of the span so the pixels nearest
    that edge are always included.
    """
    if reverse:
        return np.arange(origin + length - 1, origin - 1, -stride)
    return np.arange(origin, origin + length, stride)


def average(
    buffer: np.ndarray,
    x: int,
    y: int,
    width: int,
    height: int,
    stride: int = 1,
    flags: SampleFlags = NO_FLAGS,
    gamma: float = DEFAULT_GAMMA,
) -> LedColor:
    if buffer.ndim != 3 or buffer.shape[2] < 3:
        raise ValueError(f"Capture buffer must be HxWx3, got shape {buffer.shape}")
    if stride < 1:
        raise ValueError(f"Stride must be >= 1, got {stride}")
    if width < 1 or height < 1:
        raise ValueError(f"Sub-rectangle must be non-empty, got {width}x{height}")
    buf_h, buf_w = buffer.shape[:2]
    if x < 0 or y < 0 or x + width > buf_w or y + height > buf_h:
        raise ValueError(
            f"Sub-rectangle ({x}, {y}, {width}, {height}) exceeds buffer {buf_w}x{buf_h}"
        )

    xs = axis_positions(x, width, stride, flags.reverse_x)
    ys = axis_positions(y, height, stride, flags.reverse_y)
    samples = buffer[np.ix_(ys, xs)][..., :3]
    count = len(xs) * len(ys)
    sums = samples.reshape(-1, 3).sum(axis=0, dtype=np.int64)
    r, g, b = (int(v) for v in sums // count)

    if flags.correct:
        table = gamma_table(gamma)
        r, g, b = int(table[r]), int(table[g]), int(table[b])
    return LedColor(r, g, b)
