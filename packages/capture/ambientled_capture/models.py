"""Typed models for screen regions, LED colors, and LED frames."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator


@dataclass(frozen=True)
class ScreenRegion:
    x: int
    y: int
    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Region size must be positive, got {self.width}x{self.height}")

    def offset(self, dx: int, dy: int) -> ScreenRegion:
        return ScreenRegion(x=self.x + dx, y=self.y + dy, width=self.width, height=self.height)


@dataclass(frozen=True)
class LedColor:
    r: int = 0
    g: int = 0
    b: int = 0

    def __post_init__(self) -> None:
        for channel in (self.r, self.g, self.b):
            if not 0 <= channel <= 255:
                raise ValueError(f"Color channel out of range: {channel}")

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.r, self.g, self.b)


BLACK = LedColor(0, 0, 0)


@dataclass(frozen=True)
class LedFrame:
    """Complete color assignment for one strip, indexed in wiring order."""

    colors: tuple[LedColor, ...]

    @classmethod
    def from_colors(cls, colors: Iterable[LedColor]) -> LedFrame:
        return cls(colors=tuple(colors))

    def __len__(self) -> int:
        return len(self.colors)

    def __getitem__(self, index: int) -> LedColor:
        return self.colors[index]

    def __iter__(self) -> Iterator[LedColor]:
        return iter(self.colors)
