"""Per-device LED layout descriptors and the built-in strip geometries."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

from ambientled_capture import NO_FLAGS, SampleFlags, ScreenRegion


HORIZONTAL = "horizontal"
VERTICAL = "vertical"


@dataclass(frozen=True)
class LedAssignment:
    """One LED's sub-rectangle inside a captured strip region."""

    index: int
    strip: str
    x: int
    y: int
    width: int
    height: int


@dataclass(frozen=True)
class StripLayout:
    name: str
    region: ScreenRegion
    axis: str
    divisions: int
    start_index: int
    leds: int | None = None
    reverse_order: bool = False
    stride: int = 2
    flags: SampleFlags = NO_FLAGS

    def __post_init__(self) -> None:
        if self.axis not in (HORIZONTAL, VERTICAL):
            raise ValueError(f"Unknown strip axis: {self.axis}")
        if self.divisions <= 0:
            raise ValueError("Strip needs at least one division")
        if not 0 < self.led_count <= self.divisions:
            raise ValueError(f"Strip {self.name} uses {self.led_count} of {self.divisions} cells")
        if self.cell_size < 2:
            raise ValueError(f"Strip {self.name} cells are too small to sample")

    @property
    def led_count(self) -> int:
        return self.divisions if self.leds is None else self.leds

    @property
    def cell_size(self) -> int:
        extent = self.region.width if self.axis == HORIZONTAL else self.region.height
        return extent // self.divisions

    def assignments(self) -> Iterator[LedAssignment]:
        cell = self.cell_size
        for i in range(self.led_count):
            k = self.divisions - i - 1 if self.reverse_order else i
            if self.axis == HORIZONTAL:
                x, y, w, h = cell * k, 0, cell - 1, self.region.height
            else:
                x, y, w, h = 0, cell * k, self.region.width, cell - 1
            yield LedAssignment(index=self.start_index + i, strip=self.name, x=x, y=y, width=w, height=h)


@dataclass(frozen=True)
class DeviceGeometry:
    name: str
    reference_width: int
    reference_height: int
    led_count: int
    strips: tuple[StripLayout, ...] = field(default_factory=tuple)
    origin_x: int = 0
    origin_y: int = 0
    # regions scale with the live primary display instead of staying fixed
    follow_display: bool = False

    def __post_init__(self) -> None:
        names = [s.name for s in self.strips]
        if len(set(names)) != len(names):
            raise ValueError(f"Strip names must be unique in {self.name}: {names}")
        seen: set[int] = set()
        for strip in self.strips:
            for a in strip.assignments():
                if a.index in seen:
                    raise ValueError(f"LED index {a.index} assigned twice in {self.name}")
                if a.x + a.width > strip.region.width or a.y + a.height > strip.region.height:
                    raise ValueError(f"LED index {a.index} falls outside strip {strip.name}")
                seen.add(a.index)
        missing = set(range(self.led_count)) - seen
        if missing or len(seen) != self.led_count:
            raise ValueError(f"{self.name} leaves LED indices unassigned: {sorted(missing)[:8]}")

    def absolute_region(self, strip: StripLayout) -> ScreenRegion:
        return strip.region.offset(self.origin_x, self.origin_y)

    def assignments(self) -> Iterator[LedAssignment]:
        for strip in self.strips:
            yield from strip.assignments()


def edge_geometry(leds: int = 144, width: int = 1920, height: int = 1080, depth: int = 180) -> DeviceGeometry:
    """Top and bottom edges of a single display, both scanned left to right."""
    top = StripLayout(
        name="top",
        region=ScreenRegion(0, 0, width, depth),
        axis=HORIZONTAL,
        divisions=leds,
        start_index=0,
    )
    bottom = StripLayout(
        name="bottom",
        region=ScreenRegion(0, height - depth - 1, width, depth),
        axis=HORIZONTAL,
        divisions=leds,
        start_index=leds,
    )
    return DeviceGeometry(
        name="edge",
        reference_width=width,
        reference_height=height,
        led_count=leds * 2,
        strips=(top, bottom),
        follow_display=True,
    )


def perimeter_geometry(
    leds_side: int = 55,
    leds_top: int = 75,
    short_right: int = 5,
    width: int = 3840,
    height: int = 2160,
    monitor_offset: int = 3840,
) -> DeviceGeometry:
    """Left, top and right edges of the second monitor.

    Wiring runs up the left edge, across the top, then down the right edge,
    which stops ``short_right`` LEDs before the bottom.
    """
    flags = SampleFlags(reverse_x=True, reverse_y=False, correct=True)
    left = StripLayout(
        name="left",
        region=ScreenRegion(0, 0, 300, height),
        axis=VERTICAL,
        divisions=leds_side,
        start_index=0,
        reverse_order=True,
        flags=flags,
    )
    top = StripLayout(
        name="top",
        region=ScreenRegion(0, 0, width, 180),
        axis=HORIZONTAL,
        divisions=leds_top,
        start_index=leds_side,
        flags=flags,
    )
    right = StripLayout(
        name="right",
        region=ScreenRegion(width - 300, 0, 300, height),
        axis=VERTICAL,
        divisions=leds_side,
        leds=leds_side - short_right,
        start_index=leds_side + leds_top,
        flags=flags,
    )
    return DeviceGeometry(
        name="perimeter",
        reference_width=width,
        reference_height=height,
        led_count=leds_side * 2 + leds_top - short_right,
        strips=(left, top, right),
        origin_x=monitor_offset,
    )


GEOMETRIES = {
    "edge": edge_geometry,
    "perimeter": perimeter_geometry,
}


def get_geometry(name: str) -> DeviceGeometry:
    try:
        return GEOMETRIES[name]()
    except KeyError:
        raise ValueError(f"Unknown geometry: {name}") from None
