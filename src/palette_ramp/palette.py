# palette.py

from __future__ import annotations

import logging
import math
import re
from dataclasses import asdict, dataclass
from typing import Any, NamedTuple

from coloraide import Color

from .curves import (
    MAX_COUNT,
    MIN_COUNT,
    chroma_multiplier,
    clamp_count,
    lightness_ramp,
)

log = logging.getLogger(__name__)

Hex = str

FIT_HEX = {"method": "raytrace"}  # consistent gamut-fit for hex output

_HEX_RE = re.compile(r"^#[0-9A-F]{6}$", re.IGNORECASE)


class ColorParseError(ValueError):
    """The base color string could not be parsed."""


class OklchColor(NamedTuple):
    l: float
    c: float
    h: float


@dataclass(frozen=True)
class ColorSample:
    hex: Hex
    lightness: float
    chroma: float
    is_original: bool = False

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ShapingParams:
    count: int = 12
    steepness: float = 0.5
    chroma_height: float = 1.0

    def __post_init__(self) -> None:
        if isinstance(self.count, float) and not math.isfinite(self.count):
            raise ValueError(f"count must be finite, got {self.count}")
        # out-of-range counts are clamped rather than rejected
        object.__setattr__(self, "count", clamp_count(self.count))
        for name in ("steepness", "chroma_height"):
            value = float(getattr(self, name))
            # nan/inf would leak into the ramp and into JSON responses
            if not math.isfinite(value):
                raise ValueError(f"{name} must be finite, got {value}")
            object.__setattr__(self, name, value)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


Palette = tuple[ColorSample, ...]


# ---- color conversion (ColorAide) ----


def _parse(text: str) -> Color:
    s = (text or "").strip()
    if not s:
        raise ColorParseError("empty color")
    try:
        return Color(s)
    except ValueError as exc:
        raise ColorParseError(f"could not parse color {s!r}") from exc


def parse_color(text: str) -> OklchColor:
    """Parse any CSS color string into OKLCH (l in 0..1, h in degrees)."""
    oklch = _parse(text).convert("oklch")
    l, c, h = (float(v) for v in oklch.coords())
    # achromatic colors have an undefined hue
    if math.isnan(h):
        h = 0.0
    if math.isnan(c):
        c = 0.0
    return OklchColor(l, c, h % 360.0)


def to_display_hex(l: float, c: float, h: float) -> Hex:
    return Color("oklch", [l, c, h]).convert("srgb").to_string(hex=True, fit=FIT_HEX)


def canonical_hex(text: str) -> Hex:
    return _parse(text).convert("srgb").to_string(hex=True, fit=FIT_HEX)


def to_rgb_string(text: str) -> str:
    return _parse(text).convert("srgb").to_string(fit=FIT_HEX)


def is_valid_hex(text: str) -> bool:
    return bool(_HEX_RE.match(text or ""))


# ---- assembly ----


def assemble_palette(base_hex: Hex, base: OklchColor, params: ShapingParams) -> Palette:
    """
    Build the ordered swatch list for one base color.

    The base occupies one of the `params.count` slots; the rest are sampled
    along the sigmoid lightness ramp with hue held fixed and chroma shaped by
    the mountain profile. Positions are taken over the generated samples
    only. The result is stably sorted by lightness.
    """
    n = max(1, params.count - 1)
    out: list[ColorSample] = []
    for i, lightness in enumerate(lightness_ramp(n, params.steepness)):
        position = i / (n - 1) if n > 1 else 0.0
        chroma = base.c * chroma_multiplier(position, params.chroma_height)
        out.append(
            ColorSample(
                hex=to_display_hex(lightness, chroma, base.h),
                lightness=lightness,
                chroma=chroma,
            )
        )
    out.append(ColorSample(hex=base_hex, lightness=base.l, chroma=base.c, is_original=True))
    # sorted() is stable: ties keep generated-before-original order
    return tuple(sorted(out, key=lambda s: s.lightness))


def generate_palette(color: str, params: ShapingParams | None = None) -> Palette:
    params = params or ShapingParams()
    base = parse_color(color)
    base_hex = canonical_hex(color)
    log.debug("palette for %s (%s) with %s", base_hex, base, params)
    return assemble_palette(base_hex, base, params)


__all__ = [
    "MAX_COUNT",
    "MIN_COUNT",
    "ColorParseError",
    "ColorSample",
    "OklchColor",
    "Palette",
    "ShapingParams",
    "assemble_palette",
    "canonical_hex",
    "generate_palette",
    "is_valid_hex",
    "parse_color",
    "to_display_hex",
    "to_rgb_string",
]

if __name__ == "__main__":
    for sample in generate_palette("#f64466"):
        print(sample)
