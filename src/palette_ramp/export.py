from __future__ import annotations

import json
import math
from datetime import datetime, timezone
from typing import Callable, Iterable, Mapping, NamedTuple

from .palette import ColorSample


def _percent(x: float) -> int:
    # JS Math.round semantics (half toward +inf), not banker's rounding
    return math.floor(x * 100.0 + 0.5)


def css_variable(sample: ColorSample) -> str:
    if sample.is_original:
        return "--color-primary"
    return f"--color-{_percent(sample.lightness)}"


def swatch_name(sample: ColorSample) -> str:
    return "primary" if sample.is_original else f"shade-{_percent(sample.lightness)}"


def export_css(palette: Iterable[ColorSample]) -> str:
    """`:root` custom properties plus a few usage rules."""
    samples = list(palette)
    lines = [":root {"]
    lines += [f"  {css_variable(s)}: {s.hex};" for s in samples]
    lines += ["}", "", "/* Usage */", ".primary { color: var(--color-primary); }"]
    for s in samples:
        if not s.is_original:
            n = _percent(s.lightness)
            lines.append(f".text-{n} {{ color: var(--color-{n}); }}")
    return "\n".join(lines) + "\n"


def export_json(
    palette: Iterable[ColorSample], *, generated: datetime | None = None
) -> str:
    samples = list(palette)
    stamp = generated or datetime.now(timezone.utc)
    doc = {
        "palette": [
            {
                "name": swatch_name(s),
                "hex": s.hex,
                "lightness": _percent(s.lightness),
                "chroma": _percent(s.chroma),
                "isOriginal": s.is_original,
            }
            for s in samples
        ],
        "generated": stamp.isoformat(),
        "total": len(samples),
    }
    return json.dumps(doc, indent=2)


class ExportFormat(NamedTuple):
    render: Callable[[Iterable[ColorSample]], str]
    filename: str
    content_type: str


EXPORT_FORMATS: Mapping[str, ExportFormat] = {
    "css": ExportFormat(export_css, "color-palette.css", "text/css"),
    "json": ExportFormat(export_json, "color-palette.json", "application/json"),
}


def supported_formats() -> tuple[str, ...]:
    return tuple(EXPORT_FORMATS)


def render_export(fmt: str, palette: Iterable[ColorSample]) -> tuple[str, ExportFormat]:
    try:
        entry = EXPORT_FORMATS[fmt.lower()]
    except KeyError:
        raise ValueError(f"unknown export format '{fmt}'") from None
    return entry.render(palette), entry


__all__ = [
    "EXPORT_FORMATS",
    "ExportFormat",
    "css_variable",
    "export_css",
    "export_json",
    "render_export",
    "supported_formats",
    "swatch_name",
]
