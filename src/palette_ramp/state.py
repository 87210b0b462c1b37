"""
Explicit UI state for the palette page.

Every input widget (hex field, RGB field, picker, shaping sliders) reports a
discrete event; `update` folds it into a new `PaletteState`. Nothing is
mutated in place and the palette is always replaced as a whole, so feeding
the same event twice (e.g. a picker echoing back a sync) is harmless.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Mapping, Union

from .palette import (
    ColorParseError,
    Palette,
    ShapingParams,
    canonical_hex,
    generate_palette,
    is_valid_hex,
    to_rgb_string,
)

log = logging.getLogger(__name__)

DEFAULT_COLOR = "#ff0000"


@dataclass(frozen=True)
class PaletteState:
    hex_input: str = ""
    rgb_input: str = ""
    params: ShapingParams = ShapingParams()
    palette: Palette | None = None
    picker_hex: str | None = None

    @property
    def visible(self) -> bool:
        return self.palette is not None


@dataclass(frozen=True)
class HexInput:
    value: str


@dataclass(frozen=True)
class RgbInput:
    value: str


@dataclass(frozen=True)
class PickerChange:
    hex: str


@dataclass(frozen=True)
class ParamsChange:
    params: ShapingParams


Event = Union[HexInput, RgbInput, PickerChange, ParamsChange]


def _regenerate(state: PaletteState, color: str) -> PaletteState:
    try:
        palette = generate_palette(color, state.params)
    except ColorParseError:
        log.info("hiding palette: unparseable color %r", color)
        return replace(state, palette=None)
    return replace(state, palette=palette)


def current_color(state: PaletteState) -> str:
    return state.hex_input.strip() or state.rgb_input.strip() or DEFAULT_COLOR


def initial_state(color: str = DEFAULT_COLOR, params: ShapingParams | None = None) -> PaletteState:
    state = PaletteState(hex_input=color, params=params or ShapingParams())
    return _regenerate(state, color)


def update(state: PaletteState, event: Event) -> PaletteState:
    if isinstance(event, HexInput):
        value = event.value
        state = replace(
            state,
            hex_input=value,
            rgb_input="",
            picker_hex=value if is_valid_hex(value) else state.picker_hex,
        )
        if value.strip():
            state = _regenerate(state, value)
        return state

    if isinstance(event, RgbInput):
        state = replace(state, rgb_input=event.value, hex_input="")
        try:
            picker = canonical_hex(event.value)
        except ColorParseError:
            # keep whatever palette is showing until the input parses
            return state
        return _regenerate(replace(state, picker_hex=picker), event.value)

    if isinstance(event, PickerChange):
        if not event.hex:
            return state
        try:
            rgb = to_rgb_string(event.hex)
        except ColorParseError:
            log.error("color conversion failed for picker value %r", event.hex)
            rgb = state.rgb_input
        state = replace(state, hex_input=event.hex, rgb_input=rgb, picker_hex=event.hex)
        return _regenerate(state, event.hex)

    if isinstance(event, ParamsChange):
        state = replace(state, params=event.params)
        if state.visible:
            state = _regenerate(state, current_color(state))
        return state

    raise TypeError(f"unknown event {event!r}")


# ---- JSON round-tripping for the /state endpoint ----


def params_from_dict(data: Mapping[str, Any] | None) -> ShapingParams:
    data = data or {}
    defaults = ShapingParams()
    return ShapingParams(
        count=int(data.get("count", defaults.count)),
        steepness=float(data.get("steepness", defaults.steepness)),
        chroma_height=float(data.get("chroma_height", defaults.chroma_height)),
    )


def state_to_dict(state: PaletteState) -> dict[str, Any]:
    return {
        "hex_input": state.hex_input,
        "rgb_input": state.rgb_input,
        "params": state.params.to_dict(),
        "palette": None if state.palette is None else [s.to_dict() for s in state.palette],
        "picker_hex": state.picker_hex,
        "visible": state.visible,
    }


def state_from_dict(data: Mapping[str, Any] | None) -> PaletteState:
    """Rebuild a state from its JSON form; the palette is recomputed, not trusted."""
    data = data or {}
    state = PaletteState(
        hex_input=str(data.get("hex_input") or ""),
        rgb_input=str(data.get("rgb_input") or ""),
        params=params_from_dict(data.get("params")),
        picker_hex=data.get("picker_hex"),
    )
    if data.get("visible", data.get("palette") is not None):
        state = _regenerate(state, current_color(state))
    return state


_EVENTS = {
    "hex": lambda d: HexInput(str(d.get("value", ""))),
    "rgb": lambda d: RgbInput(str(d.get("value", ""))),
    "picker": lambda d: PickerChange(str(d.get("value", ""))),
    "params": lambda d: ParamsChange(params_from_dict(d.get("value"))),
}


def event_from_dict(data: Mapping[str, Any]) -> Event:
    kind = str(data.get("kind", "")).lower()
    if kind not in _EVENTS:
        raise ValueError(f"unknown event kind '{kind}'")
    return _EVENTS[kind](data)


__all__ = [
    "DEFAULT_COLOR",
    "Event",
    "HexInput",
    "PaletteState",
    "ParamsChange",
    "PickerChange",
    "RgbInput",
    "current_color",
    "event_from_dict",
    "initial_state",
    "state_from_dict",
    "state_to_dict",
    "update",
]
