from __future__ import annotations

import logging
from typing import Any, Mapping

from flask import Flask, Response, jsonify, render_template, request

from .curves import curve_series
from .export import render_export, supported_formats
from .palette import ColorParseError, ShapingParams, generate_palette
from .state import event_from_dict, state_from_dict, state_to_dict, update

log = logging.getLogger(__name__)

DEFAULTS: Mapping[str, Any] = {
    "DEFAULT_COLOR": "#ff0000",
    "DEFAULT_COUNT": 12,
    "DEFAULT_STEEPNESS": 0.5,
    "DEFAULT_CHROMA_HEIGHT": 1.0,
    "CURVE_POINTS": 100,
    "MAX_CURVE_POINTS": 512,
}


def parse_params(args: Mapping[str, str], config: Mapping[str, Any]) -> ShapingParams:
    """Shaping parameters from query args; raises ValueError on non-numbers."""
    return ShapingParams(
        count=int(args.get("count", config["DEFAULT_COUNT"])),
        steepness=float(args.get("steepness", config["DEFAULT_STEEPNESS"])),
        chroma_height=float(args.get("chroma_height", config["DEFAULT_CHROMA_HEIGHT"])),
    )


def _bad_request(message: str, **extra: Any):
    return jsonify({"error": message, **extra}), 400


# ----------------------------- Flask app ----------------------------------


def create_app(config: Mapping[str, Any] | None = None) -> Flask:
    app = Flask(__name__, static_folder="static", template_folder="templates")
    app.config.update(DEFAULTS)
    app.config.from_prefixed_env("PALETTE_RAMP")
    if config:
        app.config.update(config)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

    @app.route("/")
    def index():
        return render_template("index.html", default_color=app.config["DEFAULT_COLOR"])

    @app.route("/palette")
    def palette():
        color = request.args.get("color", app.config["DEFAULT_COLOR"])
        try:
            params = parse_params(request.args, app.config)
        except ValueError as e:
            return _bad_request(f"invalid parameter: {e}")
        try:
            samples = generate_palette(color, params)
        except ColorParseError as e:
            log.info("rejecting color %r: %s", color, e)
            return _bad_request(f"invalid color: {e}")
        except Exception as exc:
            log.exception("Palette generation failed")
            return jsonify({"error": str(exc)}), 500

        return jsonify(
            {
                "base": next(s.hex for s in samples if s.is_original),
                "params": params.to_dict(),
                "palette": [s.to_dict() for s in samples],
            }
        )

    @app.route("/curves")
    def curves():
        try:
            params = parse_params(request.args, app.config)
            points = int(request.args.get("points", app.config["CURVE_POINTS"]))
            points = max(1, min(points, app.config["MAX_CURVE_POINTS"]))
            series = curve_series(params.steepness, params.chroma_height, points=points)
        except ValueError as e:
            return _bad_request(f"invalid parameter: {e}")
        return jsonify(series.to_dict())

    @app.route("/export/<fmt>")
    def export(fmt: str):
        if fmt.lower() not in supported_formats():
            return _bad_request(f"unknown export format '{fmt}'", supported=supported_formats())
        color = request.args.get("color", app.config["DEFAULT_COLOR"])
        try:
            params = parse_params(request.args, app.config)
            body, entry = render_export(fmt, generate_palette(color, params))
        except ColorParseError as e:
            return _bad_request(f"invalid color: {e}")
        except ValueError as e:
            return _bad_request(f"invalid parameter: {e}")
        return Response(
            body,
            mimetype=entry.content_type,
            headers={"Content-Disposition": f"attachment; filename={entry.filename}"},
        )

    @app.route("/state", methods=["POST"])
    def state():
        payload = request.get_json(silent=True) or {}
        if not isinstance(payload, dict):
            return _bad_request("expected a JSON object")
        try:
            current = state_from_dict(payload.get("state"))
            event = event_from_dict(payload.get("event") or {})
        except (AttributeError, TypeError, ValueError) as e:
            return _bad_request(str(e))
        return jsonify(state_to_dict(update(current, event)))

    return app


if __name__ == "__main__":
    # Production: debug=False; threaded=True is fine, the engine is pure.
    create_app().run(debug=False, threaded=True)
