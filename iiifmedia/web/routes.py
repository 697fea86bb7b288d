"""JSON API routes exposing the parsers over HTTP."""

from flask import Blueprint, current_app, jsonify, request

from iiifmedia.captions import extract_speaker_segments
from iiifmedia.display import display_chapters
from iiifmedia.ranges import resolve_chapters
from iiifmedia.target import parse_target

bp = Blueprint("api", __name__)

_VTT_TYPES = ("text/vtt", "text/plain")


@bp.route("/api/health")
def health():
    return jsonify({"status": "ok"})


@bp.route("/api/chapters", methods=["POST"])
def chapters():
    manifest = request.get_json(silent=True)
    if not isinstance(manifest, dict):
        return jsonify({"error": "Request body must be a JSON manifest object"}), 400

    language = request.args.get("language") or current_app.config["DEFAULT_LANGUAGE"]
    resolved = resolve_chapters(manifest, language=language)

    if request.args.get("display") in ("1", "true"):
        return jsonify({"chapters": display_chapters(resolved)})
    return jsonify({"chapters": [ch.to_dict() for ch in resolved]})


@bp.route("/api/speakers", methods=["POST"])
def speakers():
    if request.mimetype in _VTT_TYPES:
        vtt = request.get_data(as_text=True)
    else:
        body = request.get_json(silent=True)
        if not isinstance(body, dict) or not isinstance(body.get("vtt"), str):
            return jsonify({"error": "Provide WebVTT text as {\"vtt\": ...} or a text/vtt body"}), 400
        vtt = body["vtt"]

    segments = extract_speaker_segments(vtt)
    return jsonify({"segments": [s.to_dict() for s in segments]})


@bp.route("/api/target", methods=["POST"])
def target():
    body = request.get_json(silent=True)
    if not isinstance(body, dict) or "target" not in body:
        return jsonify({"error": "Request body must contain 'target'"}), 400

    value = body["target"]
    if value is not None and not isinstance(value, (str, dict)):
        return jsonify({"error": "'target' must be a string or an object"}), 400

    parsed = parse_target(value)
    return jsonify({"target": parsed.to_dict() if parsed is not None else None})
