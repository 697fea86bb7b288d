"""Flask application factory for the iiifmedia JSON API."""

from flask import Flask, jsonify

from iiifmedia.ranges import DEFAULT_LANGUAGE


def create_app(default_language: str = DEFAULT_LANGUAGE, max_body_mb: int = 16) -> Flask:
    """Build the API app. Manifests and caption tracks arrive as request bodies."""
    app = Flask(__name__)
    app.config["DEFAULT_LANGUAGE"] = default_language
    # Caps the manifest JSON / WebVTT text a single request may post
    app.config["MAX_CONTENT_LENGTH"] = max_body_mb * 1024 * 1024
    # Keep metadata keys in manifest order
    app.json.sort_keys = False

    from iiifmedia.web.routes import bp
    app.register_blueprint(bp)

    @app.errorhandler(413)
    def payload_too_large(error):
        limit = app.config["MAX_CONTENT_LENGTH"]
        return jsonify({"error": f"Manifest or caption body exceeds {limit} bytes"}), 413

    return app
