"""Flask application factory for the game builder."""

import logging
from pathlib import Path

from flask import Flask, jsonify, send_from_directory
from flask_cors import CORS
from werkzeug.exceptions import HTTPException, RequestEntityTooLarge

from game_builder.config import app_settings
from game_builder.api.routes import api_bp

logger = logging.getLogger(__name__)

CORS_ALLOW_HEADERS = ["Origin", "X-Requested-With", "Content-Type", "Accept"]


def create_app(overrides=None):
    """Build the app; ``overrides`` replaces any of the settings in game_builder.config."""
    settings = app_settings()
    settings.update(overrides or {})

    app = Flask(__name__, static_folder=None)
    app.config.update(settings)
    for key in ("GAMES_DIR", "UPLOAD_TMP_DIR", "TEMPLATE_FILE", "STATIC_DIR"):
        app.config[key] = Path(app.config[key])
    app.config["GAMES_DIR"].mkdir(parents=True, exist_ok=True)
    app.config["UPLOAD_TMP_DIR"].mkdir(parents=True, exist_ok=True)

    app.register_blueprint(api_bp)
    CORS(app, origins="*", send_wildcard=True, allow_headers=CORS_ALLOW_HEADERS)

    # Serve generated games
    @app.route("/games/<path:filename>")
    def game_file(filename):
        return send_from_directory(app.config["GAMES_DIR"], filename)

    # Serve the builder's own static assets
    @app.route("/", defaults={"filename": "index.html"})
    @app.route("/<path:filename>")
    def static_file(filename):
        return send_from_directory(app.config["STATIC_DIR"], filename)

    @app.errorhandler(RequestEntityTooLarge)
    def too_large(e):
        return jsonify({"error": "La solicitud supera el tamaño máximo permitido"}), 413

    @app.errorhandler(HTTPException)
    def http_error(e):
        return jsonify({"error": e.description}), e.code

    @app.errorhandler(Exception)
    def internal_error(e):
        logger.exception("Unhandled error")
        return jsonify({"error": "Error interno del servidor"}), 500

    return app
