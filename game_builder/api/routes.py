from flask import Blueprint, Response, current_app, jsonify, request

from game_builder.services import game_service

api_bp = Blueprint("api", __name__, url_prefix="/api")


@api_bp.route("/health")
def health():
    return jsonify({"status": "ok"})


# --- Create Game ---

@api_bp.route("/create-game", methods=["POST"])
def create_game():
    # Parsing the body raises 413 over the upload ceiling.
    form, files = request.form, request.files
    try:
        url = game_service.create_game(
            form,
            files,
            games_dir=current_app.config["GAMES_DIR"],
            upload_dir=current_app.config["UPLOAD_TMP_DIR"],
            template_file=current_app.config["TEMPLATE_FILE"],
        )
    except Exception as e:
        return jsonify({"error": f"Error al crear el juego: {e}"}), 500
    return jsonify({"url": url})


# --- Game Config ---

@api_bp.route("/game/<game_id>/config")
def game_config(game_id):
    content = game_service.get_game_config(game_id, games_dir=current_app.config["GAMES_DIR"])
    if content is None:
        return jsonify({"error": "Configuración no encontrada"}), 404
    return Response(content, mimetype="application/json")
