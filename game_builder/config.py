import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

BASE_DIR = Path(__file__).resolve().parent.parent
GAMES_DIR = Path(os.getenv("GAMES_DIR", BASE_DIR / "games"))
UPLOAD_TMP_DIR = Path(os.getenv("UPLOAD_TMP_DIR", BASE_DIR / "tmp_uploads"))
TEMPLATE_FILE = Path(os.getenv("GAME_TEMPLATE", BASE_DIR / "templates" / "game_template.html"))
STATIC_DIR = BASE_DIR / "static"

# Server config
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3000"))
MAX_UPLOAD_BYTES = int(os.getenv("MAX_UPLOAD_BYTES", str(100 * 1024 * 1024)))  # 100MB
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Tunnel config (ngrok)
NGROK_BIN = os.getenv("NGROK_BIN", "ngrok")
NGROK_API_URL = os.getenv("NGROK_API_URL", "http://127.0.0.1:4040/api/tunnels")
TOKEN_FILE = BASE_DIR / ".ngrok_token"
ENTRY_PAGE = os.getenv("ENTRY_PAGE", "configurator.html")


def app_settings():
    """Settings handed to the Flask app; overridable per app instance."""
    return {
        "GAMES_DIR": GAMES_DIR,
        "UPLOAD_TMP_DIR": UPLOAD_TMP_DIR,
        "TEMPLATE_FILE": TEMPLATE_FILE,
        "STATIC_DIR": STATIC_DIR,
        "MAX_CONTENT_LENGTH": MAX_UPLOAD_BYTES,
        "MAX_FORM_MEMORY_SIZE": MAX_UPLOAD_BYTES,
        "MAX_FORM_PARTS": None,  # any number of file parts, bounded by the byte ceiling
    }
