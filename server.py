#!/usr/bin/env python3
"""Game builder server. Host and port configurable via HOST and PORT in .env."""

import logging

from game_builder.config import HOST, LOG_LEVEL, PORT
from game_builder.web import create_app

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

app = create_app()

if __name__ == "__main__":
    print(f"Servidor corriendo en http://localhost:{PORT}")
    app.run(host=HOST, port=PORT, debug=False)
