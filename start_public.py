#!/usr/bin/env python3
"""Start the game builder and share it through an ngrok tunnel. Token via NGROK_AUTHTOKEN in .env."""

import logging
import sys

from game_builder.config import LOG_LEVEL
from game_builder.tunnel import run

if __name__ == "__main__":
    logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    sys.exit(run())
