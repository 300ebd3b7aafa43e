"""Expose the local game builder through a public ngrok tunnel.

Starts ``server.py`` in the background, waits until it answers, resolves an
ngrok authtoken and opens an HTTP tunnel with the ``ngrok`` binary. The public
URL is read back from ngrok's local inspection API.
"""

import argparse
import logging
import os
import re
import subprocess
import sys
import time
from pathlib import Path

import requests

from game_builder.config import (
    BASE_DIR,
    ENTRY_PAGE,
    NGROK_API_URL,
    NGROK_BIN,
    PORT,
    TOKEN_FILE,
)

logger = logging.getLogger(__name__)

TOKEN_PROMPT = (
    "Introduce tu ngrok authtoken "
    "(https://dashboard.ngrok.com/get-started/your-authtoken): "
)
_AUTHTOKEN_RE = re.compile(r"authtoken:\s*([\w-]+)")


class TunnelError(RuntimeError):
    """Raised when the server or the tunnel cannot be brought up."""


def check_server(url, retries=15, delay=1.0, session=None, sleep=time.sleep):
    """Poll url until it answers 200.

    Raises:
        TunnelError: After ``retries`` attempts without a 200 response.
    """
    http = session or requests
    last_error = None
    for attempt in range(retries):
        try:
            response = http.get(url, timeout=5)
            if response.status_code == 200:
                return
            last_error = "El servidor no respondió correctamente"
        except requests.RequestException:
            last_error = "El servidor no está disponible"
        if attempt + 1 < retries:
            sleep(delay)
    raise TunnelError(last_error)


def _global_config_paths(home):
    return [
        home / ".ngrok2" / "ngrok.yml",
        home / ".config" / "ngrok" / "ngrok.yml",
    ]


def _read_global_token(home):
    for path in _global_config_paths(home):
        try:
            if not path.exists():
                continue
            match = _AUTHTOKEN_RE.search(path.read_text(encoding="utf-8"))
        except OSError as e:
            logger.warning("Could not read ngrok config %s: %s", path, e)
            continue
        if match:
            return match.group(1)
    return None


def get_ngrok_token(token_file=TOKEN_FILE, home=None, prompt=input):
    """Resolve the ngrok authtoken.

    Order: NGROK_AUTHTOKEN env var, the local token file, ngrok's own global
    config, and finally an interactive prompt.
    """
    env_token = os.getenv("NGROK_AUTHTOKEN")
    if env_token:
        return env_token

    token_file = Path(token_file)
    if token_file.exists():
        return token_file.read_text(encoding="utf-8").strip()

    token = _read_global_token(Path(home) if home else Path.home())
    if token:
        return token

    return prompt(TOKEN_PROMPT).strip()


def save_ngrok_token(token, token_file=TOKEN_FILE):
    """Remember the token for future sessions. Returns False if it could not be written."""
    try:
        Path(token_file).write_text(token, encoding="utf-8")
    except OSError as e:
        print(f"⚠️ No se pudo guardar el token: {e}")
        return False
    print("✅ Token de Ngrok guardado para futuras sesiones")
    return True


class _BackgroundProcess:
    """Owns one child process; stop() terminates, then kills after a timeout."""

    def __init__(self):
        self._process = None

    def _launch(self, command, **kwargs):
        try:
            self._process = subprocess.Popen(command, **kwargs)
        except OSError as e:
            raise TunnelError(f"No se pudo ejecutar {command[0]}: {e}") from e
        return self._process

    def is_running(self):
        return self._process is not None and self._process.poll() is None

    def stop(self):
        process = self._process
        if process is None:
            return False
        self._process = None
        if process.poll() is not None:
            process.wait()
            return False
        process.terminate()
        try:
            process.wait(timeout=5)
        except subprocess.TimeoutExpired:
            process.kill()
            process.wait(timeout=5)
        return True


class ServerProcess(_BackgroundProcess):
    """The game builder server running in the background."""

    def __init__(self, script=BASE_DIR / "server.py", env=None):
        super().__init__()
        self.script = Path(script)
        self._env = env

    def start(self):
        env = os.environ.copy()
        if self._env:
            env.update(self._env)
        return self._launch([sys.executable, str(self.script)], cwd=str(self.script.parent), env=env)


class NgrokTunnel(_BackgroundProcess):
    """An ``ngrok http <port>`` process and the public URL it serves."""

    def __init__(self, port, token, binary=NGROK_BIN, api_url=NGROK_API_URL, session=None, sleep=time.sleep):
        super().__init__()
        self.port = port
        self.token = token
        self.binary = binary
        self.api_url = api_url
        self._http = session or requests
        self._sleep = sleep
        self.public_url = None

    def command(self):
        return [self.binary, "http", str(self.port), "--authtoken", self.token, "--log", "stdout"]

    def _fetch_public_url(self):
        response = self._http.get(self.api_url, timeout=5)
        response.raise_for_status()
        tunnels = response.json().get("tunnels", [])
        for tunnel in tunnels:
            if tunnel.get("public_url", "").startswith("https://"):
                return tunnel["public_url"]
        if tunnels:
            return tunnels[0].get("public_url")
        return None

    def _wait_for_url(self, retries=10, delay=0.5):
        for _ in range(retries):
            if not self.is_running():
                raise TunnelError("ngrok terminó inesperadamente")
            try:
                url = self._fetch_public_url()
            except (requests.RequestException, ValueError):
                url = None
            if url:
                return url
            self._sleep(delay)
        raise TunnelError("ngrok no publicó ninguna URL")

    def connect(self, attempts=3, delay=2.0):
        """Start ngrok and return its public URL, retrying a few times."""
        for attempt in range(1, attempts + 1):
            try:
                self._launch(self.command(), stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL)
                self.public_url = self._wait_for_url()
                return self.public_url
            except TunnelError as e:
                self.stop()
                print(f"⚠️ Intento {attempt}/{attempts} - Error al conectar Ngrok: {e}")
                if attempt < attempts:
                    self._sleep(delay)
        raise TunnelError("No se pudo conectar con Ngrok")

    def close(self):
        self.public_url = None
        return self.stop()


def run(argv=None, wait=None):
    parser = argparse.ArgumentParser(description="Expose the game builder through an ngrok tunnel.")
    parser.add_argument("--port", type=int, default=PORT)
    parser.add_argument("--entry-page", default=ENTRY_PAGE)
    args = parser.parse_args(argv)

    print("🚀 Iniciando servidor...")
    server = ServerProcess(env={"PORT": str(args.port)})
    tunnel = None
    try:
        server.start()
        check_server(f"http://localhost:{args.port}/api/health")
        print(f"✅ Servidor listo en http://localhost:{args.port}")

        token = get_ngrok_token()
        tunnel = NgrokTunnel(args.port, token)
        public_url = tunnel.connect()
        save_ngrok_token(token)

        print("\n🌈 ¡Servidor público listo!")
        print("🔗 Comparte este enlace para acceder desde cualquier dispositivo:")
        print(f"   {public_url}/{args.entry_page}")
        print("\n💡 Presiona Ctrl+C para detener el servidor")
        (wait or _wait_forever)(server)
    except KeyboardInterrupt:
        print("\nApagando servidor...")
    except TunnelError as e:
        print(f"❌ Error crítico: {e}")
        return 1
    finally:
        if tunnel is not None:
            tunnel.close()
        server.stop()
    return 0


def _wait_forever(server):
    while server.is_running():
        time.sleep(1)
    raise TunnelError("El servidor se detuvo")
