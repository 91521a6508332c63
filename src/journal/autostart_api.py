# journal/autostart_api.py
from __future__ import annotations
import os, sys, atexit, time, socket, subprocess, contextlib
import streamlit as st


def _truthy(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes", "y")


def _is_listening(host: str, port: int, timeout: float = 0.25) -> bool:
    with contextlib.closing(socket.socket(socket.AF_INET, socket.SOCK_STREAM)) as sock:
        sock.settimeout(timeout)
        try:
            sock.connect((host, port))
            return True
        except OSError:
            return False


def _wait_until_up(host: str, port: int, timeout: float = 8.0) -> bool:
    deadline = time.time() + timeout
    while time.time() < deadline:
        if _is_listening(host, port):
            return True
        time.sleep(0.15)
    return False


def _host_port() -> tuple[str, int]:
    return os.getenv("RJ_API_HOST", "127.0.0.1"), int(os.getenv("RJ_API_PORT", "7000"))


def api_url() -> str:
    """Base URL the UI posts to; RJ_API_URL wins over host/port."""
    explicit = os.getenv("RJ_API_URL")
    if explicit:
        return explicit.rstrip("/")
    host, port = _host_port()
    return f"http://{host}:{port}"


@st.cache_resource(show_spinner=False)
def ensure_fastapi(
    app_module: str | None = None,
    host: str | None = None,
    port: int | None = None,
) -> dict:
    """
    Start the digitize API via Uvicorn in the background if not already running.
    Returns dict: {status, url, pid}

    Env overrides:
      RJ_API_AUTOSTART=1|0
      RJ_API_APP=journal.api:app
      RJ_API_HOST=127.0.0.1
      RJ_API_PORT=7000
      RJ_API_RELOAD=0|1
    """
    if not _truthy("RJ_API_AUTOSTART", "1"):
        return {"status": "disabled", "url": None, "pid": None}

    app_module = app_module or os.getenv("RJ_API_APP", "journal.api:app")
    default_host, default_port = _host_port()
    host = host or default_host
    port = int(port or default_port)

    url = f"http://{host}:{port}"

    if _is_listening(host, port):
        return {"status": "already-running", "url": url, "pid": None}

    cmd = [
        sys.executable, "-m", "uvicorn", app_module,
        "--host", host, "--port", str(port),
        "--workers", "1", "--log-level", "info",
    ]
    if _truthy("RJ_API_RELOAD", "0"):
        cmd.append("--reload")

    # uvicorn must import journal.api from src/
    src_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(p for p in (src_dir, env.get("PYTHONPATH")) if p)

    log_dir = os.path.join(os.getcwd(), "logs")
    os.makedirs(log_dir, exist_ok=True)
    log_path = os.path.join(log_dir, "uvicorn.log")
    # the child keeps its own handle on the log
    with open(log_path, "a", encoding="utf-8") as log_file:
        proc = subprocess.Popen(cmd, stdout=log_file, stderr=log_file, close_fds=True, env=env)

    def _cleanup():
        with contextlib.suppress(Exception):
            proc.terminate()
    atexit.register(_cleanup)

    if not _wait_until_up(host, port, timeout=10.0):
        st.error(
            f"Recipe API failed to start on {url}. "
            f"Check {log_path} and verify RJ_API_APP (module:app)."
        )
        return {"status": "failed", "url": url, "pid": proc.pid}

    return {"status": "started", "url": url, "pid": proc.pid}
