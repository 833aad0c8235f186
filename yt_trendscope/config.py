from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Iterator

KEY_NAME = "YOUTUBE_API_KEY"
APP_DIR = "yt-trendscope"

DEFAULT_MAX_RESULTS = 50
DEFAULT_TOP = 50
DEFAULT_SORT = "view_count"
DEFAULT_ORDER = "desc"
DEFAULT_REGION = "KR"
DEFAULT_LOG_LEVEL = "WARNING"


def get_api_key() -> str:
    """
    YouTube API key from, in order: the environment, a .env at the project
    root, the per-user config.env. Files never override real env vars.
    """
    for source in (None, _project_root() / ".env", _config_dir() / "config.env"):
        if source is not None:
            for k, v in _read_env_file(source):
                os.environ.setdefault(k, v)
        key = os.getenv(KEY_NAME)
        if key:
            return key

    raise RuntimeError(
        f"{KEY_NAME} not set. Export it, or run:\n\n"
        "  yt-trendscope config --api-key YOUR_KEY\n"
    )


def save_api_key(key: str) -> None:
    key = (key or "").strip()
    if not key:
        return
    path = _config_dir() / "config.env"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(f"{KEY_NAME}={key}\n", encoding="utf-8")


def load_setting(key: str, default=None):
    return _read_settings().get(key, default)


def save_setting(key: str, value) -> None:
    data = _read_settings()
    data[key] = value
    path = _config_dir() / "settings.json"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")


def _read_settings() -> dict:
    path = _config_dir() / "settings.json"
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def _read_env_file(path: Path) -> Iterator[tuple[str, str]]:
    """KEY=VALUE pairs; blank lines, comments and malformed lines are skipped."""
    try:
        lines = path.read_text(encoding="utf-8").splitlines()
    except OSError:
        return
    for line in lines:
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        k, v = (part.strip() for part in line.split("=", 1))
        if k:
            yield k, v.strip("\"'")


def _config_dir() -> Path:
    # %APPDATA%\yt-trendscope on Windows, ~/.config/yt-trendscope elsewhere
    if os.name == "nt":
        return Path(os.environ.get("APPDATA", str(Path.home() / "AppData" / "Roaming"))) / APP_DIR
    return Path.home() / ".config" / APP_DIR


def _project_root() -> Path:
    cwd = Path.cwd()
    for p in [cwd, *cwd.parents]:
        if (p / "pyproject.toml").exists() or (p / ".git").exists():
            return p
    return cwd
