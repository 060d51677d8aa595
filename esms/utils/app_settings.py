"""Application settings resolved from the environment.

Every value is read at call time so tests can point the application at a
temporary directory with ``monkeypatch.setenv``. When a variable is not set,
an optional INI file in the data directory (``<data dir>/app.ini``, section
``[app]``) is consulted before falling back to the built-in default.
"""

from __future__ import annotations

import configparser
import os
from pathlib import Path
from typing import Optional


def data_dir() -> Path:
    return Path(os.environ.get("ESMS_DATA_DIR", "data"))


def _read_ini_value(key: str) -> Optional[str]:
    """Read ``key`` from ``[app]`` in ``<data dir>/app.ini`` if present."""
    ini_path = data_dir() / "app.ini"
    if not ini_path.exists():
        return None
    cp = configparser.ConfigParser()
    try:
        cp.read(ini_path)
    except configparser.Error:
        return None
    value = cp.get("app", key, fallback=None)
    return value.strip() if value is not None else None


def _setting(env_name: str, ini_key: str, default: str) -> str:
    value = os.environ.get(env_name)
    if value is None or not value.strip():
        value = _read_ini_value(ini_key)
    return value if value else default


def database_url() -> str:
    return _setting("ESMS_DATABASE_URL", "database_url", f"sqlite:///{data_dir() / 'esms.db'}")


def upload_dir() -> Path:
    return Path(_setting("ESMS_UPLOAD_DIR", "upload_dir", str(data_dir() / "uploads")))


def public_url() -> str:
    """Prefix used when building URLs for uploaded files."""
    return _setting("ESMS_PUBLIC_URL", "public_url", "").rstrip("/")


def cors_origins() -> list[str]:
    raw = _setting("ESMS_CORS_ORIGINS", "cors_origins", "*")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def log_level() -> str:
    return _setting("ESMS_LOG_LEVEL", "log_level", "INFO").upper()


def port() -> int:
    return int(_setting("PORT", "port", "8000"))


__all__ = [
    "data_dir",
    "database_url",
    "upload_dir",
    "public_url",
    "cors_origins",
    "log_level",
    "port",
]
