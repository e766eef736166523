from __future__ import annotations

import os
from dotenv import load_dotenv


def load_env() -> None:
    """
    Loads environment variables from .env if present.
    Real environment variables always win; safe to call more than once.
    """
    load_dotenv(override=False)


def env_str(key: str, default: str = "") -> str:
    v = os.getenv(key)
    return v.strip() if v is not None and v.strip() else default


def env_bool(key: str, default: bool = False) -> bool:
    v = os.getenv(key)
    if v is None or not v.strip():
        return default
    return v.strip().lower() in ("1", "true", "yes", "y", "on")


def env_int(key: str, default: int = 0) -> int:
    v = os.getenv(key)
    if v is None:
        return default
    try:
        return int(v.strip())
    except ValueError:
        return default
