import os
import logging
from pathlib import Path

from dotenv import load_dotenv

loaded = load_dotenv()
if not loaded and Path(".env").exists():
    raise RuntimeError(".env file present but failed to load")


def get_str_env(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    return raw


def get_int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except Exception:
        logging.exception("Invalid %s: %r", name, raw)
        return default


def get_float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except Exception:
        logging.exception("Invalid %s: %r", name, raw)
        return default


USER_AGENT = get_str_env("USER_AGENT", "GraphCrawl/0.1")
HTTP_TIMEOUT = get_int_env("HTTP_TIMEOUT", 10)


def log_level() -> str:
    return get_str_env("GRAPHCRAWL_LOG_LEVEL", "WARNING").strip().upper()


def shutdown_grace_seconds() -> float:
    return get_float_env("GRAPHCRAWL_SHUTDOWN_GRACE_SECONDS", 0.2)


def controller_join_seconds() -> float:
    return get_float_env("GRAPHCRAWL_CONTROLLER_JOIN_SECONDS", 1.0)
