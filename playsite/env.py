from __future__ import annotations

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

from auth.errors import ConfigurationError
from auth.signed_token import MIN_SECRET_LENGTH
from auth.urls import is_valid_public_url

from .constants import LOGGER


def is_truthy(value: str | None) -> bool:
    if value is None:
        return False
    return value.strip().lower() in {"1", "true", "yes", "on"}


def get_env_int(key: str, default: int) -> int:
    raw = os.getenv(key, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise RuntimeError(f"{key} must be an integer value.")


def get_env_float(key: str, default: float) -> float:
    raw = os.getenv(key, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        raise RuntimeError(f"{key} must be a number.")
    if value <= 0:
        raise RuntimeError(f"{key} must be greater than zero.")
    return value


def load_env() -> None:
    env_path = Path(__file__).resolve().parent.parent / ".env"
    if not env_path.exists():
        return
    load_dotenv(env_path, override=True)


def get_public_url() -> str | None:
    public_url = os.getenv("PLAYSITE_PUBLIC_URL", "").strip()
    if not public_url:
        return None
    if not is_valid_public_url(public_url):
        raise ConfigurationError(
            "PLAYSITE_PUBLIC_URL must be an http(s) URL with a host (for example: "
            "https://playsite.example.com)."
        )
    return public_url


def check_env() -> list[str]:
    """Warn about configuration the auth endpoints will need.

    Requests that depend on a missing value fail on their own; startup
    continues so the rest of the site stays up.
    """
    problems = [
        key
        for key in ("GOOGLE_CLIENT_ID", "GOOGLE_CLIENT_SECRET")
        if not os.getenv(key, "").strip()
    ]
    secret = os.getenv("SESSION_SECRET", "")
    if len(secret) < MIN_SECRET_LENGTH:
        problems.append("SESSION_SECRET")

    if problems:
        LOGGER.warning(
            "Missing or invalid configuration: %s; sign-in will fail until it is set.",
            ", ".join(problems),
        )
    return problems


def setup_logging() -> bool:
    debug_enabled = is_truthy(os.getenv("PLAYSITE_DEBUG", "1"))
    if debug_enabled:
        logging.basicConfig(level=logging.INFO)
        LOGGER.setLevel(logging.INFO)
    return debug_enabled
