"""
Netatmo API URL and environment configuration.

Loads .env and exposes the API base URL and derived endpoint URLs. The base URL
can be overridden via environment variable (e.g. to point tests at a stub server).

Environment variables:
  - NETATMO_API_BASE_URL   (optional, default: https://api.netatmo.com)
  - NETATMO_CLIENT_ID      (required by the CLI)
  - NETATMO_CLIENT_SECRET  (required by the CLI)
  - NETATMO_REFRESH_TOKEN  (required by the CLI)
  - NETATMO_DEVICE_ID      (required by the CLI)
  - NETATMO_LOG_LEVEL      (optional, default: INFO)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .errors import ConfigError

_DEFAULT_API_BASE = "https://api.netatmo.com"


def _load_dotenv(log: Optional[logging.LoggerAdapter] = None) -> None:
    """
    Load a .env file into the process environment (if one exists).

    Search order:
    1. Current working directory (.env)
    2. The project root, three levels up from this file
       (src/netatmo_client/config.py -> project root)

    Shell / CI environment variables already set take priority: we always
    call load_dotenv() with override=False so existing values are never
    overwritten.
    """
    cwd_env = Path.cwd() / ".env"
    project_root_env = Path(__file__).resolve().parents[2] / ".env"

    env_file: Optional[Path] = None
    if cwd_env.is_file():
        env_file = cwd_env
    elif project_root_env.is_file():
        env_file = project_root_env

    if env_file is None:
        return

    loaded = load_dotenv(env_file, override=False)
    if log is not None:
        if loaded:
            log.debug("loaded .env from %s (shell vars take precedence)", env_file)
        else:
            log.debug(
                ".env found at %s but all variables were already set in the environment",
                env_file,
            )


def _get_env(name: str, default: Optional[str] = None) -> Optional[str]:
    """Get environment variable, stripped; return default if unset or empty."""
    value = os.getenv(name)
    if value is None:
        return default
    value = value.strip()
    return value or default


# Load .env on module import so URL getters see env vars.
_load_dotenv()


def get_api_base_url() -> str:
    """Return API base URL (e.g. for /oauth2/token, /api/...)."""
    return _get_env("NETATMO_API_BASE_URL", _DEFAULT_API_BASE) or _DEFAULT_API_BASE


def get_token_url() -> str:
    """Return full OAuth token endpoint URL."""
    return f"{get_api_base_url().rstrip('/')}/oauth2/token"


def get_homes_data_url() -> str:
    return f"{get_api_base_url().rstrip('/')}/api/homesdata"


def get_home_status_url() -> str:
    return f"{get_api_base_url().rstrip('/')}/api/homestatus"


def get_station_data_url() -> str:
    """Return weather station data endpoint URL."""
    return f"{get_api_base_url().rstrip('/')}/api/getstationsdata"


def get_homecoachs_data_url() -> str:
    """Return home coach data endpoint URL (same payload shape as station data)."""
    return f"{get_api_base_url().rstrip('/')}/api/gethomecoachsdata"


def get_measure_url() -> str:
    return f"{get_api_base_url().rstrip('/')}/api/getmeasure"


def get_set_room_thermpoint_url() -> str:
    return f"{get_api_base_url().rstrip('/')}/api/setroomthermpoint"


@dataclass(frozen=True)
class CliSettings:
    client_id: str
    client_secret: str
    refresh_token: str
    device_id: str
    log_level: str


def load_cli_settings(*, log: Optional[logging.LoggerAdapter] = None) -> CliSettings:
    """
    Read credentials and the target device from the environment.

    Raises ConfigError naming every missing required variable at once.
    """
    _load_dotenv(log=log)
    client_id = _get_env("NETATMO_CLIENT_ID")
    client_secret = _get_env("NETATMO_CLIENT_SECRET")
    refresh_token = _get_env("NETATMO_REFRESH_TOKEN")
    device_id = _get_env("NETATMO_DEVICE_ID")

    missing = [
        k
        for k, v in [
            ("NETATMO_CLIENT_ID", client_id),
            ("NETATMO_CLIENT_SECRET", client_secret),
            ("NETATMO_REFRESH_TOKEN", refresh_token),
            ("NETATMO_DEVICE_ID", device_id),
        ]
        if not v
    ]
    if missing:
        raise ConfigError(f"Missing required environment variables: {', '.join(missing)}")

    return CliSettings(
        client_id=client_id,
        client_secret=client_secret,
        refresh_token=refresh_token,
        device_id=device_id,
        log_level=_get_env("NETATMO_LOG_LEVEL", "INFO") or "INFO",
    )
