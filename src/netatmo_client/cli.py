#!/usr/bin/env python3
"""
CLI: authenticate with a refresh token and print a weather station's data.

Reads NETATMO_CLIENT_ID, NETATMO_CLIENT_SECRET, NETATMO_REFRESH_TOKEN and
NETATMO_DEVICE_ID from the environment (or a .env file) and prints the decoded
station data as JSON to stdout.
"""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys
import uuid
from typing import Optional

from . import config as config_mod
from . import log_utils
from .client import ClientCredentials, NetatmoClient
from .errors import NetatmoError


def _parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="netatmo-station-data",
        description="Fetch Netatmo weather station data for NETATMO_DEVICE_ID.",
    )
    p.add_argument("--pretty", action="store_true", help="Pretty-print JSON output.")
    p.add_argument(
        "--homecoach",
        action="store_true",
        help="Treat the device as a home coach (gethomecoachsdata) instead of a station.",
    )
    p.add_argument(
        "--timeout-seconds",
        default="30",
        help="HTTP timeout in seconds (default: 30).",
    )
    p.add_argument(
        "--insecure-skip-ssl-verify",
        action="store_true",
        help="Disable TLS certificate verification (NOT recommended).",
    )
    p.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help='Logging verbosity (default: NETATMO_LOG_LEVEL or "INFO").',
    )
    return p.parse_args(sys.argv[1:] if argv is None else argv)


def main(argv: Optional[list[str]] = None) -> int:
    """
    CLI entrypoint.

    Returns 0 on success, 2 on configuration or API errors.
    """
    args = _parse_args(argv)
    log: Optional[logging.LoggerAdapter] = None
    try:
        settings = config_mod.load_cli_settings()
        log = log_utils.configure_logging(
            run_id=uuid.uuid4().hex[:12],
            level=args.log_level or settings.log_level,
        )
        log.info("starting station data fetch")

        credentials = ClientCredentials(
            client_id=settings.client_id,
            client_secret=settings.client_secret,
        )
        client = NetatmoClient.new(
            credentials,
            timeout_seconds=float(args.timeout_seconds),
            ssl_verify=not bool(args.insecure_skip_ssl_verify),
            log=log,
        ).authenticate(settings.refresh_token)

        if args.homecoach:
            data = client.get_homecoachs_data(settings.device_id)
        else:
            data = client.get_station_data(settings.device_id)

        out = dataclasses.asdict(data)
        if args.pretty:
            print(json.dumps(out, indent=2, ensure_ascii=False, default=str))
        else:
            print(json.dumps(out, ensure_ascii=False, default=str))
        log.info("completed successfully")
        return 0
    except NetatmoError as e:
        # Causes can echo request data, so both levels are sanitized.
        message = log_utils.sanitize_text(str(e))
        cause = e.__cause__
        if cause is not None:
            message = f"{message} ({log_utils.sanitize_text(str(cause))})"
        if log is not None:
            log.error("CLI error: %s", message)
        else:
            logging.getLogger(log_utils.LOGGER_NAME).error("CLI error: %s", message)
        print(f"Error: {message}", file=sys.stderr)
        return 2
    except ValueError as e:
        # Bad --timeout-seconds.
        print(f"Error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
