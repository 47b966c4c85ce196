"""
Logging setup and secret redaction for the Netatmo client.

Every request carries either a refresh token, a client secret or an access
token, so anything that logs request parameters or response bodies goes
through the sanitizers below first.
"""

from __future__ import annotations

import logging
import re
from typing import Optional

LOGGER_NAME = "netatmo_client"

# Run id stamped on records; replaced by each configure_logging() call.
_run_id = "-"


def _stamp_run_id(record: logging.LogRecord) -> None:
    if not hasattr(record, "run_id"):
        record.run_id = _run_id


class _RunIdFilter(logging.Filter):
    """
    Stamp records that were created by another record factory.
    """

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: A003 - logging uses `filter` name
        _stamp_run_id(record)
        return True


_RUN_ID_FILTER = _RunIdFilter()


def _coerce_log_level(level: str) -> int:
    level_upper = (level or "").strip().upper()
    if not level_upper:
        return logging.INFO
    return logging._nameToLevel.get(level_upper, logging.INFO)


def _install_record_factory() -> None:
    current = logging.getLogRecordFactory()
    if getattr(current, "stamps_netatmo_run_id", False):
        return

    def record_factory(*args, **kwargs):  # type: ignore[no-untyped-def]
        record = current(*args, **kwargs)
        _stamp_run_id(record)
        return record

    record_factory.stamps_netatmo_run_id = True  # type: ignore[attr-defined]
    logging.setLogRecordFactory(record_factory)


def configure_logging(*, run_id: str, level: str) -> logging.LoggerAdapter:
    """
    Configure logging for CLI runs.

    - Creates a root handler only if nothing is configured yet.
    - Adds a run_id to all records so one CLI invocation can be correlated.

    Safe to call repeatedly: later calls only swap the run id and the level,
    the record factory and handler filter are installed once.
    """
    global _run_id
    _run_id = run_id

    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(
            level=_coerce_log_level(level),
            format="%(asctime)s %(levelname)s [%(name)s] [run=%(run_id)s] %(message)s",
        )
    else:
        root.setLevel(_coerce_log_level(level))

    _install_record_factory()
    for h in root.handlers:
        if _RUN_ID_FILTER not in h.filters:
            h.addFilter(_RUN_ID_FILTER)

    return default_logger()


def default_logger() -> logging.LoggerAdapter:
    """Return the package logger wrapped the way every client call expects it."""
    return logging.LoggerAdapter(logging.getLogger(LOGGER_NAME), {})


# Form fields this client sends or receives that must never reach a log.
_SECRET_FIELDS = ("access_token", "refresh_token", "client_secret")

_FIELD_ALTERNATION = "|".join(_SECRET_FIELDS)
# "access_token": "..." in JSON bodies
_JSON_SECRET_RE = re.compile(rf'("(?:{_FIELD_ALTERNATION})"\s*:\s*")[^"]+(")', re.IGNORECASE)
# access_token=... in form-encoded text
_FORM_SECRET_RE = re.compile(rf"((?:{_FIELD_ALTERNATION})=)[^&\s]+", re.IGNORECASE)


def redact_sensitive(value: object) -> str:
    """Redact a secret completely; only its absence stays visible."""
    if value is None:
        return "<none>"
    return "<redacted>" if str(value) else "<empty>"


def sanitize_mapping(d: dict) -> dict:
    """
    Return a shallow copy of request parameters safe for logging.
    """
    return {k: redact_sensitive(v) if str(k).lower() in _SECRET_FIELDS else v for k, v in d.items()}


def sanitize_text(text: Optional[str]) -> Optional[str]:
    """
    Scrub secret fields from free-form text (response bodies, error messages).

    Over-redacts rather than leaks: any `<field>=` or `"<field>": "` match is replaced.
    """
    if not text:
        return text
    scrubbed = _JSON_SECRET_RE.sub(r"\1<redacted>\2", text)
    return _FORM_SECRET_RE.sub(r"\1<redacted>", scrubbed)


__all__ = [
    "configure_logging",
    "default_logger",
    "redact_sensitive",
    "sanitize_mapping",
    "sanitize_text",
]
