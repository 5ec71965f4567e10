"""
Logging setup.

Logs go to stdout, either as JSON lines (``LOG_JSON=true``) or as plain text.
Values under keys that look like credentials are masked before formatting.

Usage:
    from support_desk.core.logging import get_logger

    logger = get_logger(__name__)
    logger.info("Ticket created", extra={"ticket_id": str(ticket.id)})
"""

import logging
import sys
from typing import Any

from pythonjsonlogger.json import JsonFormatter

REDACTED = "***REDACTED***"
SENSITIVE_KEY_PARTS = ("password", "token", "secret")


def _is_sensitive(key: str) -> bool:
    lowered = key.lower()
    return any(part in lowered for part in SENSITIVE_KEY_PARTS)


class SupportDeskJsonFormatter(JsonFormatter):
    def add_fields(
        self,
        log_record: dict[str, Any],
        record: logging.LogRecord,
        message_dict: dict[str, Any],
    ) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record.setdefault("level", record.levelname)
        log_record.setdefault("logger", record.name)
        for key in list(log_record):
            if _is_sensitive(key):
                log_record[key] = REDACTED


class RedactingFilter(logging.Filter):
    """Masks sensitive ``extra`` attributes for the plain-text formatter."""

    def filter(self, record: logging.LogRecord) -> bool:
        for key in list(vars(record)):
            if _is_sensitive(key):
                setattr(record, key, REDACTED)
        return True


def setup_logging(level: str = "INFO", json_logs: bool = True) -> None:
    root_logger = logging.getLogger()
    root_logger.setLevel(level.upper())
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    if json_logs:
        handler.setFormatter(
            SupportDeskJsonFormatter(
                fmt="%(asctime)s %(name)s %(levelname)s %(message)s",
                datefmt="%Y-%m-%dT%H:%M:%S",
            )
        )
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)-8s %(name)s: %(message)s")
        )
    handler.addFilter(RedactingFilter())
    root_logger.addHandler(handler)

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("psycopg.pool").setLevel(logging.WARNING)
    logging.getLogger("passlib").setLevel(logging.ERROR)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
