"""Logging setup: JSON or plain-text lines with credentials masked before formatting."""

import json
import logging
import re
from datetime import datetime, timezone
from typing import Any


REDACTED = "[REDACTED]"

# Supabase sends the key twice (apikey + Authorization); Finnhub takes a header or ?token=.
DEFAULT_REDACT_FIELDS = frozenset(
    {"authorization", "apikey", "x-finnhub-token", "token", "password", "admin_password"}
)

SECRET_PATTERNS = (
    (re.compile(r"Bearer\s+[A-Za-z0-9._\-]+", re.IGNORECASE), f"Bearer {REDACTED}"),
    (re.compile(r"([?&]token=)[^&\s]+", re.IGNORECASE), rf"\g<1>{REDACTED}"),
)

# Attributes every LogRecord carries; anything else arrived through ``extra``.
_STANDARD_RECORD_KEYS = frozenset(logging.makeLogRecord({}).__dict__) | {"message", "asctime"}


def parse_redact_fields(raw_fields: str | None) -> set[str]:
    fields = {item.strip().lower() for item in (raw_fields or "").split(",") if item.strip()}
    return fields or set(DEFAULT_REDACT_FIELDS)


def redact_sensitive_value(value: Any, field_name: str | None, redact_fields: set[str]) -> Any:
    if field_name and field_name.lower() in redact_fields:
        return REDACTED
    if isinstance(value, str):
        for pattern, replacement in SECRET_PATTERNS:
            value = pattern.sub(replacement, value)
        return value
    if isinstance(value, dict):
        return {key: redact_sensitive_value(item, str(key), redact_fields) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return type(value)(redact_sensitive_value(item, None, redact_fields) for item in value)
    return value


def extra_fields(record: logging.LogRecord) -> dict[str, Any]:
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in _STANDARD_RECORD_KEYS and not key.startswith("_")
    }


class RedactionFilter(logging.Filter):
    def __init__(self, redact_fields: set[str]) -> None:
        super().__init__()
        self.redact_fields = redact_fields

    def filter(self, record: logging.LogRecord) -> bool:
        record.msg = redact_sensitive_value(record.msg, None, self.redact_fields)
        if record.args:
            record.args = redact_sensitive_value(record.args, None, self.redact_fields)
        for key, value in extra_fields(record).items():
            setattr(record, key, redact_sensitive_value(value, key, self.redact_fields))
        return True


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **extra_fields(record),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def configure_logging(
    *,
    level: str = "INFO",
    log_format: str = "json",
    include_stack: bool = False,
    redact_fields_raw: str | None = None,
) -> None:
    handler = logging.StreamHandler()
    handler.addFilter(RedactionFilter(parse_redact_fields(redact_fields_raw)))
    if log_format.lower() == "json":
        handler.setFormatter(JsonFormatter())
    else:
        pattern = "%(asctime)s %(levelname)s %(name)s: %(message)s"
        if include_stack:
            pattern += " | %(pathname)s:%(lineno)d"
        handler.setFormatter(logging.Formatter(pattern))

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level.upper())


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
