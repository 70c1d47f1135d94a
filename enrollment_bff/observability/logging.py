"""Structured logging configuration using structlog.

JSON output for production, console output for development, with
contextvars merging and redaction of personal data.
"""

import re
import sys
from collections.abc import Mapping
from typing import Any, cast

import structlog
from structlog.types import EventDict, WrappedLogger

# Keys whose values are always replaced
SENSITIVE_KEYS: frozenset[str] = frozenset({
    "password",
    "secret",
    "token",
    "access_token",
    "refresh_token",
    "api_key",
    "authorization",
    "credentials",
    "email",
    "phone",
    "ssn",
    "date_of_birth",
    "dob",
    "member_ssn",
    "bank_account",
    "routing_number",
    "card_number",
})

EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
SSN_PATTERN = re.compile(r"\b\d{3}-\d{2}-\d{4}\b")
# Grouped like a phone number (optional country code, 3-3-4 digits) and
# not embedded in a longer token such as a uuid
PHONE_PATTERN = re.compile(
    r"(?<![\w-])(?:\+?\d{1,3}[\s.-]?)?\(?\d{3}\)?[\s.-]?\d{3}[\s.-]?\d{4}(?![\w-])"
)

LEVELS: dict[str, int] = {
    "DEBUG": 10,
    "INFO": 20,
    "WARNING": 30,
    "ERROR": 40,
    "CRITICAL": 50,
}


def is_identifier_key(key: str) -> bool:
    """Check whether a log key names an opaque identifier."""
    return key == "id" or key.endswith("_id")


class PIIRedactor:
    """Processor that strips personal data from log events.

    Values under a sensitive key are dropped wholesale; identifier values
    (enrollment_id, request_id, ...) pass through untouched; every other
    string is scanned for email, SSN and phone patterns.
    """

    def __call__(
        self,
        _logger: WrappedLogger,
        _method_name: str,
        event_dict: EventDict,
    ) -> EventDict:
        return cast(EventDict, self._redact(event_dict))

    def _redact(self, value: Any) -> Any:
        if isinstance(value, Mapping):
            return {key: self._redact_item(str(key).lower(), item) for key, item in value.items()}
        if isinstance(value, list | tuple):
            return [self._redact(item) for item in value]
        if isinstance(value, str):
            value = EMAIL_PATTERN.sub("[EMAIL]", value)
            value = SSN_PATTERN.sub("[SSN]", value)
            return PHONE_PATTERN.sub("[PHONE]", value)
        return value

    def _redact_item(self, key: str, item: Any) -> Any:
        if key in SENSITIVE_KEYS:
            return "[REDACTED]"
        if is_identifier_key(key) and isinstance(item, str):
            return item
        return self._redact(item)


def setup_logging(
    level: str = "INFO",
    format: str = "json",
    redact_pii: bool = True,
) -> None:
    """Configure structured logging.

    Args:
        level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format: "json" for production, "console" for development
        redact_pii: Whether to redact personal data from log events
    """
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if redact_pii:
        processors.append(PIIRedactor())

    if format == "json":
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(LEVELS.get(level.upper(), 20)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a logger instance bound to the given name.

    Args:
        name: Logger name (typically __name__ of the module)
    """
    return cast(structlog.stdlib.BoundLogger, structlog.get_logger(name))
