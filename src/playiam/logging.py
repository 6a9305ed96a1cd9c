"""Logging for playiam.

Everything that may carry credentials (request bodies, error payloads,
record extras) goes through :func:`safe_log_value` before it is emitted.
Resource modules log through :func:`get_resource_logger` so every record
names the resource type and lifecycle operation it belongs to.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Optional

from .config import ProviderConfig


# OAuth bearer values, ``ya29.`` access tokens, PEM private keys and
# ``secret=...``-style assignments.
SECRET_PATTERNS = [
    r'(?i)(?:password|passwd|pwd|secret|token|key|api[_-]?key|auth[_-]?token|access[_-]?token)\s*[:=]\s*["\']?([^"\'\s]+)',
    r'(?i)(?:bearer|basic)\s+([a-zA-Z0-9+/=._\-]+)',
    r'ya29\.[0-9A-Za-z_.\-]+',
    r'(?i)-----BEGIN\s+(?:RSA\s+)?(?:PRIVATE\s+)?KEY-----.*?-----END\s+(?:RSA\s+)?(?:PRIVATE\s+)?KEY-----',
]

_SECRET_RES = [re.compile(p, re.IGNORECASE | re.DOTALL) for p in SECRET_PATTERNS]

# LogRecord attributes that are never copied into the output as extras.
_STANDARD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {
    "message",
    "asctime",
    "resource",
    "operation",
}


def safe_preview(value: Any, limit: int = 240) -> str:
    """Render ``value`` on one line, at most ``limit`` characters long."""
    if value is None:
        return ""
    if isinstance(value, (dict, list, tuple)):
        try:
            text = json.dumps(value, default=str, ensure_ascii=False)
        except (TypeError, ValueError):
            text = str(value)
    else:
        text = value if isinstance(value, str) else str(value)

    text = " ".join(text.split())
    return text if len(text) <= limit else text[: limit - 1] + "…"


def redact_secrets(text: str, replacement: str = "[REDACTED]") -> str:
    """Replace every credential-looking substring of ``text``."""
    if not isinstance(text, str):
        return text
    for pattern in _SECRET_RES:
        text = pattern.sub(replacement, text)
    return text


def safe_log_value(value: Any, limit: int = 240, redact: bool = True) -> str:
    """Preview plus optional redaction; use for anything that came off the wire."""
    preview = safe_preview(value, limit=limit)
    return redact_secrets(preview) if redact else preview


class PlayIAMFormatter(logging.Formatter):
    """One JSON object (or one plain line) per record.

    ``resource`` and ``operation`` become top-level fields; any other
    extra is previewed and redacted.
    """

    def __init__(self, json_format: bool = True, redact_secrets: bool = True, *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self.json_format = json_format
        self.redact_secrets = redact_secrets

    def _fields(self, record: logging.LogRecord) -> dict[str, Any]:
        message = record.getMessage()
        fields: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": redact_secrets(message) if self.redact_secrets else message,
        }
        for key in ("resource", "operation"):
            value = getattr(record, key, None)
            if value:
                fields[key] = value
        if record.exc_info:
            fields["exception"] = self.formatException(record.exc_info)
        fields.update(
            (key, safe_log_value(value, redact=self.redact_secrets))
            for key, value in vars(record).items()
            if key not in _STANDARD_ATTRS
        )
        return fields

    def format(self, record: logging.LogRecord) -> str:
        fields = self._fields(record)
        if self.json_format:
            return json.dumps(fields, default=str, ensure_ascii=False)

        context = "".join(
            f" {key}={fields[key]}" for key in ("resource", "operation") if key in fields
        )
        return f"[{fields['timestamp']}] {fields['level']} {fields['logger']}{context} : {fields['message']}"


class ResourceLoggerAdapter(logging.LoggerAdapter):
    """Tags records with a resource type and, per call, an operation.

    ``resource=`` and ``operation=`` may be passed to any logging call and
    override the adapter defaults.
    """

    def __init__(
        self,
        logger: logging.Logger,
        resource: Optional[str] = None,
        operation: Optional[str] = None,
    ):
        super().__init__(logger, {})
        self.resource = resource
        self.operation = operation

    def process(self, msg: str, kwargs: dict[str, Any]) -> tuple[str, dict[str, Any]]:
        context = {
            "resource": kwargs.pop("resource", self.resource),
            "operation": kwargs.pop("operation", self.operation),
        }
        extra = dict(kwargs.get("extra") or {})
        extra.update((k, v) for k, v in context.items() if v)
        kwargs["extra"] = extra
        return msg, kwargs


def setup_logging(
    config: ProviderConfig,
    json_format: Optional[bool] = None,
    redact_secrets: bool = True,
) -> None:
    """Point the root logger at a single stderr handler configured from ``config``.

    ``json_format`` overrides ``config.log_json`` when given.
    """
    level = getattr(logging, config.log_level.value, logging.INFO)

    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(
        PlayIAMFormatter(
            json_format=config.log_json if json_format is None else json_format,
            redact_secrets=redact_secrets,
        )
    )

    root = logging.getLogger()
    root.setLevel(level)
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)

    # httpx logs full request lines at INFO
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))


def get_resource_logger(
    name: str,
    resource: Optional[str] = None,
    operation: Optional[str] = None,
) -> ResourceLoggerAdapter:
    """Logger adapter for a resource module, e.g. ``get_resource_logger(__name__, resource="googleplay_user")``."""
    return ResourceLoggerAdapter(logging.getLogger(name), resource=resource, operation=operation)


__all__ = [
    "PlayIAMFormatter",
    "ResourceLoggerAdapter",
    "get_resource_logger",
    "redact_secrets",
    "safe_log_value",
    "safe_preview",
    "setup_logging",
]
