"""Unified exception hierarchy for playiam.

All errors inherit from PlayIAMError. This module provides:
- Base exception hierarchy with stable error codes
- ErrorRegistry for mapping codes back to exception types

Resource lifecycle methods let these propagate; ``resources.base.lifecycle_step``
turns them into diagnostics.
"""

from __future__ import annotations

from typing import Any, Callable, TypeVar, cast

__all__ = [
    # Base hierarchy
    "PlayIAMError",
    "ConfigurationError",
    "NameParseError",
    "RemoteAPIError",
    "RemoteTransportError",
    # Registry
    "ErrorRegistry",
    "error_registry",
    "register_error",
]


# ---- Exception Hierarchy ----------------------------------------------------


class PlayIAMError(Exception):
    """Base exception for playiam.

    Attributes:
        code: Stable error code string (e.g. "REMOTE_API_ERROR").
        message: Human-readable error description.
        details: Additional context as keyword arguments.
    """

    code: str = "INTERNAL_ERROR"
    message: str = "An internal error occurred"

    def __init__(self, message: str | None = None, code: str | None = None, **kwargs: Any) -> None:
        self.message = message or self.message
        self.code = code or self.code
        self.details = kwargs
        super().__init__(self.message)


class ConfigurationError(PlayIAMError):
    """Invalid or missing configuration (provider settings or resource input)."""

    code: str = "CONFIGURATION_ERROR"


class NameParseError(PlayIAMError, ValueError):
    """Malformed qualified name returned by the remote API."""

    code: str = "NAME_PARSE_ERROR"


class RemoteAPIError(PlayIAMError):
    """Non-success response from the Google Play Developer API.

    Attributes:
        status_code: HTTP status of the response, ``None`` when no response arrived.
    """

    code: str = "REMOTE_API_ERROR"

    def __init__(
        self,
        message: str | None = None,
        code: str | None = None,
        status_code: int | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, code, **kwargs)
        self.status_code = status_code


class RemoteTransportError(RemoteAPIError):
    """The request never produced a response (DNS, connect, timeout)."""

    code: str = "TRANSPORT_ERROR"


# ---- Error Registry ---------------------------------------------------------

_E = TypeVar("_E", bound=type[PlayIAMError])


class ErrorRegistry:
    """Registry mapping stable error codes to exception types."""

    def __init__(self) -> None:
        self._errors: dict[str, type[PlayIAMError]] = {}

    def register(self, code: str, error_cls: type[PlayIAMError]) -> None:
        self._errors[code] = error_cls

    def get(self, code: str) -> type[PlayIAMError] | None:
        return self._errors.get(code)

    def all(self) -> dict[str, type[PlayIAMError]]:
        return dict(self._errors)


error_registry = ErrorRegistry()


def register_error(code: str) -> Callable[[_E], _E]:
    """Decorator to register a custom error type.

    Usage:
        @register_error("MY_CUSTOM_ERROR")
        class MyCustomError(PlayIAMError):
            code = "MY_CUSTOM_ERROR"
    """

    def decorator(cls: _E) -> _E:
        error_registry.register(code, cls)
        return cls

    return cast(Callable[[_E], _E], decorator)


error_registry.register("INTERNAL_ERROR", PlayIAMError)
error_registry.register("CONFIGURATION_ERROR", ConfigurationError)
error_registry.register("NAME_PARSE_ERROR", NameParseError)
error_registry.register("REMOTE_API_ERROR", RemoteAPIError)
error_registry.register("TRANSPORT_ERROR", RemoteTransportError)


