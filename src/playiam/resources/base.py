"""Request/response contract between the declarative engine and resources.

The engine owns desired configuration and persisted state; resources
translate lifecycle calls into API operations. Every lifecycle method
returns a :class:`ResourceResponse` carrying the state to persist and
all diagnostics produced along the way.
"""

from __future__ import annotations

import functools
import logging
from dataclasses import dataclass, field
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel

from ..diagnostics import Diagnostics
from ..exceptions import PlayIAMError
from ..permissions import PermissionScope, implicit_grants

StateT = TypeVar("StateT", bound=BaseModel)

IMPLICIT_GRANT_SUMMARY = "Granting implicit permission"
MISSING_ATTRIBUTE = "Missing required attribute"
REQUIRES_REPLACEMENT = "Identity attributes require replacement"

logger = logging.getLogger(__name__)


@dataclass
class CreateRequest(Generic[StateT]):
    plan: StateT

    @property
    def prior_state(self) -> Optional[StateT]:
        return None


@dataclass
class ReadRequest(Generic[StateT]):
    state: StateT

    @property
    def prior_state(self) -> Optional[StateT]:
        return self.state


@dataclass
class UpdateRequest(Generic[StateT]):
    plan: StateT
    state: StateT

    @property
    def prior_state(self) -> Optional[StateT]:
        return self.state


@dataclass
class DeleteRequest(Generic[StateT]):
    state: StateT

    @property
    def prior_state(self) -> Optional[StateT]:
        return self.state


@dataclass
class ResourceResponse(Generic[StateT]):
    """State to persist (``None`` = absent) plus diagnostics."""

    state: Optional[StateT] = None
    diagnostics: Diagnostics = field(default_factory=Diagnostics)


def warn_implicit_grants(
    diagnostics: Diagnostics,
    permissions: list[str],
    scope: PermissionScope,
    attribute: str,
) -> None:
    """Add one warning per inherited permission missing from ``permissions``."""
    for grant in implicit_grants(permissions, scope):
        diagnostics.add_warning(
            IMPLICIT_GRANT_SUMMARY,
            f"The permission '{grant.permission}' is inherited from '{grant.granted_by}', "
            "but it is not explicitly granted.",
            attribute=attribute,
        )


def lifecycle_step(summary: str):
    """Decorator for resource lifecycle methods.

    The wrapped coroutine receives ``(self, request, response)`` where
    ``response`` already carries the pre-operation state. Any PlayIAMError
    becomes a single error diagnostic titled ``summary`` and the response
    state is reset to ``request.prior_state``. Cancellation and unexpected
    exceptions propagate.

    Usage:
        @lifecycle_step("Failed to grant access to app")
        async def create(self, request, response):
            ...
    """

    def decorator(method):
        @functools.wraps(method)
        async def wrapper(self, request):
            response = ResourceResponse(state=request.prior_state)
            try:
                await method(self, request, response)
            except PlayIAMError as e:
                logger.error(
                    "%s.%s failed: [%s] %s",
                    type(self).__name__,
                    method.__name__,
                    e.code,
                    e.message,
                    extra={
                        "error_code": e.code,
                        "error_details": e.details,
                    },
                )
                response.diagnostics.add_error(summary, e.message)
                response.state = request.prior_state
            return response

        return wrapper

    return decorator


__all__ = [
    "IMPLICIT_GRANT_SUMMARY",
    "MISSING_ATTRIBUTE",
    "REQUIRES_REPLACEMENT",
    "CreateRequest",
    "DeleteRequest",
    "ReadRequest",
    "ResourceResponse",
    "UpdateRequest",
    "lifecycle_step",
    "warn_implicit_grants",
]
