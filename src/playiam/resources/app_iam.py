"""``googleplay_app_iam``: app-level access for one user on one app.

Identity is ``(developer_id, user_id, app_id)``; the API names it
``developers/{d}/users/{user_id}/grants/{app_id}``. The server is the
authority on identity, so every successful call re-derives ``user_id``
and ``app_id`` from the returned grant name.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ..client import GooglePlayUsersClient, Grant
from ..logging import get_resource_logger
from ..names import parse_grant_name
from ..permissions import PermissionScope, expand_permissions, permission_sets_equal
from .base import (
    MISSING_ATTRIBUTE,
    REQUIRES_REPLACEMENT,
    CreateRequest,
    DeleteRequest,
    ReadRequest,
    ResourceResponse,
    UpdateRequest,
    lifecycle_step,
    warn_implicit_grants,
)

TYPE_NAME = "googleplay_app_iam"

logger = get_resource_logger(__name__, resource=TYPE_NAME)


class AppIAMModel(BaseModel):
    """Desired/persisted record for an app grant.

    ``expanded_permissions`` and ``developer_id`` are computed; whatever
    the caller puts there is overwritten.
    """

    user_id: str = Field(description="Email the user signs in to Google Play with")
    app_id: str = Field(description="Package name of the app to grant access to")
    permissions: list[str] = Field(default_factory=list)
    expanded_permissions: list[str] = Field(default_factory=list)
    developer_id: Optional[str] = None

    @field_validator("permissions", "expanded_permissions")
    @classmethod
    def dedupe(cls, v: list[str]) -> list[str]:
        return list(dict.fromkeys(v))


def expand_app_permissions(plan: AppIAMModel) -> AppIAMModel:
    """Plan-time computation of ``expanded_permissions`` from ``permissions``."""
    return plan.model_copy(
        update={"expanded_permissions": list(expand_permissions(plan.permissions, PermissionScope.APP))}
    )


class AppIAMResource:
    """Reconciles ``googleplay_app_iam`` records against the API."""

    type_name = TYPE_NAME

    def __init__(self, client: GooglePlayUsersClient) -> None:
        self.client = client

    # ── Plan phase ───────────────────────────────────────

    def validate_config(self, config: AppIAMModel) -> ResourceResponse[AppIAMModel]:
        response: ResourceResponse[AppIAMModel] = ResourceResponse()

        # Each grant must contain a valid permission
        if not config.permissions:
            response.diagnostics.add_error(
                "Invalid permissions configuration",
                "permissions must contain at least one permission.",
                attribute="permissions",
            )

        warn_implicit_grants(response.diagnostics, config.permissions, PermissionScope.APP, "permissions")
        return response

    def modify_plan(self, plan: AppIAMModel) -> ResourceResponse[AppIAMModel]:
        return ResourceResponse(state=expand_app_permissions(plan))

    # ── Apply phase ──────────────────────────────────────

    def _record_from_grant(self, grant: Grant, permissions: list[str]) -> AppIAMModel:
        # developers/DEVELOPER_ID/users/EMAIL/grants/APP_ID
        name = parse_grant_name(grant.name)
        return AppIAMModel(
            developer_id=name.developer_id,
            user_id=name.email,
            app_id=name.app_id,
            permissions=permissions,
            expanded_permissions=list(expand_permissions(permissions, PermissionScope.APP)),
        )

    @lifecycle_step("Failed to grant access to app")
    async def create(self, request: CreateRequest[AppIAMModel], response: ResourceResponse[AppIAMModel]) -> None:
        plan = request.plan
        response.diagnostics.extend(self.validate_config(plan).diagnostics)
        if response.diagnostics.has_error():
            return

        logger.debug("granting %s on %s", plan.user_id, plan.app_id, operation="create")
        grant = await self.client.grant_access(plan.user_id, plan.app_id, plan.permissions)

        response.state = self._record_from_grant(grant, grant.app_level_permissions)
        logger.debug("created grant %s", grant.name, operation="create")

    @lifecycle_step("Failed to fetch users")
    async def read(self, request: ReadRequest[AppIAMModel], response: ResourceResponse[AppIAMModel]) -> None:
        state = request.state
        if not state.user_id:
            response.diagnostics.add_error(
                MISSING_ATTRIBUTE,
                "Attribute 'user_id' is required to fetch user information.",
                attribute="user_id",
            )
            return
        if not state.app_id:
            response.diagnostics.add_error(
                MISSING_ATTRIBUTE,
                "Attribute 'app_id' is required to fetch IAM information.",
                attribute="app_id",
            )
            return

        users = await self.client.list_users()
        for user in users:
            if user.email != state.user_id:
                continue
            for grant in user.grants:
                if parse_grant_name(grant.name).app_id == state.app_id:
                    response.state = self._record_from_grant(grant, grant.app_level_permissions)
                    return
            break

        # Not found: keep state as-is; drift is not reported as removal.
        logger.debug("grant %s/%s not found, state unchanged", state.user_id, state.app_id, operation="read")

    @lifecycle_step("Failed to update IAM permissions")
    async def update(self, request: UpdateRequest[AppIAMModel], response: ResourceResponse[AppIAMModel]) -> None:
        plan, state = request.plan, request.state
        if (plan.user_id, plan.app_id) != (state.user_id, state.app_id):
            response.diagnostics.add_error(
                REQUIRES_REPLACEMENT,
                f"Grant {state.user_id}/{state.app_id} cannot be moved to {plan.user_id}/{plan.app_id}; "
                "delete it and create a new one.",
                attribute="user_id" if plan.user_id != state.user_id else "app_id",
            )
            return

        response.diagnostics.extend(self.validate_config(plan).diagnostics)
        if response.diagnostics.has_error():
            return

        if permission_sets_equal(plan.permissions, state.permissions):
            logger.debug("permissions for %s on %s unchanged", plan.user_id, plan.app_id, operation="update")
            return

        logger.debug("modifying %s on %s", plan.user_id, plan.app_id, operation="update")
        # Full explicit set, not a delta.
        grant = await self.client.modify_access(plan.user_id, plan.app_id, plan.permissions)

        response.state = self._record_from_grant(grant, grant.app_level_permissions)

    @lifecycle_step("Unable to delete permission")
    async def delete(self, request: DeleteRequest[AppIAMModel], response: ResourceResponse[AppIAMModel]) -> None:
        state = request.state
        logger.debug("revoking %s on %s", state.user_id, state.app_id, operation="delete")
        await self.client.revoke_access(state.user_id, state.app_id)
        response.state = None


__all__ = [
    "TYPE_NAME",
    "AppIAMModel",
    "AppIAMResource",
    "expand_app_permissions",
]
