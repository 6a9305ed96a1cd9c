"""``googleplay_user``: a user of the developer account.

Identity is ``(developer_id, email)``; ``name`` is the server-issued
``developers/{d}/users/{email}`` and is never settable.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ..client import GooglePlayUsersClient, User
from ..logging import get_resource_logger
from ..names import parse_user_name
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

TYPE_NAME = "googleplay_user"

logger = get_resource_logger(__name__, resource=TYPE_NAME)


class UserModel(BaseModel):
    """Desired/persisted record for a user.

    ``global_permissions`` may be empty: a user can hold app grants only.
    """

    email: str = Field(description="The email address for the user")
    global_permissions: list[str] = Field(default_factory=list)
    expanded_global_permissions: list[str] = Field(default_factory=list)
    name: Optional[str] = None
    developer_id: Optional[str] = None

    @field_validator("global_permissions", "expanded_global_permissions")
    @classmethod
    def dedupe(cls, v: list[str]) -> list[str]:
        return list(dict.fromkeys(v))


def expand_user_permissions(plan: UserModel) -> UserModel:
    """Plan-time computation of ``expanded_global_permissions``."""
    return plan.model_copy(
        update={
            "expanded_global_permissions": list(
                expand_permissions(plan.global_permissions, PermissionScope.DEVELOPER)
            )
        }
    )


class UserResource:
    """Reconciles ``googleplay_user`` records against the API."""

    type_name = TYPE_NAME

    def __init__(self, client: GooglePlayUsersClient) -> None:
        self.client = client

    def validate_config(self, config: UserModel) -> ResourceResponse[UserModel]:
        response: ResourceResponse[UserModel] = ResourceResponse()
        warn_implicit_grants(
            response.diagnostics,
            config.global_permissions,
            PermissionScope.DEVELOPER,
            "global_permissions",
        )
        return response

    def modify_plan(self, plan: UserModel) -> ResourceResponse[UserModel]:
        return ResourceResponse(state=expand_user_permissions(plan))

    @staticmethod
    def _record_from_user(user: User) -> UserModel:
        name = parse_user_name(user.name)
        permissions = user.developer_account_permissions
        return UserModel(
            name=user.name,
            developer_id=name.developer_id,
            email=name.email,
            global_permissions=permissions,
            expanded_global_permissions=list(expand_permissions(permissions, PermissionScope.DEVELOPER)),
        )

    @lifecycle_step("Failed to create user")
    async def create(self, request: CreateRequest[UserModel], response: ResourceResponse[UserModel]) -> None:
        plan = request.plan
        response.diagnostics.extend(self.validate_config(plan).diagnostics)
        if response.diagnostics.has_error():
            return

        logger.debug("creating user %s", plan.email, operation="create")
        user = await self.client.create_user(plan.email, plan.global_permissions)
        response.state = self._record_from_user(user)

    @lifecycle_step("Failed to fetch users")
    async def read(self, request: ReadRequest[UserModel], response: ResourceResponse[UserModel]) -> None:
        state = request.state
        if not state.email:
            response.diagnostics.add_error(
                MISSING_ATTRIBUTE,
                "Attribute 'email' is required to fetch user information.",
                attribute="email",
            )
            return

        for user in await self.client.list_users():
            if user.email == state.email:
                response.state = self._record_from_user(user)
                return

        logger.debug("user %s not found, state unchanged", state.email, operation="read")

    @lifecycle_step("Failed to update user")
    async def update(self, request: UpdateRequest[UserModel], response: ResourceResponse[UserModel]) -> None:
        plan, state = request.plan, request.state
        if plan.email != state.email:
            response.diagnostics.add_error(
                REQUIRES_REPLACEMENT,
                f"User {state.email} cannot be renamed to {plan.email}; delete it and create a new one.",
                attribute="email",
            )
            return

        response.diagnostics.extend(self.validate_config(plan).diagnostics)
        if response.diagnostics.has_error():
            return

        if permission_sets_equal(plan.global_permissions, state.global_permissions):
            logger.debug("permissions for user %s unchanged", plan.email, operation="update")
            return

        logger.debug("updating user %s", plan.email, operation="update")
        user = await self.client.update_user(plan.email, plan.global_permissions)
        response.state = self._record_from_user(user)

    @lifecycle_step("Unable to delete user")
    async def delete(self, request: DeleteRequest[UserModel], response: ResourceResponse[UserModel]) -> None:
        logger.debug("deleting user %s", request.state.email, operation="delete")
        await self.client.delete_user(request.state.email)
        response.state = None


__all__ = [
    "TYPE_NAME",
    "UserModel",
    "UserResource",
    "expand_user_permissions",
]
