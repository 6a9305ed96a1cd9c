"""Read-only lookups: ``googleplay_user`` and ``googleplay_users``."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel

from ..client import GooglePlayUsersClient
from .base import MISSING_ATTRIBUTE, ReadRequest, ResourceResponse, lifecycle_step


class UserSummary(BaseModel):
    email: str
    name: Optional[str] = None


class UsersList(BaseModel):
    users: list[UserSummary] = []


class UserDataSource:
    """Look up one user by email."""

    type_name = "googleplay_user"

    def __init__(self, client: GooglePlayUsersClient) -> None:
        self.client = client

    @lifecycle_step("Failed to fetch users")
    async def read(self, request: ReadRequest[UserSummary], response: ResourceResponse[UserSummary]) -> None:
        config = request.state
        if not config.email:
            response.diagnostics.add_error(
                MISSING_ATTRIBUTE,
                "Attribute 'email' is required to fetch user information.",
                attribute="email",
            )
            return

        for user in await self.client.list_users():
            if user.email == config.email:
                response.state = UserSummary(email=user.email, name=user.name)
                return


class UsersDataSource:
    """Every user of the developer account."""

    type_name = "googleplay_users"

    def __init__(self, client: GooglePlayUsersClient) -> None:
        self.client = client

    @lifecycle_step("Failed to fetch users")
    async def read(self, request: ReadRequest[UsersList], response: ResourceResponse[UsersList]) -> None:
        users = await self.client.list_users()
        response.state = UsersList(users=[UserSummary(email=u.email, name=u.name) for u in users])


__all__ = [
    "UserDataSource",
    "UserSummary",
    "UsersDataSource",
    "UsersList",
]
