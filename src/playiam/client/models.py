"""Wire models for the Google Play Developer API users/grants surface.

These are Pydantic models mirroring the REST resources; field aliases
carry the API's camelCase names.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

_WIRE = ConfigDict(populate_by_name=True, extra="ignore")


def _dedupe(values: list[str]) -> list[str]:
    return list(dict.fromkeys(values))


class Grant(BaseModel):
    """App-level access granted to a user.

    ``name`` is ``developers/{d}/users/{email}/grants/{package_name}``.
    """

    model_config = _WIRE

    name: str = ""
    package_name: str = Field(default="", alias="packageName")
    app_level_permissions: list[str] = Field(default_factory=list, alias="appLevelPermissions")
    expiration_time: Optional[str] = Field(default=None, alias="expirationTime")

    @field_validator("app_level_permissions")
    @classmethod
    def dedupe_permissions(cls, v: list[str]) -> list[str]:
        return _dedupe(v)


class User(BaseModel):
    """A user with access to the developer account.

    ``name`` is ``developers/{d}/users/{email}``.
    """

    model_config = _WIRE

    name: str = ""
    email: str = ""
    access_state: Optional[str] = Field(default=None, alias="accessState")
    waiting_for_acceptance: Optional[bool] = Field(default=None, alias="waitingForAcceptance")
    expiration_time: Optional[str] = Field(default=None, alias="expirationTime")
    partial: Optional[bool] = None
    developer_account_permissions: list[str] = Field(
        default_factory=list, alias="developerAccountPermissions"
    )
    grants: list[Grant] = Field(default_factory=list)

    @field_validator("developer_account_permissions")
    @classmethod
    def dedupe_permissions(cls, v: list[str]) -> list[str]:
        return _dedupe(v)


class ListUsersPage(BaseModel):
    """One page of ``users.list``."""

    model_config = _WIRE

    users: list[User] = Field(default_factory=list)
    next_page_token: Optional[str] = Field(default=None, alias="nextPageToken")


__all__ = [
    "Grant",
    "ListUsersPage",
    "User",
]
