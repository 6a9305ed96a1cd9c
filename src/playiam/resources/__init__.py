"""Declarative resources and data sources for the Google Play Console."""

from .app_iam import AppIAMModel, AppIAMResource, expand_app_permissions
from .base import (
    CreateRequest,
    DeleteRequest,
    ReadRequest,
    ResourceResponse,
    UpdateRequest,
)
from .datasources import UserDataSource, UsersDataSource, UserSummary, UsersList
from .user import UserModel, UserResource, expand_user_permissions

__all__ = [
    "AppIAMModel",
    "AppIAMResource",
    "CreateRequest",
    "DeleteRequest",
    "ReadRequest",
    "ResourceResponse",
    "UpdateRequest",
    "UserDataSource",
    "UserModel",
    "UserResource",
    "UserSummary",
    "UsersDataSource",
    "UsersList",
    "expand_app_permissions",
    "expand_user_permissions",
]
