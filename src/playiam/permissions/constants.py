"""Permission constants and scopes for the Google Play Console.

Provides:
- ``PermissionScope`` — which universe a permission token belongs to.
- ``AppPermissions`` — app-level grant tokens (``AppLevelPermission``).
- ``DeveloperPermissions`` — account-wide tokens (``DeveloperLevelPermission``).

Tokens are plain strings. Nothing here validates input against these
lists: the API is the authority on which tokens exist.
"""

from __future__ import annotations

from enum import Enum


class PermissionScope(str, Enum):
    """Universe a permission token is drawn from."""

    APP = "app"
    DEVELOPER = "developer"


class AppPermissions:
    """Permissions that apply to a single app.

    See https://developers.google.com/android-publisher/api-ref/rest/v3/grants#applevelpermission
    """

    CAN_ACCESS_APP = "CAN_ACCESS_APP"  # Deprecated by the API, still accepted
    CAN_VIEW_FINANCIAL_DATA = "CAN_VIEW_FINANCIAL_DATA"
    CAN_MANAGE_PERMISSIONS = "CAN_MANAGE_PERMISSIONS"
    CAN_REPLY_TO_REVIEWS = "CAN_REPLY_TO_REVIEWS"
    CAN_MANAGE_PUBLIC_APKS = "CAN_MANAGE_PUBLIC_APKS"
    CAN_MANAGE_TRACK_APKS = "CAN_MANAGE_TRACK_APKS"
    CAN_MANAGE_TRACK_USERS = "CAN_MANAGE_TRACK_USERS"
    CAN_MANAGE_PUBLIC_LISTING = "CAN_MANAGE_PUBLIC_LISTING"
    CAN_MANAGE_DRAFT_APPS = "CAN_MANAGE_DRAFT_APPS"
    CAN_MANAGE_ORDERS = "CAN_MANAGE_ORDERS"
    CAN_MANAGE_APP_CONTENT = "CAN_MANAGE_APP_CONTENT"
    CAN_VIEW_NON_FINANCIAL_DATA = "CAN_VIEW_NON_FINANCIAL_DATA"
    CAN_VIEW_APP_QUALITY = "CAN_VIEW_APP_QUALITY"
    CAN_MANAGE_DEEPLINKS = "CAN_MANAGE_DEEPLINKS"


class DeveloperPermissions:
    """Permissions that apply across the whole developer account.

    See https://developers.google.com/android-publisher/api-ref/rest/v3/users#DeveloperLevelPermission
    """

    CAN_SEE_ALL_APPS = "CAN_SEE_ALL_APPS"  # Deprecated by the API, still accepted
    CAN_VIEW_FINANCIAL_DATA_GLOBAL = "CAN_VIEW_FINANCIAL_DATA_GLOBAL"
    CAN_MANAGE_PERMISSIONS_GLOBAL = "CAN_MANAGE_PERMISSIONS_GLOBAL"
    CAN_EDIT_GAMES_GLOBAL = "CAN_EDIT_GAMES_GLOBAL"
    CAN_PUBLISH_GAMES_GLOBAL = "CAN_PUBLISH_GAMES_GLOBAL"
    CAN_REPLY_TO_REVIEWS_GLOBAL = "CAN_REPLY_TO_REVIEWS_GLOBAL"
    CAN_MANAGE_PUBLIC_APKS_GLOBAL = "CAN_MANAGE_PUBLIC_APKS_GLOBAL"
    CAN_MANAGE_TRACK_APKS_GLOBAL = "CAN_MANAGE_TRACK_APKS_GLOBAL"
    CAN_MANAGE_TRACK_USERS_GLOBAL = "CAN_MANAGE_TRACK_USERS_GLOBAL"
    CAN_MANAGE_PUBLIC_LISTING_GLOBAL = "CAN_MANAGE_PUBLIC_LISTING_GLOBAL"
    CAN_MANAGE_DRAFT_APPS_GLOBAL = "CAN_MANAGE_DRAFT_APPS_GLOBAL"
    CAN_CREATE_MANAGED_PLAY_APPS_GLOBAL = "CAN_CREATE_MANAGED_PLAY_APPS_GLOBAL"
    CAN_CHANGE_MANAGED_PLAY_SETTING_GLOBAL = "CAN_CHANGE_MANAGED_PLAY_SETTING_GLOBAL"
    CAN_MANAGE_ORDERS_GLOBAL = "CAN_MANAGE_ORDERS_GLOBAL"
    CAN_MANAGE_APP_CONTENT_GLOBAL = "CAN_MANAGE_APP_CONTENT_GLOBAL"
    CAN_VIEW_NON_FINANCIAL_DATA_GLOBAL = "CAN_VIEW_NON_FINANCIAL_DATA_GLOBAL"
    CAN_VIEW_APP_QUALITY_GLOBAL = "CAN_VIEW_APP_QUALITY_GLOBAL"
    CAN_MANAGE_DEEPLINKS_GLOBAL = "CAN_MANAGE_DEEPLINKS_GLOBAL"


__all__ = [
    "AppPermissions",
    "DeveloperPermissions",
    "PermissionScope",
]
