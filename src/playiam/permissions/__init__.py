"""Google Play Console permission registry.

Defines:
- AppPermissions / DeveloperPermissions: known permission tokens
- PermissionScope: app-level vs developer-level universe
- PERMISSION_CATALOG: parent → children relationships per scope
- expand_permissions(): resolve inherited permissions
- implicit_grants(): inherited permissions missing from an explicit grant
"""

from .constants import AppPermissions, DeveloperPermissions, PermissionScope
from .inheritance import (
    APP_PERMISSION_INHERITANCE,
    DEVELOPER_PERMISSION_INHERITANCE,
    PERMISSION_CATALOG,
    ImplicationGraph,
    ImplicitGrant,
    PermissionCatalog,
    expand_permissions,
    implicit_grants,
    permission_sets_equal,
)

__all__ = [
    "APP_PERMISSION_INHERITANCE",
    "DEVELOPER_PERMISSION_INHERITANCE",
    "PERMISSION_CATALOG",
    "AppPermissions",
    "DeveloperPermissions",
    "ImplicationGraph",
    "ImplicitGrant",
    "PermissionCatalog",
    "PermissionScope",
    "expand_permissions",
    "implicit_grants",
    "permission_sets_equal",
]
