"""Permission inheritance and expansion.

Provides:
- ``APP_PERMISSION_INHERITANCE`` / ``DEVELOPER_PERMISSION_INHERITANCE`` — parent → children edges.
- ``ImplicationGraph`` / ``PermissionCatalog`` — read-only graphs, one per scope.
- ``expand_permissions()`` — transitive closure of an explicit grant.
- ``implicit_grants()`` — closure members the caller did not ask for.
"""

from __future__ import annotations

from collections import deque
from types import MappingProxyType
from typing import Iterable, Mapping, NamedTuple

from .constants import AppPermissions, DeveloperPermissions, PermissionScope

# ── Permission Inheritance ──────────────────────────────
# Parent permission implies all children.

APP_PERMISSION_INHERITANCE: dict[str, tuple[str, ...]] = {
    AppPermissions.CAN_VIEW_NON_FINANCIAL_DATA: (AppPermissions.CAN_VIEW_APP_QUALITY,),
    AppPermissions.CAN_VIEW_FINANCIAL_DATA: (AppPermissions.CAN_VIEW_NON_FINANCIAL_DATA,),
    AppPermissions.CAN_REPLY_TO_REVIEWS: (AppPermissions.CAN_VIEW_NON_FINANCIAL_DATA,),
    AppPermissions.CAN_MANAGE_PUBLIC_APKS: (AppPermissions.CAN_MANAGE_TRACK_APKS,),
    AppPermissions.CAN_MANAGE_TRACK_APKS: (AppPermissions.CAN_VIEW_NON_FINANCIAL_DATA,),
    AppPermissions.CAN_MANAGE_TRACK_USERS: (AppPermissions.CAN_VIEW_NON_FINANCIAL_DATA,),
    AppPermissions.CAN_MANAGE_PUBLIC_LISTING: (AppPermissions.CAN_VIEW_NON_FINANCIAL_DATA,),
    AppPermissions.CAN_MANAGE_DRAFT_APPS: (AppPermissions.CAN_VIEW_NON_FINANCIAL_DATA,),
    AppPermissions.CAN_MANAGE_APP_CONTENT: (AppPermissions.CAN_VIEW_NON_FINANCIAL_DATA,),
    AppPermissions.CAN_MANAGE_DEEPLINKS: (AppPermissions.CAN_VIEW_NON_FINANCIAL_DATA,),
    AppPermissions.CAN_MANAGE_PERMISSIONS: (AppPermissions.CAN_VIEW_NON_FINANCIAL_DATA,),
    AppPermissions.CAN_MANAGE_ORDERS: (AppPermissions.CAN_VIEW_FINANCIAL_DATA,),
}

DEVELOPER_PERMISSION_INHERITANCE: dict[str, tuple[str, ...]] = {
    DeveloperPermissions.CAN_VIEW_NON_FINANCIAL_DATA_GLOBAL: (
        DeveloperPermissions.CAN_VIEW_APP_QUALITY_GLOBAL,
    ),
    DeveloperPermissions.CAN_VIEW_FINANCIAL_DATA_GLOBAL: (
        DeveloperPermissions.CAN_VIEW_NON_FINANCIAL_DATA_GLOBAL,
    ),
    DeveloperPermissions.CAN_REPLY_TO_REVIEWS_GLOBAL: (
        DeveloperPermissions.CAN_VIEW_NON_FINANCIAL_DATA_GLOBAL,
    ),
    DeveloperPermissions.CAN_MANAGE_PUBLIC_APKS_GLOBAL: (
        DeveloperPermissions.CAN_MANAGE_TRACK_APKS_GLOBAL,
    ),
    DeveloperPermissions.CAN_MANAGE_TRACK_APKS_GLOBAL: (
        DeveloperPermissions.CAN_VIEW_NON_FINANCIAL_DATA_GLOBAL,
    ),
    DeveloperPermissions.CAN_MANAGE_TRACK_USERS_GLOBAL: (
        DeveloperPermissions.CAN_VIEW_NON_FINANCIAL_DATA_GLOBAL,
    ),
    DeveloperPermissions.CAN_MANAGE_PUBLIC_LISTING_GLOBAL: (
        DeveloperPermissions.CAN_VIEW_NON_FINANCIAL_DATA_GLOBAL,
    ),
    DeveloperPermissions.CAN_MANAGE_DRAFT_APPS_GLOBAL: (
        DeveloperPermissions.CAN_VIEW_NON_FINANCIAL_DATA_GLOBAL,
    ),
    DeveloperPermissions.CAN_MANAGE_APP_CONTENT_GLOBAL: (
        DeveloperPermissions.CAN_VIEW_NON_FINANCIAL_DATA_GLOBAL,
    ),
    DeveloperPermissions.CAN_MANAGE_DEEPLINKS_GLOBAL: (
        DeveloperPermissions.CAN_VIEW_NON_FINANCIAL_DATA_GLOBAL,
    ),
    DeveloperPermissions.CAN_MANAGE_PERMISSIONS_GLOBAL: (
        DeveloperPermissions.CAN_VIEW_NON_FINANCIAL_DATA_GLOBAL,
    ),
    DeveloperPermissions.CAN_MANAGE_ORDERS_GLOBAL: (
        DeveloperPermissions.CAN_VIEW_FINANCIAL_DATA_GLOBAL,
    ),
    DeveloperPermissions.CAN_PUBLISH_GAMES_GLOBAL: (DeveloperPermissions.CAN_EDIT_GAMES_GLOBAL,),
}


class ImplicationGraph:
    """Read-only mapping of permission → directly implied permissions.

    The graph may contain cycles; expansion tracks visited permissions
    instead of assuming a DAG.
    """

    __slots__ = ("scope", "_edges")

    def __init__(self, scope: PermissionScope, edges: Mapping[str, Iterable[str]]) -> None:
        self.scope = scope
        self._edges = MappingProxyType({parent: tuple(children) for parent, children in edges.items()})

    def directly_implied(self, permission: str) -> tuple[str, ...]:
        """Direct children of ``permission``; empty for leaves and unknown tokens."""
        return self._edges.get(permission, ())

    def __contains__(self, permission: object) -> bool:
        return permission in self._edges

    def __repr__(self) -> str:
        return f"ImplicationGraph(scope={self.scope.value!r}, edges={len(self._edges)})"


class PermissionCatalog:
    """One implication graph per permission scope."""

    __slots__ = ("_graphs",)

    def __init__(self, graphs: Iterable[ImplicationGraph]) -> None:
        self._graphs = MappingProxyType({graph.scope: graph for graph in graphs})

    def graph(self, scope: PermissionScope) -> ImplicationGraph:
        try:
            return self._graphs[PermissionScope(scope)]
        except KeyError:
            # Scope with no recorded edges behaves like an empty graph.
            return ImplicationGraph(PermissionScope(scope), {})

    def directly_implied(self, scope: PermissionScope, permission: str) -> tuple[str, ...]:
        return self.graph(scope).directly_implied(permission)


PERMISSION_CATALOG = PermissionCatalog(
    (
        ImplicationGraph(PermissionScope.APP, APP_PERMISSION_INHERITANCE),
        ImplicationGraph(PermissionScope.DEVELOPER, DEVELOPER_PERMISSION_INHERITANCE),
    )
)


class ImplicitGrant(NamedTuple):
    """A permission conferred by inheritance rather than asked for."""

    permission: str
    granted_by: str


def _closure(
    permissions: Iterable[str],
    scope: PermissionScope,
    catalog: PermissionCatalog,
) -> dict[str, str | None]:
    """Breadth-first closure.

    Returns permission → explicit root that first reached it (``None`` for
    explicit permissions). Dict order is first-seen order.
    """
    graph = catalog.graph(scope)
    origin: dict[str, str | None] = {}
    for perm in permissions:
        origin.setdefault(perm, None)

    queue = deque(origin)
    while queue:
        perm = queue.popleft()
        root = origin[perm] or perm
        for child in graph.directly_implied(perm):
            if child not in origin:
                origin[child] = root
                queue.append(child)

    return origin


def expand_permissions(
    permissions: Iterable[str],
    scope: PermissionScope = PermissionScope.APP,
    catalog: PermissionCatalog = PERMISSION_CATALOG,
) -> tuple[str, ...]:
    """Expand permissions by resolving inheritance.

    The result is the smallest superset of ``permissions`` closed under
    the scope's implication graph. Order is deterministic: explicit
    permissions in input order (duplicates dropped), then implied
    permissions in discovery order.

    Args:
        permissions: Explicit permission strings.
        scope: Which implication graph to follow.
        catalog: Graph source, defaults to the Google Play catalog.

    Returns:
        Deduplicated tuple with all implied permissions.

    Example::

        >>> expand_permissions(("CAN_REPLY_TO_REVIEWS",))
        ('CAN_REPLY_TO_REVIEWS', 'CAN_VIEW_NON_FINANCIAL_DATA', 'CAN_VIEW_APP_QUALITY')
    """
    return tuple(_closure(permissions, scope, catalog))


def implicit_grants(
    permissions: Iterable[str],
    scope: PermissionScope = PermissionScope.APP,
    catalog: PermissionCatalog = PERMISSION_CATALOG,
) -> list[ImplicitGrant]:
    """List every closure member absent from ``permissions``.

    Each entry names the explicit permission whose expansion reached it.

    Example::

        >>> implicit_grants(("CAN_REPLY_TO_REVIEWS",))
        [ImplicitGrant(permission='CAN_VIEW_NON_FINANCIAL_DATA', granted_by='CAN_REPLY_TO_REVIEWS'),
         ImplicitGrant(permission='CAN_VIEW_APP_QUALITY', granted_by='CAN_REPLY_TO_REVIEWS')]
    """
    return [
        ImplicitGrant(perm, root)
        for perm, root in _closure(permissions, scope, catalog).items()
        if root is not None
    ]


def permission_sets_equal(left: Iterable[str], right: Iterable[str]) -> bool:
    """Order-insensitive equality of two permission collections."""
    return set(left) == set(right)


__all__ = [
    "APP_PERMISSION_INHERITANCE",
    "DEVELOPER_PERMISSION_INHERITANCE",
    "PERMISSION_CATALOG",
    "ImplicationGraph",
    "ImplicitGrant",
    "PermissionCatalog",
    "expand_permissions",
    "implicit_grants",
    "permission_sets_equal",
]
