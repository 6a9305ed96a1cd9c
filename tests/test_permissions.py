"""Tests for the permission catalog and expansion engine."""

from __future__ import annotations

import pytest

from playiam import (
    PERMISSION_CATALOG,
    AppPermissions,
    DeveloperPermissions,
    ImplicationGraph,
    ImplicitGrant,
    PermissionCatalog,
    PermissionScope,
    expand_permissions,
    implicit_grants,
    permission_sets_equal,
)
from playiam.permissions import APP_PERMISSION_INHERITANCE, DEVELOPER_PERMISSION_INHERITANCE


def _constants(cls) -> list[str]:
    return [getattr(cls, attr) for attr in dir(cls) if not attr.startswith("_")]


def _reachable(graph: ImplicationGraph, start: str) -> set[str]:
    seen: set[str] = set()
    stack = list(graph.directly_implied(start))
    while stack:
        perm = stack.pop()
        if perm not in seen:
            seen.add(perm)
            stack.extend(graph.directly_implied(perm))
    return seen


CYCLIC = PermissionCatalog(
    (
        ImplicationGraph(PermissionScope.APP, {"A": ("B",), "B": ("A", "C"), "C": ()}),
    )
)


class TestPermissionConstants:
    """Tests for permission constant classes."""

    def test_unique_app_permissions(self) -> None:
        """All app permission values are unique."""
        values = _constants(AppPermissions)
        assert len(values) == len(set(values))

    def test_developer_permissions_are_global(self) -> None:
        """Developer-level tokens carry the _GLOBAL suffix, apart from the legacy one."""
        for value in _constants(DeveloperPermissions):
            if value == DeveloperPermissions.CAN_SEE_ALL_APPS:
                continue
            assert value.endswith("_GLOBAL"), value

    def test_graph_edges_use_known_tokens(self) -> None:
        """Every edge in the built-in graphs references a known token of the same scope."""
        app = set(_constants(AppPermissions))
        for parent, children in APP_PERMISSION_INHERITANCE.items():
            assert parent in app
            assert set(children) <= app

        developer = set(_constants(DeveloperPermissions))
        for parent, children in DEVELOPER_PERMISSION_INHERITANCE.items():
            assert parent in developer
            assert set(children) <= developer


class TestCatalog:
    """Tests for ImplicationGraph / PermissionCatalog lookups."""

    def test_directly_implied(self) -> None:
        """Direct edges are returned in declaration order."""
        assert PERMISSION_CATALOG.directly_implied(
            PermissionScope.APP, AppPermissions.CAN_REPLY_TO_REVIEWS
        ) == (AppPermissions.CAN_VIEW_NON_FINANCIAL_DATA,)

    def test_unknown_token_has_no_implications(self) -> None:
        """Unknown tokens are not an error at the catalog layer."""
        assert PERMISSION_CATALOG.directly_implied(PermissionScope.APP, "NOT_A_PERMISSION") == ()

    def test_scopes_are_separate(self) -> None:
        """App tokens have no edges in the developer graph."""
        assert (
            PERMISSION_CATALOG.directly_implied(PermissionScope.DEVELOPER, AppPermissions.CAN_REPLY_TO_REVIEWS)
            == ()
        )

    def test_scope_accepts_string(self) -> None:
        """Scope lookups accept the enum value."""
        assert PERMISSION_CATALOG.graph("developer").scope is PermissionScope.DEVELOPER

    def test_graph_is_read_only(self) -> None:
        """Graph edges cannot be mutated after construction."""
        graph = PERMISSION_CATALOG.graph(PermissionScope.APP)
        with pytest.raises(TypeError):
            graph._edges["X"] = ("Y",)  # type: ignore[index]

    def test_graph_copies_input(self) -> None:
        """Mutating the source mapping does not change a built graph."""
        edges = {"A": ["B"]}
        graph = ImplicationGraph(PermissionScope.APP, edges)
        edges["A"].append("C")
        edges["B"] = ["D"]
        assert graph.directly_implied("A") == ("B",)
        assert graph.directly_implied("B") == ()


class TestExpandPermissions:
    """Tests for permission inheritance expansion."""

    def test_explicit_only(self) -> None:
        """A leaf permission expands to itself."""
        assert expand_permissions((AppPermissions.CAN_VIEW_APP_QUALITY,)) == (
            AppPermissions.CAN_VIEW_APP_QUALITY,
        )

    def test_transitive_expansion(self) -> None:
        """CAN_REPLY_TO_REVIEWS → CAN_VIEW_NON_FINANCIAL_DATA → CAN_VIEW_APP_QUALITY."""
        assert expand_permissions((AppPermissions.CAN_REPLY_TO_REVIEWS,)) == (
            AppPermissions.CAN_REPLY_TO_REVIEWS,
            AppPermissions.CAN_VIEW_NON_FINANCIAL_DATA,
            AppPermissions.CAN_VIEW_APP_QUALITY,
        )

    def test_first_seen_order(self) -> None:
        """Explicit permissions keep input order; implied ones follow in discovery order."""
        result = expand_permissions(
            (AppPermissions.CAN_VIEW_APP_QUALITY, AppPermissions.CAN_MANAGE_ORDERS)
        )
        assert result == (
            AppPermissions.CAN_VIEW_APP_QUALITY,
            AppPermissions.CAN_MANAGE_ORDERS,
            AppPermissions.CAN_VIEW_FINANCIAL_DATA,
            AppPermissions.CAN_VIEW_NON_FINANCIAL_DATA,
        )

    def test_deterministic(self) -> None:
        """Repeated expansion of identical input is identical."""
        perms = [AppPermissions.CAN_MANAGE_PUBLIC_APKS, AppPermissions.CAN_REPLY_TO_REVIEWS]
        assert expand_permissions(perms) == expand_permissions(list(perms))

    def test_deduplication(self) -> None:
        """Duplicates in input are collapsed."""
        result = expand_permissions((AppPermissions.CAN_VIEW_APP_QUALITY,) * 3)
        assert result == (AppPermissions.CAN_VIEW_APP_QUALITY,)

    def test_empty_input(self) -> None:
        """Empty input returns empty tuple."""
        assert expand_permissions(()) == ()

    def test_developer_scope(self) -> None:
        """Developer-level graph is used when requested."""
        result = expand_permissions(
            (DeveloperPermissions.CAN_PUBLISH_GAMES_GLOBAL,), PermissionScope.DEVELOPER
        )
        assert result == (
            DeveloperPermissions.CAN_PUBLISH_GAMES_GLOBAL,
            DeveloperPermissions.CAN_EDIT_GAMES_GLOBAL,
        )

    def test_cycle_terminates(self) -> None:
        """A cyclic graph still yields a finite closure."""
        assert expand_permissions(("A",), catalog=CYCLIC) == ("A", "B", "C")
        assert expand_permissions(("B",), catalog=CYCLIC) == ("B", "A", "C")

    def test_unknown_tokens_pass_through(self) -> None:
        """Unknown tokens are kept and simply do not expand."""
        assert expand_permissions(("SOMETHING_NEW",)) == ("SOMETHING_NEW",)

    @pytest.mark.parametrize("scope", list(PermissionScope))
    def test_closure_laws_over_catalog(self, scope: PermissionScope) -> None:
        """Monotonic, idempotent and reachable for every single-permission input."""
        graph = PERMISSION_CATALOG.graph(scope)
        tokens = _constants(AppPermissions if scope is PermissionScope.APP else DeveloperPermissions)
        for token in tokens:
            explicit = (token,)
            expanded = expand_permissions(explicit, scope)
            assert set(explicit) <= set(expanded)
            assert expand_permissions(expanded, scope) == expanded
            assert set(expanded) - set(explicit) == _reachable(graph, token) - {token}
            for perm in expanded:
                assert set(graph.directly_implied(perm)) <= set(expanded)

    def test_idempotent_on_mixed_sets(self) -> None:
        """Expanding an expanded set changes nothing."""
        explicit = (
            AppPermissions.CAN_MANAGE_ORDERS,
            AppPermissions.CAN_MANAGE_PUBLIC_APKS,
            AppPermissions.CAN_VIEW_APP_QUALITY,
        )
        once = expand_permissions(explicit)
        assert expand_permissions(once) == once


class TestImplicitGrants:
    """Tests for implicit-grant detection."""

    def test_no_implicit_for_leaf(self) -> None:
        """A leaf permission grants nothing implicitly."""
        assert implicit_grants((AppPermissions.CAN_VIEW_APP_QUALITY,)) == []

    def test_transitive_implicit_grants(self) -> None:
        """Every missing closure member is reported against its explicit root."""
        assert implicit_grants((AppPermissions.CAN_REPLY_TO_REVIEWS,)) == [
            ImplicitGrant(AppPermissions.CAN_VIEW_NON_FINANCIAL_DATA, AppPermissions.CAN_REPLY_TO_REVIEWS),
            ImplicitGrant(AppPermissions.CAN_VIEW_APP_QUALITY, AppPermissions.CAN_REPLY_TO_REVIEWS),
        ]

    def test_explicit_children_not_reported(self) -> None:
        """Permissions already granted explicitly are not implicit."""
        grants = implicit_grants(
            (AppPermissions.CAN_VIEW_APP_QUALITY, AppPermissions.CAN_VIEW_NON_FINANCIAL_DATA)
        )
        assert grants == []

    def test_developer_scope(self) -> None:
        """Developer-level implicit grants use the developer graph."""
        grants = implicit_grants(
            (DeveloperPermissions.CAN_SEE_ALL_APPS, DeveloperPermissions.CAN_REPLY_TO_REVIEWS_GLOBAL),
            PermissionScope.DEVELOPER,
        )
        assert [g.permission for g in grants] == [
            DeveloperPermissions.CAN_VIEW_NON_FINANCIAL_DATA_GLOBAL,
            DeveloperPermissions.CAN_VIEW_APP_QUALITY_GLOBAL,
        ]
        assert {g.granted_by for g in grants} == {DeveloperPermissions.CAN_REPLY_TO_REVIEWS_GLOBAL}


class TestPermissionSetsEqual:
    """Tests for order-insensitive comparison."""

    def test_order_ignored(self) -> None:
        assert permission_sets_equal(["A", "B"], ("B", "A"))

    def test_difference_detected(self) -> None:
        assert not permission_sets_equal(["A"], ["A", "B"])
