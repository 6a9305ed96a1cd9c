"""Shared fixtures: an in-memory Google Play users/grants API."""

from __future__ import annotations

import json
from typing import Any

import httpx
import pytest

from playiam import GooglePlayUsersClient, ProviderConfig

DEVELOPER_ID = "5166846112789481453"
API_PREFIX = "/androidpublisher/v3/"


def _error(status: int, message: str) -> httpx.Response:
    return httpx.Response(status, json={"error": {"code": status, "message": message, "status": "ERROR"}})


class FakePlayAPI:
    """Minimal stand-in for developers.users and developers.users.grants."""

    def __init__(self) -> None:
        self.users: dict[str, dict[str, Any]] = {}
        self.calls: list[tuple[str, str]] = []
        self.fail_next: tuple[int, str] | None = None
        self.grant_name_override: str | None = None

    # ── seeding ──────────────────────────────────────────

    def add_user(self, email: str, permissions: list[str] | None = None) -> dict[str, Any]:
        user = {
            "name": f"developers/{DEVELOPER_ID}/users/{email}",
            "email": email,
            "accessState": "ACCESS_GRANTED",
            "developerAccountPermissions": list(permissions or []),
            "grants": {},
        }
        self.users[email] = user
        return user

    def add_grant(self, email: str, app_id: str, permissions: list[str]) -> dict[str, Any]:
        grant = {
            "name": f"developers/{DEVELOPER_ID}/users/{email}/grants/{app_id}",
            "packageName": app_id,
            "appLevelPermissions": list(permissions),
        }
        self.users[email]["grants"][app_id] = grant
        return grant

    @staticmethod
    def _render_user(user: dict[str, Any]) -> dict[str, Any]:
        rendered = {k: v for k, v in user.items() if k != "grants"}
        rendered["grants"] = list(user["grants"].values())
        return rendered

    # ── transport ────────────────────────────────────────

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        self.calls.append((request.method, path))

        if self.fail_next is not None:
            status, message = self.fail_next
            self.fail_next = None
            return _error(status, message)

        assert path.startswith(API_PREFIX), path
        segments = path[len(API_PREFIX) :].split("/")
        assert segments[:3] == ["developers", DEVELOPER_ID, "users"], segments
        body = json.loads(request.content) if request.content else {}
        method = request.method

        if len(segments) == 3:
            if method == "GET":
                return self._list(request)
            if method == "POST":
                email = body["email"]
                if email in self.users:
                    return _error(409, f"User {email} already exists")
                user = self.add_user(email, body.get("developerAccountPermissions", []))
                return httpx.Response(200, json=self._render_user(user))

        email = segments[3]
        user = self.users.get(email)
        if user is None:
            return _error(404, f"User {email} not found")

        if len(segments) == 4:
            if method == "PATCH":
                assert request.url.params["updateMask"] == "developerAccountPermissions"
                user["developerAccountPermissions"] = body["developerAccountPermissions"]
                return httpx.Response(200, json=self._render_user(user))
            if method == "DELETE":
                del self.users[email]
                return httpx.Response(200, content=b"")

        if len(segments) == 5 and method == "POST":
            grant = self.add_grant(email, body["packageName"], body["appLevelPermissions"])
            if self.grant_name_override is not None:
                grant = dict(grant, name=self.grant_name_override)
            return httpx.Response(200, json=grant)

        if len(segments) == 6:
            app_id = segments[5]
            grant = user["grants"].get(app_id)
            if grant is None:
                return _error(404, f"Grant {app_id} not found")
            if method == "PATCH":
                assert request.url.params["updateMask"] == "appLevelPermissions"
                grant["appLevelPermissions"] = body["appLevelPermissions"]
                return httpx.Response(200, json=grant)
            if method == "DELETE":
                del user["grants"][app_id]
                return httpx.Response(200, content=b"")

        return _error(400, f"Unsupported route {method} {path}")

    def _list(self, request: httpx.Request) -> httpx.Response:
        page_size = int(request.url.params.get("pageSize", "100"))
        start = int(request.url.params.get("pageToken", "0"))
        users = list(self.users.values())
        page = users[start : start + page_size]
        payload: dict[str, Any] = {"users": [self._render_user(u) for u in page]}
        if start + page_size < len(users):
            payload["nextPageToken"] = str(start + page_size)
        return httpx.Response(200, json=payload)


@pytest.fixture
def config() -> ProviderConfig:
    return ProviderConfig(developer_id=DEVELOPER_ID, access_token="ya29.test-token", page_size=2)


@pytest.fixture
def fake_api() -> FakePlayAPI:
    return FakePlayAPI()


@pytest.fixture
def client(config: ProviderConfig, fake_api: FakePlayAPI) -> GooglePlayUsersClient:
    return GooglePlayUsersClient(config, transport=httpx.MockTransport(fake_api.handler))
