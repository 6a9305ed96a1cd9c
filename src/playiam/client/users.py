"""GooglePlayUsersClient - async client for the users and grants API.

Wraps the ``developers.users`` and ``developers.users.grants`` REST
collections of the Google Play Developer API v3. Every call is a
coroutine; cancelling the calling task aborts the in-flight request and
raises ``asyncio.CancelledError`` unchanged. Nothing is retried here.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable
from urllib.parse import quote

import httpx

from ..config import ProviderConfig
from ..exceptions import RemoteAPIError, RemoteTransportError
from ..logging import safe_log_value
from ..names import format_developer_name, format_grant_name, format_user_name
from .models import Grant, ListUsersPage, User

logger = logging.getLogger(__name__)


def _segment(value: str) -> str:
    """Percent-encode one path segment so reserved characters stay inside it."""
    return quote(value, safe="@+")


class GooglePlayUsersClient:
    """Typed client for user and grant management.

    Example:
        async with GooglePlayUsersClient(config) as client:
            users = await client.list_users()
            grant = await client.grant_access("dev@example.com", "com.example.app", ["CAN_VIEW_APP_QUALITY"])
    """

    def __init__(
        self,
        config: ProviderConfig,
        *,
        client: httpx.AsyncClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Provider configuration (developer id, base URL, timeout).
            client: Already-authorized HTTP client; takes precedence over
                ``config.access_token``.
            transport: Transport for a client built here (tests use
                ``httpx.MockTransport``).
        """
        self.developer_id = config.developer_id
        self.page_size = config.page_size
        self._owns_client = client is None

        headers: dict[str, str] = {}
        if config.access_token is not None:
            headers["Authorization"] = f"Bearer {config.access_token.get_secret_value()}"

        self._client = client or httpx.AsyncClient(
            base_url=config.api_base_url,
            transport=transport,
            timeout=config.timeout_seconds,
            headers=headers or None,
        )

    async def __aenter__(self) -> "GooglePlayUsersClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    # ── Transport ────────────────────────────────────────

    async def _request_json(
        self,
        method: str,
        path: str,
        *,
        json_body: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        logger.debug("%s %s", method, path)
        try:
            response = await self._client.request(method, path, json=json_body, params=params)
        except httpx.TransportError as e:
            raise RemoteTransportError(f"{method} {path} failed: {e}", method=method, path=path) from e

        self._raise_for_status(response)
        if response.status_code == 204 or not response.content:
            return None

        try:
            return response.json()
        except ValueError as e:
            raise RemoteAPIError(
                f"{method} {path} returned a non-JSON body",
                status_code=response.status_code,
            ) from e

    @staticmethod
    def _extract_error_message(payload: Any, fallback: str) -> str:
        if isinstance(payload, dict):
            err = payload.get("error")
            if isinstance(err, dict):
                message = err.get("message")
                if isinstance(message, str) and message.strip():
                    return message
            if isinstance(err, str) and err.strip():
                return err
        return fallback

    def _raise_for_status(self, response: httpx.Response) -> None:
        if response.is_success:
            return

        payload: Any
        try:
            payload = response.json()
        except ValueError:
            payload = response.text

        message = self._extract_error_message(
            payload,
            f"HTTP {response.status_code} for {response.request.method} {response.request.url.path}",
        )
        logger.debug("API error %s: %s", response.status_code, safe_log_value(payload))
        raise RemoteAPIError(
            message,
            status_code=response.status_code,
            path=response.request.url.path,
        )

    # ── Users ────────────────────────────────────────────

    async def list_users(self) -> list[User]:
        """Return every user of the developer account, following pagination."""
        path = f"{format_developer_name(self.developer_id)}/users"
        users: list[User] = []
        page_token: str | None = None

        while True:
            params: dict[str, Any] = {"pageSize": self.page_size}
            if page_token:
                params["pageToken"] = page_token
            data = await self._request_json("GET", path, params=params)
            page = ListUsersPage.model_validate(data or {})
            users.extend(page.users)
            if not page.next_page_token:
                break
            page_token = page.next_page_token

        logger.debug("Listed %d users for developer %s", len(users), self.developer_id)
        return users

    async def create_user(self, email: str, global_permissions: Iterable[str]) -> User:
        data = await self._request_json(
            "POST",
            f"{format_developer_name(self.developer_id)}/users",
            json_body={
                "email": email,
                "developerAccountPermissions": list(global_permissions),
            },
        )
        return User.model_validate(data)

    async def update_user(self, email: str, global_permissions: Iterable[str]) -> User:
        data = await self._request_json(
            "PATCH",
            format_user_name(self.developer_id, _segment(email)),
            json_body={"developerAccountPermissions": list(global_permissions)},
            params={"updateMask": "developerAccountPermissions"},
        )
        return User.model_validate(data)

    async def delete_user(self, email: str) -> None:
        await self._request_json("DELETE", format_user_name(self.developer_id, _segment(email)))

    # ── Grants ───────────────────────────────────────────

    async def grant_access(self, email: str, app_id: str, permissions: Iterable[str]) -> Grant:
        data = await self._request_json(
            "POST",
            f"{format_user_name(self.developer_id, _segment(email))}/grants",
            json_body={
                "packageName": app_id,
                "appLevelPermissions": list(permissions),
            },
        )
        return Grant.model_validate(data)

    async def modify_access(self, email: str, app_id: str, permissions: Iterable[str]) -> Grant:
        data = await self._request_json(
            "PATCH",
            format_grant_name(self.developer_id, _segment(email), _segment(app_id)),
            json_body={"appLevelPermissions": list(permissions)},
            params={"updateMask": "appLevelPermissions"},
        )
        return Grant.model_validate(data)

    async def revoke_access(self, email: str, app_id: str) -> None:
        await self._request_json("DELETE", format_grant_name(self.developer_id, _segment(email), _segment(app_id)))


__all__ = ["GooglePlayUsersClient"]
