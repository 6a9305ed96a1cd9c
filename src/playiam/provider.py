"""GooglePlayProvider - wires configuration, client and resources together.

The declarative engine configures the provider once, then asks it for
resource and data source instances by type name. All of them share a
single :class:`GooglePlayUsersClient`.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

import httpx

from .client import GooglePlayUsersClient
from .config import ProviderConfig, load_config_from_env
from .exceptions import ConfigurationError
from .logging import setup_logging
from .resources import AppIAMResource, UserDataSource, UserResource, UsersDataSource

logger = logging.getLogger(__name__)

TYPE_NAME = "googleplay"


class GooglePlayProvider:
    """Entry point for the declarative engine.

    Example:
        provider = GooglePlayProvider()
        provider.configure(ProviderConfig(developer_id="5166846112789481453", access_token="ya29..."))
        app_iam = provider.resource("googleplay_app_iam")
    """

    def __init__(self, version: str = "dev") -> None:
        self.version = version
        self.config: Optional[ProviderConfig] = None
        self._client: Optional[GooglePlayUsersClient] = None

    def configure(
        self,
        config: ProviderConfig | None = None,
        *,
        http_client: httpx.AsyncClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        configure_logging: bool = True,
    ) -> GooglePlayUsersClient:
        """Build the shared API client.

        A provider is configured once; call :meth:`aclose` before configuring
        it again.

        Args:
            config: Provider settings; loaded from the environment when omitted.
            http_client: Already-authorized HTTP client.
            transport: Transport override for a client built from ``config``.
            configure_logging: Apply ``config.log_level`` and ``config.log_json``
                to the root logger. Embedders that own logging pass False.
        """
        if self._client is not None:
            raise ConfigurationError("Provider is already configured; call aclose() first")

        self.config = config or load_config_from_env()
        if configure_logging:
            setup_logging(self.config)
        if http_client is None and self.config.access_token is None:
            logger.warning(
                "No access token or authorized HTTP client configured for developer %s; "
                "requests will be unauthenticated",
                self.config.developer_id,
            )
        self._client = GooglePlayUsersClient(self.config, client=http_client, transport=transport)
        logger.debug("Configured %s provider %s for developer %s", TYPE_NAME, self.version, self.config.developer_id)
        return self._client

    @property
    def client(self) -> GooglePlayUsersClient:
        if self._client is None:
            raise ConfigurationError("Provider has not been configured")
        return self._client

    def resources(self) -> dict[str, Callable[[GooglePlayUsersClient], Any]]:
        return {
            UserResource.type_name: UserResource,
            AppIAMResource.type_name: AppIAMResource,
        }

    def data_sources(self) -> dict[str, Callable[[GooglePlayUsersClient], Any]]:
        return {
            UserDataSource.type_name: UserDataSource,
            UsersDataSource.type_name: UsersDataSource,
        }

    def resource(self, type_name: str) -> Any:
        try:
            factory = self.resources()[type_name]
        except KeyError:
            raise ConfigurationError(f"Unknown resource type: {type_name}")
        return factory(self.client)

    def data_source(self, type_name: str) -> Any:
        try:
            factory = self.data_sources()[type_name]
        except KeyError:
            raise ConfigurationError(f"Unknown data source type: {type_name}")
        return factory(self.client)

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None


__all__ = ["GooglePlayProvider", "TYPE_NAME"]
