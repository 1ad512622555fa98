"""Abstract clients with namespaced resource sub-clients."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ._cli.transport import AsyncCLITransport, BlockingCLITransport
from ._core.config import DEFAULT_CLI_TIMEOUT, TransportConfig, TransportMode
from ._core.dispatcher import Dispatcher
from ._http.transport import AsyncTransport, BlockingTransport, SleepFn
from .projects import AsyncProjectsClient, ProjectsClient
from .shares import AsyncSharesClient, SharesClient
from .webhooks import AsyncWebhooksClient, WebhooksClient


def _build_config(
    transport_mode: TransportMode | str | None,
    api_base_url: str | None,
    cli_executable_path: str | None,
    auth_token: str | None,
    default_headers: Mapping[str, str] | None,
    timeout: float | None,
    cli_timeout: float | None,
    cli_cwd: str | None,
    cli_env: Mapping[str, str] | None,
) -> TransportConfig:
    return TransportConfig.from_env(
        transport_mode=transport_mode,
        api_base_url=api_base_url,
        cli_executable_path=cli_executable_path,
        auth_token=auth_token,
        default_headers=default_headers,
        timeout=timeout,
        cli_timeout=cli_timeout,
        cli_cwd=cli_cwd,
        cli_env=cli_env,
    )


class AbstractClient:
    """Synchronous Abstract SDK client.

    Raises ConfigurationError on construction when the chosen transport is
    missing its endpoint (``api_base_url`` or ``cli_executable_path``).
    """

    def __init__(
        self,
        *,
        transport_mode: TransportMode | str | None = None,
        api_base_url: str | None = None,
        cli_executable_path: str | None = None,
        auth_token: str | None = None,
        default_headers: Mapping[str, str] | None = None,
        timeout: float | None = None,
        cli_timeout: float | None = DEFAULT_CLI_TIMEOUT,
        cli_cwd: str | None = None,
        cli_env: Mapping[str, str] | None = None,
        sleep_fn: SleepFn | None = None,
    ):
        self._config = _build_config(
            transport_mode,
            api_base_url,
            cli_executable_path,
            auth_token,
            default_headers,
            timeout,
            cli_timeout,
            cli_cwd,
            cli_env,
        )
        self._dispatcher = Dispatcher(self._config.mode)
        http = (
            BlockingTransport(self._config, sleep_fn=sleep_fn)
            if sleep_fn is not None
            else BlockingTransport(self._config)
        )
        cli = BlockingCLITransport(self._config)
        self.projects = ProjectsClient(self._dispatcher, http, cli)
        self.webhooks = WebhooksClient(self._dispatcher, http, cli)
        self.shares = SharesClient(self._dispatcher, http, cli)

    @property
    def config(self) -> TransportConfig:
        return self._config

    def close(self) -> None:
        # Each call owns its connection or child process; nothing to release.
        pass

    def __enter__(self) -> AbstractClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()


class AsyncAbstractClient:
    """Asynchronous Abstract SDK client."""

    def __init__(
        self,
        *,
        transport_mode: TransportMode | str | None = None,
        api_base_url: str | None = None,
        cli_executable_path: str | None = None,
        auth_token: str | None = None,
        default_headers: Mapping[str, str] | None = None,
        timeout: float | None = None,
        cli_timeout: float | None = DEFAULT_CLI_TIMEOUT,
        cli_cwd: str | None = None,
        cli_env: Mapping[str, str] | None = None,
        sleep_fn: SleepFn | None = None,
    ):
        self._config = _build_config(
            transport_mode,
            api_base_url,
            cli_executable_path,
            auth_token,
            default_headers,
            timeout,
            cli_timeout,
            cli_cwd,
            cli_env,
        )
        self._dispatcher = Dispatcher(self._config.mode)
        http = (
            AsyncTransport(self._config, sleep_fn=sleep_fn)
            if sleep_fn is not None
            else AsyncTransport(self._config)
        )
        cli = AsyncCLITransport(self._config)
        self.projects = AsyncProjectsClient(self._dispatcher, http, cli)
        self.webhooks = AsyncWebhooksClient(self._dispatcher, http, cli)
        self.shares = AsyncSharesClient(self._dispatcher, http, cli)

    @property
    def config(self) -> TransportConfig:
        return self._config

    async def close(self) -> None:
        pass

    async def __aenter__(self) -> AsyncAbstractClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()


__all__ = ["AbstractClient", "AsyncAbstractClient"]
