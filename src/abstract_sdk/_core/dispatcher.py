"""Transport selection.

A resource call hands the dispatcher one action per transport it supports.
The dispatcher resolves the effective mode for that call and invokes exactly
one of them. There is no fallback: a failure in the chosen transport is
raised as is.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from ..errors import ConfigurationError
from .config import RequestOptions, TransportMode

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class HttpAction(Generic[T]):
    run: Callable[[], Awaitable[T]]


@dataclass(frozen=True, slots=True)
class CliAction(Generic[T]):
    run: Callable[[], Awaitable[T]]


@dataclass(frozen=True, slots=True)
class LocalAction(Generic[T]):
    """Work that resolves in-process whatever the transport mode."""

    run: Callable[[], Awaitable[T]]


TransportAction = HttpAction[T] | CliAction[T]


class Dispatcher:
    def __init__(self, default_mode: TransportMode) -> None:
        self._default_mode = default_mode

    @property
    def default_mode(self) -> TransportMode:
        return self._default_mode

    def effective_mode(self, options: RequestOptions | None = None) -> TransportMode:
        if options is not None and options.transport_mode is not None:
            return options.transport_mode
        return self._default_mode

    def select(
        self,
        http: HttpAction[T],
        cli: CliAction[T] | None,
        options: RequestOptions | None = None,
    ) -> TransportAction[T]:
        mode = self.effective_mode(options)
        if mode is TransportMode.API:
            return http
        if cli is None:
            raise ConfigurationError(
                "This operation is not supported by the CLI transport; "
                "use transport_mode='api'."
            )
        return cli

    async def dispatch(
        self,
        http: HttpAction[T],
        cli: CliAction[T] | None = None,
        options: RequestOptions | None = None,
    ) -> T:
        action = self.select(http, cli, options)
        logger.debug("Dispatching via %s", "api" if isinstance(action, HttpAction) else "cli")
        return await action.run()

    async def run_local(self, action: LocalAction[T]) -> T:
        return await action.run()


__all__ = [
    "HttpAction",
    "CliAction",
    "LocalAction",
    "TransportAction",
    "Dispatcher",
]
