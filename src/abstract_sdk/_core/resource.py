"""Shared plumbing for resource clients."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .config import RequestOptionsLike, coerce_options
from .dispatcher import CliAction, HttpAction

if TYPE_CHECKING:
    from .._cli.transport import BaseCLITransport
    from .._http.transport import BaseTransport
    from .dispatcher import Dispatcher
    from .envelope import ResponseEnvelope
    from .operation import OperationDescriptor


class BaseResource:
    """Holds the dispatcher and both transports of one client.

    Resource clients build an OperationDescriptor per call and hand it to
    ``_execute``; they never pick a transport themselves.
    """

    def __init__(
        self,
        dispatcher: Dispatcher,
        http: BaseTransport,
        cli: BaseCLITransport,
    ) -> None:
        self._dispatcher = dispatcher
        self._http = http
        self._cli = cli

    async def _execute(
        self,
        operation: OperationDescriptor,
        options: RequestOptionsLike = None,
    ) -> ResponseEnvelope:
        opts = coerce_options(options)
        http = HttpAction(
            lambda: self._http.send(operation, headers=opts.headers, timeout=opts.timeout)
        )
        cli = (
            CliAction(lambda: self._cli.send(operation, timeout=opts.timeout))
            if operation.has_cli_form
            else None
        )
        return await self._dispatcher.dispatch(http, cli, opts)

    async def _request(
        self,
        operation: OperationDescriptor,
        options: RequestOptionsLike = None,
    ) -> Any:
        envelope = await self._execute(operation, options)
        return envelope.unwrap()


__all__ = ["BaseResource"]
