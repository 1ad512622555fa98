"""Drive the shared async resource code from the synchronous clients."""

from __future__ import annotations

import typing

_T = typing.TypeVar("_T")


def run_blocking(coro: typing.Coroutine[None, None, _T]) -> _T:
    """Run one ``ProjectsClient``/``WebhooksClient``/``SharesClient`` call.

    Sync resource clients wrap the same ``async def _op`` methods as their
    async twins, but the dispatcher hands them ``BlockingTransport`` and
    ``BlockingCLITransport``, whose ``send`` never awaits anything that
    suspends. The coroutine therefore finishes on its first step and its
    return value (or typed error) is passed straight through.

    A coroutine that does suspend was wired to an async transport; it is
    closed and RuntimeError is raised instead of silently dropping the call.
    """
    try:
        coro.send(None)
    except StopIteration as stop:
        return stop.value  # type: ignore [no-any-return]
    else:
        raise RuntimeError(
            f"{coro!r} suspended; sync clients need blocking transports"
        )
    finally:
        coro.close()


__all__ = ["run_blocking"]
