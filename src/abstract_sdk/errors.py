"""Typed errors raised by the Abstract SDK.

Every failure surfaced by a client call is an instance of
:class:`AbstractSDKError`. Transport specific exceptions (``httpx``,
``OSError``, ``json``) are always chained, never re-raised bare.
"""

from __future__ import annotations

from typing import Any

import httpx


class AbstractSDKError(Exception):
    """Base class for all SDK errors."""

    transient: bool = False


class ConfigurationError(AbstractSDKError):
    """The client or a call was configured inconsistently."""


class NetworkError(AbstractSDKError):
    """The HTTP request never produced a response (DNS, refused, timeout)."""

    transient = True


class HTTPStatusError(AbstractSDKError):
    """The API answered with a non-2xx status."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        body: Any | None = None,
        response: httpx.Response | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.body = body
        self.response = response

    @property
    def transient(self) -> bool:  # type: ignore[override]
        return self.status_code >= 500


class RateLimited(HTTPStatusError):
    """The API kept answering 429 after the single allowed retry."""

    def __init__(
        self,
        message: str,
        *,
        retry_after: float | None = None,
        body: Any | None = None,
        response: httpx.Response | None = None,
    ):
        super().__init__(message, status_code=429, body=body, response=response)
        self.retry_after = retry_after

    @property
    def transient(self) -> bool:  # type: ignore[override]
        return True


class ProcessSpawnError(AbstractSDKError):
    """The CLI executable could not be started at all."""

    def __init__(self, message: str, cause: Exception | None = None):
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)
        self.cause = cause


class ProcessExitError(AbstractSDKError):
    """The CLI exited with a non-zero status."""

    def __init__(self, message: str, *, exit_code: int | None, stderr: str = ""):
        super().__init__(message)
        self.exit_code = exit_code
        self.stderr = stderr


class ProcessTimeoutError(ProcessExitError):
    """The CLI did not exit before its deadline and was killed."""

    transient = True

    def __init__(self, message: str, *, timeout: float, stderr: str = ""):
        super().__init__(message, exit_code=None, stderr=stderr)
        self.timeout = timeout


class MalformedResponse(AbstractSDKError):
    """A successful response body (or CLI stdout) was not valid JSON."""

    def __init__(self, message: str, *, raw: str | bytes | None = None):
        super().__init__(message)
        self.raw = raw


class SignatureMismatch(AbstractSDKError):
    """A webhook payload did not match its signature."""


__all__ = [
    "AbstractSDKError",
    "ConfigurationError",
    "NetworkError",
    "HTTPStatusError",
    "RateLimited",
    "ProcessSpawnError",
    "ProcessExitError",
    "ProcessTimeoutError",
    "MalformedResponse",
    "SignatureMismatch",
]
