"""HTTP transport implementations for sync and async clients."""

from __future__ import annotations

import abc
import asyncio
import inspect
import logging
import math
import time
from collections.abc import Awaitable, Callable, Mapping
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any, cast

import httpx

from .._core.config import TransportConfig
from .._core.envelope import (
    RateLimitInfo,
    ResponseEnvelope,
    ResponseMeta,
    extract_pagination,
)
from .._core.operation import OperationDescriptor
from ..errors import (
    ConfigurationError,
    HTTPStatusError,
    MalformedResponse,
    NetworkError,
    RateLimited,
)
from .headers import injected_headers, merge_headers

logger = logging.getLogger(__name__)

SleepFn = Callable[[float], Awaitable[None] | None]


def _blocking_sleep(seconds: float) -> None:
    time.sleep(seconds)


async def _await_if_necessary(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await cast(Awaitable[Any], value)
    return value


def parse_retry_after(value: str | None) -> float | None:
    """Parse a Retry-After header given as delta-seconds or an HTTP date."""
    if not value:
        return None
    value = value.strip()
    try:
        seconds = float(value)
    except ValueError:
        pass
    else:
        return max(seconds, 0.0) if math.isfinite(seconds) else None
    try:
        when = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return None
    if when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)
    return max((when - datetime.now(timezone.utc)).total_seconds(), 0.0)


def _parse_error_message(response: httpx.Response) -> tuple[str, Any | None]:
    """Parse error message from API response."""
    parsed: Any | None = None
    message = f"HTTP {response.status_code}"
    try:
        parsed = response.json()
    except ValueError:
        parsed = None

    if isinstance(parsed, dict):
        if isinstance(parsed.get("message"), str):
            message = f"{message}: {parsed['message']}"
        elif "error" in parsed:
            err = parsed["error"]
            if isinstance(err, dict):
                code = err.get("code")
                msg = err.get("message") or err.get("msg")
                if msg:
                    message = f"{message}: {msg}"
                if code:
                    message = f"{message} (code={code})"
            elif isinstance(err, str):
                message = f"{message}: {err}"

    if parsed is None:
        text = response.text
        if text:
            snippet = text if len(text) <= 500 else text[:500] + "..."
            message = f"{message}: {snippet}"
            parsed = text

    return message, parsed


def _decode_body(response: httpx.Response) -> Any:
    if not response.content or not response.content.strip():
        return None
    try:
        return response.json()
    except ValueError as exc:
        raise MalformedResponse(
            f"Expected JSON from {response.request.method} {response.request.url}, "
            f"got {response.headers.get('content-type', 'unknown content')}",
            raw=response.content,
        ) from exc


class BaseTransport(abc.ABC):
    """Runs an OperationDescriptor against the HTTP API.

    Subclasses only implement the single-request primitive; header merging,
    the one-shot rate-limit retry and status mapping live here so the blocking
    and async flavours behave identically.
    """

    def __init__(self, config: TransportConfig, *, sleep_fn: SleepFn) -> None:
        self._config = config
        self._sleep_fn = sleep_fn

    @abc.abstractmethod
    async def _request(
        self,
        method: str,
        url: str,
        *,
        headers: dict[str, str],
        json: Any | None,
        timeout: float,
    ) -> httpx.Response:
        """Send one request and return the raw response."""
        ...

    def build_url(self, path: str) -> str:
        if not self._config.api_base_url:
            raise ConfigurationError("API transport used without api_base_url")
        return self._config.api_base_url.rstrip("/") + "/" + path.lstrip("/")

    def build_headers(
        self,
        operation: OperationDescriptor,
        per_call: Mapping[str, str] | None = None,
    ) -> dict[str, str]:
        return merge_headers(
            injected_headers(self._config.auth_token, operation.headers),
            self._config.default_headers,
            per_call,
        )

    def _rate_limit_wait(self, response: httpx.Response) -> float:
        hinted = parse_retry_after(response.headers.get("retry-after"))
        wait = self._config.rate_limit_default_wait if hinted is None else hinted
        return min(wait, self._config.rate_limit_max_wait)

    async def _attempt(
        self,
        method: str,
        url: str,
        *,
        headers: dict[str, str],
        json: Any | None,
        timeout: float,
    ) -> httpx.Response:
        try:
            response = await self._request(
                method, url, headers=headers, json=json, timeout=timeout
            )
        except httpx.InvalidURL as exc:
            raise ConfigurationError(f"Invalid API URL {url!r}: {exc}") from exc
        except httpx.RequestError as exc:
            raise NetworkError(f"{method} {url} failed: {exc}") from exc
        logger.debug("%s %s -> %s", method, url, response.status_code)
        return response

    async def send(
        self,
        operation: OperationDescriptor,
        *,
        headers: Mapping[str, str] | None = None,
        timeout: float | None = None,
    ) -> ResponseEnvelope:
        """Execute ``operation`` and return its envelope or raise a typed error."""
        url = self.build_url(operation.path)
        request_headers = self.build_headers(operation, headers)
        effective_timeout = timeout if timeout is not None else self._config.timeout

        response = await self._attempt(
            operation.method,
            url,
            headers=request_headers,
            json=operation.body,
            timeout=effective_timeout,
        )
        attempts = 1

        if response.status_code == 429:
            wait = self._rate_limit_wait(response)
            logger.warning(
                "Rate limited on %s %s, retrying once in %.2fs",
                operation.method,
                url,
                wait,
            )
            await _await_if_necessary(self._sleep_fn(wait))
            response = await self._attempt(
                operation.method,
                url,
                headers=request_headers,
                json=operation.body,
                timeout=effective_timeout,
            )
            attempts = 2
            if response.status_code == 429:
                message, parsed = _parse_error_message(response)
                raise RateLimited(
                    message,
                    retry_after=parse_retry_after(response.headers.get("retry-after")),
                    body=parsed,
                    response=response,
                )

        if not (200 <= response.status_code < 300):
            message, parsed = _parse_error_message(response)
            raise HTTPStatusError(
                message,
                status_code=response.status_code,
                body=parsed,
                response=response,
            )

        data = _decode_body(response)
        return ResponseEnvelope(
            data=data,
            meta=ResponseMeta(
                transport="api",
                status=response.status_code,
                headers=dict(response.headers),
                rate_limit=RateLimitInfo.from_headers(response.headers),
                pagination=extract_pagination(data),
                attempts=attempts,
            ),
        )


class BlockingTransport(BaseTransport):
    """
    Synchronous HTTP transport using httpx.Client.

    Methods are declared async but don't actually await anything,
    allowing them to be executed via run_blocking().
    """

    def __init__(self, config: TransportConfig, *, sleep_fn: SleepFn = _blocking_sleep) -> None:
        super().__init__(config, sleep_fn=sleep_fn)

    async def _request(
        self,
        method: str,
        url: str,
        *,
        headers: dict[str, str],
        json: Any | None,
        timeout: float,
    ) -> httpx.Response:
        # Use a fresh client for each request (ephemeral pattern)
        with httpx.Client(timeout=httpx.Timeout(timeout)) as client:
            return client.request(method, url, json=json, headers=headers)


class AsyncTransport(BaseTransport):
    """Asynchronous HTTP transport using httpx.AsyncClient."""

    def __init__(self, config: TransportConfig, *, sleep_fn: SleepFn = asyncio.sleep) -> None:
        super().__init__(config, sleep_fn=sleep_fn)

    async def _request(
        self,
        method: str,
        url: str,
        *,
        headers: dict[str, str],
        json: Any | None,
        timeout: float,
    ) -> httpx.Response:
        # Use a fresh client for each request (ephemeral pattern)
        async with httpx.AsyncClient(timeout=httpx.Timeout(timeout)) as client:
            return await client.request(method, url, json=json, headers=headers)


__all__ = [
    "SleepFn",
    "BaseTransport",
    "BlockingTransport",
    "AsyncTransport",
    "parse_retry_after",
]
