"""Normalized result shape shared by both transports."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Literal


@dataclass(frozen=True, slots=True)
class RateLimitInfo:
    limit: int | None = None
    remaining: int | None = None
    reset: int | None = None

    @classmethod
    def from_headers(cls, headers: Mapping[str, str]) -> RateLimitInfo | None:
        lowered = {k.lower(): v for k, v in headers.items()}
        values = [
            _parse_int(lowered.get(f"x-ratelimit-{name}"))
            for name in ("limit", "remaining", "reset")
        ]
        if all(v is None for v in values):
            return None
        return cls(*values)


@dataclass(frozen=True, slots=True)
class ResponseMeta:
    """Diagnostics about how a result was produced.

    Both transports fill the same fields; the ones that do not apply to a
    transport are left as ``None`` (``status`` for CLI, ``exit_code`` for HTTP).
    """

    transport: Literal["api", "cli"]
    status: int | None = None
    exit_code: int | None = None
    headers: Mapping[str, str] = field(default_factory=dict)
    rate_limit: RateLimitInfo | None = None
    pagination: Any | None = None
    attempts: int = 1


@dataclass(frozen=True, slots=True)
class ResponseEnvelope:
    data: Any
    meta: ResponseMeta

    def unwrap(self) -> Any:
        """Return the caller-visible payload.

        API bodies shaped like ``{"data": ...}`` are unwrapped; bare arrays and
        objects are returned as is.
        """
        if isinstance(self.data, dict) and "data" in self.data:
            return self.data["data"]
        return self.data


def extract_pagination(body: Any) -> Any | None:
    if isinstance(body, dict) and isinstance(body.get("meta"), dict):
        return body["meta"]
    return None


def _parse_int(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


__all__ = ["RateLimitInfo", "ResponseMeta", "ResponseEnvelope", "extract_pagination"]
