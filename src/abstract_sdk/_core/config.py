"""Client and per-call configuration."""

from __future__ import annotations

import enum
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from ..errors import ConfigurationError

DEFAULT_TIMEOUT = 60.0
DEFAULT_CLI_TIMEOUT = 120.0
DEFAULT_RATE_LIMIT_WAIT = 1.0
MAX_RATE_LIMIT_WAIT = 60.0

TOKEN_ENV = "ABSTRACT_TOKEN"
API_URL_ENV = "ABSTRACT_API_URL"
CLI_PATH_ENV = "ABSTRACT_CLI_PATH"
TRANSPORT_MODE_ENV = "ABSTRACT_TRANSPORT_MODE"


class TransportMode(str, enum.Enum):
    """Which execution path a call runs on."""

    API = "api"
    CLI = "cli"

    @classmethod
    def coerce(cls, value: TransportMode | str) -> TransportMode:
        try:
            return cls(value.lower() if isinstance(value, str) else value)
        except ValueError:
            raise ConfigurationError(
                f"Unknown transport mode {value!r}; expected 'api' or 'cli'."
            ) from None


@dataclass(frozen=True, slots=True)
class TransportConfig:
    """Transport settings shared by every call a client makes.

    Created once per client and never mutated afterwards; ``default_headers``
    is exposed as a read-only mapping.
    """

    mode: TransportMode = TransportMode.API
    api_base_url: str | None = None
    cli_executable_path: str | None = None
    auth_token: str | None = None
    default_headers: Mapping[str, str] = field(default_factory=dict)
    timeout: float = DEFAULT_TIMEOUT
    cli_timeout: float | None = DEFAULT_CLI_TIMEOUT
    cli_cwd: str | None = None
    cli_env: Mapping[str, str] = field(default_factory=dict)
    rate_limit_default_wait: float = DEFAULT_RATE_LIMIT_WAIT
    rate_limit_max_wait: float = MAX_RATE_LIMIT_WAIT

    def __post_init__(self) -> None:
        object.__setattr__(self, "mode", TransportMode.coerce(self.mode))
        object.__setattr__(
            self, "default_headers", MappingProxyType(dict(self.default_headers))
        )
        object.__setattr__(self, "cli_env", MappingProxyType(dict(self.cli_env)))

    def validate(self) -> TransportConfig:
        """Check the mode/field invariant, raising ConfigurationError."""
        if self.mode is TransportMode.API and not self.api_base_url:
            raise ConfigurationError(
                f"API transport requires api_base_url. Pass api_base_url=... or set {API_URL_ENV}."
            )
        if self.mode is TransportMode.CLI and not self.cli_executable_path:
            raise ConfigurationError(
                f"CLI transport requires cli_executable_path. "
                f"Pass cli_executable_path=... or set {CLI_PATH_ENV}."
            )
        if self.timeout <= 0:
            raise ConfigurationError("timeout must be positive")
        if self.cli_timeout is not None and self.cli_timeout <= 0:
            raise ConfigurationError("cli_timeout must be positive or None")
        return self

    @classmethod
    def from_env(
        cls,
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
    ) -> TransportConfig:
        """Resolve arguments against the environment and validate."""
        mode = transport_mode or os.getenv(TRANSPORT_MODE_ENV) or TransportMode.API
        config = cls(
            mode=mode,  # type: ignore[arg-type]
            api_base_url=api_base_url or os.getenv(API_URL_ENV),
            cli_executable_path=cli_executable_path or os.getenv(CLI_PATH_ENV),
            auth_token=auth_token or os.getenv(TOKEN_ENV),
            default_headers=default_headers or {},
            timeout=timeout or DEFAULT_TIMEOUT,
            cli_timeout=cli_timeout,
            cli_cwd=cli_cwd,
            cli_env=cli_env or {},
        )
        return config.validate()


@dataclass(frozen=True, slots=True)
class RequestOptions:
    """Per-call overrides. Applies to a single call only."""

    transport_mode: TransportMode | None = None
    headers: Mapping[str, str] | None = None
    timeout: float | None = None

    def __post_init__(self) -> None:
        if self.transport_mode is not None:
            object.__setattr__(
                self, "transport_mode", TransportMode.coerce(self.transport_mode)
            )


RequestOptionsLike = RequestOptions | Mapping[str, object] | None


def coerce_options(options: RequestOptionsLike) -> RequestOptions:
    """Accept a RequestOptions, a plain mapping of its fields, or None."""
    if options is None:
        return RequestOptions()
    if isinstance(options, RequestOptions):
        return options
    try:
        return RequestOptions(**options)  # type: ignore[arg-type]
    except TypeError as exc:
        raise ConfigurationError(f"Invalid request options: {exc}") from exc


__all__ = [
    "DEFAULT_TIMEOUT",
    "DEFAULT_CLI_TIMEOUT",
    "DEFAULT_RATE_LIMIT_WAIT",
    "MAX_RATE_LIMIT_WAIT",
    "TOKEN_ENV",
    "API_URL_ENV",
    "CLI_PATH_ENV",
    "TRANSPORT_MODE_ENV",
    "TransportMode",
    "TransportConfig",
    "RequestOptions",
    "RequestOptionsLike",
    "coerce_options",
]
