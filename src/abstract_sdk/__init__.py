"""Python SDK for the Abstract design-file API and CLI."""

from ._core.config import RequestOptions, TransportConfig, TransportMode
from ._core.envelope import RateLimitInfo, ResponseEnvelope, ResponseMeta
from .client import AbstractClient, AsyncAbstractClient
from .errors import (
    AbstractSDKError,
    ConfigurationError,
    HTTPStatusError,
    MalformedResponse,
    NetworkError,
    ProcessExitError,
    ProcessSpawnError,
    ProcessTimeoutError,
    RateLimited,
    SignatureMismatch,
)
from .models import NewProject, NewWebhook, ShareInput
from .signature import compute_signature, require_valid_signature, verify

__version__ = "0.1.0"

__all__ = [
    "AbstractClient",
    "AsyncAbstractClient",
    "TransportConfig",
    "TransportMode",
    "RequestOptions",
    "ResponseEnvelope",
    "ResponseMeta",
    "RateLimitInfo",
    "NewProject",
    "NewWebhook",
    "ShareInput",
    "compute_signature",
    "verify",
    "require_valid_signature",
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
