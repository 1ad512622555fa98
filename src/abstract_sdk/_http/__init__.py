"""HTTP transport for the Abstract API."""

from .headers import API_VERSION_HEADER, injected_headers, merge_headers
from .transport import AsyncTransport, BaseTransport, BlockingTransport, parse_retry_after

__all__ = [
    "API_VERSION_HEADER",
    "injected_headers",
    "merge_headers",
    "BaseTransport",
    "BlockingTransport",
    "AsyncTransport",
    "parse_retry_after",
]
