"""Subprocess transport for the local Abstract CLI."""

from .transport import AsyncCLITransport, BaseCLITransport, BlockingCLITransport

__all__ = ["BaseCLITransport", "BlockingCLITransport", "AsyncCLITransport"]
