"""Transport-agnostic description of a single API operation."""

from __future__ import annotations

import urllib.parse
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Literal

Method = Literal["GET", "POST", "PUT", "DELETE"]


@dataclass(frozen=True, slots=True)
class OperationDescriptor:
    """What a resource call wants done.

    The HTTP transport derives a request from ``method``/``path``/``body``/
    ``headers``; the CLI transport only runs ``cli_args``, which the resource
    declares itself. ``cli_args`` is ``None`` for operations the CLI cannot
    express.
    """

    method: Method
    segments: Sequence[str]
    query: Mapping[str, Any] | None = None
    body: Any | None = None
    headers: Mapping[str, str] = field(default_factory=dict)
    cli_args: Sequence[str] | None = None

    @property
    def path(self) -> str:
        path = "/".join(urllib.parse.quote(str(s), safe="") for s in self.segments)
        if self.query:
            params = {k: v for k, v in self.query.items() if v is not None}
            if params:
                path = f"{path}?{urllib.parse.urlencode(params, doseq=True)}"
        return path

    @property
    def has_cli_form(self) -> bool:
        return self.cli_args is not None


__all__ = ["Method", "OperationDescriptor"]
