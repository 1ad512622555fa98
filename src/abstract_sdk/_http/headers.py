"""Request header construction."""

from __future__ import annotations

from collections.abc import Mapping

API_VERSION_HEADER = "Abstract-Api-Version"


def injected_headers(
    token: str | None,
    operation_headers: Mapping[str, str] | None = None,
) -> dict[str, str]:
    """Headers the transport adds on its own: auth, content negotiation and
    whatever the operation pins (e.g. the API version)."""
    headers = {
        "accept": "application/json",
        "content-type": "application/json",
    }
    if token:
        headers["authorization"] = f"Bearer {token}"
    if operation_headers:
        headers.update(operation_headers)
    return headers


def merge_headers(
    injected: Mapping[str, str] | None,
    defaults: Mapping[str, str] | None,
    per_call: Mapping[str, str] | None,
) -> dict[str, str]:
    """Merge header layers into a new dict, later layers winning.

    Precedence: per-call > client defaults > injected. Names are compared
    case-insensitively and returned lower-cased. None of the inputs is
    modified.
    """
    merged: dict[str, str] = {}
    for layer in (injected, defaults, per_call):
        if not layer:
            continue
        for key, value in layer.items():
            merged[key.lower()] = value
    return merged


__all__ = ["API_VERSION_HEADER", "injected_headers", "merge_headers"]
