"""Share links API client (API transport only)."""

from __future__ import annotations

import urllib.parse
from collections.abc import Mapping
from typing import Any

from ._core.config import RequestOptionsLike
from ._core.operation import OperationDescriptor
from ._core.resource import BaseResource
from ._http.headers import API_VERSION_HEADER
from ._internal.blocking import run_blocking
from .models import ShareInput, payload_body

HEADERS = {API_VERSION_HEADER: "13"}

ShareInputLike = ShareInput | Mapping[str, Any]


def infer_share_id(share: str) -> str:
    """Accept a share id or a share URL such as ``https://share.goabstract.com/<id>``."""
    if share.startswith(("http://", "https://")):
        path = urllib.parse.urlparse(share).path.rstrip("/")
        return path.rsplit("/", 1)[-1]
    return share


class BaseSharesClient(BaseResource):
    async def _create(
        self,
        organization_id: str,
        share: ShareInputLike,
        options: RequestOptionsLike = None,
    ) -> Any:
        body = {"organizationId": organization_id, **payload_body(ShareInput, share)}
        return await self._request(
            OperationDescriptor("POST", ("share_links",), body=body, headers=HEADERS),
            options,
        )

    async def _info(self, share: str, options: RequestOptionsLike = None) -> Any:
        return await self._request(
            OperationDescriptor(
                "GET", ("share_links", infer_share_id(share)), headers=HEADERS
            ),
            options,
        )


class SharesClient(BaseSharesClient):
    def create(
        self,
        organization_id: str,
        share: ShareInputLike,
        options: RequestOptionsLike = None,
    ) -> Any:
        return run_blocking(self._create(organization_id, share, options))

    def info(self, share: str, options: RequestOptionsLike = None) -> Any:
        return run_blocking(self._info(share, options))


class AsyncSharesClient(BaseSharesClient):
    async def create(
        self,
        organization_id: str,
        share: ShareInputLike,
        options: RequestOptionsLike = None,
    ) -> Any:
        return await self._create(organization_id, share, options)

    async def info(self, share: str, options: RequestOptionsLike = None) -> Any:
        return await self._info(share, options)


__all__ = ["infer_share_id", "BaseSharesClient", "SharesClient", "AsyncSharesClient"]
