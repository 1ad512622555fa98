"""Webhooks API client (API transport only)."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from . import signature
from ._core.config import RequestOptionsLike
from ._core.dispatcher import LocalAction
from ._core.operation import OperationDescriptor
from ._core.resource import BaseResource
from ._internal.blocking import run_blocking
from .models import NewWebhook, payload_body

WebhookInput = NewWebhook | Mapping[str, Any]


def _webhooks_path(organization_id: str, *rest: str) -> tuple[str, ...]:
    return ("organizations", organization_id, "webhooks", *rest)


class BaseWebhooksClient(BaseResource):
    async def _list(self, organization_id: str, options: RequestOptionsLike = None) -> Any:
        return await self._request(
            OperationDescriptor("GET", _webhooks_path(organization_id)), options
        )

    async def _info(
        self, organization_id: str, webhook_id: str, options: RequestOptionsLike = None
    ) -> Any:
        return await self._request(
            OperationDescriptor("GET", _webhooks_path(organization_id, webhook_id)), options
        )

    async def _events(self, organization_id: str, options: RequestOptionsLike = None) -> Any:
        return await self._request(
            OperationDescriptor("GET", _webhooks_path(organization_id, "events")), options
        )

    async def _subscribe(
        self, organization_id: str, webhook: WebhookInput, options: RequestOptionsLike
    ) -> Any:
        # Create and update share the subscribe endpoint; an id in the
        # subscription makes it an update.
        return await self._request(
            OperationDescriptor(
                "POST",
                _webhooks_path(organization_id, "subscribe"),
                body={"subscription": payload_body(NewWebhook, webhook)},
            ),
            options,
        )

    async def _create(
        self, organization_id: str, webhook: WebhookInput, options: RequestOptionsLike = None
    ) -> Any:
        return await self._subscribe(organization_id, webhook, options)

    async def _update(
        self, organization_id: str, webhook: WebhookInput, options: RequestOptionsLike = None
    ) -> Any:
        return await self._subscribe(organization_id, webhook, options)

    async def _delete(
        self, organization_id: str, webhook_id: str, options: RequestOptionsLike = None
    ) -> None:
        await self._request(
            OperationDescriptor(
                "DELETE", _webhooks_path(organization_id, webhook_id, "unsubscribe")
            ),
            options,
        )

    async def _ping(
        self, organization_id: str, webhook_id: str, options: RequestOptionsLike = None
    ) -> None:
        await self._request(
            OperationDescriptor("POST", _webhooks_path(organization_id, webhook_id, "ping")),
            options,
        )

    async def _deliveries(
        self, organization_id: str, webhook_id: str, options: RequestOptionsLike = None
    ) -> Any:
        return await self._request(
            OperationDescriptor(
                "GET", _webhooks_path(organization_id, webhook_id, "deliveries")
            ),
            options,
        )

    async def _redeliver(
        self,
        organization_id: str,
        webhook_id: str,
        delivery_id: str,
        options: RequestOptionsLike = None,
    ) -> None:
        await self._request(
            OperationDescriptor(
                "POST",
                _webhooks_path(
                    organization_id, webhook_id, "deliveries", delivery_id, "redeliver"
                ),
            ),
            options,
        )

    async def _verify(self, payload: Any, expected_signature: str, signing_key: str) -> bool:
        async def run() -> bool:
            return signature.verify(payload, expected_signature, signing_key)

        return await self._dispatcher.run_local(LocalAction(run))


class WebhooksClient(BaseWebhooksClient):
    def list(self, organization_id: str, options: RequestOptionsLike = None) -> Any:
        return run_blocking(self._list(organization_id, options))

    def info(
        self, organization_id: str, webhook_id: str, options: RequestOptionsLike = None
    ) -> Any:
        return run_blocking(self._info(organization_id, webhook_id, options))

    def events(self, organization_id: str, options: RequestOptionsLike = None) -> Any:
        return run_blocking(self._events(organization_id, options))

    def create(
        self, organization_id: str, webhook: WebhookInput, options: RequestOptionsLike = None
    ) -> Any:
        return run_blocking(self._create(organization_id, webhook, options))

    def update(
        self, organization_id: str, webhook: WebhookInput, options: RequestOptionsLike = None
    ) -> Any:
        return run_blocking(self._update(organization_id, webhook, options))

    def delete(
        self, organization_id: str, webhook_id: str, options: RequestOptionsLike = None
    ) -> None:
        return run_blocking(self._delete(organization_id, webhook_id, options))

    def ping(
        self, organization_id: str, webhook_id: str, options: RequestOptionsLike = None
    ) -> None:
        return run_blocking(self._ping(organization_id, webhook_id, options))

    def deliveries(
        self, organization_id: str, webhook_id: str, options: RequestOptionsLike = None
    ) -> Any:
        return run_blocking(self._deliveries(organization_id, webhook_id, options))

    def redeliver(
        self,
        organization_id: str,
        webhook_id: str,
        delivery_id: str,
        options: RequestOptionsLike = None,
    ) -> None:
        return run_blocking(
            self._redeliver(organization_id, webhook_id, delivery_id, options)
        )

    def verify(self, payload: Any, expected_signature: str, signing_key: str) -> bool:
        return run_blocking(self._verify(payload, expected_signature, signing_key))


class AsyncWebhooksClient(BaseWebhooksClient):
    async def list(self, organization_id: str, options: RequestOptionsLike = None) -> Any:
        return await self._list(organization_id, options)

    async def info(
        self, organization_id: str, webhook_id: str, options: RequestOptionsLike = None
    ) -> Any:
        return await self._info(organization_id, webhook_id, options)

    async def events(self, organization_id: str, options: RequestOptionsLike = None) -> Any:
        return await self._events(organization_id, options)

    async def create(
        self, organization_id: str, webhook: WebhookInput, options: RequestOptionsLike = None
    ) -> Any:
        return await self._create(organization_id, webhook, options)

    async def update(
        self, organization_id: str, webhook: WebhookInput, options: RequestOptionsLike = None
    ) -> Any:
        return await self._update(organization_id, webhook, options)

    async def delete(
        self, organization_id: str, webhook_id: str, options: RequestOptionsLike = None
    ) -> None:
        return await self._delete(organization_id, webhook_id, options)

    async def ping(
        self, organization_id: str, webhook_id: str, options: RequestOptionsLike = None
    ) -> None:
        return await self._ping(organization_id, webhook_id, options)

    async def deliveries(
        self, organization_id: str, webhook_id: str, options: RequestOptionsLike = None
    ) -> Any:
        return await self._deliveries(organization_id, webhook_id, options)

    async def redeliver(
        self,
        organization_id: str,
        webhook_id: str,
        delivery_id: str,
        options: RequestOptionsLike = None,
    ) -> None:
        return await self._redeliver(organization_id, webhook_id, delivery_id, options)

    async def verify(self, payload: Any, expected_signature: str, signing_key: str) -> bool:
        return await self._verify(payload, expected_signature, signing_key)


__all__ = ["BaseWebhooksClient", "WebhooksClient", "AsyncWebhooksClient"]
