#!/usr/bin/env python3
"""
Example verifying a webhook delivery signature.

Runs entirely locally: signs a sample payload with a key, then checks a good
and a tampered signature with both clients.

Usage:
    python examples/webhook_signature.py
"""

import asyncio

from abstract_sdk import AbstractClient, AsyncAbstractClient, compute_signature

SIGNING_KEY = "example-signing-key"
PAYLOAD = {"event": "project.created", "data": {"id": "p1", "name": "Design System"}}


def sync_demo() -> None:
    signature = compute_signature(PAYLOAD, SIGNING_KEY)
    print("signature:", signature)

    with AbstractClient(api_base_url="https://api.example.invalid") as client:
        print("sync valid:", client.webhooks.verify(PAYLOAD, signature, SIGNING_KEY))
        tampered = ("0" if signature[0] != "0" else "1") + signature[1:]
        print("sync tampered:", client.webhooks.verify(PAYLOAD, tampered, SIGNING_KEY))


async def async_demo() -> None:
    signature = compute_signature(PAYLOAD, SIGNING_KEY)

    async with AsyncAbstractClient(api_base_url="https://api.example.invalid") as client:
        print("async valid:", await client.webhooks.verify(PAYLOAD, signature, SIGNING_KEY))
        print("async wrong key:", await client.webhooks.verify(PAYLOAD, signature, "other"))


if __name__ == "__main__":
    sync_demo()
    asyncio.run(async_demo())
