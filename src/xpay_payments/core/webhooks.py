"""
Webhook endpoint management.
"""

from __future__ import annotations

from typing import Any, Mapping

from .config import ClientConfig
from .models import APIResponse
from .signatures import verify_signature
from .transport import HTTPTransport

__all__ = ["WebhooksAPI"]


class WebhooksAPI:
    def __init__(self, transport: HTTPTransport, config: ClientConfig) -> None:
        self._transport = transport
        self._config = config

    def create(self, webhook: Mapping[str, Any]) -> APIResponse:
        """
        Register a webhook endpoint from ``{"url", "events", "description"?}``.

        The response carries the endpoint ``secret`` exactly once; keep it to
        verify incoming deliveries.
        """
        return self._transport.post(self._config.merchant_path("webhooks"), webhook)

    def list(self) -> APIResponse:
        return self._transport.get(self._config.merchant_path("webhooks"))

    def retrieve(self, webhook_id: str) -> APIResponse:
        return self._transport.get(self._config.merchant_path("webhooks", webhook_id))

    def update(self, webhook_id: str, changes: Mapping[str, Any]) -> APIResponse:
        return self._transport.put(
            self._config.merchant_path("webhooks", webhook_id), changes
        )

    def delete(self, webhook_id: str) -> APIResponse:
        return self._transport.delete(self._config.merchant_path("webhooks", webhook_id))

    def test(self, webhook_id: str) -> APIResponse:
        """Ask the API to send a test event to the endpoint."""
        return self._transport.post(
            self._config.merchant_path("webhooks", webhook_id, "test")
        )

    @staticmethod
    def verify_signature(payload: str, signature: str, secret: str) -> bool:
        return verify_signature(payload, signature, secret)
