"""
Customers resource.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from .config import ClientConfig
from .models import APIResponse
from .transport import HTTPTransport

__all__ = ["CustomersAPI"]


class CustomersAPI:
    def __init__(self, transport: HTTPTransport, config: ClientConfig) -> None:
        self._transport = transport
        self._config = config

    def create(self, customer: Mapping[str, Any]) -> APIResponse:
        """Create a customer; ``customer`` needs at least ``email`` and ``name``."""
        return self._transport.post(self._config.merchant_path("customers"), customer)

    def retrieve(self, customer_id: str) -> APIResponse:
        return self._transport.get(self._config.merchant_path("customers", customer_id))

    def update(self, customer_id: str, changes: Mapping[str, Any]) -> APIResponse:
        return self._transport.put(
            self._config.merchant_path("customers", customer_id), changes
        )

    def delete(self, customer_id: str) -> APIResponse:
        return self._transport.delete(self._config.merchant_path("customers", customer_id))

    def list(
        self,
        *,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        email: Optional[str] = None,
        name: Optional[str] = None,
        created_after: Optional[str] = None,
        created_before: Optional[str] = None,
    ) -> APIResponse:
        return self._transport.get(
            self._config.merchant_path("customers"),
            params={
                "limit": limit,
                "offset": offset,
                "email": email,
                "name": name,
                "created_after": created_after,
                "created_before": created_before,
            },
        )
