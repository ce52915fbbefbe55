"""
Top-level X-Pay client tying the transport and resources together.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import requests

from .config import ClientConfig
from .customers import CustomersAPI
from .models import PaymentMethods
from .payments import PaymentsAPI
from .transport import HTTPTransport
from .webhooks import WebhooksAPI

__all__ = ["XPayClient"]

logger = logging.getLogger(__name__)


class XPayClient:
    """
    Entry point for the X-Pay API.

    One instance owns a single HTTP session; the ``payments``, ``customers``
    and ``webhooks`` attributes share it.
    """

    def __init__(
        self,
        config: ClientConfig,
        *,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.config = config
        self.transport = HTTPTransport(config, session=session)
        self.payments = PaymentsAPI(self.transport, config)
        self.customers = CustomersAPI(self.transport, config)
        self.webhooks = WebhooksAPI(self.transport, config)
        logger.debug(
            "Client ready for merchant %s (%s)", config.merchant_id, config.environment
        )

    @property
    def merchant_id(self) -> str:
        return self.config.merchant_id

    def ping(self) -> Dict[str, Any]:
        """Check connectivity and credentials against ``/v1/healthz``."""
        response = self.transport.get("/v1/healthz")
        return {
            "success": response.success,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    def get_payment_methods(self, country: Optional[str] = None) -> PaymentMethods:
        response = self.payments.get_payment_methods(country)
        return PaymentMethods.from_mapping(response.data or {})

    def close(self) -> None:
        self.transport.session.close()

    def __enter__(self) -> "XPayClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
