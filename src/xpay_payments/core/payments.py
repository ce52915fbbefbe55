"""
Payments resource: creation with currency selection, lookups and polling.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Tuple

from . import currencies
from .config import ClientConfig
from .errors import InvalidPaymentMethodError
from .models import APIResponse, Payment, PaymentMethods
from .polling import DEFAULT_INTERVAL_SECONDS, DEFAULT_MAX_ATTEMPTS, poll_status
from .transport import HTTPTransport

__all__ = ["PaymentsAPI"]

logger = logging.getLogger(__name__)


class PaymentsAPI:
    """
    Merchant-scoped payment endpoints.

    The merchant's payment-method configuration is fetched lazily the first
    time a payment is created without a currency and kept for the lifetime of
    this object.
    """

    def __init__(self, transport: HTTPTransport, config: ClientConfig) -> None:
        self._transport = transport
        self._config = config
        self._payment_methods: Optional[PaymentMethods] = None
        self._payment_methods_lock = threading.Lock()

    def create(self, payment: Mapping[str, Any]) -> APIResponse:
        """
        Create a payment.

        ``payment`` needs ``amount`` and ``payment_method``; when ``currency``
        is missing it is derived from the merchant configuration, falling back
        to the method's static default. The currency is validated before any
        request is sent.
        """
        body: Dict[str, Any] = dict(payment)
        method = body.get("payment_method")
        if not method:
            raise InvalidPaymentMethodError(str(method or ""))
        if not body.get("currency"):
            body["currency"] = self.resolve_currency(method)

        currencies.validate_currency(method, body["currency"])
        logger.info(
            "Creating %s payment of %s %s", method, body.get("amount"), body["currency"]
        )
        return self._transport.post(self._config.merchant_path("payments"), body)

    def retrieve(self, payment_id: str) -> APIResponse:
        return self._transport.get(self._config.merchant_path("payments", payment_id))

    def list(
        self,
        *,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        status: Optional[str] = None,
        customer_id: Optional[str] = None,
        created_after: Optional[str] = None,
        created_before: Optional[str] = None,
    ) -> APIResponse:
        return self._transport.get(
            self._config.merchant_path("payments"),
            params={
                "limit": limit,
                "offset": offset,
                "status": status,
                "customer_id": customer_id,
                "created_after": created_after,
                "created_before": created_before,
            },
        )

    def cancel(self, payment_id: str) -> APIResponse:
        return self._transport.post(
            self._config.merchant_path("payments", payment_id, "cancel")
        )

    def confirm(
        self,
        payment_id: str,
        *,
        payment_method_id: Optional[str] = None,
        return_url: Optional[str] = None,
    ) -> APIResponse:
        """Confirm a payment for methods that need an explicit confirmation step."""
        body = {
            key: value
            for key, value in (
                ("payment_method_id", payment_method_id),
                ("return_url", return_url),
            )
            if value is not None
        }
        return self._transport.post(
            self._config.merchant_path("payments", payment_id, "confirm"),
            body or None,
        )

    def get_payment_methods(self, country: Optional[str] = None) -> APIResponse:
        return self._transport.get(
            self._config.merchant_path("payment-methods"),
            params={"country": country},
        )

    def supported_currencies(self, payment_method: str) -> Tuple[str, ...]:
        return currencies.supported_currencies(payment_method)

    def _cached_payment_methods(self) -> Optional[PaymentMethods]:
        if self._payment_methods is not None:
            return self._payment_methods

        response = self.get_payment_methods()
        if not response.success or not isinstance(response.data, Mapping):
            return None

        fetched = PaymentMethods.from_mapping(response.data)
        with self._payment_methods_lock:
            if self._payment_methods is None:
                self._payment_methods = fetched
            return self._payment_methods

    def resolve_currency(self, payment_method: str) -> str:
        """
        Pick a currency for ``payment_method``.

        Uses the first currency the merchant has enabled for the method, or the
        static default when the configuration is unavailable. Never raises.
        """
        try:
            methods = self._cached_payment_methods()
        except Exception as exc:  # noqa: BLE001
            logger.info(
                "Payment methods unavailable (%s); using default currency for %s",
                exc,
                payment_method,
            )
            methods = None

        option = methods.find(payment_method) if methods is not None else None
        if option is not None and option.currencies:
            return option.currencies[0]
        return currencies.default_currency(payment_method)

    def poll_payment_status(
        self,
        payment_id: str,
        *,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        interval_seconds: float = DEFAULT_INTERVAL_SECONDS,
        final_statuses: Optional[Iterable[str]] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> Payment:
        """
        Wait for an asynchronous payment (MoMo, Orange Money) to settle.

        Raises :class:`~xpay_payments.core.errors.PollingTimeoutError` when the
        payment is still pending after ``max_attempts`` fetches.
        """
        return poll_status(
            self._fetch_payment,
            payment_id,
            max_attempts=max_attempts,
            interval_seconds=interval_seconds,
            final_statuses=final_statuses,
            sleep=sleep,
        )

    def _fetch_payment(self, payment_id: str) -> Payment:
        return Payment.from_mapping(self.retrieve(payment_id).data)
