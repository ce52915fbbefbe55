"""
Exception hierarchy shared by every part of the X-Pay client.

All errors derive from :class:`XPayError` so callers can branch on ``code``
without caring which layer raised it.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence

__all__ = [
    "ConfigError",
    "CryptoUnavailableError",
    "HTTPError",
    "InvalidCurrencyError",
    "InvalidPaymentMethodError",
    "MissingCredentialError",
    "NetworkError",
    "PollingTimeoutError",
    "RequestTimeoutError",
    "XPayError",
]


class XPayError(Exception):
    """Base error carrying a machine readable ``code`` and optional HTTP status."""

    default_code = "XPAY_ERROR"
    retryable = False

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        status: Optional[int] = None,
        details: Any = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.status = status
        self.details = details

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(message={self.message!r}, code={self.code!r}, "
            f"status={self.status!r})"
        )


class ConfigError(XPayError):
    """Raised when the supplied configuration is invalid."""

    default_code = "CONFIG_ERROR"


class MissingCredentialError(ConfigError):
    """A required credential (API key, merchant id) was not provided."""


class InvalidPaymentMethodError(XPayError):
    default_code = "INVALID_PAYMENT_METHOD"

    def __init__(self, payment_method: str) -> None:
        super().__init__(f"Unsupported payment method: {payment_method}")
        self.payment_method = payment_method


class InvalidCurrencyError(XPayError):
    """
    The currency is unknown, or not accepted by the chosen payment method.

    ``supported_currencies`` lists what the method does accept so the caller
    can correct the request without another lookup.
    """

    default_code = "INVALID_CURRENCY"

    def __init__(
        self,
        message: str,
        *,
        currency: str,
        payment_method: Optional[str] = None,
        supported_currencies: Sequence[str] = (),
    ) -> None:
        super().__init__(
            message,
            details={
                "currency": currency,
                "payment_method": payment_method,
                "supported_currencies": list(supported_currencies),
            },
        )
        self.currency = currency
        self.payment_method = payment_method
        self.supported_currencies = tuple(supported_currencies)


class HTTPError(XPayError):
    """The API answered with a non-2xx status."""

    default_code = "HTTP_ERROR"


class RequestTimeoutError(XPayError):
    default_code = "TIMEOUT"
    retryable = True

    def __init__(self, message: str = "Request timeout", details: Any = None) -> None:
        super().__init__(message, status=408, details=details)


class NetworkError(XPayError):
    default_code = "NETWORK_ERROR"


class PollingTimeoutError(XPayError):
    """
    The polled resource never reached a terminal status.

    This is not a payment failure: the outcome is still unknown and the caller
    should check again later or wait for a webhook.
    """

    default_code = "POLLING_TIMEOUT"
    retryable = True

    def __init__(
        self,
        resource_id: str,
        attempts: int,
        last_status: Optional[str] = None,
    ) -> None:
        super().__init__(
            "Payment status polling timeout",
            status=408,
            details={
                "resource_id": resource_id,
                "attempts": attempts,
                "last_status": last_status,
            },
        )
        self.resource_id = resource_id
        self.attempts = attempts
        self.last_status = last_status


class CryptoUnavailableError(XPayError):
    default_code = "CRYPTO_UNAVAILABLE"
