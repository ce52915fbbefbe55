"""
Public facade for the X-Pay payments client.

The most useful pieces are re-exported here so integrators can
``from xpay_payments import ...`` without navigating the package.
"""

from .api import create_client, verify_webhook
from .core import (
    DEFAULT_FINAL_STATUSES,
    PAYMENT_METHOD_CURRENCIES,
    SDK_VERSION,
    SUPPORTED_CURRENCIES,
    APIResponse,
    ClientConfig,
    ClientParameters,
    ConfigError,
    CryptoUnavailableError,
    CurrencyInfo,
    Customer,
    HTTPError,
    InvalidCurrencyError,
    InvalidPaymentMethodError,
    MissingCredentialError,
    NetworkError,
    Payment,
    PaymentMethodCurrency,
    PaymentMethods,
    PaymentStatus,
    PollingTimeoutError,
    RequestTimeoutError,
    WebhookEndpoint,
    XPayClient,
    XPayError,
    compute_signature,
    default_currency,
    format_amount,
    from_smallest_unit,
    load_client_config,
    poll_status,
    supported_currencies,
    to_smallest_unit,
    validate_currency,
    verify_signature,
)

__version__ = SDK_VERSION

__all__ = (
    "APIResponse",
    "ClientConfig",
    "ClientParameters",
    "ConfigError",
    "CryptoUnavailableError",
    "CurrencyInfo",
    "Customer",
    "DEFAULT_FINAL_STATUSES",
    "HTTPError",
    "InvalidCurrencyError",
    "InvalidPaymentMethodError",
    "MissingCredentialError",
    "NetworkError",
    "PAYMENT_METHOD_CURRENCIES",
    "Payment",
    "PaymentMethodCurrency",
    "PaymentMethods",
    "PaymentStatus",
    "PollingTimeoutError",
    "RequestTimeoutError",
    "SUPPORTED_CURRENCIES",
    "WebhookEndpoint",
    "XPayClient",
    "XPayError",
    "compute_signature",
    "create_client",
    "default_currency",
    "format_amount",
    "from_smallest_unit",
    "load_client_config",
    "poll_status",
    "supported_currencies",
    "to_smallest_unit",
    "validate_currency",
    "verify_signature",
    "verify_webhook",
)
