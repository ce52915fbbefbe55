"""
Core primitives of the X-Pay client.
"""

from .client import XPayClient
from .config import ClientConfig, ClientParameters, load_client_config
from .currencies import (
    PAYMENT_METHOD_CURRENCIES,
    SUPPORTED_CURRENCIES,
    CurrencyInfo,
    PaymentMethodCurrency,
    default_currency,
    format_amount,
    from_smallest_unit,
    get_currency,
    supported_currencies,
    to_smallest_unit,
    validate_currency,
)
from .customers import CustomersAPI
from .environment import ClientEnvironment, build_environment, detect_environment, load_env_file
from .errors import (
    ConfigError,
    CryptoUnavailableError,
    HTTPError,
    InvalidCurrencyError,
    InvalidPaymentMethodError,
    MissingCredentialError,
    NetworkError,
    PollingTimeoutError,
    RequestTimeoutError,
    XPayError,
)
from .models import (
    DEFAULT_FINAL_STATUSES,
    APIResponse,
    Customer,
    Payment,
    PaymentMethodOption,
    PaymentMethods,
    PaymentStatus,
    WebhookEndpoint,
)
from .payments import PaymentsAPI
from .polling import poll_status
from .signatures import compute_signature, timing_safe_equal, verify_signature
from .transport import SDK_VERSION, HTTPTransport
from .webhooks import WebhooksAPI

__all__ = [
    "APIResponse",
    "ClientConfig",
    "ClientEnvironment",
    "ClientParameters",
    "ConfigError",
    "CryptoUnavailableError",
    "CurrencyInfo",
    "Customer",
    "CustomersAPI",
    "DEFAULT_FINAL_STATUSES",
    "HTTPError",
    "HTTPTransport",
    "InvalidCurrencyError",
    "InvalidPaymentMethodError",
    "MissingCredentialError",
    "NetworkError",
    "PAYMENT_METHOD_CURRENCIES",
    "Payment",
    "PaymentMethodCurrency",
    "PaymentMethodOption",
    "PaymentMethods",
    "PaymentStatus",
    "PaymentsAPI",
    "PollingTimeoutError",
    "RequestTimeoutError",
    "SDK_VERSION",
    "SUPPORTED_CURRENCIES",
    "WebhookEndpoint",
    "WebhooksAPI",
    "XPayClient",
    "XPayError",
    "build_environment",
    "compute_signature",
    "default_currency",
    "detect_environment",
    "format_amount",
    "from_smallest_unit",
    "get_currency",
    "load_client_config",
    "load_env_file",
    "poll_status",
    "supported_currencies",
    "timing_safe_equal",
    "to_smallest_unit",
    "validate_currency",
    "verify_signature",
]
