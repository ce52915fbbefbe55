"""
Static currency and payment-method tables plus amount conversion helpers.

Amounts are handled as :class:`~decimal.Decimal` so conversions between major
and smallest units never pick up binary floating point noise.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from types import MappingProxyType
from typing import Mapping, Tuple, Union

from .errors import InvalidCurrencyError, InvalidPaymentMethodError

__all__ = [
    "CurrencyInfo",
    "FALLBACK_CURRENCY",
    "PAYMENT_METHOD_CURRENCIES",
    "PaymentMethodCurrency",
    "SUPPORTED_CURRENCIES",
    "default_currency",
    "format_amount",
    "from_smallest_unit",
    "get_currency",
    "supported_currencies",
    "to_smallest_unit",
    "validate_currency",
]

AmountLike = Union[Decimal, int, float, str]

FALLBACK_CURRENCY = "USD"


@dataclass(frozen=True)
class CurrencyInfo:
    code: str
    name: str
    symbol: str
    decimal_places: int
    smallest_unit_name: str

    @property
    def scale(self) -> Decimal:
        return Decimal(10) ** self.decimal_places

    @property
    def quantum(self) -> Decimal:
        return Decimal(1).scaleb(-self.decimal_places)


@dataclass(frozen=True)
class PaymentMethodCurrency:
    payment_method: str
    supported_currencies: Tuple[str, ...]
    default_currency: str
    regions: Tuple[str, ...]

    def __post_init__(self) -> None:
        if self.default_currency not in self.supported_currencies:
            raise ValueError(
                f"Default currency {self.default_currency} of {self.payment_method} "
                "is not one of its supported currencies"
            )


def _currencies(*infos: CurrencyInfo) -> Mapping[str, CurrencyInfo]:
    return MappingProxyType({info.code: info for info in infos})


def _methods(*entries: PaymentMethodCurrency) -> Mapping[str, PaymentMethodCurrency]:
    return MappingProxyType({entry.payment_method: entry for entry in entries})


SUPPORTED_CURRENCIES: Mapping[str, CurrencyInfo] = _currencies(
    CurrencyInfo("USD", "US Dollar", "$", 2, "cents"),
    CurrencyInfo("LRD", "Liberian Dollar", "L$", 2, "cents"),
    CurrencyInfo("EUR", "Euro", "€", 2, "cents"),
    CurrencyInfo("GBP", "British Pound", "£", 2, "pence"),
    CurrencyInfo("GHS", "Ghanaian Cedi", "₵", 2, "pesewas"),
    CurrencyInfo("NGN", "Nigerian Naira", "₦", 2, "kobo"),
    CurrencyInfo("UGX", "Ugandan Shilling", "USh", 0, "shillings"),
    CurrencyInfo("RWF", "Rwandan Franc", "FRw", 0, "francs"),
    CurrencyInfo("XOF", "West African CFA Franc", "CFA", 0, "francs"),
)

_WALLET_CURRENCIES = ("USD", "LRD", "NGN", "UGX", "RWF", "GHS")

PAYMENT_METHOD_CURRENCIES: Mapping[str, PaymentMethodCurrency] = _methods(
    PaymentMethodCurrency(
        "stripe",
        ("USD", "EUR", "GBP", "GHS", "NGN", "UGX", "RWF"),
        "USD",
        ("US", "EU", "GB", "GH", "NG", "UG", "RW", "LR"),
    ),
    PaymentMethodCurrency("momo", ("GHS", "USD"), "GHS", ("GH",)),
    PaymentMethodCurrency("momo_liberia", ("USD", "LRD"), "USD", ("LR",)),
    PaymentMethodCurrency("momo_nigeria", ("NGN",), "NGN", ("NG",)),
    PaymentMethodCurrency("momo_uganda", ("UGX",), "UGX", ("UG",)),
    PaymentMethodCurrency("momo_rwanda", ("RWF",), "RWF", ("RW",)),
    PaymentMethodCurrency("orange", ("USD", "LRD", "XOF"), "USD", ("LR", "CI", "SN", "ML")),
    PaymentMethodCurrency("xpay_wallet", _WALLET_CURRENCIES, "USD", ("GLOBAL",)),
    PaymentMethodCurrency("wallet", _WALLET_CURRENCIES, "USD", ("GLOBAL",)),
)


def get_currency(code: str) -> CurrencyInfo:
    try:
        return SUPPORTED_CURRENCIES[code]
    except KeyError:
        raise InvalidCurrencyError(
            f"Unsupported currency: {code}",
            currency=code,
            supported_currencies=tuple(SUPPORTED_CURRENCIES),
        ) from None


def supported_currencies(payment_method: str) -> Tuple[str, ...]:
    """Currencies accepted by ``payment_method``; empty for unknown methods."""
    entry = PAYMENT_METHOD_CURRENCIES.get(payment_method)
    return entry.supported_currencies if entry is not None else ()


def default_currency(payment_method: str) -> str:
    entry = PAYMENT_METHOD_CURRENCIES.get(payment_method)
    return entry.default_currency if entry is not None else FALLBACK_CURRENCY


def validate_currency(payment_method: str, currency: str) -> None:
    """
    Check that ``payment_method`` is known and accepts ``currency``.

    Raises :class:`InvalidPaymentMethodError` or :class:`InvalidCurrencyError`;
    the latter lists every currency the method supports.
    """
    entry = PAYMENT_METHOD_CURRENCIES.get(payment_method)
    if entry is None:
        raise InvalidPaymentMethodError(payment_method)

    if currency not in entry.supported_currencies:
        supported = ", ".join(entry.supported_currencies)
        raise InvalidCurrencyError(
            f"Currency {currency} is not supported for payment method "
            f"{payment_method}. Supported currencies: {supported}",
            currency=currency,
            payment_method=payment_method,
            supported_currencies=entry.supported_currencies,
        )


def _to_decimal(amount: AmountLike) -> Decimal:
    if isinstance(amount, Decimal):
        return amount
    if isinstance(amount, bool):
        raise TypeError("Amount must be numeric, not bool")
    try:
        # str() keeps floats such as 1.005 exactly as written
        value = Decimal(str(amount)) if isinstance(amount, float) else Decimal(amount)
    except InvalidOperation as exc:
        raise ValueError(f"Amount must be a valid decimal number, got '{amount}'") from exc
    if not value.is_finite():
        raise ValueError(f"Amount must be finite, got '{amount}'")
    return value


def to_smallest_unit(amount: AmountLike, currency: str) -> int:
    """
    Convert a major-unit amount into the currency's smallest unit.

    ``round(amount * 10 ** decimal_places)`` with ties rounded half away from
    zero: ``to_smallest_unit("25.505", "USD") == 2551``.
    """
    info = get_currency(currency)
    scaled = _to_decimal(amount) * info.scale
    return int(scaled.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def from_smallest_unit(amount: int, currency: str) -> Decimal:
    """Inverse of :func:`to_smallest_unit`; ``2550`` USD becomes ``Decimal("25.50")``."""
    info = get_currency(currency)
    return (Decimal(int(amount)) / info.scale).quantize(info.quantum)


def format_amount(
    amount: AmountLike,
    currency: str,
    from_smallest: bool = True,
) -> str:
    """
    Render ``amount`` with the currency symbol, fixed to its decimal places.

    ``amount`` is read as smallest units unless ``from_smallest`` is false.
    """
    info = get_currency(currency)
    value = _to_decimal(amount)
    if from_smallest:
        value = value / info.scale
    value = value.quantize(info.quantum, rounding=ROUND_HALF_UP)
    return f"{info.symbol}{value:.{info.decimal_places}f}"
