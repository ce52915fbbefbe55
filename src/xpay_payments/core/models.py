"""
Typed views over the JSON payloads returned by the X-Pay API.

Each model keeps the original mapping in ``raw`` so fields added upstream are
never lost.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Mapping, Optional, Tuple

__all__ = [
    "APIResponse",
    "Customer",
    "DEFAULT_FINAL_STATUSES",
    "Payment",
    "PaymentMethodOption",
    "PaymentMethods",
    "PaymentStatus",
    "WebhookEndpoint",
]


class PaymentStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    CANCELLED = "cancelled"


DEFAULT_FINAL_STATUSES: FrozenSet[str] = frozenset(
    {
        PaymentStatus.SUCCEEDED.value,
        PaymentStatus.COMPLETED.value,
        PaymentStatus.FAILED.value,
        PaymentStatus.CANCELLED.value,
    }
)


@dataclass(frozen=True)
class APIResponse:
    """Normalised ``{success, data, message, error}`` envelope."""

    success: bool
    data: Any
    message: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def from_body(cls, body: Any) -> "APIResponse":
        if isinstance(body, Mapping) and "success" in body and "data" in body:
            return cls(
                success=bool(body["success"]),
                data=body["data"],
                message=body.get("message"),
                error=body.get("error"),
            )
        return cls(success=True, data=body)


@dataclass(frozen=True)
class Payment:
    id: str
    status: str
    amount: str
    currency: str
    payment_method: str
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    description: Optional[str] = None
    customer_id: Optional[str] = None
    client_secret: Optional[str] = None
    reference_id: Optional[str] = None
    transaction_url: Optional[str] = None
    instructions: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)
    raw: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @property
    def is_final(self) -> bool:
        return self.status in DEFAULT_FINAL_STATUSES

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "Payment":
        return cls(
            id=str(payload["id"]),
            status=str(payload.get("status", "")),
            amount=str(payload.get("amount", "")),
            currency=str(payload.get("currency", "")),
            payment_method=str(payload.get("payment_method", "")),
            created_at=payload.get("created_at"),
            updated_at=payload.get("updated_at"),
            description=payload.get("description"),
            customer_id=payload.get("customer_id"),
            client_secret=payload.get("client_secret"),
            reference_id=payload.get("reference_id"),
            transaction_url=payload.get("transaction_url"),
            instructions=payload.get("instructions"),
            metadata=dict(payload.get("metadata") or {}),
            raw=dict(payload),
        )


@dataclass(frozen=True)
class PaymentMethodOption:
    type: str
    display_name: str = ""
    currencies: Tuple[str, ...] = ()
    description: str = ""

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "PaymentMethodOption":
        return cls(
            type=str(payload["type"]),
            display_name=payload.get("display_name") or "",
            currencies=tuple(payload.get("currencies") or ()),
            description=payload.get("description") or "",
        )


@dataclass(frozen=True)
class PaymentMethods:
    """Payment methods enabled for a merchant, as reported by the API."""

    available_methods: Tuple[PaymentMethodOption, ...]
    country: Optional[str] = None
    default_currency: Optional[str] = None
    stripe_publishable_key: Optional[str] = None
    raw: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    def find(self, payment_method: str) -> Optional[PaymentMethodOption]:
        for option in self.available_methods:
            if option.type == payment_method:
                return option
        return None

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "PaymentMethods":
        stripe_config = payload.get("stripe_config") or {}
        return cls(
            available_methods=tuple(
                PaymentMethodOption.from_mapping(item)
                for item in payload.get("available_methods") or ()
            ),
            country=payload.get("country"),
            default_currency=payload.get("default_currency"),
            stripe_publishable_key=stripe_config.get("publishable_key"),
            raw=dict(payload),
        )


@dataclass(frozen=True)
class Customer:
    id: str
    email: str
    name: str
    phone: Optional[str] = None
    description: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)
    raw: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "Customer":
        return cls(
            id=str(payload["id"]),
            email=str(payload.get("email", "")),
            name=str(payload.get("name", "")),
            phone=payload.get("phone"),
            description=payload.get("description"),
            created_at=payload.get("created_at"),
            updated_at=payload.get("updated_at"),
            metadata=dict(payload.get("metadata") or {}),
            raw=dict(payload),
        )


@dataclass(frozen=True)
class WebhookEndpoint:
    """
    A registered webhook endpoint.

    ``secret`` is only returned when the endpoint is created; store it, it is
    what :func:`~xpay_payments.core.signatures.verify_signature` needs.
    """

    id: str
    url: str
    events: List[str] = field(default_factory=list)
    environment: Optional[str] = None
    is_active: bool = True
    secret: Optional[str] = field(default=None, repr=False)
    created_at: Optional[str] = None
    raw: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "WebhookEndpoint":
        return cls(
            id=str(payload["id"]),
            url=str(payload.get("url", "")),
            events=list(payload.get("events") or []),
            environment=payload.get("environment"),
            is_active=bool(payload.get("is_active", True)),
            secret=payload.get("secret"),
            created_at=payload.get("created_at"),
            raw=dict(payload),
        )
