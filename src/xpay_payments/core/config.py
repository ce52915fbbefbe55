"""
Configuration objects and helpers for the X-Pay client.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from .environment import LIVE, SANDBOX, build_environment, detect_environment
from .errors import ConfigError, MissingCredentialError

__all__ = [
    "ClientConfig",
    "ClientParameters",
    "DEFAULT_BASE_URL",
    "DEFAULT_TIMEOUT_SECONDS",
    "load_client_config",
]

DEFAULT_BASE_URL = "https://server.xpay-bits.com"
DEFAULT_TIMEOUT_SECONDS = 30.0

_PARAMETER_TO_ENV_KEY = {
    "api_key": "XPAY_API_KEY",
    "merchant_id": "XPAY_MERCHANT_ID",
    "environment": "XPAY_ENVIRONMENT",
    "base_url": "XPAY_BASE_URL",
    "timeout_seconds": "XPAY_TIMEOUT_SECONDS",
}


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


@dataclass(frozen=True)
class ClientParameters:
    """
    Explicit parameter bundle for constructing :class:`ClientConfig`.

    Equivalent to passing the same keyword arguments to
    :func:`load_client_config`.
    """

    api_key: Optional[str] = None
    merchant_id: Optional[str] = None
    environment: Optional[str] = None
    base_url: Optional[str] = None
    timeout_seconds: Optional[float | int | str] = None

    def as_overrides(self) -> Dict[str, str]:
        overrides: Dict[str, str] = {}
        for field_name, env_key in _PARAMETER_TO_ENV_KEY.items():
            value = getattr(self, field_name)
            if value is None:
                continue
            overrides[env_key] = _stringify(value)
        return overrides


def _collect_parameter_overrides(
    parameters: Optional[ClientParameters],
    explicit: Mapping[str, Any],
) -> Dict[str, str]:
    overrides: Dict[str, str] = {}
    if parameters is not None:
        overrides.update(parameters.as_overrides())

    for key, value in explicit.items():
        if value is None:
            continue
        overrides[_PARAMETER_TO_ENV_KEY[key]] = _stringify(value)
    return overrides


def _parse_timeout(raw: str) -> float:
    try:
        timeout = float(raw)
    except ValueError as exc:
        raise ConfigError(
            f"XPAY_TIMEOUT_SECONDS must be a number, got '{raw}'"
        ) from exc
    if timeout <= 0:
        raise ConfigError("XPAY_TIMEOUT_SECONDS must be greater than zero")
    return timeout


@dataclass(frozen=True)
class ClientConfig:
    """
    Resolved client settings.

    ``environment`` is detected from the API key prefix when left unset.
    """

    api_key: str
    merchant_id: str
    environment: Optional[str] = None
    base_url: str = DEFAULT_BASE_URL
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    def __post_init__(self) -> None:
        if not self.api_key:
            raise MissingCredentialError("API key is required", "MISSING_API_KEY")
        if not self.merchant_id:
            raise MissingCredentialError(
                "Merchant ID is required. Get your merchant ID from the X-Pay dashboard.",
                "MISSING_MERCHANT_ID",
            )
        if self.environment is None:
            object.__setattr__(self, "environment", detect_environment(self.api_key))
        elif self.environment not in (SANDBOX, LIVE):
            raise ConfigError(
                f"environment must be '{SANDBOX}' or '{LIVE}', got '{self.environment}'"
            )
        if self.timeout_seconds <= 0:
            raise ConfigError("timeout_seconds must be greater than zero")
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

    def merchant_path(self, *parts: str) -> str:
        """Build a merchant-scoped API path, e.g. ``/v1/api/merchants/<id>/payments``."""
        return "/".join(("/v1/api/merchants", self.merchant_id, *parts))

    @classmethod
    def from_mapping(cls, values: Mapping[str, str]) -> "ClientConfig":
        environment = values.get("XPAY_ENVIRONMENT") or None
        if environment is not None:
            environment = environment.strip().lower()

        return cls(
            api_key=values.get("XPAY_API_KEY", "").strip(),
            merchant_id=values.get("XPAY_MERCHANT_ID", "").strip(),
            environment=environment,
            base_url=values.get("XPAY_BASE_URL") or DEFAULT_BASE_URL,
            timeout_seconds=_parse_timeout(
                values.get("XPAY_TIMEOUT_SECONDS", str(DEFAULT_TIMEOUT_SECONDS))
            ),
        )

    @classmethod
    def from_env(
        cls,
        *,
        env_file: Optional[str] = ".env",
        overrides: Optional[Mapping[str, str]] = None,
        base: Optional[Mapping[str, str]] = None,
        parameters: Optional[ClientParameters] = None,
        api_key: Optional[str] = None,
        merchant_id: Optional[str] = None,
        environment: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout_seconds: Optional[float | int | str] = None,
    ) -> "ClientConfig":
        parameter_overrides = _collect_parameter_overrides(
            parameters,
            {
                "api_key": api_key,
                "merchant_id": merchant_id,
                "environment": environment,
                "base_url": base_url,
                "timeout_seconds": timeout_seconds,
            },
        )
        merged_overrides = dict(overrides or {})
        merged_overrides.update(parameter_overrides)

        resolved = build_environment(
            env_file=env_file,
            base=base,
            overrides=merged_overrides,
        )
        return cls.from_mapping(resolved.variables)


def load_client_config(
    *,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    parameters: Optional[ClientParameters] = None,
    api_key: Optional[str] = None,
    merchant_id: Optional[str] = None,
    environment: Optional[str] = None,
    base_url: Optional[str] = None,
    timeout_seconds: Optional[float | int | str] = None,
) -> ClientConfig:
    """
    Convenience wrapper that mirrors :meth:`ClientConfig.from_env`.

    Settings can come from environment variables, a ``.env`` file, direct
    keyword arguments, or any combination of the three.
    """
    return ClientConfig.from_env(
        env_file=env_file,
        overrides=overrides,
        base=base,
        parameters=parameters,
        api_key=api_key,
        merchant_id=merchant_id,
        environment=environment,
        base_url=base_url,
        timeout_seconds=timeout_seconds,
    )
