"""
Public, high-level helpers for working with the X-Pay API.
"""

from __future__ import annotations

from typing import Mapping, Optional

import requests

from .core.client import XPayClient
from .core.config import ClientConfig, ClientParameters, load_client_config
from .core.signatures import verify_signature

__all__ = [
    "create_client",
    "verify_webhook",
]


def create_client(
    *,
    config: Optional[ClientConfig] = None,
    session: Optional[requests.Session] = None,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    parameters: Optional[ClientParameters] = None,
    api_key: Optional[str] = None,
    merchant_id: Optional[str] = None,
    environment: Optional[str] = None,
    base_url: Optional[str] = None,
    timeout_seconds: Optional[float | int | str] = None,
) -> XPayClient:
    """
    Construct an :class:`XPayClient`.

    Callers either supply a ready-made :class:`ClientConfig` or let the helper
    assemble one from environment data and keyword arguments.
    """
    if config is not None:
        extras = (
            overrides,
            base,
            parameters,
            api_key,
            merchant_id,
            environment,
            base_url,
            timeout_seconds,
        )
        if any(item is not None and item != {} for item in extras):
            raise ValueError(
                "Provide either a pre-built ClientConfig or individual parameters, not both."
            )
        cfg = config
    else:
        cfg = load_client_config(
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
    return XPayClient(cfg, session=session)


def verify_webhook(payload: str, signature: str, secret: str) -> bool:
    """
    Return ``True`` when ``signature`` authenticates the raw webhook ``payload``.

    Pass the request body exactly as received; re-serialising parsed JSON
    changes the bytes and breaks the signature.
    """
    return verify_signature(payload, signature, secret)
