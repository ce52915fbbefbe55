"""
Utilities for assembling the variables used to configure the X-Pay client.

Sources are layered: a base mapping (``os.environ`` by default), an optional
``.env`` file and explicit overrides. The result is a plain mapping consumed
by :class:`xpay_payments.core.config.ClientConfig`.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping, MutableMapping, Optional

__all__ = [
    "ClientEnvironment",
    "LIVE",
    "SANDBOX",
    "build_environment",
    "detect_environment",
    "load_env_file",
]

SANDBOX = "sandbox"
LIVE = "live"

_SANDBOX_KEY_PREFIXES = ("xpay_sandbox_", "pk_sandbox_", "sk_sandbox_")
_LIVE_KEY_PREFIXES = ("xpay_live_", "pk_live_", "sk_live_")


def detect_environment(api_key: str) -> str:
    """
    Guess the API environment from the key prefix.

    Keys without a recognised prefix are treated as sandbox keys.
    """
    if api_key.startswith(_SANDBOX_KEY_PREFIXES):
        return SANDBOX
    if api_key.startswith(_LIVE_KEY_PREFIXES):
        return LIVE
    return SANDBOX


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def _parse_env_file(path: Path) -> Dict[str, str]:
    values: Dict[str, str] = {}
    try:
        data = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return values

    for raw_line in data.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if line.startswith("export "):
            line = line[len("export "):].lstrip()
        key, sep, value = line.partition("=")
        key = key.strip()
        if not sep or not key:
            continue
        values[key] = _unquote(value.strip())
    return values


def load_env_file(
    path: str = ".env",
    *,
    environ: Optional[MutableMapping[str, str]] = None,
) -> Dict[str, str]:
    """
    Copy the variables of ``path`` into ``environ`` without clobbering keys
    that are already set, and return the merged result.
    """
    target: MutableMapping[str, str] = environ if environ is not None else os.environ
    for key, value in _parse_env_file(Path(path)).items():
        target.setdefault(key, value)
    return dict(target)


@dataclass(frozen=True)
class ClientEnvironment:
    variables: Mapping[str, str]

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self.variables.get(key, default)


def build_environment(
    *,
    env_file: Optional[str] = ".env",
    base: Optional[Mapping[str, str]] = None,
    overrides: Optional[Mapping[str, str]] = None,
) -> ClientEnvironment:
    """
    Merge ``base`` (default :data:`os.environ`), ``env_file`` and ``overrides``.

    File values only fill gaps left by ``base``; ``overrides`` always win.
    Pass ``env_file=None`` to skip the file entirely.
    """
    merged: Dict[str, str] = dict(os.environ if base is None else base)

    if env_file is not None:
        for key, value in _parse_env_file(Path(env_file)).items():
            merged.setdefault(key, value)

    if overrides:
        merged.update(overrides)

    return ClientEnvironment(variables=merged)
