"""
Fixed-interval polling until a resource reaches a terminal status.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Iterable, Mapping, Optional, TypeVar

from .errors import PollingTimeoutError
from .models import DEFAULT_FINAL_STATUSES

__all__ = [
    "DEFAULT_INTERVAL_SECONDS",
    "DEFAULT_MAX_ATTEMPTS",
    "poll_status",
]

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 30
DEFAULT_INTERVAL_SECONDS = 2.0

ResourceT = TypeVar("ResourceT")


def _status_of(resource: Any) -> Optional[str]:
    if isinstance(resource, Mapping):
        status = resource.get("status")
    else:
        status = getattr(resource, "status", None)
    return getattr(status, "value", status)


def poll_status(
    fetch_one: Callable[[str], ResourceT],
    resource_id: str,
    *,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    interval_seconds: float = DEFAULT_INTERVAL_SECONDS,
    final_statuses: Optional[Iterable[str]] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> ResourceT:
    """
    Fetch ``resource_id`` until its ``status`` is one of ``final_statuses``.

    At most ``max_attempts`` fetches are made with ``interval_seconds`` between
    them; the resource is returned as soon as a terminal status is seen.
    Errors raised by ``fetch_one`` propagate unchanged and stop the loop.

    Raises:
        PollingTimeoutError: every attempt saw a non-terminal status.
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")
    if interval_seconds < 0:
        raise ValueError("interval_seconds must not be negative")

    terminal = (
        DEFAULT_FINAL_STATUSES if final_statuses is None else frozenset(final_statuses)
    )
    last_status: Optional[str] = None

    for attempt in range(1, max_attempts + 1):
        resource = fetch_one(resource_id)
        last_status = _status_of(resource)
        if last_status in terminal:
            logger.debug(
                "%s reached %s after %d attempt(s)", resource_id, last_status, attempt
            )
            return resource

        logger.debug(
            "%s is %s (attempt %d/%d)", resource_id, last_status, attempt, max_attempts
        )
        if attempt < max_attempts:
            sleep(interval_seconds)

    logger.warning(
        "Gave up polling %s after %d attempts; last status %s",
        resource_id,
        max_attempts,
        last_status,
    )
    raise PollingTimeoutError(resource_id, max_attempts, last_status)
