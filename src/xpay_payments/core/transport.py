"""
HTTP transport for the X-Pay REST API.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional

import requests

from .config import ClientConfig
from .errors import HTTPError, NetworkError, RequestTimeoutError
from .models import APIResponse

__all__ = ["HTTPTransport", "SDK_VERSION"]

logger = logging.getLogger(__name__)

SDK_VERSION = "0.1.0"


def _error_body(response: requests.Response) -> Dict[str, Any]:
    try:
        body = response.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


def _clean_params(params: Optional[Mapping[str, Any]]) -> Optional[Dict[str, str]]:
    if not params:
        return None
    cleaned = {key: str(value) for key, value in params.items() if value is not None}
    return cleaned or None


class HTTPTransport:
    """
    Sends authenticated JSON requests and normalises the responses.

    Every call returns an :class:`APIResponse`; failures surface as
    :class:`HTTPError`, :class:`RequestTimeoutError` or :class:`NetworkError`.
    """

    def __init__(
        self,
        config: ClientConfig,
        *,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.config = config
        self.session = session or requests.Session()

    @property
    def headers(self) -> Dict[str, str]:
        return {
            "X-API-Key": self.config.api_key,
            "Content-Type": "application/json",
            "User-Agent": f"xpay-python-sdk/{SDK_VERSION}",
            "X-SDK-Version": SDK_VERSION,
            "X-Environment": self.config.environment,
        }

    def request(
        self,
        method: str,
        path: str,
        body: Optional[Mapping[str, Any]] = None,
        *,
        params: Optional[Mapping[str, Any]] = None,
    ) -> APIResponse:
        method = method.upper()
        url = f"{self.config.base_url}{path}"
        kwargs: Dict[str, Any] = {
            "headers": self.headers,
            "timeout": self.config.timeout_seconds,
        }
        query = _clean_params(params)
        if query:
            kwargs["params"] = query
        if body is not None and method != "GET":
            kwargs["json"] = dict(body)

        logger.debug("%s %s", method, url)
        try:
            response = self.session.request(method, url, **kwargs)
        except requests.exceptions.Timeout as exc:
            logger.warning("%s %s timed out after %ss", method, url, self.config.timeout_seconds)
            raise RequestTimeoutError(details=exc) from exc
        except requests.exceptions.RequestException as exc:
            logger.warning("%s %s failed: %s", method, url, exc)
            raise NetworkError(str(exc) or "Network error", details=exc) from exc

        if not 200 <= response.status_code < 300:
            error_body = _error_body(response)
            message = error_body.get("message") or (
                f"HTTP {response.status_code}: {response.reason}"
            )
            logger.warning("%s %s returned %s", method, url, response.status_code)
            raise HTTPError(
                message,
                error_body.get("error_code") or "HTTP_ERROR",
                response.status_code,
                error_body,
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise NetworkError(
                f"Failed to parse JSON from {url}: {response.text}", details=exc
            ) from exc

        return APIResponse.from_body(payload)

    def get(self, path: str, *, params: Optional[Mapping[str, Any]] = None) -> APIResponse:
        return self.request("GET", path, params=params)

    def post(self, path: str, body: Optional[Mapping[str, Any]] = None) -> APIResponse:
        return self.request("POST", path, body)

    def put(self, path: str, body: Optional[Mapping[str, Any]] = None) -> APIResponse:
        return self.request("PUT", path, body)

    def delete(self, path: str) -> APIResponse:
        return self.request("DELETE", path)
