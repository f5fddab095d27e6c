"""Thin JSON-over-HTTP client for the kit backend.

Keeps transport, headers and error translation in one place so the
repositories can stay declarative. Nothing is retried: a failed call is
reported once and the operator decides whether to trigger it again.
"""
from __future__ import annotations

import logging
from typing import Any

import requests

from core.errors import RequestError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30  # seconds


class ApiClient:
    def __init__(
        self,
        base_url: str,
        *,
        token: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.update({"Content-Type": "application/json"})
        if token:
            self._session.headers.update({"Authorization": f"Bearer {token}"})

    def url_for(self, endpoint: str) -> str:
        if endpoint.startswith("http"):
            return endpoint
        return f"{self.base_url}/{endpoint.lstrip('/')}"

    def request(
        self,
        method: str,
        endpoint: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> Any:
        """Send one request and return the decoded JSON body.

        Raises ``RequestError`` with ``status_code=None`` when no response
        arrived, or with the HTTP status and the body's ``error`` field for
        4xx/5xx answers.
        """
        url = self.url_for(endpoint)
        try:
            resp = self._session.request(
                method, url, params=params, json=json, timeout=self.timeout
            )
        except requests.RequestException as exc:
            # no usable response, including bad URLs and bodies cut off mid-stream
            logger.warning("%s %s: no response (%s)", method, url, exc)
            raise RequestError(f"Network Error: {exc}") from exc

        if resp.status_code >= 400:
            backend_message = _error_field(resp)
            logger.warning(
                "%s %s failed with HTTP %s: %s",
                method,
                url,
                resp.status_code,
                backend_message or resp.reason,
            )
            raise RequestError(
                f"Request failed with status code {resp.status_code}",
                status_code=resp.status_code,
                backend_message=backend_message,
            )

        if not resp.content:
            return {}
        try:
            return resp.json()
        except ValueError as exc:
            raise RequestError(
                f"Invalid JSON response from {url}", status_code=resp.status_code
            ) from exc

    def get_json(self, endpoint: str, *, params: dict[str, Any] | None = None) -> Any:
        return self.request("GET", endpoint, params=params)

    def post_json(self, endpoint: str, payload: Any) -> Any:
        return self.request("POST", endpoint, json=payload)

    def close(self) -> None:
        self._session.close()


def _error_field(resp: requests.Response) -> str | None:
    try:
        body = resp.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, str) and error.strip():
            return error
    return None
