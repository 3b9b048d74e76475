"""``requests`` transport for the automation agent.

Retry policy differs by method. ``GET`` is read-only, so any timeout or
connection failure is retried. ``POST`` triggers a UI action on the device:
once the request may have reached the agent (a read timeout) it is not sent
again, and only failures to connect are retried.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple, Type

import requests
from requests import exceptions as req_exc

from .api_errors import ApiTimeoutError

_log = logging.getLogger(__name__)

# ConnectTimeout subclasses both Timeout and ConnectionError.
RETRY_SAFE_GET: Tuple[Type[Exception], ...] = (req_exc.Timeout, req_exc.ConnectionError)
RETRY_SAFE_POST: Tuple[Type[Exception], ...] = (req_exc.ConnectTimeout, req_exc.ConnectionError)


@dataclass
class HttpConfig:
    request_timeout_s: int = 10
    retries: int = 2  # extra attempts after the first one


class RetryingSession:
    """Holds the ``requests.Session``, the API key and the retry policy."""

    def __init__(self, api_key: Optional[str], cfg: HttpConfig) -> None:
        self.session = requests.Session()
        self.api_key = api_key
        self.cfg = cfg

    def get(self, url: str, *, timeout: Optional[int] = None) -> requests.Response:
        return self._send("GET", url, RETRY_SAFE_GET, timeout=timeout)

    def post(
        self,
        url: str,
        *,
        json_body: Optional[Dict[str, Any]] = None,
        timeout: Optional[int] = None,
    ) -> requests.Response:
        data = None if json_body is None else json.dumps(json_body)
        return self._send("POST", url, RETRY_SAFE_POST, data=data, timeout=timeout)

    def _send(
        self,
        method: str,
        url: str,
        retry_on: Tuple[Type[Exception], ...],
        *,
        data: Optional[str] = None,
        timeout: Optional[int] = None,
    ) -> requests.Response:
        """Send one request, repeating it while ``retry_on`` errors occur.

        Raises:
            ApiTimeoutError: on a transport failure that is not retried, or
                once every attempt has failed.
        """
        kwargs: Dict[str, Any] = {
            "headers": self._headers(with_body=data is not None),
            "timeout": timeout or self.cfg.request_timeout_s,
        }
        if method == "POST":
            kwargs["data"] = data
        send = self.session.post if method == "POST" else self.session.get

        attempts = max(0, self.cfg.retries) + 1
        failure: Optional[Exception] = None
        for attempt in range(1, attempts + 1):
            try:
                return send(url, **kwargs)
            except retry_on as exc:
                _log.debug("%s %s failed (attempt %d/%d): %s", method, url, attempt, attempts, exc)
                failure = exc
            except (req_exc.Timeout, req_exc.ConnectionError) as exc:
                _log.warning("%s %s timed out after sending; not retrying", method, url)
                raise ApiTimeoutError(
                    f"No answer from {url}", context=f"{method} {url}"
                ) from exc
        raise ApiTimeoutError(
            f"Could not reach {url} after {attempts} attempt(s)", context=f"{method} {url}"
        ) from failure

    def _headers(self, *, with_body: bool) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["X-API-Key"] = self.api_key
        if with_body:
            headers["Content-Type"] = "application/json"
        return headers


__all__ = ["HttpConfig", "RetryingSession"]
