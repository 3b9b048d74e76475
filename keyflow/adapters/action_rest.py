from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

from ..domain.entities import InputEvent
from ..domain.ports import ActionExecutorPort, ActionLabel
from .api_errors import ApiError, error_for_response
from .http_client import HttpConfig, RetryingSession


class ActionRestAdapter(ActionExecutorPort):
    """Action executor backed by the on-device automation agent's REST API."""

    def __init__(
        self,
        base_url: str,
        *,
        api_key: Optional[str] = None,
        request_timeout_s: int = 10,
        retries: int = 2,
    ) -> None:
        if not base_url or not str(base_url).strip():
            raise ValueError("ActionRestAdapter requires an agent base URL")
        self.base_url = str(base_url).strip().rstrip("/")
        self.cfg = HttpConfig(request_timeout_s=request_timeout_s, retries=retries)
        self.session = RetryingSession(api_key or None, self.cfg)
        self._log = logging.getLogger(__name__)

    def run(self, action_label: ActionLabel) -> bool:
        url = self._make_url("/actions")
        resp = self.session.post(url, json_body={"label": action_label})
        self._ensure_ok(resp, f"action[{action_label}]")
        data = self._json_object(resp, f"action[{action_label}]")
        ok = bool(data.get("ok", True))
        if not ok:
            self._log.warning("Agent reported failure for action %s: %s", action_label, data)
        return ok

    def handle_input_event(self, event: InputEvent) -> bool:
        url = self._make_url("/input-events")
        resp = self.session.post(url, json_body=event.to_payload())
        self._ensure_ok(resp, "input_event")
        data = self._json_object(resp, "input_event")
        return bool(data.get("consumed", False))

    def health(self) -> Dict[str, Any]:
        url = self._make_url("/health")
        resp = self.session.get(url)
        self._ensure_ok(resp, "health")
        return self._json_object(resp, "health")

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _make_url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    @staticmethod
    def _ensure_ok(resp: requests.Response, ctx: str) -> None:
        if not 200 <= resp.status_code < 300:
            raise error_for_response(resp, ctx)

    @staticmethod
    def _json_object(resp: requests.Response, ctx: str) -> Dict[str, Any]:
        # An empty 204 body counts as an empty object.
        if resp.status_code == 204 or not getattr(resp, "text", "x"):
            return {}
        try:
            data = resp.json()
        except ValueError as exc:
            snippet = getattr(resp, "text", "")[:400]
            raise ApiError(f"{ctx}: invalid JSON response: {snippet}", context=ctx) from exc
        if not isinstance(data, dict):
            raise ApiError(f"{ctx}: expected object response", context=ctx)
        return data


__all__ = ["ActionRestAdapter"]
