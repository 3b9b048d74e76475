"""Typed failures raised by the automation agent adapter.

``error_for_response`` maps a non-2xx answer to the matching subclass. The
agent reports errors as ``{"detail": ..., "code": ..., "hint": ...}``; a
plain-text body is used as the detail.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Union

_Body = Union[Dict[str, Any], str, None]


class ApiError(RuntimeError):
    """Base class for agent failures.

    Attributes:
        status: HTTP status, ``None`` for transport failures.
        code: Machine-readable error code sent by the agent, if any.
        hint: Short remedy suggested by the agent, if any.
        context: Which call failed, e.g. ``action[BUY]``.
    """

    def __init__(
        self,
        message: str,
        *,
        status: Optional[int] = None,
        code: Optional[str] = None,
        hint: Optional[str] = None,
        context: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.code = code
        self.hint = hint
        self.context = context


class ApiClientError(ApiError):
    """4xx: the agent refused the request, e.g. an action it does not know."""


class ApiServerError(ApiError):
    """5xx: the agent failed while running the request."""


class ApiTimeoutError(ApiError):
    """The agent could not be reached or did not answer in time."""


def error_for_response(resp: Any, context: str) -> ApiError:
    """Build the error for a non-2xx ``resp``; the caller raises it."""
    status = int(resp.status_code)
    body = _read_body(resp)
    detail = _field(body, "detail", "message", "error")
    message = f"{context}: {detail} (HTTP {status})" if detail else f"{context}: HTTP {status}"

    if 400 <= status < 500:
        kind = ApiClientError
    elif 500 <= status < 600:
        kind = ApiServerError
    else:
        kind = ApiError
    return kind(
        message,
        status=status,
        code=_field(body, "code", "error_code"),
        hint=_field(body, "hint"),
        context=context,
    )


def _read_body(resp: Any) -> _Body:
    try:
        data = resp.json()
    except ValueError:
        text = (getattr(resp, "text", "") or "").strip()
        return text[:400] or None
    return data if isinstance(data, (dict, str)) else None


def _field(body: _Body, *keys: str) -> Optional[str]:
    if isinstance(body, str):
        # Plain-text bodies only carry a detail.
        return body if "detail" in keys else None
    if not body:
        return None
    for key in keys:
        value = body.get(key)
        if value is None:
            continue
        text = str(value).strip()
        if text:
            return text[:200]
    return None


__all__ = [
    "ApiClientError",
    "ApiError",
    "ApiServerError",
    "ApiTimeoutError",
    "error_for_response",
]
