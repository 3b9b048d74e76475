"""Domain-level error types.

Errors here are configuration mistakes caught while building domain objects,
never conditions raised during dispatch.
"""

from __future__ import annotations


class RoutingTableError(ValueError):
    """Raised when a workflow routing table contains a blank or duplicate key."""

    def __init__(self, message: str, *, logic_key: str = "") -> None:
        super().__init__(message)
        self.logic_key = logic_key


__all__ = ["RoutingTableError"]
