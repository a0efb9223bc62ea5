"""Per-request holder for a user-facing error message."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

_ERROR_DATA_KEY = "error_data"


@dataclass
class ErrorData:
    """A message that a service leaves for the handler to report."""

    message: str = ""

    def has_message(self) -> bool:
        """Return True when a message has been set."""
        return self.message != ""


def with_error_data(ctx: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of ``ctx`` carrying a fresh, empty :class:`ErrorData`."""
    return {**ctx, _ERROR_DATA_KEY: ErrorData()}


def get_error_data(ctx: dict[str, Any]) -> ErrorData | None:
    """Return the :class:`ErrorData` stored in ``ctx``, or None."""
    value = ctx.get(_ERROR_DATA_KEY)
    return value if isinstance(value, ErrorData) else None