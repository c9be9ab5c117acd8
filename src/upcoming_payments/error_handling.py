"""
Reduction of data fetch errors to a single display message.

Errors arrive in a few shapes::

    {"body": [{"message": "A"}, {"message": "B"}]}
    {"body": {"message": "C"}}
    {"statusText": "Not Found"}

Only the first matching shape is used, in that order.
"""

from collections.abc import Mapping
from typing import Any

UNKNOWN_ERROR = "Unknown error"


def _get(source: Any, *names: str) -> Any:
    """Read a field from a mapping or an object attribute."""
    if source is None:
        return None
    for name in names:
        if isinstance(source, Mapping):
            if name in source:
                return source[name]
        elif hasattr(source, name):
            return getattr(source, name)
    return None


def normalize_error(error: Any) -> str:
    """Return the human-readable message for a fetch error."""
    body = _get(error, "body")

    if isinstance(body, list | tuple):
        messages = (_get(entry, "message") for entry in body)
        return ", ".join("" if message is None else str(message) for message in messages)

    message = _get(body, "message")
    if message:
        return str(message)

    status_text = _get(error, "statusText", "status_text")
    if status_text:
        return str(status_text)

    return UNKNOWN_ERROR
