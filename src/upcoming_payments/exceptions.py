"""
Upcoming payments exceptions.

Errors raised while turning a billing schedule payload into a view model.
Formatting problems are never raised; they degrade to the raw value instead.
"""

from typing import Any


class UpcomingPaymentsError(Exception):
    """
    Base error with context.

    Attributes:
        message: Human-readable error message
        error_code: Machine-readable error code
        context: Additional context data about the error
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        self.message = message
        self.error_code = error_code or "UPCOMING_PAYMENTS_ERROR"
        self.context = context or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary."""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "context": self.context,
        }


class InvalidPayloadError(UpcomingPaymentsError):
    """A delivered payload could not be read as billing schedule groups."""

    def __init__(
        self, message: str, index: int | None = None, location: str | None = None
    ) -> None:
        context: dict[str, Any] = {}
        if index is not None:
            context["index"] = index
        if location is not None:
            context["location"] = location
        super().__init__(message, "INVALID_PAYLOAD", context=context)


class PaginationError(UpcomingPaymentsError):
    """Invalid pagination request."""

    def __init__(self, message: str, page_size: int | None = None) -> None:
        context = {}
        if page_size is not None:
            context["page_size"] = page_size
        super().__init__(message, "PAGINATION_ERROR", context=context)
