"""
Contracts for the collaborators around the view controller.

The data source pushes payloads or errors; the navigator opens records.
"""

from collections.abc import Callable, Sequence
from typing import Any, Literal, Protocol

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from upcoming_payments.settings import get_settings

DataCallback = Callable[[Sequence[Any]], None]
ErrorCallback = Callable[[Any], None]


class NavigationRequest(BaseModel):
    """Request to open a record page."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    target_kind: Literal["record-page"] = "record-page"
    record_id: str = Field(min_length=1, description="Record to open")
    object_type: str = Field(default_factory=lambda: get_settings().record_object_type)
    action: Literal["view"] = "view"

    def to_payload(self) -> dict[str, Any]:
        """CamelCase mapping as expected by the navigation subsystem."""
        return self.model_dump(by_alias=True)


class Navigator(Protocol):
    def navigate(self, request: NavigationRequest) -> None: ...  # pragma: no cover - protocol


class DataSource(Protocol):
    """Push-based source of billing schedule groups for one account."""

    def subscribe(
        self, account_id: str, on_data: DataCallback, on_error: ErrorCallback
    ) -> None: ...  # pragma: no cover - protocol
