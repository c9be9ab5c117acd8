"""
View controller for the upcoming payments panel.

Owns the view state and reacts to data source deliveries and user actions.
States: loading, loaded, errored. Every payload or error arrival replaces
the whole state; pagination actions only move the page window.
"""

from collections.abc import Sequence
from typing import Any

import structlog

from upcoming_payments.collaborators import DataSource, NavigationRequest, Navigator
from upcoming_payments.error_handling import normalize_error
from upcoming_payments.exceptions import InvalidPayloadError
from upcoming_payments.mappers import GroupMapper
from upcoming_payments.models import PAGE_SIZE, ViewState, ViewStatus
from upcoming_payments.pagination import Paginator

logger = structlog.get_logger(__name__)


class UpcomingPaymentsController:
    """State machine behind the upcoming payments view."""

    def __init__(
        self,
        navigator: Navigator | None = None,
        mapper: GroupMapper | None = None,
        page_size: int = PAGE_SIZE,
    ) -> None:
        self.navigator = navigator
        self.mapper = mapper or GroupMapper()
        self.page_size = page_size
        self.state = ViewState(page_size=page_size)

    # ------------------------------------------------------------------
    # Data source events
    # ------------------------------------------------------------------

    def subscribe(self, source: DataSource, account_id: str) -> None:
        """Bind this controller to a data source for one account."""
        self.on_loading()
        source.subscribe(account_id, self.on_data, self.on_error)
        logger.debug("Subscribed to billing schedule groups", account_id=account_id)

    def on_loading(self) -> None:
        """A new fetch is in flight."""
        self.state = ViewState(page_size=self.page_size)
        logger.debug("View state reset to loading")

    def on_data(self, payload: Sequence[Any] | None) -> None:
        """Map a delivered payload and show its first page."""
        try:
            groups = self.mapper.map_groups(payload)
        except InvalidPayloadError as e:
            logger.warning("Invalid billing schedule payload", error=e.message, **e.context)
            self._enter_errored(e.message)
            return

        paginator = Paginator(groups, self.page_size)
        self.state = ViewState(
            status=ViewStatus.LOADED,
            groups=groups,
            displayed_groups=paginator.page,
            current_page=paginator.current_page,
            page_size=self.page_size,
            loading=False,
        )
        logger.debug(
            "Billing schedule groups loaded",
            group_count=len(groups),
            total_pages=paginator.total_pages,
        )

    def on_error(self, error: Any) -> None:
        """Show a fetch error and clear the groups."""
        message = normalize_error(error)
        logger.warning("Failed to fetch billing schedule groups", error=message)
        self._enter_errored(message)

    def deliver(self, data: Sequence[Any] | None = None, error: Any = None) -> None:
        """Handle one data source delivery; data wins over error."""
        if data is not None:
            self.on_data(data)
        elif error is not None:
            self.on_error(error)
        else:
            self.state = self.state.model_copy(update={"loading": False})

    def _enter_errored(self, message: str) -> None:
        self.state = ViewState(
            status=ViewStatus.ERRORED,
            page_size=self.page_size,
            error=message,
            loading=False,
        )

    # ------------------------------------------------------------------
    # Pagination
    # ------------------------------------------------------------------

    def _paginate(self, action: str) -> ViewState:
        if self.state.status is not ViewStatus.LOADED:
            return self.state

        paginator = Paginator(self.state.groups, self.page_size, page=self.state.current_page)
        getattr(paginator, action)()
        if paginator.current_page != self.state.current_page:
            self.state = self.state.model_copy(
                update={
                    "current_page": paginator.current_page,
                    "displayed_groups": paginator.page,
                }
            )
        return self.state

    def first_page(self) -> ViewState:
        return self._paginate("first")

    def previous_page(self) -> ViewState:
        return self._paginate("previous")

    def next_page(self) -> ViewState:
        return self._paginate("next")

    def last_page(self) -> ViewState:
        return self._paginate("last")

    # ------------------------------------------------------------------
    # Row navigation and accordion
    # ------------------------------------------------------------------

    def handle_row_click(self, record_id: str | None) -> bool:
        """Open the billing schedule record behind a detail row.

        Returns:
            True when a navigation request was sent
        """
        if not record_id:
            return False
        if self.navigator is None:
            logger.warning("Row click ignored, no navigator configured", record_id=record_id)
            return False

        request = NavigationRequest(record_id=record_id)
        self.navigator.navigate(request)
        logger.info(
            "Navigating to billing schedule", record_id=record_id, object_type=request.object_type
        )
        return True

    def toggle_sections(self, open_sections: Sequence[str]) -> None:
        """Record which accordion sections are expanded."""
        self.state = self.state.model_copy(update={"active_section_names": list(open_sections)})
