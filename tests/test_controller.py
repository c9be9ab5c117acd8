"""Tests for the upcoming payments view controller."""

import pytest
from structlog.testing import capture_logs

from upcoming_payments.collaborators import NavigationRequest
from upcoming_payments.controller import UpcomingPaymentsController
from upcoming_payments.models import ViewStatus
from upcoming_payments.settings import reset_settings


@pytest.fixture
def controller(navigator):
    return UpcomingPaymentsController(navigator=navigator)


@pytest.fixture
def seven_groups(group_factory):
    return [group_factory(section_id=f"S{i}") for i in range(1, 8)]


def _ids(groups):
    return [group.id for group in groups]


@pytest.mark.unit
class TestStateTransitions:
    """Test data and error arrival."""

    def test_initial_state_is_loading(self, controller):
        """Test a new controller waits for data."""
        state = controller.state

        assert state.status is ViewStatus.LOADING
        assert state.loading is True
        assert state.groups == []
        assert state.current_page == 1
        assert state.page_size == 3

    def test_data_arrival(self, controller, seven_groups):
        """Test a payload is mapped and the first page shown."""
        controller.on_data(seven_groups)
        state = controller.state

        assert state.status is ViewStatus.LOADED
        assert state.loading is False
        assert state.error is None
        assert len(state.groups) == 7
        assert _ids(state.displayed_groups) == ["S1", "S2", "S3"]
        assert state.total_pages == 3
        assert state.has_pagination is True
        assert state.has_data is True

    def test_error_arrival_clears_groups(self, controller, seven_groups):
        """Test an error replaces loaded data."""
        controller.on_data(seven_groups)
        controller.next_page()

        controller.on_error({"body": {"message": "Insufficient access"}})
        state = controller.state

        assert state.status is ViewStatus.ERRORED
        assert state.error == "Insufficient access"
        assert state.groups == []
        assert state.displayed_groups == []
        assert state.current_page == 1
        assert state.loading is False

    def test_new_payload_resets_page(self, controller, seven_groups, group_factory):
        """Test a fresh payload starts again at page 1 without merging."""
        controller.on_data(seven_groups)
        controller.last_page()

        controller.on_data([group_factory(section_id="N1")])

        assert controller.state.current_page == 1
        assert _ids(controller.state.groups) == ["N1"]
        assert controller.state.has_pagination is False

    def test_payload_after_error_recovers(self, controller, seven_groups):
        """Test the controller stays usable after an error."""
        controller.on_error({"statusText": "Server Error"})
        controller.on_data(seven_groups)

        assert controller.state.status is ViewStatus.LOADED
        assert controller.state.error is None

    def test_empty_payload_is_loaded(self, controller):
        """Test an empty list is data, not an error."""
        controller.on_data([])

        assert controller.state.status is ViewStatus.LOADED
        assert controller.state.has_data is False
        assert controller.state.total_pages == 1

    def test_invalid_payload_is_errored(self, controller):
        """Test a malformed payload is shown as an error."""
        with capture_logs() as logs:
            controller.on_data([{"items": "ok"}, {"items": [1]}])

        assert controller.state.status is ViewStatus.ERRORED
        assert controller.state.error.startswith("Invalid billing schedule group")
        assert any(log["event"] == "Invalid billing schedule payload" for log in logs)

    def test_numeric_text_keeps_sibling_groups(self, controller, group_factory, fee_item_factory):
        """Test a group with a numeric fee name does not fail the delivery."""
        good = group_factory(section_id="S1")
        odd = group_factory(section_id="S2", items=[fee_item_factory(fee_name=2025)])

        controller.on_data([good, odd])

        assert controller.state.status is ViewStatus.LOADED
        assert controller.state.error is None
        assert _ids(controller.state.groups) == ["S1", "S2"]
        assert controller.state.groups[1].detail_rows[0].description == "2025"

    def test_on_loading(self, controller, seven_groups):
        """Test a new fetch re-enters loading."""
        controller.on_data(seven_groups)
        controller.on_loading()

        assert controller.state.status is ViewStatus.LOADING
        assert controller.state.groups == []

    def test_deliver(self, controller, seven_groups):
        """Test the combined delivery callback."""
        controller.deliver(data=seven_groups, error={"statusText": "ignored"})
        assert controller.state.status is ViewStatus.LOADED

        controller.deliver(error={"body": [{"message": "A"}, {"message": "B"}]})
        assert controller.state.error == "A, B"

    def test_deliver_nothing(self, controller):
        """Test an empty delivery only clears the loading flag."""
        controller.deliver()

        assert controller.state.status is ViewStatus.LOADING
        assert controller.state.loading is False

    def test_error_is_logged(self, controller):
        """Test fetch errors are logged with the normalized message."""
        with capture_logs() as logs:
            controller.on_error({})

        assert controller.state.error == "Unknown error"
        assert logs[0]["event"] == "Failed to fetch billing schedule groups"
        assert logs[0]["error"] == "Unknown error"
        assert logs[0]["log_level"] == "warning"


@pytest.mark.unit
class TestPagination:
    """Test pagination actions."""

    def test_seven_groups_scenario(self, controller, seven_groups):
        """Test next, last and the no-op next on the last page."""
        controller.on_data(seven_groups)
        assert controller.state.total_pages == 3

        controller.next_page()
        assert controller.state.current_page == 2
        assert _ids(controller.state.displayed_groups) == ["S4", "S5", "S6"]

        controller.last_page()
        assert controller.state.current_page == 3
        assert _ids(controller.state.displayed_groups) == ["S7"]

        before = controller.state
        controller.next_page()
        assert controller.state == before
        assert controller.state.current_page == 3

    def test_previous_on_first_page_is_noop(self, controller, seven_groups):
        """Test previous leaves page 1 untouched."""
        controller.on_data(seven_groups)
        before = controller.state

        controller.previous_page()

        assert controller.state == before
        assert controller.state.disable_prev is True

    def test_first_and_previous(self, controller, seven_groups):
        """Test moving back."""
        controller.on_data(seven_groups)
        controller.last_page()

        controller.previous_page()
        assert controller.state.current_page == 2

        controller.first_page()
        assert controller.state.current_page == 1
        assert _ids(controller.state.displayed_groups) == ["S1", "S2", "S3"]

    def test_disable_flags(self, controller, seven_groups):
        """Test the button states follow the page."""
        controller.on_data(seven_groups)
        assert controller.state.disable_prev is True
        assert controller.state.disable_next is False

        controller.last_page()
        assert controller.state.disable_prev is False
        assert controller.state.disable_next is True

    def test_ignored_unless_loaded(self, controller):
        """Test pagination does nothing while loading or errored."""
        controller.next_page()
        assert controller.state.status is ViewStatus.LOADING

        controller.on_error({})
        controller.last_page()
        assert controller.state.current_page == 1


@pytest.mark.unit
class TestRowNavigation:
    """Test row clicks."""

    def test_navigates_to_record(self, controller, navigator):
        """Test a row with a record id opens the billing schedule."""
        assert controller.handle_row_click("a0B000000000001") is True

        request = navigator.requests[0]
        assert isinstance(request, NavigationRequest)
        assert request.to_payload() == {
            "targetKind": "record-page",
            "recordId": "a0B000000000001",
            "objectType": "Billing_Schedule",
            "action": "view",
        }

    @pytest.mark.parametrize("record_id", [None, ""])
    def test_empty_record_id_ignored(self, controller, navigator, record_id):
        """Test rows without a record do not navigate."""
        assert controller.handle_row_click(record_id) is False
        assert navigator.requests == []

    def test_without_navigator(self):
        """Test a controller without navigator ignores clicks."""
        assert UpcomingPaymentsController().handle_row_click("F1") is False

    def test_object_type_from_settings(self, controller, navigator, monkeypatch):
        """Test the navigated object type is configurable."""
        monkeypatch.setenv("UPCOMING_PAYMENTS_RECORD_OBJECT_TYPE", "Custom_Schedule")
        reset_settings()

        controller.handle_row_click("F1")

        assert navigator.requests[0].object_type == "Custom_Schedule"


@pytest.mark.unit
class TestSubscription:
    """Test data source wiring and accordion state."""

    def test_subscribe_routes_callbacks(self, controller, seven_groups):
        """Test the data source drives the controller."""

        class FakeSource:
            def subscribe(self, account_id, on_data, on_error):
                self.account_id = account_id
                self.on_data = on_data
                self.on_error = on_error

        source = FakeSource()
        controller.subscribe(source, "001000000000001")
        assert source.account_id == "001000000000001"
        assert controller.state.status is ViewStatus.LOADING

        source.on_data(seven_groups)
        assert controller.state.status is ViewStatus.LOADED

        source.on_error({"statusText": "Gone"})
        assert controller.state.error == "Gone"

    def test_toggle_sections(self, controller, seven_groups):
        """Test accordion expansion is tracked without touching data."""
        controller.on_data(seven_groups)
        controller.toggle_sections(["S1", "S3"])

        assert controller.state.active_section_names == ["S1", "S3"]
        assert len(controller.state.groups) == 7
