"""Tests for page windowing."""

import pytest

from upcoming_payments.exceptions import PaginationError
from upcoming_payments.pagination import Paginator, paginate, total_pages


@pytest.mark.unit
class TestTotalPages:
    """Test total_pages."""

    @pytest.mark.parametrize(
        ("count", "page_size", "expected"),
        [(0, 3, 1), (1, 3, 1), (3, 3, 1), (4, 3, 2), (7, 3, 3), (9, 3, 3), (10, 1, 10), (5, 10, 1)],
    )
    def test_formula(self, count, page_size, expected):
        """Test max(1, ceil(count / page_size))."""
        assert total_pages(count, page_size) == expected

    def test_invalid_page_size(self):
        """Test a page size below one is rejected."""
        with pytest.raises(PaginationError):
            total_pages(3, 0)


@pytest.mark.unit
class TestPaginate:
    """Test paginate."""

    def test_slices(self):
        """Test 1-based page slices."""
        items = list(range(7))

        assert paginate(items, 1, 3) == [0, 1, 2]
        assert paginate(items, 2, 3) == [3, 4, 5]
        assert paginate(items, 3, 3) == [6]

    @pytest.mark.parametrize("page_size", [1, 2, 3, 5])
    @pytest.mark.parametrize("count", [0, 1, 4, 11])
    def test_never_exceeds_page_size(self, count, page_size):
        """Test no page holds more than page_size items."""
        items = list(range(count))
        for page in range(0, total_pages(count, page_size) + 2):
            assert len(paginate(items, page, page_size)) <= page_size

    def test_out_of_range_is_empty(self):
        """Test overrun gives an empty slice instead of an error."""
        assert paginate([1, 2, 3], 5, 3) == []
        assert paginate([1, 2, 3], 0, 3) == []
        assert paginate([1, 2, 3], -2, 3) == []


@pytest.mark.unit
class TestPaginator:
    """Test Paginator navigation."""

    def test_initial_page(self):
        """Test the first page is computed on creation."""
        paginator = Paginator(list(range(7)))

        assert paginator.current_page == 1
        assert paginator.page == [0, 1, 2]
        assert paginator.total_pages == 3
        assert paginator.has_pagination is True

    def test_navigation(self):
        """Test first, previous, next and last."""
        paginator = Paginator(list(range(7)), page_size=3)

        assert paginator.next() == [3, 4, 5]
        assert paginator.last() == [6]
        assert paginator.current_page == 3
        assert paginator.previous() == [3, 4, 5]
        assert paginator.first() == [0, 1, 2]
        assert paginator.current_page == 1

    def test_previous_on_first_page_is_noop(self):
        """Test previous is idempotent at page 1."""
        paginator = Paginator(list(range(7)))

        assert paginator.previous() == [0, 1, 2]
        assert paginator.current_page == 1

    def test_next_on_last_page_is_noop(self):
        """Test next is idempotent at the last page."""
        paginator = Paginator(list(range(7)))
        paginator.last()

        assert paginator.next() == [6]
        assert paginator.current_page == 3

    def test_empty(self):
        """Test an empty list has a single empty page."""
        paginator = Paginator([])

        assert paginator.total_pages == 1
        assert paginator.page == []
        assert paginator.is_first and paginator.is_last
        assert paginator.has_pagination is False

    def test_start_page_clamped(self):
        """Test the starting page is kept in range."""
        assert Paginator(list(range(7)), page=9).current_page == 3
        assert Paginator(list(range(7)), page=0).current_page == 1
