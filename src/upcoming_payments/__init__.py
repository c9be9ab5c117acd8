"""
Upcoming payments view model.

Turns billing schedule groups delivered by the backend into a paginated,
locale-formatted view:
- Currency and date formatting with fallback
- Payment method classification
- Fee and discount flattening into detail rows
- Fixed-size pagination
- Error message normalization
"""

from upcoming_payments.controller import UpcomingPaymentsController
from upcoming_payments.error_handling import normalize_error
from upcoming_payments.exceptions import (
    InvalidPayloadError,
    PaginationError,
    UpcomingPaymentsError,
)
from upcoming_payments.formatting import Formatter, current_locale, format_amount, format_date
from upcoming_payments.mappers import GroupMapper
from upcoming_payments.models import (
    BillToAccount,
    DetailRow,
    DisplayGroup,
    RawGroup,
    RowKind,
    StoredAccount,
    ViewState,
    ViewStatus,
)
from upcoming_payments.pagination import Paginator, paginate, total_pages
from upcoming_payments.payment_methods import map_payment_method
from upcoming_payments.rows import flatten_rows

__version__ = "1.0.0"

__all__ = [
    # Controller
    "UpcomingPaymentsController",
    # Pipeline
    "Formatter",
    "current_locale",
    "format_amount",
    "format_date",
    "map_payment_method",
    "flatten_rows",
    "GroupMapper",
    "Paginator",
    "paginate",
    "total_pages",
    "normalize_error",
    # Models
    "RawGroup",
    "DisplayGroup",
    "DetailRow",
    "RowKind",
    "BillToAccount",
    "StoredAccount",
    "ViewState",
    "ViewStatus",
    # Exceptions
    "UpcomingPaymentsError",
    "InvalidPayloadError",
    "PaginationError",
]
