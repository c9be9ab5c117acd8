"""
Upcoming payments data models.

Raw models mirror the billing schedule payload delivered by the backend
(camelCase keys, optional everywhere). View models are the frozen,
display-ready structures built from them.
"""

from decimal import Decimal
from enum import Enum
from math import ceil
from typing import Annotated, Any, Literal

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel

EM_DASH = "—"
BILL_TO_ACCOUNT_LABEL = "Bill to Account"
PAGE_SIZE = 3


def _stringify_number(value: Any) -> Any:
    if isinstance(value, int | float | Decimal) and not isinstance(value, bool):
        return str(value)
    return value


def _as_list(value: Any) -> Any:
    if isinstance(value, list | tuple):
        return list(value)
    return []


# Upstream text fields sometimes arrive as bare numbers
Text = Annotated[str | None, BeforeValidator(_stringify_number)]
Identifier = Text

# Amounts keep the upstream representation; coercion happens when formatting
Amount = int | float | Decimal | str | None


class RawModel(BaseModel):
    """Base for payload models: camelCase aliases, unknown keys ignored."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )


class RawDiscount(RawModel):
    """Discount schedule as delivered; amount is a non-negative magnitude."""

    discount_schedule_id: Identifier = None
    name: Text = None
    amount: Amount = None
    parent_fee_schedule_id: Identifier = None
    description: Text = Field(None, alias="tliDescription")


class RawFeeItem(RawModel):
    """Fee schedule with the discounts attributed to it."""

    fee_schedule_id: Identifier = None
    fee_name: Text = None
    fee_amount: Amount = None
    description: Text = Field(None, alias="tliDescription")
    discounts: Annotated[list[RawDiscount], BeforeValidator(_as_list)] = Field(
        default_factory=list
    )


class RawPaymentMethod(RawModel):
    """Payment method record attached to a billing schedule group."""

    display_type: Text = None
    nickname: Text = None
    card_type: Text = None
    ending_in: Identifier = None
    expiration: Text = None


class RawGroup(RawModel):
    """One billing schedule group from the payload."""

    section_id: Identifier = None
    billing_schedule_group_id: Identifier = None
    billing_schedule_group_name: Text = None
    next_billing_date: Text = None
    fee_total: Amount = None
    discount_total: Amount = None
    net_total: Amount = None
    payment_method: RawPaymentMethod | None = None
    description: Text = Field(None, alias="tliDescription")
    items: Annotated[list[RawFeeItem], BeforeValidator(_as_list)] = Field(default_factory=list)
    misc_discounts: Annotated[list[RawDiscount], BeforeValidator(_as_list)] = Field(
        default_factory=list
    )


class ViewModel(BaseModel):
    """Base for display models."""

    model_config = ConfigDict(frozen=True)


class BillToAccount(ViewModel):
    """Payment is billed to the account; only the label is shown."""

    type: Literal["BILL_TO_ACCOUNT"] = "BILL_TO_ACCOUNT"
    label: str = BILL_TO_ACCOUNT_LABEL
    nickname: None = None
    card_type: None = None
    ending_in: None = None
    expiration: None = None


class StoredAccount(ViewModel):
    """Stored card or bank account, copied verbatim from the payload."""

    type: Literal["STORED_ACCOUNT"] = "STORED_ACCOUNT"
    label: None = None
    nickname: str | None = None
    card_type: str | None = None
    ending_in: str | None = None
    expiration: str | None = None


PaymentMethodView = Annotated[BillToAccount | StoredAccount, Field(discriminator="type")]


class DiscountView(ViewModel):
    """Discount with its magnitude already formatted."""

    discount_schedule_id: str | None = None
    name: str | None = None
    amount: Any = None
    parent_fee_schedule_id: str | None = None
    description: str | None = None


class FeeItemView(ViewModel):
    """Fee item with its amount and discounts already formatted."""

    fee_schedule_id: str | None = None
    fee_name: str | None = None
    fee_amount: Any = None
    description: str | None = None
    discounts: list[DiscountView] = Field(default_factory=list)


class RowKind(str, Enum):
    """Kind of a detail table row."""

    FEE = "Fee"
    DISCOUNT = "Discount"


class DetailRow(ViewModel):
    """One line of a group's detail table."""

    id: str
    description: str = EM_DASH
    kind: RowKind
    amount: str = EM_DASH
    record_id: str | None = None


class DisplayGroup(ViewModel):
    """Display-ready billing schedule group."""

    id: str | None = None
    group_id: str | None = None
    name: str | None = None
    next_date: str | None = None
    fee_total: Any = None
    discount_total: Any = None
    net_total: Any = None
    payment_method: PaymentMethodView = Field(default_factory=BillToAccount)
    description: str | None = None
    items: list[FeeItemView] = Field(default_factory=list)
    misc_discounts: list[DiscountView] = Field(default_factory=list)
    detail_rows: list[DetailRow] = Field(default_factory=list)
    accordion_label: str = ""


class ViewStatus(str, Enum):
    """Controller states."""

    LOADING = "loading"
    LOADED = "loaded"
    ERRORED = "errored"


class ViewState(ViewModel):
    """Complete state of the upcoming payments view."""

    status: ViewStatus = ViewStatus.LOADING
    groups: list[DisplayGroup] = Field(default_factory=list)
    displayed_groups: list[DisplayGroup] = Field(default_factory=list)
    current_page: int = Field(1, ge=1)
    page_size: int = Field(PAGE_SIZE, ge=1)
    error: str | None = None
    loading: bool = True
    active_section_names: list[str] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total_pages(self) -> int:
        return max(1, ceil(len(self.groups) / self.page_size))

    @property
    def has_pagination(self) -> bool:
        return len(self.groups) > self.page_size

    @property
    def disable_prev(self) -> bool:
        return self.current_page <= 1

    @property
    def disable_next(self) -> bool:
        return self.current_page >= self.total_pages

    @property
    def has_data(self) -> bool:
        return len(self.groups) > 0
