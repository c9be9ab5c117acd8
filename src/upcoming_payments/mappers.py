"""
Data mappers for upcoming payments.

Transforms raw billing schedule groups from the payload into display groups.
"""

from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import ValidationError

from upcoming_payments.exceptions import InvalidPayloadError
from upcoming_payments.formatting import Formatter
from upcoming_payments.models import (
    EM_DASH,
    DiscountView,
    DisplayGroup,
    FeeItemView,
    RawDiscount,
    RawFeeItem,
    RawGroup,
)
from upcoming_payments.payment_methods import map_payment_method
from upcoming_payments.rows import flatten_rows

# Three non-breaking spaces
LABEL_PAD = "\u00a0" * 3


def accordion_label(fee_total: Any, discount_total: Any) -> str:
    """Header text for a group's accordion section."""
    fee_total = EM_DASH if fee_total is None else fee_total
    discount_total = EM_DASH if discount_total is None else discount_total
    return (
        f"Details: {LABEL_PAD}Fees {fee_total}{LABEL_PAD}·{LABEL_PAD}Discounts {discount_total}"
    )


class GroupMapper:
    """Maps raw billing schedule groups to display groups."""

    def __init__(self, formatter: Formatter | None = None) -> None:
        self.formatter = formatter or Formatter()

    def _map_discounts(self, discounts: Iterable[RawDiscount]) -> list[DiscountView]:
        """Format discount magnitudes; the sign is added when rows are built."""
        return [
            DiscountView(
                discount_schedule_id=discount.discount_schedule_id,
                name=discount.name,
                amount=self.formatter.format_amount(discount.amount),
                parent_fee_schedule_id=discount.parent_fee_schedule_id,
                description=discount.description,
            )
            for discount in discounts
        ]

    def _map_fee_items(self, items: Iterable[RawFeeItem]) -> list[FeeItemView]:
        return [
            FeeItemView(
                fee_schedule_id=item.fee_schedule_id,
                fee_name=item.fee_name,
                fee_amount=self.formatter.format_amount(item.fee_amount),
                description=item.description,
                discounts=self._map_discounts(item.discounts),
            )
            for item in items
        ]

    def _format_next_date(self, next_billing_date: str | None) -> str | None:
        if not next_billing_date:
            return None
        return self.formatter.format_date(next_billing_date)

    @staticmethod
    def validate_group(
        raw_group: RawGroup | Mapping[str, Any], index: int | None = None
    ) -> RawGroup:
        """Read one payload entry as a RawGroup."""
        if isinstance(raw_group, RawGroup):
            return raw_group
        try:
            return RawGroup.model_validate(raw_group)
        except ValidationError as e:
            first = e.errors()[0]
            location = ".".join(str(part) for part in first["loc"]) or None
            where = f" at {location}" if location else ""
            raise InvalidPayloadError(
                f"Invalid billing schedule group{where}: {first['msg']}",
                index=index,
                location=location,
            ) from e

    def map(self, raw_group: RawGroup | Mapping[str, Any]) -> DisplayGroup:
        """Build a complete display group. The input is never mutated."""
        group = self.validate_group(raw_group)

        fee_total = self.formatter.format_amount(group.fee_total)
        discount_total = self.formatter.format_amount(group.discount_total)
        items = self._map_fee_items(group.items)
        misc_discounts = self._map_discounts(group.misc_discounts)

        return DisplayGroup(
            id=group.section_id,
            group_id=group.billing_schedule_group_id,
            name=group.billing_schedule_group_name,
            next_date=self._format_next_date(group.next_billing_date),
            fee_total=fee_total,
            discount_total=discount_total,
            net_total=self.formatter.format_amount(group.net_total),
            payment_method=map_payment_method(group.payment_method),
            description=group.description,
            items=items,
            misc_discounts=misc_discounts,
            detail_rows=flatten_rows(items, misc_discounts),
            accordion_label=accordion_label(fee_total, discount_total),
        )

    def map_groups(
        self, payload: Iterable[RawGroup | Mapping[str, Any]] | None
    ) -> list[DisplayGroup]:
        """Map a whole payload, keeping the delivered order."""
        if payload is None:
            return []
        if isinstance(payload, Mapping | str | bytes):
            raise InvalidPayloadError("Payload must be a sequence of billing schedule groups")
        return [
            self.map(self.validate_group(raw_group, index=index))
            for index, raw_group in enumerate(payload)
        ]
