"""
Flattening of a group's fee and discount tree into detail table rows.

Rows come out fee first, then that fee's discounts, for every fee in
order; discounts not tied to a fee ("misc") follow all fee rows.
"""

from collections.abc import Iterable
from typing import Any

from upcoming_payments.models import EM_DASH, DetailRow, DiscountView, FeeItemView, RowKind


def _text(*candidates: str | None) -> str:
    """First non-empty candidate, or the em-dash placeholder."""
    for candidate in candidates:
        if candidate:
            return candidate
    return EM_DASH


def _amount(formatted: Any) -> str:
    if formatted is None or formatted == "":
        return EM_DASH
    return str(formatted)


def _negated(formatted: Any) -> str:
    # Always negated, even if the upstream magnitude was already negative
    if formatted is None or formatted == "":
        return EM_DASH
    return f"-{formatted}"


def _identifier(value: str | None) -> str:
    return value if value is not None else ""


def fee_row(fee: FeeItemView) -> DetailRow:
    return DetailRow(
        id=f"fee-{_identifier(fee.fee_schedule_id)}",
        description=_text(fee.description, fee.fee_name),
        kind=RowKind.FEE,
        amount=_amount(fee.fee_amount),
        record_id=fee.fee_schedule_id,
    )


def discount_row(discount: DiscountView, misc: bool = False) -> DetailRow:
    prefix = "disc-misc-" if misc else "disc-"
    return DetailRow(
        id=f"{prefix}{_identifier(discount.discount_schedule_id)}",
        description=_text(discount.description, discount.name),
        kind=RowKind.DISCOUNT,
        amount=_negated(discount.amount),
        record_id=discount.discount_schedule_id,
    )


def flatten_rows(
    fee_items: Iterable[FeeItemView] | None,
    misc_discounts: Iterable[DiscountView] | None,
) -> list[DetailRow]:
    """Build the ordered detail rows for one group.

    Args:
        fee_items: Formatted fee items, each carrying its own discounts
        misc_discounts: Formatted discounts not attributed to any fee

    Returns:
        One row per fee, fee discount and misc discount; nothing is skipped
    """
    rows: list[DetailRow] = []
    for fee in fee_items or ():
        rows.append(fee_row(fee))
        rows.extend(discount_row(discount) for discount in fee.discounts)

    rows.extend(discount_row(discount, misc=True) for discount in misc_discounts or ())
    return rows
