"""Payment method classification for display."""

from collections.abc import Mapping
from typing import Any

from upcoming_payments.models import (
    BillToAccount,
    PaymentMethodView,
    RawPaymentMethod,
    StoredAccount,
)

BILL_TO_ACCOUNT = "BILL_TO_ACCOUNT"


def map_payment_method(raw: RawPaymentMethod | Mapping[str, Any] | None) -> PaymentMethodView:
    """Classify a payment method record as bill-to-account or a stored account.

    Stored account fields are copied verbatim.
    """
    if raw is None:
        return BillToAccount()
    if not isinstance(raw, RawPaymentMethod):
        raw = RawPaymentMethod.model_validate(raw)

    if raw.display_type == BILL_TO_ACCOUNT:
        return BillToAccount()

    return StoredAccount(
        nickname=raw.nickname,
        card_type=raw.card_type,
        ending_in=raw.ending_in,
        expiration=raw.expiration,
    )
