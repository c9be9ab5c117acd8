"""
Locale-aware amount and date formatting using Babel and py-moneyed.

Both formatters are total: input that cannot be read as a number or a
calendar date is returned unchanged, and an unsupported locale or
currency falls back to en_US / USD.
"""

import re
from collections.abc import Callable
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any

from babel import Locale
from babel.core import UnknownLocaleError, default_locale
from babel.dates import format_date as babel_format_date
from babel.numbers import format_currency
from moneyed import get_currency
from moneyed.classes import CurrencyDoesNotExist

from upcoming_payments.settings import get_settings

FALLBACK_LOCALE = "en_US"
FALLBACK_CURRENCY = "USD"

LocaleProvider = Callable[[], str]

# Year, month and day only; anything after the day (a time part) is ignored
_DATE_PREFIX = re.compile(r"^\s*(\d+)(?:-(\d+))?(?:-(\d+))?")


def current_locale() -> str:
    """Return the locale to format with, read at call time.

    The configured override wins, then the process locale from the
    environment, then en_US.
    """
    return get_settings().locale or default_locale() or FALLBACK_LOCALE


def _parse_locale(locale_code: str | None) -> Locale | None:
    if not locale_code:
        return None
    try:
        return Locale.parse(locale_code.replace("-", "_"))
    except (UnknownLocaleError, ValueError, TypeError):
        return None


def _to_decimal(value: Any) -> Decimal | None:
    """Coerce a number or numeric string to Decimal, or None when not numeric."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        number = value
    elif isinstance(value, int | float):
        number = Decimal(str(value))
    elif isinstance(value, str):
        text = value.strip()
        # Decimal accepts digit separators like "1_000"; amounts do not
        if not text or "_" in text:
            return None
        try:
            number = Decimal(text)
        except InvalidOperation:
            return None
    else:
        return None

    if not number.is_finite():
        return None
    return number


def _is_known_currency(currency_code: str) -> bool:
    try:
        get_currency(currency_code.upper())
    except CurrencyDoesNotExist:
        return False
    return True


def format_amount(value: Any, locale: str | None = None, currency: str | None = None) -> Any:
    """Format a number or numeric string as currency.

    Non-numeric input is returned as given. Sign handling is left to the caller.

    Args:
        value: Amount as int, float, Decimal or numeric string
        locale: Locale code (``en_US`` or ``en-US``), defaults to ``current_locale()``
        currency: ISO 4217 code, defaults to the configured currency
    """
    number = _to_decimal(value)
    if number is None:
        return value

    parsed_locale = _parse_locale(locale or current_locale())
    currency_code = (currency or get_settings().currency).upper()

    if parsed_locale is not None and _is_known_currency(currency_code):
        try:
            return format_currency(number, currency_code, locale=parsed_locale)
        except (UnknownLocaleError, ValueError, TypeError):
            pass
    return format_currency(number, FALLBACK_CURRENCY, locale=FALLBACK_LOCALE)


def parse_calendar_date(value: Any) -> date | None:
    """Read year, month and day from an ISO date string without any timezone shift."""
    if isinstance(value, date):
        return date(value.year, value.month, value.day)
    if not isinstance(value, str):
        return None

    match = _DATE_PREFIX.match(value)
    if match is None:
        return None
    year, month, day = match.groups()
    try:
        return date(int(year), int(month or 1), int(day or 1))
    except ValueError:
        return None


def format_date(value: Any, locale: str | None = None) -> Any:
    """Format an ISO date string in the locale's medium style ("Jan 5, 2025").

    Input that is absent or not a valid calendar date is returned as given.
    """
    parsed = parse_calendar_date(value)
    if parsed is None:
        return value

    parsed_locale = _parse_locale(locale or current_locale()) or Locale.parse(FALLBACK_LOCALE)
    return babel_format_date(parsed, format="medium", locale=parsed_locale)


class Formatter:
    """Formatting bound to a locale provider and a currency code."""

    def __init__(
        self,
        locale_provider: LocaleProvider | None = None,
        currency: str | None = None,
    ) -> None:
        self.locale_provider = locale_provider or current_locale
        self.currency = currency

    @classmethod
    def for_locale(cls, locale: str, currency: str | None = None) -> "Formatter":
        """Create a formatter pinned to one locale."""
        return cls(locale_provider=lambda: locale, currency=currency)

    def format_amount(self, value: Any) -> Any:
        return format_amount(value, locale=self.locale_provider(), currency=self.currency)

    def format_date(self, value: Any) -> Any:
        return format_date(value, locale=self.locale_provider())
