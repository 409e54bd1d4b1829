from decimal import Decimal

import pytest

from tutor_admin.views.formatting import (
    format_amount,
    format_currency,
    format_short_date,
    normalize_phone,
    parse_timestamp,
    timestamp_sort_key,
    whatsapp_link,
)


def test_local_phone_gets_country_code() -> None:
    assert whatsapp_link("08012345678") == "https://wa.me/2348012345678"


def test_phone_non_digits_are_stripped() -> None:
    assert normalize_phone("0801-234 5678") == "2348012345678"
    assert normalize_phone("+234 801 234 5678") == "2348012345678"


def test_empty_phone_has_no_link() -> None:
    assert whatsapp_link("") is None
    assert whatsapp_link("n/a") is None


def test_custom_country_code() -> None:
    assert whatsapp_link("0244123456", country_code="233") == "https://wa.me/233244123456"


@pytest.mark.parametrize(
    "amount, expected",
    [
        (Decimal("0"), "0"),
        (Decimal("1500"), "1,500"),
        (Decimal("1500.50"), "1,500.5"),
        (Decimal("1234567.891"), "1,234,567.89"),
        (Decimal("-800"), "-800"),
    ],
)
def test_format_amount(amount, expected) -> None:
    assert format_amount(amount) == expected


def test_format_amount_beyond_default_precision() -> None:
    assert format_amount(Decimal("1e30")) == f"{10**30:,}"
    assert format_amount(Decimal("123456789012345678901234567890.125")) == "123,456,789,012,345,678,901,234,567,890.13"


def test_format_currency_symbol() -> None:
    assert format_currency(Decimal("200")) == "₦200"
    assert format_currency(Decimal("200"), symbol="$") == "$200"


def test_short_date() -> None:
    assert format_short_date("2024-01-05T10:00:00.000Z") == "Jan 5"
    assert format_short_date("2024-12-31") == "Dec 31"
    assert format_short_date("") == ""
    assert format_short_date("soon") == "soon"


def test_timestamps_missing_or_garbage_sort_earliest() -> None:
    assert parse_timestamp("garbage") is None
    assert timestamp_sort_key("") == float("-inf")
    assert timestamp_sort_key("2024-01-01") < timestamp_sort_key("2024-01-01T00:00:01Z")
