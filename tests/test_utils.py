from datetime import date
from decimal import Decimal

from sentinela.utils import (
    is_http_url,
    is_month_key,
    money_str,
    parse_iso_date,
    parse_money,
    parse_non_negative_int,
    pick,
)


def test_parse_iso_date():
    assert parse_iso_date("2024-02-29") == (date(2024, 2, 29), None)
    assert parse_iso_date("2025-02-29")[1] == "date is not a valid calendar date"
    assert parse_iso_date("2025-2-1")[1] == "date must be in YYYY-MM-DD format"
    assert parse_iso_date(20250201)[0] is None


def test_parse_non_negative_int():
    assert parse_non_negative_int(0, "rides") == (0, None)
    assert parse_non_negative_int("7", "rides") == (7, None)
    assert parse_non_negative_int(-1, "rides")[1] == "rides must be non-negative"
    assert parse_non_negative_int(2.5, "rides")[1] == "rides must be an integer"
    assert parse_non_negative_int(False, "rides")[1] == "rides must be an integer"


def test_parse_non_negative_int_rejects_non_ascii_digits_and_overflow():
    # only ASCII digits count; "\u00b2" passes str.isdigit()
    assert parse_non_negative_int("\u00b2", "rides")[1] == "rides must be an integer"
    assert parse_non_negative_int("\u0663", "rides")[1] == "rides must be an integer"
    assert parse_non_negative_int(" 12 ", "rides") == (12, None)
    assert parse_non_negative_int("-3", "rides")[1] == "rides must be non-negative"
    assert parse_non_negative_int(2 ** 31 - 1, "rides") == (2 ** 31 - 1, None)
    assert parse_non_negative_int(2 ** 31, "rides")[1] == "rides is too large"
    assert parse_non_negative_int(10 ** 20, "rides")[1] == "rides is too large"
    assert parse_non_negative_int(str(10 ** 20), "rides")[1] == "rides is too large"


def test_parse_money_quantizes_to_cents():
    assert parse_money("10", "revenue") == (Decimal("10.00"), None)
    assert parse_money(0.1, "revenue") == (Decimal("0.10"), None)
    assert parse_money("19.995", "revenue") == (Decimal("20.00"), None)
    assert parse_money("-0.01", "revenue")[1] == "revenue must be non-negative"
    assert parse_money("NaN", "revenue")[1] == "revenue must be a decimal number"
    assert parse_money("", "revenue")[1] == "revenue is required"


def test_parse_money_rejects_amounts_beyond_the_column():
    assert parse_money("99999999.99", "revenue") == (Decimal("99999999.99"), None)
    assert parse_money("100000000", "revenue")[1] == "revenue is too large"
    assert parse_money("1e30", "revenue")[1] == "revenue is too large"
    assert parse_money(1e30, "fuel_cost")[1] == "fuel_cost is too large"


def test_month_keys():
    assert is_month_key("2025-01")
    assert is_month_key("2025-12")
    assert not is_month_key("2025-00")
    assert not is_month_key("2025-1")
    assert not is_month_key("0000-01")
    assert is_month_key("0001-01")
    assert is_month_key("9999-12")


def test_misc_helpers():
    assert pick({"fuelCost": 3}, "fuel_cost", "fuelCost") == 3
    assert pick({}, "a", default="x") == "x"
    assert money_str(None) == "0.00"
    assert money_str(Decimal("6500")) == "6500.00"
    assert is_http_url("https://example.com/a.png")
    assert not is_http_url("javascript:alert(1)")