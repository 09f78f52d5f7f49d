from __future__ import annotations

from stockwatch.domain.watchlist.formatting import (
    change_trend,
    format_change,
    format_market_cap,
    format_price,
)


def test_format_market_cap_switches_to_trillions_at_one_thousand_billions() -> None:
    assert format_market_cap(2500) == "$2.50T"
    assert format_market_cap(1000) == "$1.00T"
    assert format_market_cap(450) == "$450.00B"
    assert format_market_cap(999.994) == "$999.99B"
    assert format_market_cap(None) == "N/A"


def test_format_change_forces_plus_sign_on_non_negative_change() -> None:
    assert format_change(1.23, 0.45) == "+1.23 (+0.45%)"
    assert format_change(0, 0) == "+0.00 (+0.00%)"


def test_format_change_keeps_native_minus_on_negative_change() -> None:
    assert format_change(-1.5, -0.75) == "-1.50 (-0.75%)"


def test_format_change_renders_negative_zero_as_plus_zero() -> None:
    assert format_change(-0.0, -0.0) == "+0.00 (+0.00%)"
    assert format_change(-0.0, 0.0) == "+0.00 (+0.00%)"
    assert format_change(0.5, -0.0) == "+0.50 (+0.00%)"


def test_format_change_requires_both_components() -> None:
    assert format_change(None, 0.45) == "N/A"
    assert format_change(1.23, None) == "N/A"


def test_format_price_and_trend() -> None:
    assert format_price(12.3) == "$12.30"
    assert format_price(None) == "N/A"
    assert change_trend(0.0) == "up"
    assert change_trend(-0.01) == "down"
    assert change_trend(None) is None
