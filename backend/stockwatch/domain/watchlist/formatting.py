from __future__ import annotations

NOT_AVAILABLE = "N/A"

_TRILLION_IN_BILLIONS = 1000


def format_price(price: float | None) -> str:
    if price is None:
        return NOT_AVAILABLE
    return f"${price:.2f}"


def format_market_cap(market_cap_billions: float | None) -> str:
    """Render a provider market cap (in billions) as ``$X.XXB`` or ``$X.XXT``."""
    if market_cap_billions is None:
        return NOT_AVAILABLE
    if market_cap_billions >= _TRILLION_IN_BILLIONS:
        return f"${market_cap_billions / _TRILLION_IN_BILLIONS:.2f}T"
    return f"${market_cap_billions:.2f}B"


def format_change(change: float | None, change_percent: float | None) -> str:
    """Render ``+1.23 (+0.45%)``; negative values keep their own minus sign.

    The sign is driven by the absolute change so both parts always agree.
    """
    if change is None or change_percent is None:
        return NOT_AVAILABLE
    # adding 0.0 folds a provider -0.0 into 0.0 so it renders as +0.00
    change += 0.0
    change_percent += 0.0
    sign = "+" if change >= 0 else ""
    return f"{sign}{change:.2f} ({sign}{change_percent:.2f}%)"


def change_trend(change: float | None) -> str | None:
    if change is None:
        return None
    return "up" if change >= 0 else "down"
