"""Display helpers shared by the dashboard views and workflow messages."""

import re
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Optional

from tutor_admin.core.config import settings

MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
WHATSAPP_BASE = "https://wa.me/"


def parse_timestamp(value: str) -> Optional[datetime]:
    """Parse an ISO timestamp from the sheet; naive values are taken as UTC. None if unparseable."""
    if not value or not value.strip():
        return None
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def timestamp_sort_key(value: str) -> float:
    """Sort key where missing or unparseable timestamps come first (earliest)."""
    parsed = parse_timestamp(value)
    return parsed.timestamp() if parsed is not None else float("-inf")


def format_short_date(value: str) -> str:
    """'2024-01-05T10:00:00Z' -> 'Jan 5'. Unparseable input is echoed back unchanged."""
    if not value:
        return ""
    parsed = parse_timestamp(value)
    if parsed is None:
        return str(value)
    return f"{MONTHS[parsed.month - 1]} {parsed.day}"


def format_amount(amount: Decimal) -> str:
    """Group thousands with commas and keep at most two decimals: 1500.50 -> '1,500.5'."""
    amount = Decimal(amount)
    with localcontext() as ctx:
        # Room for every integer digit plus two decimals.
        ctx.prec = max(28, amount.adjusted() + 3)
        q = amount.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    if q == q.to_integral_value():
        return f"{int(q):,}"
    return f"{q:,.2f}".rstrip("0").rstrip(".")


def format_currency(amount: Decimal, symbol: Optional[str] = None) -> str:
    return (settings.currency_symbol if symbol is None else symbol) + format_amount(amount)


def normalize_phone(phone: str, country_code: Optional[str] = None) -> str:
    """Swap a local leading '0' for the country code, then keep digits only."""
    cc = settings.phone_country_code if country_code is None else country_code
    return re.sub(r"[^0-9]", "", re.sub(r"^0", cc, phone))


def whatsapp_link(phone: str, country_code: Optional[str] = None) -> Optional[str]:
    """Chat link for a student's phone; None when there is no number to call."""
    if not phone:
        return None
    digits = normalize_phone(phone, country_code)
    return WHATSAPP_BASE + digits if digits else None
