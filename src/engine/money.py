"""Cents <-> dollars conversion. Amounts cross every boundary as integer cents."""

from decimal import Decimal, ROUND_HALF_UP

TWO_PLACES = Decimal("0.01")


def format_cents(cents: int) -> str:
    sign = "-" if cents < 0 else ""
    dollars = (Decimal(abs(cents)) / 100).quantize(TWO_PLACES)
    return f"{sign}${dollars:,}"


def dollars_to_cents(dollars: Decimal | str | int) -> int:
    """Dollars to cents, half-up at the cent: Decimal("1.505") -> 151."""
    amount = Decimal(str(dollars)).quantize(TWO_PLACES, ROUND_HALF_UP)
    return int(amount * 100)


def parse_currency(text: str) -> int:
    """Parse a user-entered amount like "$1,234.50" into cents."""
    cleaned = text.strip().replace("$", "").replace(",", "")
    if not cleaned:
        raise ValueError(f"Not a currency amount: {text!r}")
    try:
        return dollars_to_cents(cleaned)
    except ArithmeticError as e:
        raise ValueError(f"Not a currency amount: {text!r}") from e
