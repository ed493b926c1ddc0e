# This project was developed with assistance from AI tools.
"""Display strings for rubles and durations (ru-RU)."""

import math

# ru-RU groups thousands with a no-break space
_GROUP_SEPARATOR = "\u00a0"


def format_currency(value: float) -> str:
    """Format as whole rubles with no-break spaces, e.g. ``1 234 567 ₽``."""
    rubles = math.floor(value + 0.5)
    grouped = f"{abs(rubles):,}".replace(",", _GROUP_SEPARATOR)
    sign = "-" if rubles < 0 else ""
    return f"{sign}{grouped}{_GROUP_SEPARATOR}₽"


def year_word(years: int) -> str:
    """Russian plural of "year" for the given count."""
    last_digit = years % 10
    last_two_digits = years % 100

    if 11 <= last_two_digits <= 14:
        return "лет"
    if last_digit == 1:
        return "год"
    if 2 <= last_digit <= 4:
        return "года"
    return "лет"


def format_months(months: int) -> str:
    """Human-readable duration; negative values (unreachable goal) read "Невозможно"."""
    if months < 0:
        return "Невозможно"

    years, remaining = divmod(months, 12)
    if years == 0:
        return f"{remaining} мес."
    if remaining == 0:
        return f"{years} {year_word(years)}"
    return f"{years} {year_word(years)} {remaining} мес."
