"""Business hours helpers."""

from datetime import date

from digicard.models import DEFAULT_HOURS, WEEKDAYS, BusinessHour
from digicard.utils.text import new_id


def weekday_name(day: date | None = None) -> str:
    """
    Get the English weekday name for a date.

    Locale independent, unlike strftime("%A").

    Args:
        day: Date to name (defaults to today).

    Returns:
        Weekday name, e.g. "Monday".
    """
    day = day or date.today()
    return WEEKDAYS[day.weekday()]


def backfill_business_hours(hours: list[BusinessHour]) -> list[BusinessHour]:
    """
    Complete a list of opening hours to exactly one entry per weekday.

    Existing weekday entries keep their values and relative order (the first
    entry wins when a day appears twice, entries with unknown day labels are
    dropped). Missing days are appended from the defaults in week order.
    Appended entries get ids that do not clash with the kept ones.

    Args:
        hours: Entries as stored on a card (may be partial).

    Returns:
        New list with seven entries.
    """
    kept: list[BusinessHour] = []
    seen_days: set[str] = set()
    for entry in hours:
        if entry.day in DEFAULT_HOURS and entry.day not in seen_days:
            kept.append(entry)
            seen_days.add(entry.day)

    used_ids = {entry.id for entry in kept}
    for index, day in enumerate(WEEKDAYS, start=1):
        if day in seen_days:
            continue
        opening, closing, closed = DEFAULT_HOURS[day]
        entry_id = str(index) if str(index) not in used_ids else new_id()
        used_ids.add(entry_id)
        kept.append(
            BusinessHour(id=entry_id, day=day, open=opening, close=closing, is_closed=closed)
        )

    return kept


def is_valid_time(value: str) -> bool:
    """
    Check a 24h "HH:MM" time string.

    Args:
        value: Time string to check.

    Returns:
        True for values like "09:00" or "23:59".
    """
    if len(value) != 5 or value[2] != ":":
        return False
    hours, minutes = value[:2], value[3:]
    if not (hours.isdigit() and minutes.isdigit()):
        return False
    return int(hours) < 24 and int(minutes) < 60
