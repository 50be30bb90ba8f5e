"""
Recurrence rules: is a medication due on a given date, and when is it due next.

All dates are calendar dates (YYYY-MM-DD strings or datetime.date); the anchor
is the date the medication was first marked taken. Functions here never read
the clock, the caller passes the date it cares about.
"""
from __future__ import annotations
import calendar
from datetime import date, timedelta

from models.medication import Frequency, Medication
from utils.parsers import DateLike, parse_date

# Longest gap between two due dates of any computable frequency (monthly,
# anchor on the 31st, clamped into a short month and back out).
_MAX_GAP_DAYS = 62


def days_elapsed(anchor: DateLike, on: DateLike) -> int:
    """Whole days between anchor and date, ignoring direction."""
    return abs((parse_date(on) - parse_date(anchor)).days)


def _monthly_due_day(anchor_day: int, year: int, month: int) -> int:
    # anchors on the 29th-31st fall on the last day of shorter months
    return min(anchor_day, calendar.monthrange(year, month)[1])


def is_due(medication: Medication, on: DateLike) -> bool:
    if not medication.anchor_date:
        return True

    freq = medication.frequency
    if freq in (Frequency.DAILY, Frequency.CUSTOM):
        return True

    day = parse_date(on)
    anchor = parse_date(medication.anchor_date)
    elapsed = days_elapsed(anchor, day)

    if freq is Frequency.EVERY_OTHER_DAY:
        return elapsed % 2 == 0
    if freq is Frequency.WEEKLY:
        return elapsed % 7 == 0
    if freq is Frequency.MONTHLY:
        return day.day == _monthly_due_day(anchor.day, day.year, day.month)
    return True


def next_due_date(medication: Medication, after: DateLike) -> date:
    """First date strictly after `after` on which the medication is due."""
    start = parse_date(after)
    for offset in range(1, _MAX_GAP_DAYS + 1):
        candidate = start + timedelta(days=offset)
        if is_due(medication, candidate):
            return candidate
    # unreachable for the known frequencies
    raise RuntimeError(f"No due date within {_MAX_GAP_DAYS} days for medication {medication.id}")


def next_due_after(medication: Medication, from_date: DateLike) -> str:
    """Human-oriented description of the next dose, e.g. "tomorrow" or "in 3 days"."""
    freq = medication.frequency
    if not medication.anchor_date or freq in (Frequency.DAILY, Frequency.CUSTOM):
        return "tomorrow"

    start = parse_date(from_date)
    if freq is Frequency.MONTHLY:
        if is_due(medication, start):
            return "today"
        return f"on {next_due_date(medication, start).isoformat()}"

    gap = (next_due_date(medication, start) - start).days
    if gap == 1:
        return "tomorrow"
    return f"in {gap} days"
