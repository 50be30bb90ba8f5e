from typing import Dict, Iterable, List, Optional
from collections import Counter

from models.medication import (
    AdherenceTier,
    DateEvents,
    DayAdherence,
    DayMarking,
    EventLog,
    Medication,
)
from utils.parsers import DateLike, normalize_date
from utils.recurrence import is_due

HIGH_THRESHOLD = 90
MEDIUM_THRESHOLD = 50


def _percent(taken: int, scheduled: int) -> int:
    if scheduled <= 0:
        return 0
    # half-up, so 2/3 -> 67 and 1/2 -> 50
    return int(100 * taken / scheduled + 0.5)


def day_adherence(medications: Iterable[Medication], events_for_date: Optional[DateEvents],
                  date: DateLike) -> DayAdherence:
    """
    Scheduled vs taken doses for one date.
    Every time slot of a due medication counts as one scheduled dose; taken
    entries are counted per medication without matching slot names, capped at
    the medication's slot count.
    """
    events_for_date = events_for_date or {}
    scheduled = taken = 0
    for med in medications:
        if not is_due(med, date):
            continue
        scheduled += len(med.times)
        slots = events_for_date.get(med.id) or {}
        taken += min(sum(1 for v in slots.values() if v is True), len(med.times))
    return DayAdherence(scheduled=scheduled, taken=taken, percent=_percent(taken, scheduled))


def adherence_tier(percent: int, scheduled: int) -> AdherenceTier:
    if scheduled == 0:
        return AdherenceTier.NONE
    if percent >= HIGH_THRESHOLD:
        return AdherenceTier.HIGH
    if percent >= MEDIUM_THRESHOLD:
        return AdherenceTier.MEDIUM
    return AdherenceTier.LOW


def calendar_markings(medications: Iterable[Medication], event_log: EventLog,
                      selected_date: DateLike) -> Dict[str, DayMarking]:
    """Per-date tier and counts for every logged date, plus the selected date."""
    medications = list(medications)
    selected = normalize_date(selected_date)
    out: Dict[str, DayMarking] = {}
    for day in sorted(event_log):
        adh = day_adherence(medications, event_log[day], day)
        out[day] = DayMarking(
            date=day,
            tier=adherence_tier(adh.percent, adh.scheduled),
            percent=adh.percent,
            taken=adh.taken,
            scheduled=adh.scheduled,
            is_selected=(day == selected),
        )
    if selected not in out:
        out[selected] = DayMarking(date=selected, tier=AdherenceTier.NONE, is_selected=True)
    return out


def adherence_summary(medications: Iterable[Medication], event_log: EventLog) -> Dict:
    """Totals over every logged date, for the daily report."""
    medications = list(medications)
    days: List[DayAdherence] = [day_adherence(medications, event_log[d], d) for d in sorted(event_log)]
    if not days:
        return {"days": 0, "scheduled": 0, "taken": 0, "adherence_pct": None, "tiers": {}}
    scheduled = sum(d.scheduled for d in days)
    taken = sum(d.taken for d in days)
    tiers = Counter(adherence_tier(d.percent, d.scheduled).value for d in days)
    pct = round(100.0 * taken / scheduled, 1) if scheduled else None
    return {
        "days": len(days),
        "scheduled": scheduled,
        "taken": taken,
        "adherence_pct": pct,
        "tiers": dict(tiers),
    }
