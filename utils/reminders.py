from typing import Dict, Iterable, List, Optional, Tuple
from datetime import datetime
import pytz

from models.medication import EventLog, Medication
from utils.parsers import DateLike, normalize_date
from utils.recurrence import is_due, next_due_after


def local_today(tz: str = "America/Chicago") -> str:
    """Today's date in the given timezone, as YYYY-MM-DD"""
    return datetime.now(pytz.timezone(tz)).date().isoformat()


def split_due(medications: Iterable[Medication], date: DateLike) -> Tuple[List[Medication], List[Medication]]:
    """Partition medications into (due on date, skipped on date)"""
    due, skipped = [], []
    for m in medications:
        (due if is_due(m, date) else skipped).append(m)
    return due, skipped


def slot_status(value: Optional[bool]) -> str:
    if value is True:
        return "taken"
    if value is False:
        return "not taken"
    return "pending"


def status_message(time_slot: str, taken: bool) -> str:
    return f"{time_slot} medication marked as {'taken' if taken else 'not taken'}"


def build_med_schedule(medications: Iterable[Medication], event_log: EventLog, date: DateLike) -> List[Dict]:
    """Return the schedule for a date: one row per medication, with per-slot status"""
    day = normalize_date(date)
    day_events = event_log.get(day, {})
    out = []
    for m in medications:
        due = is_due(m, day)
        next_dose = None if due else next_due_after(m, day)
        slots = day_events.get(m.id, {})
        out.append({
            "medication_id": m.id,
            "med": m.name,
            "dose": m.dosage,
            "frequency": m.frequency_label,
            "first_taken": m.anchor_date,
            "due": due,
            "next_dose": next_dose,
            "schedule_text": "✓ Take today" if due else f"✗ Skip today (Next dose {next_dose})",
            "slots": [
                {"time": t, "status": slot_status(slots.get(t))}
                for t in m.times
            ] if due else [],
        })
    return out
