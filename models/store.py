"""
Status store: the medication registry and the dose event log.

The store is the only mutable state in the scheduler. Callers mutate it through
add_medication / record_dose and read it through copies or snapshots; all
access goes through a single lock so that id assignment and anchor-date
assignment are atomic.
"""
from __future__ import annotations
import copy
import logging
import threading
from dataclasses import dataclass, replace
from typing import Dict, Iterable, List, Optional, Tuple

from models.errors import NotFoundError, ValidationError
from models.medication import DateEvents, DayAdherence, DayMarking, EventLog, Frequency, Medication
from utils.adherence import calendar_markings, day_adherence
from utils.parsers import DateLike, normalize_date, parse_frequency, parse_time_slots

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoreSnapshot:
    medications: Tuple[Medication, ...]
    event_log: EventLog

    def day_adherence(self, date: DateLike) -> DayAdherence:
        day = normalize_date(date)
        return day_adherence(self.medications, self.event_log.get(day), day)

    def calendar_markings(self, selected_date: DateLike) -> Dict[str, DayMarking]:
        return calendar_markings(self.medications, self.event_log, selected_date)


class StatusStore:
    def __init__(self):
        self._lock = threading.RLock()
        self._medications: List[Medication] = []
        self._event_log: EventLog = {}

    # --- readers ---

    @property
    def medications(self) -> Tuple[Medication, ...]:
        with self._lock:
            return tuple(self._medications)

    @property
    def event_log(self) -> EventLog:
        with self._lock:
            return copy.deepcopy(self._event_log)

    def snapshot(self) -> StoreSnapshot:
        with self._lock:
            return StoreSnapshot(tuple(self._medications), copy.deepcopy(self._event_log))

    def get_medication(self, medication_id: int) -> Medication:
        with self._lock:
            return self._medications[self._index_of(medication_id)]

    def events_for(self, date: DateLike) -> DateEvents:
        day = normalize_date(date)
        with self._lock:
            return copy.deepcopy(self._event_log.get(day, {}))

    def dose_status(self, date: DateLike, medication_id: int, time_slot: str) -> Optional[bool]:
        """True/False when recorded, None when nothing was recorded for the slot."""
        return self.events_for(date).get(medication_id, {}).get(time_slot)

    def day_adherence(self, date: DateLike) -> DayAdherence:
        return self.snapshot().day_adherence(date)

    def calendar_markings(self, selected_date: DateLike) -> Dict[str, DayMarking]:
        return self.snapshot().calendar_markings(selected_date)

    # --- mutations ---

    def add_medication(self, name: str, dosage: str, times: Iterable[str],
                       frequency="Daily", custom_frequency: Optional[str] = None) -> Medication:
        name = (name or "").strip()
        dosage = (dosage or "").strip()
        try:
            if not name:
                raise ValidationError("Medication name is required")
            if not dosage:
                raise ValidationError("Dosage is required")
            slots = parse_time_slots(times)
            if not slots:
                raise ValidationError("Please select at least one time for the medication")
            freq = parse_frequency(frequency)
            custom = None
            if freq is Frequency.CUSTOM:
                custom = (custom_frequency or "").strip()
                if not custom:
                    raise ValidationError("Please enter a custom frequency")
        except ValidationError as e:
            logger.warning("Rejected medication: %s", e, extra={"medtrack_name": name})
            raise

        with self._lock:
            next_id = max((m.id for m in self._medications), default=0) + 1
            med = Medication(
                id=next_id,
                name=name,
                dosage=dosage,
                times=slots,
                frequency=freq,
                custom_frequency=custom,
            )
            self._medications.append(med)

        logger.info("Added medication %s (%s)", med.name, med.frequency_label,
                    extra={"medtrack_medication_id": med.id})
        return med

    def record_dose(self, medication_id: int, date: DateLike, time_slot: str, taken: bool,
                    today: Optional[DateLike] = None) -> Medication:
        """
        Upsert the taken flag for (date, medication, slot).
        The first taken=True event anchors the medication's recurrence; later
        events never move the anchor. Returns the current medication record.
        """
        day = normalize_date(date)
        slot = (time_slot or "").strip()
        if not slot:
            raise ValidationError("Time slot is required")
        # YYYY-MM-DD compares chronologically as plain strings
        if today is not None and day > normalize_date(today):
            raise ValidationError(f"Cannot record a dose for a future date ({day})")

        with self._lock:
            idx = self._index_of(medication_id)
            self._event_log.setdefault(day, {}).setdefault(medication_id, {})[slot] = bool(taken)
            med = self._medications[idx]
            if taken and not med.anchor_date:
                med = replace(med, anchor_date=day)
                self._medications[idx] = med
                logger.info("Anchored %s on %s", med.name, day,
                            extra={"medtrack_medication_id": med.id})

        logger.info("Recorded %s %s as %s", day, slot, "taken" if taken else "not taken",
                    extra={"medtrack_medication_id": medication_id})
        return med

    def _index_of(self, medication_id: int) -> int:
        for i, med in enumerate(self._medications):
            if med.id == medication_id:
                return i
        raise NotFoundError(medication_id)
