from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple

# date -> medication id -> time slot -> taken
SlotStatus = Dict[str, bool]
DateEvents = Dict[int, SlotStatus]
EventLog = Dict[str, DateEvents]


class Frequency(Enum):
    DAILY = "Daily"
    EVERY_OTHER_DAY = "Every other day"
    WEEKLY = "Weekly"
    MONTHLY = "Monthly"
    CUSTOM = "Custom"

    @property
    def label(self) -> str:
        return self.value


class AdherenceTier(Enum):
    NONE = "none"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True)
class Medication:
    id: int
    name: str
    dosage: str
    times: Tuple[str, ...]
    frequency: Frequency = Frequency.DAILY
    custom_frequency: Optional[str] = None
    anchor_date: Optional[str] = None  # first date marked taken

    @property
    def frequency_label(self) -> str:
        if self.frequency is Frequency.CUSTOM and self.custom_frequency:
            return self.custom_frequency
        return self.frequency.label


@dataclass(frozen=True)
class DayAdherence:
    scheduled: int = 0
    taken: int = 0
    percent: int = 0


@dataclass(frozen=True)
class DayMarking:
    date: str
    tier: AdherenceTier
    percent: int = 0
    taken: int = 0
    scheduled: int = 0
    is_selected: bool = False

    @property
    def marked(self) -> bool:
        return self.scheduled > 0

    @property
    def gradient_class(self) -> int:
        """Percent bucketed down to the nearest 10, for the 0..100 legend."""
        return (self.percent // 10) * 10

    @property
    def tooltip(self) -> str:
        return f"{self.percent}% taken ({self.taken}/{self.scheduled})"
