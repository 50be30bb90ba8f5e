from typing import Iterable, Tuple, Union
from datetime import date, datetime

from models.errors import ValidationError
from models.medication import Frequency

TIME_OPTIONS = ["Morning", "Noon", "Afternoon", "Evening", "Bedtime", "Custom"]
FREQUENCY_OPTIONS = [f.label for f in Frequency]

CUSTOM_SLOT_PREFIX = "Custom:"

DateLike = Union[str, date]


def parse_date(value: DateLike) -> date:
    """Accept a YYYY-MM-DD string (or a date) and return a date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise ValidationError(f"Invalid date: {value!r}")
    try:
        return datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"Invalid date (expected YYYY-MM-DD): {value!r}") from None


def normalize_date(value: DateLike) -> str:
    return parse_date(value).isoformat()


def parse_frequency(label: Union[str, Frequency]) -> Frequency:
    """
    Map a frequency label to a Frequency.
    Accepts display labels ("Every other day") and enum names ("EVERY_OTHER_DAY"),
    case-insensitively, with spaces, dashes and underscores treated alike.
    """
    if isinstance(label, Frequency):
        return label
    key = str(label or "").strip().lower().replace("-", " ").replace("_", " ")
    for freq in Frequency:
        if key in (freq.label.lower(), freq.name.lower().replace("_", " ")):
            return freq
    raise ValidationError(f"Unknown frequency: {label!r}")


def custom_slot(text: str) -> str:
    text = (text or "").strip()
    if not text:
        raise ValidationError("Please enter a custom time")
    return f"{CUSTOM_SLOT_PREFIX}{text}"


def parse_time_slots(labels: Iterable[str], custom_time: str = "") -> Tuple[str, ...]:
    """
    Trim and de-duplicate time slot labels, keeping the first occurrence order.
    A bare "Custom" entry is replaced by "Custom:<custom_time>".
    """
    slots = []
    for raw in labels or []:
        if not isinstance(raw, str) or not raw.strip():
            raise ValidationError("Time slot labels must be non-empty")
        label = raw.strip()
        if label == "Custom":
            label = custom_slot(custom_time)
        if label not in slots:
            slots.append(label)
    return tuple(slots)
