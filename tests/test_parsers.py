from datetime import date, datetime

import pytest

from models.errors import ValidationError
from models.medication import Frequency
from utils.parsers import FREQUENCY_OPTIONS, normalize_date, parse_date, parse_frequency, parse_time_slots


def test_parse_date_accepts_strings_and_dates():
    assert parse_date("2024-01-08") == date(2024, 1, 8)
    assert parse_date(date(2024, 1, 8)) == date(2024, 1, 8)
    assert parse_date(datetime(2024, 1, 8, 13, 30)) == date(2024, 1, 8)
    assert normalize_date(" 2024-01-08 ") == "2024-01-08"


@pytest.mark.parametrize("value", ["01/08/2024", "2024-02-30", "", None, 20240108])
def test_parse_date_rejects_malformed(value):
    with pytest.raises(ValidationError):
        parse_date(value)


@pytest.mark.parametrize("label,expected", [
    ("Daily", Frequency.DAILY),
    ("every other day", Frequency.EVERY_OTHER_DAY),
    ("EVERY_OTHER_DAY", Frequency.EVERY_OTHER_DAY),
    ("every-other-day", Frequency.EVERY_OTHER_DAY),
    ("Weekly", Frequency.WEEKLY),
    ("monthly", Frequency.MONTHLY),
    ("Custom", Frequency.CUSTOM),
    (Frequency.WEEKLY, Frequency.WEEKLY),
])
def test_parse_frequency(label, expected):
    assert parse_frequency(label) is expected


def test_frequency_options_are_parseable():
    assert [parse_frequency(o) for o in FREQUENCY_OPTIONS] == list(Frequency)


def test_parse_frequency_unknown():
    with pytest.raises(ValidationError):
        parse_frequency("hourly")


def test_parse_time_slots_custom_entry():
    assert parse_time_slots(["Morning", "Custom"], "2:30 PM") == ("Morning", "Custom:2:30 PM")
    assert parse_time_slots(["Custom:2:30 PM"]) == ("Custom:2:30 PM",)


def test_parse_time_slots_custom_without_text():
    with pytest.raises(ValidationError, match="custom time"):
        parse_time_slots(["Custom"], "   ")


def test_parse_time_slots_empty():
    assert parse_time_slots([]) == ()
