import pytest

from models.medication import Frequency, Medication
from models.store import StatusStore


@pytest.fixture
def store():
    return StatusStore()


@pytest.fixture
def make_med():
    def _make(frequency=Frequency.DAILY, anchor=None, times=("Morning",), med_id=1, custom=None):
        return Medication(
            id=med_id,
            name=f"Med {med_id}",
            dosage="10mg",
            times=tuple(times),
            frequency=frequency,
            custom_frequency=custom,
            anchor_date=anchor,
        )
    return _make
