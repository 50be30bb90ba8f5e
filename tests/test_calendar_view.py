import math

from models.medication import AdherenceTier, DayMarking
from utils.calendar_view import (
    SELECTED_COLOR,
    TIER_COLORS,
    WEEKDAYS,
    marking_color,
    markings_frame,
    month_grid,
)


def _markings():
    return {
        "2024-01-15": DayMarking("2024-01-15", AdherenceTier.HIGH, 100, 2, 2),
        "2024-01-01": DayMarking("2024-01-01", AdherenceTier.LOW, 0, 0, 1),
        "2024-01-20": DayMarking("2024-01-20", AdherenceTier.NONE, is_selected=True),
    }


def test_markings_frame_sorted_by_date():
    df = markings_frame(_markings())
    assert list(df["date"]) == ["2024-01-01", "2024-01-15", "2024-01-20"]
    assert list(df["tier"]) == ["low", "high", "none"]
    assert df.loc[1, "tooltip"] == "100% taken (2/2)"
    assert list(df["color"]) == [TIER_COLORS[AdherenceTier.LOW], TIER_COLORS[AdherenceTier.HIGH], SELECTED_COLOR]


def test_markings_frame_empty():
    df = markings_frame({})
    assert df.empty
    assert "percent" in df.columns


def test_marking_color_prefers_selection():
    m = DayMarking("2024-01-01", AdherenceTier.HIGH, 100, 1, 1, is_selected=True)
    assert marking_color(m) == SELECTED_COLOR


def test_month_grid_places_days_by_weekday():
    # January 2024 starts on a Monday
    grid = month_grid(_markings(), 2024, 1)
    assert list(grid.columns) == WEEKDAYS
    assert len(grid) == 5
    assert grid.loc["W1", "Mon"] == 0
    assert grid.loc["W3", "Mon"] == 100
    # selected but nothing scheduled
    assert math.isnan(grid.loc["W3", "Sat"])
    assert math.isnan(grid.loc["W2", "Tue"])
