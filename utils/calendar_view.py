from typing import Dict
import calendar
from datetime import date

import numpy as np
import pandas as pd

from models.medication import AdherenceTier, DayMarking

TIER_COLORS = {
    AdherenceTier.HIGH: "#32cd32",    # 90-100%
    AdherenceTier.MEDIUM: "#ffd700",  # 50-89%
    AdherenceTier.LOW: "#ff4d4d",     # 0-49%
    AdherenceTier.NONE: "#e0e0e0",
}
TIER_LABELS = {
    AdherenceTier.HIGH: "High (90-100%)",
    AdherenceTier.MEDIUM: "Medium (50-89%)",
    AdherenceTier.LOW: "Low (0-49%)",
    AdherenceTier.NONE: "No medications",
}
SELECTED_COLOR = "#4F8EF7"

WEEKDAYS = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
MARKING_COLUMNS = ["date", "tier", "percent", "taken", "scheduled", "selected", "tooltip", "color"]


def marking_color(marking: DayMarking) -> str:
    if marking.is_selected:
        return SELECTED_COLOR
    return TIER_COLORS[marking.tier]


def markings_frame(markings: Dict[str, DayMarking]) -> pd.DataFrame:
    rows = [{
        "date": m.date,
        "tier": m.tier.value,
        "percent": m.percent,
        "taken": m.taken,
        "scheduled": m.scheduled,
        "selected": m.is_selected,
        "tooltip": m.tooltip,
        "color": marking_color(m),
    } for _, m in sorted(markings.items())]
    return pd.DataFrame(rows, columns=MARKING_COLUMNS)


def month_grid(markings: Dict[str, DayMarking], year: int, month: int) -> pd.DataFrame:
    """
    Week-by-weekday grid of adherence percent for one month.
    Days with nothing scheduled (or outside the month) are NaN.
    """
    weeks = calendar.Calendar(firstweekday=0).monthdayscalendar(year, month)
    grid = np.full((len(weeks), 7), np.nan)
    for w, week in enumerate(weeks):
        for d, day in enumerate(week):
            if day == 0:
                continue
            m = markings.get(date(year, month, day).isoformat())
            if m is not None and m.marked:
                grid[w, d] = m.percent
    return pd.DataFrame(grid, columns=WEEKDAYS, index=[f"W{i + 1}" for i in range(len(weeks))])
