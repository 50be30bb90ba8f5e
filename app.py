import io
import json
import logging
from dataclasses import asdict
from datetime import date, timedelta

import pandas as pd
import streamlit as st
import plotly.express as px

from config import Config
from models.errors import MedicationError
from models.store import StatusStore
from utils.adherence import adherence_summary
from utils.calendar_view import TIER_COLORS, TIER_LABELS, markings_frame, month_grid
from utils.logging import setup_logging
from utils.parsers import FREQUENCY_OPTIONS, TIME_OPTIONS, parse_time_slots
from utils.reminders import build_med_schedule, local_today, split_due, status_message

st.set_page_config(page_title="Medication Tracker", layout="wide")

# --- Session State ---
if "config" not in st.session_state:
    st.session_state.config = Config.from_env()
    setup_logging(st.session_state.config.log_format, st.session_state.config.log_level)

if "store" not in st.session_state:
    st.session_state.store = StatusStore()

cfg: Config = st.session_state.config
store: StatusStore = st.session_state.store
logger = logging.getLogger("medtrack.app")

today = local_today(cfg.timezone)
if "selected_date" not in st.session_state:
    st.session_state.selected_date = today

st.title("💊 Medication Tracker")
if st.session_state.get("flash"):
    st.success(st.session_state.pop("flash"))

with st.sidebar:
    st.markdown("### Today")
    st.write(today)
    st.caption(f"Timezone: {cfg.timezone}")
    st.markdown("---")
    picked = st.date_input("Selected date", date.fromisoformat(st.session_state.selected_date),
                           max_value=None if cfg.allow_future_doses else date.fromisoformat(today))
    st.session_state.selected_date = picked.isoformat()

selected = st.session_state.selected_date
snap = store.snapshot()

tab1, tab2, tab3, tab4 = st.tabs([
    "1) Medications",
    "2) Log Doses",
    "3) Adherence Calendar",
    "4) Daily Report",
])

# --- Tab 1: Medications ---
with tab1:
    st.header("Your Medications")
    colA, colB = st.columns(2)
    with colA:
        st.subheader("Add New Medication")
        name = st.text_input("Medication name")
        dosage = st.text_input("Dosage, e.g., 100mg")
        times = st.multiselect("Times", TIME_OPTIONS, default=["Morning"])
        custom_time = st.text_input("Custom time (e.g., 2:30 PM, Before breakfast)") if "Custom" in times else ""
        frequency = st.selectbox("Frequency", FREQUENCY_OPTIONS)
        custom_frequency = st.text_input("Custom frequency (e.g., Every 3 days)") if frequency == "Custom" else None
        if st.button("Add Medication"):
            try:
                med = store.add_medication(name, dosage, parse_time_slots(times, custom_time),
                                           frequency, custom_frequency)
                st.success(f"Added {med.name}")
                snap = store.snapshot()
            except MedicationError as e:
                st.error(str(e))
    with colB:
        st.subheader(f"Schedule for {today}")
        if snap.medications:
            for row in build_med_schedule(snap.medications, snap.event_log, today):
                st.markdown(f"**{row['med']}** · {row['dose']} · {row['frequency']}")
                st.caption(row["schedule_text"] + (f" · First taken: {row['first_taken']}" if row["first_taken"] else ""))
        else:
            st.info("No medications added yet.")

# --- Tab 2: Log Doses ---
with tab2:
    st.header(f"Medications for {selected}")
    due, skipped = split_due(snap.medications, selected)
    if not snap.medications:
        st.info("No medications added yet. Go back to add medications.")
    elif not due:
        st.success("No medications to take today! Enjoy your day off from medications.")
    for row in build_med_schedule(due, snap.event_log, selected):
        st.markdown(f"#### {row['med']}")
        st.caption(f"{row['dose']} - {row['frequency']}")
        for slot in row["slots"]:
            c1, c2, c3 = st.columns([2, 1, 1])
            c1.write(f"{slot['time']} ({slot['status']})")
            for col, taken, label in ((c2, True, "Taken"), (c3, False, "Not Taken")):
                if col.button(label, key=f"{selected}-{row['medication_id']}-{slot['time']}-{taken}"):
                    try:
                        store.record_dose(row["medication_id"], selected, slot["time"], taken,
                                          today=None if cfg.allow_future_doses else today)
                        st.session_state.flash = status_message(slot["time"], taken)
                        st.rerun()
                    except MedicationError as e:
                        st.error(str(e))
    if skipped:
        st.subheader("Skipped Today")
        for row in build_med_schedule(skipped, snap.event_log, selected):
            st.write(f"**{row['med']}**: not scheduled for today. Next dose {row['next_dose']}.")

# --- Tab 3: Adherence Calendar ---
with tab3:
    st.header("Medication Adherence")
    markings = snap.calendar_markings(selected)
    sel = date.fromisoformat(selected)
    grid = month_grid(markings, sel.year, sel.month)
    fig = px.imshow(grid, zmin=0, zmax=100, color_continuous_scale="RdYlGn",
                    title=sel.strftime("%B %Y"), text_auto=True, aspect="auto")
    st.plotly_chart(fig, use_container_width=True)

    legend = pd.DataFrame([
        {"tier": TIER_LABELS[t], "color": color} for t, color in TIER_COLORS.items()
    ])
    st.dataframe(legend, use_container_width=True)

    df = markings_frame(markings)
    if not df.empty:
        st.dataframe(df, use_container_width=True)

# --- Tab 4: Daily Report ---
with tab4:
    st.header("Daily Report")
    week_start = (date.fromisoformat(today) - timedelta(days=6)).isoformat()
    recent = {d: v for d, v in snap.event_log.items() if week_start <= d <= today}
    rep = {
        "date": today,
        "today": asdict(snap.day_adherence(today)),
        "last_7_days": adherence_summary(snap.medications, recent),
        "all_time": adherence_summary(snap.medications, snap.event_log),
        "medications": [
            {"name": m.name, "dosage": m.dosage, "times": list(m.times),
             "frequency": m.frequency_label, "first_taken": m.anchor_date}
            for m in snap.medications
        ],
    }
    st.json(rep)

    b = io.BytesIO(json.dumps(rep, indent=2).encode())
    st.download_button("Save report.json", b, file_name=f"daily_report_{rep['date']}.json", mime="application/json")
    logger.debug("Rendered report for %s", today)
