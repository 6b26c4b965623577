from __future__ import annotations
import logging
import streamlit as st
from datetime import date, datetime

from calendar_export import slots_to_ics
from config import configure_logging, load_config
from errors import RoutineError
from models import ActivityType, RoutineSlot, User
from pdf_export import routine_to_pdf
from profiles import create_user, delete_user, list_users, load_user, save_user
from routine import (
    add_custom_slot,
    complete_slot,
    edit_slot_time,
    ensure_study_routine,
    load_daily_routine,
)
from stats import completion_percent, stats_frame
from subjects import STREAM_NAMES, SENIOR_LEVELS, subject_name, subject_options
from timer import SlotTimer


CLASS_LEVELS = ["6", "7", "8", "9", "10", "11", "12"]
ACTIVITY_BADGE = {
    ActivityType.LEARN: "🔵 LEARN",
    ActivityType.PRACTICE: "🔵 PRACTICE",
    ActivityType.REVISION: "🟡 REVISION",
    ActivityType.TEST: "🔴 TEST",
    ActivityType.CATCH_UP: "🟣 CATCH UP",
}

logger = logging.getLogger(__name__)

st.set_page_config(page_title="Daily Routine", page_icon="⏰", layout="centered")


def _get_config():
    if "config" not in st.session_state:
        config = load_config()
        configure_logging(config.log_level)
        st.session_state.config = config
    return st.session_state.config


def _ensure_session_state() -> list[str]:
    config = _get_config()
    users = list_users(config.data_dir)
    if not users:
        users = [create_user(config.data_dir, "Student").id]

    if st.session_state.get("user_id") not in users:
        st.session_state.user_id = users[0]
        st.session_state.pop("routine", None)

    if "user" not in st.session_state or st.session_state.user.id != st.session_state.user_id:
        st.session_state.user = load_user(config.data_dir, st.session_state.user_id)
        st.session_state.pop("routine", None)

    if "timer" not in st.session_state:
        st.session_state.timer = SlotTimer(on_finished=lambda event: _queue_toast(f"⏰ {event.message}"))

    # A new day, or a level change, asks for a fresh load
    routine_key = (st.session_state.user_id, date.today(), st.session_state.user.class_level, st.session_state.user.stream)
    if st.session_state.get("routine_key") != routine_key:
        st.session_state.routine = load_daily_routine(st.session_state.user, config)
        st.session_state.routine_key = routine_key
        st.session_state.timer.stop()

    return users


def _switch_user(user_id: str) -> None:
    logger.info("Switching to user %s", user_id)
    st.session_state.user_id = user_id
    st.session_state.pop("user", None)
    st.session_state.pop("routine_key", None)


def _queue_toast(message: str) -> None:
    st.session_state.toast_message = message


def _flush_toast() -> None:
    message = st.session_state.pop("toast_message", None)
    if message:
        st.toast(message)


def _name(subject_id: str, user: User) -> str:
    return subject_name(subject_id, user.class_level, user.stream)


def _subject_names(slots: list[RoutineSlot], user: User) -> dict[str, str]:
    return {s.subject_id: _name(s.subject_id, user) for s in slots}


@st.fragment(run_every=1)
def render_timer_status() -> None:
    timer: SlotTimer = st.session_state.timer
    if not timer.is_running:
        return
    event = timer.advance()
    if event is not None:
        st.rerun()
    st.info(f"⏱️ Timer running: {timer.time_left()} left")


@st.dialog("Add custom slot")
def render_add_slot_dialog(user: User, slots: list[RoutineSlot]) -> None:
    config = _get_config()
    start = st.time_input("Time", value=None, step=300)
    options = subject_options(user.class_level, user.stream)
    subject = st.selectbox(
        "Subject",
        options=[None] + options,
        format_func=lambda s: "Select subject" if s is None else s.name,
    )
    col_cancel, col_add = st.columns(2)
    if col_cancel.button("Cancel"):
        st.rerun()
    if col_add.button("Add to routine", type="primary"):
        try:
            add_custom_slot(
                user,
                slots,
                start.strftime("%H:%M") if start else "",
                subject.id if subject else "",
                config,
            )
        except ValueError as e:
            st.error(str(e))
        else:
            _queue_toast("Slot added.")
            st.rerun()


@st.dialog("Edit start time")
def render_edit_time_dialog(user: User, slots: list[RoutineSlot], slot: RoutineSlot) -> None:
    config = _get_config()
    current = None
    try:
        current = datetime.strptime(slot.start_time, "%H:%M").time()
    except ValueError:
        pass
    new_time = st.time_input("New time", value=current, step=300)
    if st.button("Save", type="primary"):
        edit_slot_time(user, slots, slot.id, new_time.strftime("%H:%M") if new_time else "", config)
        _queue_toast("Time updated.")
        st.rerun()


def render_header(user: User, slots: list[RoutineSlot], catch_up: bool) -> None:
    routine = ensure_study_routine(user)
    title_col, streak_col = st.columns([3, 1])
    with title_col:
        st.header("Sunday Catch-Up" if catch_up else "Daily Routine")
        st.caption(date.today().strftime("%A, %B %d"))
    with streak_col:
        st.metric("🔥 Day streak", routine.streak)
        st.caption("Target: 6 Hrs")

    a, b = st.columns(2)
    a.metric("Completed", f"{completion_percent(slots)}%")
    b.metric("Bonus holidays", routine.bonus_holidays)


def render_slot(user: User, slots: list[RoutineSlot], slot: RoutineSlot) -> None:
    config = _get_config()
    timer: SlotTimer = st.session_state.timer
    running = timer.is_running_for(slot.id)

    with st.container(border=True):
        top_left, top_right = st.columns([4, 1])
        top_left.markdown(f"`{slot.start_time}` {ACTIVITY_BADGE.get(slot.activity_type, slot.activity_type.value)}")
        if top_right.button("✏️", key=f"edit_{slot.id}", help="Edit time"):
            render_edit_time_dialog(user, slots, slot)

        st.subheader(_name(slot.subject_id, user))
        st.caption(slot.topic)

        if slot.is_completed:
            st.success("Completed")
            return

        timer_col, done_col = st.columns([3, 1])
        label = f"⏹ Stop ({timer.time_left()})" if running else "▶ Start timer"
        if timer_col.button(label, key=f"timer_{slot.id}", use_container_width=True):
            timer.start(slot.id, slot.duration_minutes)
            st.rerun()
        if done_col.button("✅ Done", key=f"done_{slot.id}", use_container_width=True):
            try:
                complete_slot(user, slots, slot.id, config)
            except RoutineError as e:
                st.error(str(e))
            else:
                _queue_toast("Slot completed.")
                st.rerun()


def render_routine(user: User) -> None:
    routine = st.session_state.routine
    slots = routine.slots

    render_header(user, slots, routine.catch_up)
    render_timer_status()
    st.divider()

    if routine.catch_up and not slots:
        st.info("🎉 No backlog! Enjoy your holiday.")
    else:
        for slot in slots:
            render_slot(user, slots, slot)

    if st.button("➕ Add slot", type="primary"):
        render_add_slot_dialog(user, slots)

    st.divider()
    st.subheader("Exports")
    names = _subject_names(slots, user)
    ics_bytes, ics_warnings = slots_to_ics(slots, routine.day, names)
    st.download_button(
        "Download ICS",
        data=ics_bytes,
        file_name=f"routine_{routine.day.isoformat()}.ics",
        mime="text/calendar",
    )
    if ics_warnings:
        st.warning(" | ".join(ics_warnings))
    st.download_button(
        "Download PDF",
        data=routine_to_pdf(user, routine.day, slots, names),
        file_name=f"routine_{routine.day.isoformat()}.pdf",
        mime="application/pdf",
    )


def render_progress(user: User) -> None:
    st.header("Progress")
    routine = ensure_study_routine(user)
    a, b, c = st.columns(3)
    a.metric("Streak", routine.streak)
    b.metric("Bonus holidays", routine.bonus_holidays)
    c.metric("Missed slots", len(routine.missed_slots))

    df = stats_frame(routine.daily_stats)
    if df.empty:
        st.info("Complete a slot to start tracking your days.")
        return
    st.dataframe(
        df,
        hide_index=True,
        use_container_width=True,
        column_config={
            "Date": st.column_config.DateColumn("Date"),
            "Completion %": st.column_config.NumberColumn("Completion %", format="%.1f%%"),
        },
    )


def render_settings(user: User) -> None:
    st.header("Settings")
    config = _get_config()
    class_level = st.selectbox(
        "Class",
        CLASS_LEVELS,
        index=CLASS_LEVELS.index(user.class_level) if user.class_level in CLASS_LEVELS else CLASS_LEVELS.index("10"),
    )
    stream = None
    if class_level in SENIOR_LEVELS:
        streams = list(STREAM_NAMES)
        stream = st.selectbox(
            "Stream",
            streams,
            index=streams.index(user.stream) if user.stream in streams else 0,
            format_func=lambda s: STREAM_NAMES[s],
        )
    st.caption("Changes apply from the next day that has no saved routine.")

    if st.button("Save settings", type="primary"):
        user.class_level = class_level
        user.stream = stream
        save_user(config.data_dir, user)
        st.toast("Settings saved.")


users = _ensure_session_state()
config = _get_config()
user: User = st.session_state.user

_flush_toast()

with st.sidebar:
    st.header("Student")
    selected = st.selectbox(
        "Active student",
        options=users,
        index=users.index(user.id) if user.id in users else 0,
        format_func=lambda uid: load_user(config.data_dir, uid).name or uid,
    )
    if selected != user.id:
        _switch_user(selected)
        st.rerun()

    with st.form("create_user_form"):
        new_name = st.text_input("New student name", placeholder="e.g. Asha")
        new_level = st.selectbox("Class", CLASS_LEVELS, index=CLASS_LEVELS.index("10"))
        if st.form_submit_button("Create student"):
            try:
                new_user = create_user(config.data_dir, new_name, new_level)
            except ValueError as e:
                st.error(str(e))
            else:
                _queue_toast(f"Student '{new_user.name}' created.")
                _switch_user(new_user.id)
                st.rerun()

    if st.button("Delete student", disabled=len(users) <= 1):

        @st.dialog("Delete student?")
        def _confirm_delete_user() -> None:
            st.write(f"Delete '{user.name or user.id}' and their profile?")
            if st.button("Delete", type="primary"):
                delete_user(config.data_dir, user.id)
                remaining = list_users(config.data_dir)
                _switch_user(remaining[0])
                _queue_toast("Student deleted.")
                st.rerun()

        _confirm_delete_user()

    st.divider()
    page = st.radio("Navigate", ["Routine", "Progress", "Settings"], key="nav_page")
    st.caption(f"Data is stored locally in {config.data_dir}.")

if page == "Routine":
    render_routine(user)
elif page == "Progress":
    render_progress(user)
elif page == "Settings":
    render_settings(user)
