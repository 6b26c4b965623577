from __future__ import annotations
import logging
from datetime import date, datetime, timedelta
from typing import List, Optional
from pydantic import BaseModel, Field
from config import AppConfig
from daily_store import list_stored_days, load_day_slots, save_day_slots
from errors import InvalidSlotError, RemoteSyncError, SlotNotFoundError
from models import ActivityType, RoutineSlot, StudyRoutine, User
from planner import SUNDAY, generate_day_slots, is_catch_up_day, sort_slots
from profiles import save_user
from remote import push_user
from stats import day_stats


logger = logging.getLogger(__name__)

BONUS_HOLIDAY_EVERY = 25  # streak days per bonus holiday
CUSTOM_SLOT_MINUTES = 60
CUSTOM_SLOT_TOPIC = "Custom Study Slot"


class DailyRoutine(BaseModel):
    day: date
    slots: List[RoutineSlot] = Field(default_factory=list)
    catch_up: bool = False


def ensure_study_routine(user: User) -> StudyRoutine:
    if user.study_routine is None:
        user.study_routine = StudyRoutine()
    return user.study_routine


def persist_user(user: User, config: AppConfig) -> bool:
    """
    Save the user locally, then push to the remote store. A failed push is
    logged and the local copy stands. Returns True when the push went through.
    """
    save_user(config.data_dir, user)
    try:
        return push_user(user, config)
    except RemoteSyncError as e:
        logger.warning("%s; keeping local copy only", e)
        return False


def previous_catch_up_day(today: date) -> date:
    """The last Sunday strictly before today."""
    return today - timedelta(days=(today.weekday() - SUNDAY) % 7 or 7)


def missed_on(slot: RoutineSlot) -> Optional[date]:
    """Day a missed slot came from, read off its "<date>:<slot id>" id."""
    prefix, sep, _ = slot.id.partition(":")
    if not sep:
        return None
    try:
        return date.fromisoformat(prefix)
    except ValueError:
        return None


def sweep_missed_slots(user: User, today: date, config: AppConfig) -> bool:
    """
    Collect unfinished slots from stored days before today into the missed
    list. Catch-up days are skipped; their slots are already missed ones.
    Slots from before the last Sunday had their replay and are dropped.
    Returns True when the routine state changed.
    """
    routine = ensure_study_routine(user)
    cutoff = previous_catch_up_day(today)
    changed = False

    kept = [m for m in routine.missed_slots if missed_on(m) is None or missed_on(m) > cutoff]
    if len(kept) != len(routine.missed_slots):
        logger.info("Dropping %d missed slots replayed on %s", len(routine.missed_slots) - len(kept), cutoff.isoformat())
        routine.missed_slots = kept
        changed = True
    known = {s.id for s in routine.missed_slots}

    for day in list_stored_days(config.data_dir, user.id):
        if day >= today or day <= cutoff or is_catch_up_day(day):
            continue
        if routine.last_swept_date and day <= routine.last_swept_date:
            continue
        for slot in load_day_slots(config.data_dir, user.id, day) or []:
            if slot.is_completed:
                continue
            missed_id = f"{day.isoformat()}:{slot.id}"
            if missed_id in known:
                continue
            routine.missed_slots.append(slot.model_copy(update={"id": missed_id}))
            known.add(missed_id)
            changed = True

    yesterday = today - timedelta(days=1)
    if routine.last_swept_date is None or routine.last_swept_date < yesterday:
        routine.last_swept_date = yesterday
        changed = True

    if changed:
        logger.info("User %s has %d missed slots", user.id, len(routine.missed_slots))
    return changed


def load_daily_routine(user: User, config: AppConfig, today: Optional[date] = None) -> DailyRoutine:
    """
    Today's slots for the user: the stored list when one exists, otherwise a
    freshly generated one.
    """
    today = today or date.today()
    catch_up = is_catch_up_day(today)

    stored = load_day_slots(config.data_dir, user.id, today)
    if stored is not None:
        return DailyRoutine(day=today, slots=stored, catch_up=catch_up)

    if sweep_missed_slots(user, today, config):
        persist_user(user, config)

    routine = ensure_study_routine(user)
    slots = generate_day_slots(today, user.class_level, user.stream, routine.missed_slots)
    if not catch_up:
        save_day_slots(config.data_dir, user.id, today, slots)
        logger.info("Generated %d slots for %s on %s", len(slots), user.id, today.isoformat())
    return DailyRoutine(day=today, slots=slots, catch_up=catch_up)


def _find_slot(slots: List[RoutineSlot], slot_id: str) -> RoutineSlot:
    for slot in slots:
        if slot.id == slot_id:
            return slot
    raise SlotNotFoundError(f"No slot with id {slot_id!r}.")


def record_study_day(routine: StudyRoutine, today: date) -> bool:
    """Count today towards the streak once. Returns True if it was counted."""
    if routine.last_study_date == today:
        return False
    routine.streak += 1
    routine.last_study_date = today
    if routine.streak % BONUS_HOLIDAY_EVERY == 0:
        routine.bonus_holidays += 1
        logger.info("Streak reached %d days, bonus holiday awarded", routine.streak)
    return True


def complete_slot(
    user: User,
    slots: List[RoutineSlot],
    slot_id: str,
    config: AppConfig,
    today: Optional[date] = None,
    now: Optional[datetime] = None,
) -> List[RoutineSlot]:
    today = today or date.today()
    slot = _find_slot(slots, slot_id)
    if not slot.is_completed:
        slot.is_completed = True
        slot.completed_at = now or datetime.now()
    save_day_slots(config.data_dir, user.id, today, slots)

    routine = ensure_study_routine(user)
    record_study_day(routine, today)
    routine.daily_stats[today] = day_stats(slots)
    if slot.activity_type == ActivityType.CATCH_UP:
        routine.missed_slots = [m for m in routine.missed_slots if m.id != slot.id]

    persist_user(user, config)
    return slots


def add_custom_slot(
    user: User,
    slots: List[RoutineSlot],
    start_time: str,
    subject_id: str,
    config: AppConfig,
    today: Optional[date] = None,
    now: Optional[datetime] = None,
) -> List[RoutineSlot]:
    start_time = (start_time or "").strip()
    subject_id = (subject_id or "").strip()
    if not start_time or not subject_id:
        raise InvalidSlotError("Pick a time and a subject for the new slot.")

    now = now or datetime.now()
    slot = RoutineSlot(
        id=f"custom-{int(now.timestamp() * 1000)}",
        start_time=start_time,
        duration_minutes=CUSTOM_SLOT_MINUTES,
        subject_id=subject_id,
        topic=CUSTOM_SLOT_TOPIC,
        activity_type=ActivityType.LEARN,
        is_custom=True,
    )
    slots.append(slot)
    slots[:] = sort_slots(slots)
    save_day_slots(config.data_dir, user.id, today or date.today(), slots)
    return slots


def edit_slot_time(
    user: User,
    slots: List[RoutineSlot],
    slot_id: str,
    new_time: str,
    config: AppConfig,
    today: Optional[date] = None,
) -> List[RoutineSlot]:
    """Move a slot to a new start time. An empty time leaves the list alone."""
    if not new_time:
        return slots
    slot = _find_slot(slots, slot_id)
    slot.start_time = new_time
    slots[:] = sort_slots(slots)
    save_day_slots(config.data_dir, user.id, today or date.today(), slots)
    return slots
