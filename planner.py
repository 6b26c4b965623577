from __future__ import annotations
from datetime import date
from typing import List, Optional, Tuple
from errors import EmptySubjectCatalogError
from models import ActivityType, RoutineSlot, Subject
from subjects import core_subjects, get_subjects_list


SUNDAY = 6  # date.weekday()

# (id, start, subject key, topic, activity)
STANDARD_DAY = [
    ("slot-1", "06:00", "current_affairs", "Daily Current Affairs & Notes", ActivityType.LEARN),
    ("slot-2", "16:00", "sub1", "Core Concept Study", ActivityType.LEARN),
    ("slot-3", "17:15", "sub1", "Practice Questions (MCQ)", ActivityType.PRACTICE),
    ("slot-4", "19:00", "sub2", "Core Concept Study", ActivityType.LEARN),
    ("slot-5", "20:15", "sub2", "Revision (SRS System)", ActivityType.REVISION),
    ("slot-6", "21:30", "self_analysis", "Day Analysis & Next Day Plan", ActivityType.TEST),
]
STANDARD_SLOT_MINUTES = 60


def is_catch_up_day(day: date) -> bool:
    return day.weekday() == SUNDAY


def sort_slots(slots: List[RoutineSlot]) -> List[RoutineSlot]:
    # "HH:MM" strings order chronologically when zero-padded
    return sorted(slots, key=lambda s: s.start_time)


def pick_core_subjects(subjects: List[Subject], day: date) -> Tuple[Subject, Subject]:
    """
    Rotate through the core subjects two at a time, Monday first, so each
    weekday leans on a different pair.
    """
    if not subjects:
        raise EmptySubjectCatalogError("No subjects available for this class level.")

    core = core_subjects(subjects)
    if len(core) < 2:
        first = subjects[0]
        second = subjects[1] if len(subjects) > 1 else subjects[0]
        return first, second

    rotation_idx = day.weekday() * 2  # Mon=0, Tue=2, ...
    return core[rotation_idx % len(core)], core[(rotation_idx + 1) % len(core)]


def build_standard_day(sub1: Subject, sub2: Subject) -> List[RoutineSlot]:
    by_key = {"sub1": sub1.id, "sub2": sub2.id}
    return [
        RoutineSlot(
            id=slot_id,
            start_time=start,
            duration_minutes=STANDARD_SLOT_MINUTES,
            subject_id=by_key.get(subject_key, subject_key),
            topic=topic,
            activity_type=activity,
        )
        for slot_id, start, subject_key, topic, activity in STANDARD_DAY
    ]


def build_catch_up_day(missed_slots: List[RoutineSlot]) -> List[RoutineSlot]:
    return [s.model_copy(update={"activity_type": ActivityType.CATCH_UP}) for s in missed_slots]


def generate_day_slots(
    day: date,
    class_level: Optional[str],
    stream: Optional[str],
    missed_slots: List[RoutineSlot] | None = None,
) -> List[RoutineSlot]:
    """
    Fresh slot list for a day with nothing stored yet: Sunday replays missed
    slots, other days get the six-slot standard routine.
    """
    if is_catch_up_day(day):
        return build_catch_up_day(missed_slots or [])

    subjects = get_subjects_list(class_level, stream)
    sub1, sub2 = pick_core_subjects(subjects, day)
    return build_standard_day(sub1, sub2)
