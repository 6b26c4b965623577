from __future__ import annotations
from datetime import date, datetime, time, timedelta, timezone
from typing import Dict, List, Tuple
from icalendar import Calendar, Event as IcsEvent
from models import RoutineSlot


def parse_start_time(value: str) -> time | None:
    try:
        return datetime.strptime(value.strip(), "%H:%M").time()
    except ValueError:
        return None


def slots_to_ics(
    slots: List[RoutineSlot],
    day: date,
    subject_names: Dict[str, str] | None = None,
) -> Tuple[bytes, List[str]]:
    cal = Calendar()
    cal.add("PRODID", "-//Routine Planner//Local//")
    cal.add("version", "2.0")
    cal.add("X-WR-CALNAME", f"Study Routine {day.isoformat()}")

    subject_names = subject_names or {}
    warnings: List[str] = []

    for slot in slots:
        start = parse_start_time(slot.start_time)
        if start is None:
            warnings.append(f"Slot {slot.id} has an unreadable start time '{slot.start_time}' and was left out.")
            continue

        # Local wall-clock times, written out as UTC
        start_dt = datetime.combine(day, start).astimezone(timezone.utc)
        end_dt = start_dt + timedelta(minutes=slot.duration_minutes)
        name = subject_names.get(slot.subject_id, slot.subject_id)

        event = IcsEvent()
        event.add("uid", f"{slot.id}-{day.strftime('%Y%m%d')}@routine-planner")
        event.add("summary", f"{slot.activity_type.value.title().replace('_', '-')}: {name}")
        event.add("dtstart", start_dt)
        event.add("dtend", end_dt)
        description = slot.topic or ""
        if slot.is_completed:
            description += " (completed)"
        event.add("description", description.strip())
        cal.add_component(event)

    return cal.to_ical(), warnings
