from datetime import date

from icalendar import Calendar

from calendar_export import parse_start_time, slots_to_ics
from models import ActivityType, RoutineSlot, StudyRoutine, User
from pdf_export import routine_to_pdf

DAY = date(2026, 10, 19)


def _slots():
    return [
        RoutineSlot(id="slot-1", start_time="06:00", subject_id="current_affairs", topic="Daily Current Affairs & Notes"),
        RoutineSlot(id="slot-5", start_time="20:15", subject_id="science", topic="Revision (SRS System)",
                    activity_type=ActivityType.REVISION, is_completed=True),
    ]


def test_parse_start_time():
    assert parse_start_time("06:30").hour == 6
    assert parse_start_time("6pm") is None


def test_slots_to_ics():
    data, warnings = slots_to_ics(_slots(), DAY, {"science": "Science"})
    assert warnings == []
    events = Calendar.from_ical(data).walk("VEVENT")
    assert len(events) == 2
    summaries = [str(e.get("SUMMARY")) for e in events]
    assert "Revision: Science" in summaries
    assert "Learn: current_affairs" in summaries
    durations = [e.decoded("DTEND") - e.decoded("DTSTART") for e in events]
    assert all(d.total_seconds() == 3600 for d in durations)


def test_slots_to_ics_skips_malformed_time():
    slots = _slots() + [RoutineSlot(id="custom-1", start_time="later", subject_id="extra")]
    data, warnings = slots_to_ics(slots, DAY)
    assert len(Calendar.from_ical(data).walk("VEVENT")) == 2
    assert len(warnings) == 1
    assert "custom-1" in warnings[0]


def test_routine_to_pdf():
    user = User(id="u1", name="Asha", study_routine=StudyRoutine(streak=4))
    pdf = routine_to_pdf(user, DAY, _slots(), {"science": "Science"})
    assert pdf.startswith(b"%PDF")


def test_routine_to_pdf_free_day():
    pdf = routine_to_pdf(User(id="u1"), date(2026, 10, 25), [])
    assert pdf.startswith(b"%PDF")
