import json
from datetime import date

from daily_store import (
    list_stored_days,
    load_day_record,
    load_day_slots,
    routine_key,
    save_day_slots,
)
from models import DAY_RECORD_VERSION, RoutineSlot

DAY = date(2026, 10, 19)


def _slots():
    return [
        RoutineSlot(id="slot-1", start_time="06:00", subject_id="current_affairs"),
        RoutineSlot(id="slot-2", start_time="16:00", subject_id="math"),
    ]


def test_routine_key():
    assert routine_key("u1", DAY) == "routine_u1_2026-10-19"


def test_nothing_stored(tmp_path):
    assert load_day_slots(tmp_path, "u1", DAY) is None


def test_save_writes_versioned_record(tmp_path):
    save_day_slots(tmp_path, "u1", DAY, _slots())
    path = tmp_path / "routines" / "routine_u1_2026-10-19.json"
    raw = json.loads(path.read_text(encoding="utf-8"))
    assert raw["version"] == DAY_RECORD_VERSION
    assert raw["user_id"] == "u1"
    assert raw["day"] == "2026-10-19"
    assert [s["id"] for s in raw["slots"]] == ["slot-1", "slot-2"]
    assert load_day_slots(tmp_path, "u1", DAY) == _slots()


def test_saving_overwrites_the_key(tmp_path):
    save_day_slots(tmp_path, "u1", DAY, _slots())
    save_day_slots(tmp_path, "u1", DAY, _slots()[:1])
    assert len(load_day_slots(tmp_path, "u1", DAY)) == 1


def test_legacy_list_payload_is_accepted(tmp_path):
    path = tmp_path / "routines" / "routine_u1_2026-10-19.json"
    path.parent.mkdir(parents=True)
    path.write_text(json.dumps([s.model_dump(mode="json") for s in _slots()]), encoding="utf-8")
    record = load_day_record(tmp_path, "u1", DAY)
    assert record.user_id == "u1"
    assert record.day == DAY
    assert [s.id for s in record.slots] == ["slot-1", "slot-2"]


def test_record_for_another_day_is_ignored(tmp_path):
    save_day_slots(tmp_path, "u1", date(2026, 10, 18), _slots())
    src = tmp_path / "routines" / "routine_u1_2026-10-18.json"
    src.rename(tmp_path / "routines" / "routine_u1_2026-10-19.json")
    assert load_day_slots(tmp_path, "u1", DAY) is None


def test_invalid_record_is_ignored(tmp_path):
    path = tmp_path / "routines" / "routine_u1_2026-10-19.json"
    path.parent.mkdir(parents=True)
    path.write_text(json.dumps({"user_id": "u1", "day": "2026-10-19", "slots": [{"id": 3}]}), encoding="utf-8")
    assert load_day_slots(tmp_path, "u1", DAY) is None


def test_list_stored_days(tmp_path):
    save_day_slots(tmp_path, "u1", date(2026, 10, 20), _slots())
    save_day_slots(tmp_path, "u1", DAY, _slots())
    save_day_slots(tmp_path, "u2", DAY, _slots())
    assert list_stored_days(tmp_path, "u1") == [DAY, date(2026, 10, 20)]
    assert list_stored_days(tmp_path, "nobody") == []
