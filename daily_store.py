from __future__ import annotations
import logging
from datetime import date
from pathlib import Path
from typing import List, Optional
from pydantic import ValidationError
from models import DAY_RECORD_VERSION, DayRecord, RoutineSlot
from storage import load_json, safe_name, save_json


logger = logging.getLogger(__name__)

ROUTINES_DIRNAME = "routines"


def routine_key(user_id: str, day: date) -> str:
    return f"routine_{user_id}_{day.isoformat()}"


def _routines_dir(data_dir: Path) -> Path:
    return Path(data_dir) / ROUTINES_DIRNAME


def _record_path(data_dir: Path, user_id: str, day: date) -> Path:
    return _routines_dir(data_dir) / f"{safe_name(routine_key(user_id, day))}.json"


def _upgrade_payload(raw, user_id: str, day: date):
    # Unversioned payloads were a bare list of slots
    if isinstance(raw, list):
        return {"version": DAY_RECORD_VERSION, "user_id": user_id, "day": day.isoformat(), "slots": raw}
    return raw


def load_day_record(data_dir: Path, user_id: str, day: date) -> Optional[DayRecord]:
    """
    Stored record for (user, day), or None when nothing usable is stored.
    Records that fail validation or belong to another key count as missing.
    """
    path = _record_path(data_dir, user_id, day)
    if not path.exists():
        return None

    raw = _upgrade_payload(load_json(path, {}), user_id, day)
    if not raw:
        return None

    try:
        record = DayRecord.model_validate(raw)
    except ValidationError as e:
        logger.warning("Discarding invalid routine record %s: %s", path.name, e)
        return None

    if record.user_id != user_id or record.day != day:
        logger.warning(
            "Routine record %s belongs to %s/%s, ignoring",
            path.name, record.user_id, record.day.isoformat(),
        )
        return None
    return record


def load_day_slots(data_dir: Path, user_id: str, day: date) -> Optional[List[RoutineSlot]]:
    record = load_day_record(data_dir, user_id, day)
    return None if record is None else record.slots


def save_day_slots(data_dir: Path, user_id: str, day: date, slots: List[RoutineSlot]) -> None:
    record = DayRecord(user_id=user_id, day=day, slots=slots)
    save_json(_record_path(data_dir, user_id, day), record.model_dump(mode="json"))
    logger.debug("Saved %d slots under %s", len(slots), routine_key(user_id, day))


def list_stored_days(data_dir: Path, user_id: str) -> List[date]:
    """Days with a stored record for this user, oldest first."""
    prefix = safe_name(routine_key(user_id, date.min))[: -len(date.min.isoformat())]
    days = []
    folder = _routines_dir(data_dir)
    if not folder.exists():
        return days
    for path in folder.glob(f"{prefix}*.json"):
        suffix = path.stem[len(prefix):]
        try:
            days.append(date.fromisoformat(suffix))
        except ValueError:
            continue
    return sorted(days)
