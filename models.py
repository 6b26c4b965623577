from __future__ import annotations
from pydantic import BaseModel, Field
from datetime import date, datetime
from enum import Enum
from typing import Dict, List, Optional


DAY_RECORD_VERSION = 1


class ActivityType(str, Enum):
    LEARN = "LEARN"
    PRACTICE = "PRACTICE"
    REVISION = "REVISION"
    TEST = "TEST"
    CATCH_UP = "CATCH_UP"


class Subject(BaseModel):
    id: str
    name: str


class RoutineSlot(BaseModel):
    id: str
    start_time: str  # "HH:MM", not validated
    duration_minutes: int = Field(default=60, ge=0)
    subject_id: str
    topic: str = ""
    activity_type: ActivityType = ActivityType.LEARN
    is_completed: bool = False
    completed_at: Optional[datetime] = None
    is_custom: bool = False


class DailyStats(BaseModel):
    total_slots: int = 0
    completed_slots: int = 0
    minutes_studied: int = 0


class RoutinePreferences(BaseModel):
    start_time: str = "06:00"
    slots_per_day: int = Field(default=6, ge=0)
    difficulty_ratings: Dict[str, int] = Field(default_factory=dict)


class StudyRoutine(BaseModel):
    streak: int = 0
    bonus_holidays: int = 0
    last_study_date: Optional[date] = None
    last_swept_date: Optional[date] = None
    missed_slots: List[RoutineSlot] = Field(default_factory=list)
    custom_slots: List[RoutineSlot] = Field(default_factory=list)
    daily_stats: Dict[date, DailyStats] = Field(default_factory=dict)
    preferences: RoutinePreferences = Field(default_factory=RoutinePreferences)


class User(BaseModel):
    id: str
    name: str = ""
    class_level: str = "10"
    stream: Optional[str] = None
    study_routine: Optional[StudyRoutine] = None


class DayRecord(BaseModel):
    version: int = DAY_RECORD_VERSION
    user_id: str
    day: date
    slots: List[RoutineSlot] = Field(default_factory=list)
