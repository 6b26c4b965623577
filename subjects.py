"""Subject catalog keyed by class level and stream."""
from __future__ import annotations
from typing import Dict, List, Optional
from models import Subject


DEFAULT_CLASS_LEVEL = "10"

CORE_SUBJECT_IDS = (
    "math", "science", "physics", "chemistry", "biology",
    "accounts", "business", "history", "polity",
)

# Slot subjects that are not part of any catalog
SPECIAL_SUBJECTS: Dict[str, str] = {
    "current_affairs": "Current Affairs",
    "self_analysis": "Self Analysis",
    "revision": "Revision",
    "extra": "Extra Activity",
}

_SCHOOL = [
    ("math", "Mathematics"),
    ("science", "Science"),
    ("sst", "Social Studies"),
    ("english", "English"),
    ("hindi", "Hindi"),
    ("computer", "Computer Applications"),
]

_STREAMS = {
    "science": [
        ("physics", "Physics"),
        ("chemistry", "Chemistry"),
        ("math", "Mathematics"),
        ("biology", "Biology"),
        ("english", "English"),
        ("computer", "Computer Science"),
    ],
    "commerce": [
        ("accounts", "Accountancy"),
        ("business", "Business Studies"),
        ("economics", "Economics"),
        ("math", "Mathematics"),
        ("english", "English"),
    ],
    "arts": [
        ("history", "History"),
        ("polity", "Political Science"),
        ("geography", "Geography"),
        ("economics", "Economics"),
        ("english", "English"),
    ],
}

SENIOR_LEVELS = ("11", "12")
STREAM_NAMES = {"science": "Science", "commerce": "Commerce", "arts": "Arts"}


def get_subjects_list(class_level: Optional[str], stream: Optional[str] = None) -> List[Subject]:
    """
    Ordered subjects for a class level. Streams only apply to senior classes;
    a senior class without a known stream gets the science list.
    """
    level = (class_level or DEFAULT_CLASS_LEVEL).strip()
    if level in SENIOR_LEVELS:
        key = (stream or "science").strip().lower()
        pairs = _STREAMS.get(key, _STREAMS["science"])
    else:
        pairs = _SCHOOL
    return [Subject(id=sid, name=name) for sid, name in pairs]


def core_subjects(subjects: List[Subject]) -> List[Subject]:
    return [s for s in subjects if s.id in CORE_SUBJECT_IDS]


def subject_name(subject_id: str, class_level: Optional[str], stream: Optional[str] = None) -> str:
    if subject_id in SPECIAL_SUBJECTS:
        return SPECIAL_SUBJECTS[subject_id]
    for s in get_subjects_list(class_level, stream):
        if s.id == subject_id:
            return s.name
    return subject_id


def subject_options(class_level: Optional[str], stream: Optional[str] = None) -> List[Subject]:
    """Choices offered when adding a custom slot."""
    extras = [Subject(id=sid, name=SPECIAL_SUBJECTS[sid]) for sid in ("revision", "extra")]
    return get_subjects_list(class_level, stream) + extras
