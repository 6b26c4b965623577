import pytest

from models import StudyRoutine, User
from profiles import create_user, delete_user, list_users, load_user, save_user


def test_load_unknown_user_gives_defaults(tmp_path):
    user = load_user(tmp_path, "ghost")
    assert user.id == "ghost"
    assert user.class_level == "10"
    assert user.study_routine is None


def test_save_and_load_user(tmp_path):
    user = User(id="u1", name="Asha", class_level="12", stream="commerce",
                study_routine=StudyRoutine(streak=3))
    save_user(tmp_path, user)
    loaded = load_user(tmp_path, "u1")
    assert loaded == user
    assert list_users(tmp_path) == ["u1"]


def test_create_user(tmp_path):
    user = create_user(tmp_path, "  Ravi ", "11", "science")
    assert user.name == "Ravi"
    assert user.stream == "science"
    assert user.id in list_users(tmp_path)


def test_create_user_rejects_blank_and_duplicate(tmp_path):
    with pytest.raises(ValueError):
        create_user(tmp_path, "   ")
    create_user(tmp_path, "Ravi")
    with pytest.raises(ValueError):
        create_user(tmp_path, "ravi")


def test_delete_user(tmp_path):
    user = create_user(tmp_path, "Ravi")
    delete_user(tmp_path, user.id)
    assert user.id not in list_users(tmp_path)
    delete_user(tmp_path, user.id)


def test_invalid_user_record_starts_fresh(tmp_path):
    (tmp_path / "user__u1.json").write_text('{"id": "u1", "study_routine": {"streak": "lots"}}', encoding="utf-8")
    user = load_user(tmp_path, "u1")
    assert user.study_routine is None
