from __future__ import annotations
import logging
from pathlib import Path
from typing import List, Optional
from uuid import uuid4
from pydantic import ValidationError
from models import User
from storage import load_json, safe_name, save_json


logger = logging.getLogger(__name__)

USERS_INDEX = "users.json"


def _index_path(data_dir: Path) -> Path:
    return Path(data_dir) / USERS_INDEX


def _user_path(data_dir: Path, user_id: str) -> Path:
    return Path(data_dir) / f"user__{safe_name(user_id)}.json"


def _save_index(data_dir: Path, user_ids: List[str]) -> None:
    save_json(_index_path(data_dir), {"users": user_ids})


def list_users(data_dir: Path) -> List[str]:
    """
    Known user ids: the index plus any user files found on disk.
    """
    data = load_json(_index_path(data_dir), {"users": []})
    user_ids: List[str] = [u for u in data.get("users", []) if isinstance(u, str)]

    discovered = []
    for path in Path(data_dir).glob("user__*.json"):
        discovered.append(path.stem.replace("user__", "", 1))

    combined = []
    for user_id in user_ids + discovered:
        if user_id and user_id not in combined:
            combined.append(user_id)
    return combined


def load_user(data_dir: Path, user_id: str) -> User:
    default_user = User(id=user_id)
    raw = load_json(_user_path(data_dir, user_id), default_user.model_dump(mode="json"))
    try:
        user = User.model_validate(raw)
    except ValidationError as e:
        logger.warning("User record %s is invalid, starting fresh: %s", user_id, e)
        user = default_user
        save_user(data_dir, user)
    user.id = user_id
    return user


def save_user(data_dir: Path, user: User) -> None:
    save_json(_user_path(data_dir, user.id), user.model_dump(mode="json"))
    user_ids = list_users(data_dir)
    if user.id not in user_ids:
        user_ids.append(user.id)
        _save_index(data_dir, user_ids)


def create_user(
    data_dir: Path,
    name: str,
    class_level: str = "10",
    stream: Optional[str] = None,
) -> User:
    name = name.strip()
    if not name:
        raise ValueError("User name cannot be empty.")

    for user_id in list_users(data_dir):
        if load_user(data_dir, user_id).name.lower() == name.lower():
            raise ValueError("A user with that name already exists.")

    user = User(id=uuid4().hex[:12], name=name, class_level=class_level, stream=stream)
    save_user(data_dir, user)
    logger.info("Created user %s (%s)", user.name, user.id)
    return user


def delete_user(data_dir: Path, user_id: str) -> None:
    try:
        _user_path(data_dir, user_id).unlink()
    except FileNotFoundError:
        pass
    _save_index(data_dir, [u for u in list_users(data_dir) if u != user_id])
