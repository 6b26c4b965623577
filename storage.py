from __future__ import annotations
import json
import logging
import re
from pathlib import Path
from typing import Any


logger = logging.getLogger(__name__)


def safe_name(name: str, default: str = "default") -> str:
    """
    Reduce a key to characters that are safe in a file name.
    """
    safe = re.sub(r"[^A-Za-z0-9_-]+", "_", name.strip())
    safe = safe.strip("_") or default
    return safe[:120]


def _backup_file(path: Path, content: str) -> None:
    backup = path.with_suffix(path.suffix + ".bak")
    try:
        backup.write_text(content, encoding="utf-8")
    except OSError as e:
        # The reset still goes ahead without a backup
        logger.warning("Could not back up %s: %s", path, e)


def load_json(path: Path | str, default: Any = None) -> Any:
    """
    Load JSON from path with safety:
    - If missing: return default
    - If empty or invalid: write .bak, reset the file to default and return it
    """
    path = Path(path)
    if default is None:
        default = {}

    if not path.exists():
        return default

    raw_text = path.read_text(encoding="utf-8")
    text = raw_text.strip()
    if not text:
        logger.warning("Empty JSON file %s, resetting", path)
        _backup_file(path, raw_text)
        save_json(path, default)
        return default

    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        logger.warning("Invalid JSON in %s (%s), resetting", path, e)
        _backup_file(path, raw_text)
        save_json(path, default)
        return default


def save_json(path: Path | str, payload: Any) -> None:
    """
    Atomic JSON write: write to temp file then replace target.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    temp = path.with_suffix(path.suffix + ".tmp")
    temp.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2),
        encoding="utf-8",
    )
    temp.replace(path)
