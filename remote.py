"""Push user profiles to the remote profile store."""
from __future__ import annotations
import logging
import requests
from config import AppConfig
from errors import RemoteSyncError
from models import User


logger = logging.getLogger(__name__)


def push_user(user: User, config: AppConfig) -> bool:
    """
    Send the full user object to the remote store.

    Returns False when no remote is configured. Raises RemoteSyncError when
    the request fails or the server rejects it.
    """
    if not config.remote_url:
        logger.debug("No remote profile store configured, skipping push for %s", user.id)
        return False

    url = f"{config.remote_url}/users/{user.id}"
    try:
        response = requests.put(url, json=user.model_dump(mode="json"), timeout=config.remote_timeout)
        response.raise_for_status()
    except requests.RequestException as e:
        raise RemoteSyncError(f"Could not push user {user.id} to {url}: {e}") from e

    logger.info("Pushed user %s to remote store", user.id)
    return True
