import pytest
from config import AppConfig
from models import User


@pytest.fixture
def config(tmp_path):
    """Provide an app config rooted in a temporary data directory."""
    return AppConfig(data_dir=tmp_path)


@pytest.fixture
def user():
    return User(id="u1", name="Asha", class_level="10")
