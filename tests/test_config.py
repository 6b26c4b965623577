from config import AppConfig, load_config


def test_load_config_from_env(tmp_path, monkeypatch):
    monkeypatch.setenv("ROUTINE_PLANNER_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("ROUTINE_PLANNER_REMOTE_URL", "https://profiles.example/")
    monkeypatch.setenv("ROUTINE_PLANNER_REMOTE_TIMEOUT", "2.5")
    monkeypatch.setenv("ROUTINE_PLANNER_LOG_LEVEL", "debug")
    config = load_config()
    assert config.data_dir == tmp_path / "data"
    assert config.data_dir.is_dir()
    assert config.remote_url == "https://profiles.example"
    assert config.remote_timeout == 2.5
    assert config.log_level == "DEBUG"


def test_load_config_defaults(tmp_path, monkeypatch):
    monkeypatch.setenv("ROUTINE_PLANNER_DATA_DIR", str(tmp_path))
    monkeypatch.delenv("ROUTINE_PLANNER_REMOTE_URL", raising=False)
    monkeypatch.delenv("ROUTINE_PLANNER_REMOTE_TIMEOUT", raising=False)
    monkeypatch.delenv("ROUTINE_PLANNER_LOG_LEVEL", raising=False)
    config = load_config()
    assert config.remote_url is None
    assert config.remote_timeout == 5.0
    assert config.log_level == "INFO"


def test_config_model_defaults(tmp_path):
    assert AppConfig(data_dir=tmp_path).remote_url is None
