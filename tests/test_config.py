import pytest

from src.taskyminder.config import Config


def test_from_yaml_reads_sections(tmp_path):
    config_path = tmp_path / "app_config.yaml"
    config_path.write_text(
        "database:\n"
        "  path: /tmp/custom.db\n"
        "server:\n"
        "  host: 0.0.0.0\n"
        "  port: 9000\n"
        "log:\n"
        "  level: DEBUG\n"
        "  file: logs/test.log\n",
        encoding="utf-8",
    )

    config = Config.from_yaml(config_path)

    assert config.database.path == "/tmp/custom.db"
    assert config.server.host == "0.0.0.0"
    assert config.server.port == 9000
    assert config.log_level == "DEBUG"
    assert config.log_file == "logs/test.log"


def test_from_yaml_empty_sections_use_defaults(tmp_path):
    config_path = tmp_path / "app_config.yaml"
    config_path.write_text("database:\nserver:\n", encoding="utf-8")

    config = Config.from_yaml(config_path)

    assert config.database.path is None
    assert config.server.port == 8000
    assert config.log_level == "INFO"


def test_default_file_loads():
    config = Config.from_yaml()
    assert config.server.port == 8000
    assert config.log_file == "logs/taskyminder.log"


def test_from_env(monkeypatch):
    monkeypatch.setenv("TASKYMINDER_DB_PATH", "/tmp/env.db")
    monkeypatch.setenv("TASKYMINDER_PORT", "8123")
    monkeypatch.setenv("LOG_LEVEL", "WARNING")

    config = Config.from_env()

    assert config.database.path == "/tmp/env.db"
    assert config.server.port == 8123
    assert config.log_level == "WARNING"


def test_missing_default_file_falls_back_to_env(tmp_path, monkeypatch):
    monkeypatch.setattr("src.taskyminder.config.DEFAULT_CONFIG_PATH", tmp_path / "missing.yaml")
    monkeypatch.setenv("TASKYMINDER_HOST", "0.0.0.0")
    monkeypatch.setenv("LOG_FILE", "logs/env.log")

    config = Config.from_yaml()

    assert config.server.host == "0.0.0.0"
    assert config.log_file == "logs/env.log"


def test_explicit_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        Config.from_yaml(tmp_path / "missing.yaml")
