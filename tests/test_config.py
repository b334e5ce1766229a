import pytest

from simple_chat.config import load_config

KEYS = ("DB_PATH", "DB_ECHO", "POLL_INTERVAL", "LOG_LEVEL")


@pytest.fixture
def clean_env(monkeypatch):
    # set first so monkeypatch also undoes anything a .env file loads
    for key in KEYS:
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)


def test_defaults(clean_env, tmp_path):
    config = load_config(str(tmp_path / "missing-simple-chat.env"))

    assert config.db.path == "chat.db"
    assert config.db.echo is False
    assert config.polling.interval == 2.0
    assert config.logging.level == "WARNING"


def test_environment_overrides(clean_env, monkeypatch, tmp_path):
    monkeypatch.setenv("DB_PATH", str(tmp_path / "other.db"))
    monkeypatch.setenv("POLL_INTERVAL", "0.5")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    config = load_config(str(tmp_path / "missing-simple-chat.env"))

    assert config.db.path == str(tmp_path / "other.db")
    assert config.polling.interval == 0.5
    assert config.logging.level == "DEBUG"


def test_env_file(clean_env, tmp_path):
    env_file = tmp_path / "simple-chat.env"
    env_file.write_text("DB_PATH=data/chat.db\nDB_ECHO=true\nPOLL_INTERVAL=3\n")

    config = load_config(str(env_file))

    assert config.db.path == "data/chat.db"
    assert config.db.echo is True
    assert config.polling.interval == 3.0
