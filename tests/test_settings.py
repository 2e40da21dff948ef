import pytest
from pydantic import ValidationError as PydanticValidationError

from lodgebook.config.settings import LoggingSettings, Settings, StorageSettings


def test_defaults():
    settings = Settings()
    assert settings.PROJECT_NAME == "Lodgebook"
    assert settings.defaults.DEFAULT_ROOM_NUMBERS == ["101", "102"]
    assert settings.defaults.DEFAULT_ROOM_CAPACITY == 2
    assert settings.defaults.DEFAULT_MESS_RATE == 2000
    assert settings.storage.STORAGE_BACKEND == "file"


def test_environment_is_validated():
    with pytest.raises(PydanticValidationError):
        Settings(ENVIRONMENT="moon")


def test_environment_flags():
    assert Settings(ENVIRONMENT="testing").is_testing
    assert Settings(ENVIRONMENT="production").is_production
    assert not Settings(ENVIRONMENT="production").is_development


def test_log_level_is_normalised():
    assert LoggingSettings(LOG_LEVEL="debug").LOG_LEVEL == "DEBUG"
    with pytest.raises(PydanticValidationError):
        LoggingSettings(LOG_LEVEL="chatty")


def test_storage_backend_from_environment(monkeypatch):
    monkeypatch.setenv("STORAGE_BACKEND", "Memory")
    monkeypatch.setenv("DEFAULT_MESS_RATE", "1500")
    settings = Settings()
    assert settings.storage.STORAGE_BACKEND == "memory"
    assert settings.defaults.DEFAULT_MESS_RATE == 1500


def test_unknown_backend_is_rejected():
    with pytest.raises(PydanticValidationError):
        StorageSettings(STORAGE_BACKEND="nosql")
