import json
import logging

import colorlog
import pytest

from lodgebook.bootstrap import build_gateway, create_store
from lodgebook.config.settings import LoggingSettings, Settings, StorageSettings
from lodgebook.core.logging import CustomJsonFormatter, LoggingConfig, get_logger
from lodgebook.repositories import FileGateway, InMemoryGateway, SqlAlchemyGateway


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    before, level = list(root.handlers), root.level
    yield
    for handler in list(root.handlers):
        if handler not in before:
            root.removeHandler(handler)
            handler.close()
    for handler in before:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)


def _record(message="hello"):
    return logging.LogRecord("lodgebook.test", logging.INFO, __file__, 10, message, None, None)


class TestFormatters:
    def test_json_format(self):
        settings = Settings(ENVIRONMENT="production", logging=LoggingSettings(LOG_FORMAT="json"))
        formatter = LoggingConfig.build_formatter(settings)
        assert isinstance(formatter, CustomJsonFormatter)

        payload = json.loads(formatter.format(_record()))
        assert payload["message"] == "hello"
        assert payload["level"] == "INFO"
        assert payload["logger"] == "lodgebook.test"
        assert payload["environment"] == "production"

    def test_development_text_is_coloured(self):
        formatter = LoggingConfig.build_formatter(Settings(ENVIRONMENT="development"))
        assert isinstance(formatter, colorlog.ColoredFormatter)

    def test_production_text_is_plain(self):
        formatter = LoggingConfig.build_formatter(Settings(ENVIRONMENT="production"))
        assert type(formatter) is logging.Formatter


def test_logger_adapter_carries_context(caplog):
    caplog.set_level(logging.INFO)
    logger = get_logger("lodgebook.test").add_context(command="add_room")

    logger.info("room added", extra={"room_number": "201"})

    record = caplog.records[-1]
    assert record.getMessage() == "room added"
    assert record.command == "add_room"
    assert record.room_number == "201"


class TestBootstrap:
    def test_build_gateway_by_backend(self, tmp_path):
        def gateway_for(**storage):
            return build_gateway(Settings(storage=StorageSettings(**storage)))

        assert isinstance(gateway_for(STORAGE_BACKEND="memory"), InMemoryGateway)
        file_gateway = gateway_for(STORAGE_BACKEND="file", STORAGE_DIR=str(tmp_path))
        assert isinstance(file_gateway, FileGateway)
        assert isinstance(gateway_for(STORAGE_BACKEND="database", DATABASE_URL="sqlite://"), SqlAlchemyGateway)

    def test_create_store_writes_log_file_and_loads_defaults(self, tmp_path, restore_root_logger):
        log_file = tmp_path / "logs" / "lodgebook.log"
        settings = Settings(
            ENVIRONMENT="testing",
            logging=LoggingSettings(LOG_FILE=str(log_file)),
            storage=StorageSettings(STORAGE_BACKEND="file", STORAGE_DIR=str(tmp_path / "data")),
        )

        store = create_store(settings)

        assert [r.room_number for r in store.rooms] == ["101", "102"]
        assert (tmp_path / "data" / "rooms.json").exists()
        for handler in logging.getLogger().handlers:
            handler.flush()
        assert "Opening Lodgebook store" in log_file.read_text()
