"""
Logging Configuration and Utilities

Console and optional rotating file handlers, JSON output through
python-json-logger and coloured text output through colorlog.
"""

import sys
import logging
import logging.handlers
from typing import Any, Dict, Optional
from pathlib import Path

import colorlog
from pythonjsonlogger import jsonlogger

from lodgebook.config.settings import Settings, get_settings

TEXT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter for structured logging"""

    def __init__(self, *args, environment: Optional[str] = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.environment = environment

    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)

        log_record['level'] = record.levelname
        log_record['logger'] = record.name
        log_record['module'] = record.module
        log_record['function'] = record.funcName
        log_record['line'] = record.lineno

        if self.environment:
            log_record['environment'] = self.environment

        if record.exc_info:
            log_record['exception'] = self.formatException(record.exc_info)


class LoggingConfig:
    """Centralized logging configuration"""

    @staticmethod
    def build_formatter(settings: Settings) -> logging.Formatter:
        if settings.logging.LOG_FORMAT == "json":
            return CustomJsonFormatter(
                '%(asctime)s %(name)s %(levelname)s %(message)s',
                environment=settings.ENVIRONMENT,
            )
        if settings.is_development:
            return colorlog.ColoredFormatter(
                '%(log_color)s' + TEXT_FORMAT,
                log_colors={
                    'DEBUG': 'cyan',
                    'INFO': 'green',
                    'WARNING': 'yellow',
                    'ERROR': 'red',
                    'CRITICAL': 'red,bg_white',
                },
            )
        return logging.Formatter(TEXT_FORMAT)

    @staticmethod
    def configure_standard_logging(settings: Settings) -> None:
        """Configure standard Python logging"""
        level = logging.DEBUG if settings.DEBUG else getattr(logging, settings.logging.LOG_LEVEL)

        root_logger = logging.getLogger()
        root_logger.setLevel(level)
        root_logger.handlers.clear()

        formatter = LoggingConfig.build_formatter(settings)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

        if settings.logging.LOG_FILE:
            log_path = Path(settings.logging.LOG_FILE)
            log_path.parent.mkdir(parents=True, exist_ok=True)

            file_handler = logging.handlers.RotatingFileHandler(
                log_path,
                maxBytes=settings.logging.LOG_FILE_MAX_BYTES,
                backupCount=settings.logging.LOG_FILE_BACKUP_COUNT,
                encoding='utf8',
            )
            file_handler.setLevel(level)
            # Files never get ANSI colour codes
            if isinstance(formatter, colorlog.ColoredFormatter):
                file_handler.setFormatter(logging.Formatter(TEXT_FORMAT))
            else:
                file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)

        LoggingConfig._configure_library_loggers(settings)

    @staticmethod
    def _configure_library_loggers(settings: Settings):
        """Configure logging for external libraries"""
        if settings.storage.DATABASE_ECHO:
            logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)
        else:
            logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


class LoggerAdapter:
    """Enhanced logger adapter with context management"""

    def __init__(self, logger: logging.Logger):
        self.logger = logger
        self._context: Dict[str, Any] = {}

    def add_context(self, **kwargs):
        """Add context to all log messages"""
        self._context.update(kwargs)
        return self

    def remove_context(self, *keys):
        """Remove context keys"""
        for key in keys:
            self._context.pop(key, None)
        return self

    def clear_context(self):
        """Clear all context"""
        self._context.clear()
        return self

    def _log(self, level: int, message: str, *args, **kwargs):
        """Internal log method with context"""
        extra = dict(self._context)
        extra.update(kwargs.get('extra') or {})
        kwargs['extra'] = extra

        self.logger.log(level, message, *args, **kwargs)

    def debug(self, message: str, *args, **kwargs):
        self._log(logging.DEBUG, message, *args, **kwargs)

    def info(self, message: str, *args, **kwargs):
        self._log(logging.INFO, message, *args, **kwargs)

    def warning(self, message: str, *args, **kwargs):
        self._log(logging.WARNING, message, *args, **kwargs)

    def error(self, message: str, *args, **kwargs):
        self._log(logging.ERROR, message, *args, **kwargs)

    def critical(self, message: str, *args, **kwargs):
        self._log(logging.CRITICAL, message, *args, **kwargs)


def get_logger(name: Optional[str] = None) -> LoggerAdapter:
    """
    Get configured logger instance.

    Args:
        name: Logger name (defaults to the package logger)

    Returns:
        Enhanced logger adapter
    """
    return LoggerAdapter(logging.getLogger(name or 'lodgebook'))


def setup_logging(settings: Optional[Settings] = None) -> None:
    """Initialize logging configuration"""
    settings = settings or get_settings()
    LoggingConfig.configure_standard_logging(settings)

    logger = get_logger(__name__)
    logger.info("Logging system initialized", extra={
        'log_level': settings.logging.LOG_LEVEL,
        'log_format': settings.logging.LOG_FORMAT,
    })


__all__ = [
    'CustomJsonFormatter',
    'LoggerAdapter',
    'LoggingConfig',
    'get_logger',
    'setup_logging',
]
