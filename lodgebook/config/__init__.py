"""
Configuration package for the lodging ledger.

Environment driven settings for logging, snapshot storage and the seed
rooms / mess fee used on first start.
"""

from lodgebook.config.settings import (
    DefaultsSettings,
    LoggingSettings,
    Settings,
    StorageSettings,
    get_settings,
)

__all__ = [
    'DefaultsSettings',
    'LoggingSettings',
    'Settings',
    'StorageSettings',
    'get_settings',
]
