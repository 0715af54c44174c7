"""Persisted preference settings.

This package provides:
- Setting items that encode and decode their own values as text
- SettingsRegistry: the catalog of items known to the application
- SettingsManager: restores items from, and saves them to, a settings file
  that keeps comments and unknown entries intact
"""

from prefstore.bootstrap import capture_factory_defaults
from prefstore.errors import (
    BootstrapError,
    DuplicateSettingError,
    FileWriteError,
    InvalidSettingIdError,
    SettingsError,
    SettingsUnsupportedError,
    UnknownSettingError,
)
from prefstore.filemodel import CommentLine, FileEntry, SettingsFileModel
from prefstore.items import (
    BinarySetting,
    ChoiceSetting,
    IntegerSetting,
    SettingItem,
    TextSetting,
)
from prefstore.manager import SettingsManager, restore_settings, save_settings
from prefstore.registry import SettingsRegistry, default_registry, register
from prefstore.storage import LocalFileStorage, ManagedStorage

__all__ = [
    "BinarySetting",
    "BootstrapError",
    "ChoiceSetting",
    "CommentLine",
    "DuplicateSettingError",
    "FileEntry",
    "FileWriteError",
    "IntegerSetting",
    "InvalidSettingIdError",
    "LocalFileStorage",
    "ManagedStorage",
    "SettingItem",
    "SettingsError",
    "SettingsFileModel",
    "SettingsManager",
    "SettingsRegistry",
    "SettingsUnsupportedError",
    "TextSetting",
    "UnknownSettingError",
    "capture_factory_defaults",
    "default_registry",
    "register",
    "restore_settings",
    "save_settings",
]
