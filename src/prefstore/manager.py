"""Load, reconcile and save settings.

The manager sits between the registry and the managed settings file:

- ``restore`` reads the file and decodes each registered item from its
  entry, or from the item's factory default when the file has none.
- ``save`` re-reads the file, updates or appends one entry per
  registered item and writes everything back, so foreign entries and
  comments survive.
"""

from __future__ import annotations

import logging
from typing import Final

from prefstore.errors import BootstrapError, FileWriteError
from prefstore.filemodel import SettingsFileModel
from prefstore.registry import SettingsRegistry
from prefstore.storage import ManagedStorage

logger: Final = logging.getLogger(__name__)


class SettingsManager:
    """Moves setting values between a registry and managed storage.

    Not thread-safe: callers running restore/save from several threads
    must serialize the calls themselves.

    Examples:
        manager = SettingsManager(LocalFileStorage("~/.config/app/settings.txt"), registry)
        manager.restore()
        notify.value = False
        manager.save()
    """

    def __init__(self, storage: ManagedStorage, registry: SettingsRegistry) -> None:
        self.storage = storage
        self.registry = registry

    def load(self) -> SettingsFileModel:
        """Read the settings file into a file model.

        Returns:
            The parsed file, or an empty model if the file does not exist

        Raises:
            SettingsUnsupportedError: If the host cannot provide the file
        """
        try:
            with self.storage.open_managed("r") as handle:
                model = SettingsFileModel.from_lines(handle)
        except FileNotFoundError:
            logger.debug("No settings file at %s; starting empty", self.storage.describe())
            return SettingsFileModel()

        logger.debug("Read %d lines from %s", len(model), self.storage.describe())
        return model

    def restore(self) -> list[str]:
        """Load persisted values into every registered item.

        Items missing from the file are reset to their factory default.
        If loading fails, no item is changed.

        Returns:
            Identifiers of the items that fell back to their factory default

        Raises:
            BootstrapError: If factory defaults were never captured
            SettingsUnsupportedError: If the host cannot provide the file
        """
        if not self.registry.bootstrapped:
            raise BootstrapError("capture_factory_defaults() must run before restoring settings")

        model = self.load()
        defaulted: list[str] = []
        for item in self.registry:
            value = model.lookup(item.id)
            if value is None:
                item.reset()
                defaulted.append(item.id)
            else:
                item.decode(value)

        if defaulted:
            logger.debug("Using factory defaults for: %s", ", ".join(defaulted))
        return defaulted

    def save(self) -> SettingsFileModel:
        """Write every registered item's current value to the settings file.

        Returns:
            The file model that was written

        Raises:
            SettingsUnsupportedError: If the host cannot provide the file
            FileWriteError: If the file cannot be opened or written
        """
        model = self.load()
        for item in self.registry:
            model.upsert(item.id, item.encode())

        lines = model.serialize()
        location = self.storage.describe()
        try:
            with self.storage.open_managed("w") as handle:
                for line in lines:
                    handle.write(line)
        except OSError as exc:
            raise FileWriteError(location, f"cannot write settings: {exc}", exc) from exc

        logger.info("Saved %d settings to %s", len(self.registry), location)
        logger.debug("Wrote %d lines", len(lines))
        return model


def save_settings(manager: SettingsManager) -> None:
    """Persist current values; entry point for the UI layer."""
    manager.save()


def restore_settings(manager: SettingsManager) -> None:
    """Load persisted values, falling back to factory defaults; entry point for the UI layer."""
    manager.restore()
