"""Process-wide catalog of setting items."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Final, TypeVar

from prefstore.errors import DuplicateSettingError, UnknownSettingError
from prefstore.items.base import SettingItem

logger: Final = logging.getLogger(__name__)

T = TypeVar("T", bound=SettingItem)


class SettingsRegistry:
    """Catalog of every setting item in the application.

    Components register their items once at startup; items are never
    removed. Iteration follows registration order, so a restore or save
    always visits items in the same sequence.

    Examples:
        registry = SettingsRegistry()
        notify = registry.register(BinarySetting("adv3.notify", True))
        capture_factory_defaults(registry)
    """

    def __init__(self) -> None:
        self._items: dict[str, SettingItem] = {}
        self.bootstrapped = False

    def register(self, item: T) -> T:
        """Add an item to the registry.

        Items registered after bootstrap capture their factory default
        here, since nothing can have decoded into them yet.

        Args:
            item: Setting item to register

        Returns:
            The same item, so declarations can be written inline

        Raises:
            DuplicateSettingError: If another item already uses the identifier
        """
        existing = self._items.get(item.id)
        if existing is not None:
            raise DuplicateSettingError(
                f"Setting id {item.id!r} already registered by {existing!r}"
            )
        self._items[item.id] = item
        if self.bootstrapped and not item.has_factory_default:
            item.capture_factory_default()
        logger.debug("Registered setting %s (%s)", item.id, item.kind)
        return item

    def get(self, setting_id: str) -> SettingItem:
        """Return the item with the given identifier.

        Raises:
            UnknownSettingError: If no item uses the identifier
        """
        try:
            return self._items[setting_id]
        except KeyError:
            raise UnknownSettingError(f"Unknown setting {setting_id!r}") from None

    def ids(self) -> list[str]:
        return list(self._items)

    def __contains__(self, setting_id: object) -> bool:
        return setting_id in self._items

    def __iter__(self) -> Iterator[SettingItem]:
        return iter(list(self._items.values()))

    def __len__(self) -> int:
        return len(self._items)


# Registry shared by the whole process
default_registry: Final = SettingsRegistry()


def register(item: T) -> T:
    """Register an item in the process-wide registry."""
    return default_registry.register(item)
