"""Base class shared by every kind of setting item."""

from __future__ import annotations

from typing import ClassVar

from prefstore.constants import SETTING_ID_PATTERN
from prefstore.errors import BootstrapError, InvalidSettingIdError


class SettingItem:
    """A self-describing preference variable.

    Each item owns its value and knows how to turn it into a single line
    of text and back. Subclasses implement ``encode`` and ``decode``:

    - ``encode`` must always succeed, and ``decode(encode())`` must
      reproduce an equivalent value.
    - ``decode`` must accept anything ``encode`` produced, and must never
      raise on malformed text; each kind falls back to a safe value
      instead, so a corrupted settings file cannot break the registry.

    The factory default is the encoded value the item had before any
    settings file was read. It is captured once, by
    :func:`prefstore.bootstrap.capture_factory_defaults`.
    """

    kind: ClassVar[str] = "abstract"

    def __init__(self, setting_id: str, label: str = "") -> None:
        if not SETTING_ID_PATTERN.fullmatch(setting_id):
            raise InvalidSettingIdError(
                f"Invalid setting id {setting_id!r}: only letters, digits and periods allowed"
            )
        self.id = setting_id
        self.label = label
        self._factory_default: str | None = None

    # ---- value codec ----
    def encode(self) -> str:
        raise NotImplementedError

    def decode(self, text: str) -> None:
        raise NotImplementedError

    @property
    def description(self) -> str:
        """Human-readable form of the current value; not persisted."""
        return self.encode()

    # ---- factory default ----
    @property
    def factory_default(self) -> str | None:
        """Encoded value captured at bootstrap, or None before bootstrap."""
        return self._factory_default

    @property
    def has_factory_default(self) -> bool:
        return self._factory_default is not None

    def capture_factory_default(self) -> str:
        """Record the current encoded value as the factory default.

        Returns:
            The captured text

        Raises:
            BootstrapError: If a factory default was already captured
        """
        if self._factory_default is not None:
            raise BootstrapError(f"Factory default for {self.id} already captured")
        self._factory_default = self.encode()
        return self._factory_default

    def reset(self) -> None:
        """Return the item to its factory default."""
        if self._factory_default is None:
            raise BootstrapError(f"No factory default captured for {self.id}")
        self.decode(self._factory_default)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.id!r}, value={self.description!r})"
