"""On/off setting items."""

from __future__ import annotations

from prefstore.items.base import SettingItem


class BinarySetting(SettingItem):
    """A setting whose value is a boolean, stored as ``on`` or ``off``.

    Decoding ignores leading whitespace and case. Anything that is not
    literally ``on`` after that is read as off.
    """

    kind = "binary"

    def __init__(self, setting_id: str, value: bool = False, label: str = "") -> None:
        super().__init__(setting_id, label)
        self.value = value

    def encode(self) -> str:
        return "on" if self.value else "off"

    def decode(self, text: str) -> None:
        self.value = text.lstrip().lower() == "on"

    @property
    def description(self) -> str:
        return "on" if self.value else "off"
