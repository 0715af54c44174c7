"""Free-text setting items."""

from __future__ import annotations

import re

from prefstore.items.base import SettingItem

_LINE_BREAKS = re.compile(r"\r\n|\r|\n")


class TextSetting(SettingItem):
    """A setting holding one line of free text.

    Line breaks are replaced with spaces and leading whitespace is dropped
    on assignment. The file grammar swallows whitespace after ``=``, so
    neither could survive a save anyway.
    """

    kind = "text"

    def __init__(self, setting_id: str, value: str = "", label: str = "") -> None:
        super().__init__(setting_id, label)
        self.value = value

    @property
    def value(self) -> str:
        return self._value

    @value.setter
    def value(self, text: str) -> None:
        self._value = _LINE_BREAKS.sub(" ", text).lstrip()

    def encode(self) -> str:
        return self._value

    def decode(self, text: str) -> None:
        self.value = text

    @property
    def description(self) -> str:
        return repr(self._value)
