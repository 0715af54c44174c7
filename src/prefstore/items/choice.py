"""Enumerated setting items."""

from __future__ import annotations

from collections.abc import Sequence

from prefstore.items.base import SettingItem


class ChoiceSetting(SettingItem):
    """A setting restricted to one of a fixed set of lower-case tokens.

    Unknown tokens decode to the first choice.
    """

    kind = "choice"

    def __init__(
        self,
        setting_id: str,
        choices: Sequence[str],
        value: str | None = None,
        label: str = "",
    ) -> None:
        super().__init__(setting_id, label)
        self.choices: tuple[str, ...] = tuple(c.strip().lower() for c in choices)
        if not self.choices:
            raise ValueError(f"{setting_id}: at least one choice is required")
        if any(not c or c != c.split()[0] for c in self.choices):
            raise ValueError(f"{setting_id}: choices must be single non-empty words")
        self.value = self.choices[0]
        if value is not None:
            self.decode(value)

    def encode(self) -> str:
        return self.value

    def decode(self, text: str) -> None:
        token = text.strip().lower()
        self.value = token if token in self.choices else self.choices[0]
