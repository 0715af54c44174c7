"""Whole-number setting items."""

from __future__ import annotations

from prefstore.items.base import SettingItem


class IntegerSetting(SettingItem):
    """A setting holding an integer, optionally bounded.

    Values outside ``minimum``/``maximum`` are clamped when decoded. Text
    that is not an integer restores the factory default, or the declared
    value when no default has been captured yet.
    """

    kind = "integer"

    def __init__(
        self,
        setting_id: str,
        value: int = 0,
        label: str = "",
        minimum: int | None = None,
        maximum: int | None = None,
    ) -> None:
        super().__init__(setting_id, label)
        if minimum is not None and maximum is not None and minimum > maximum:
            raise ValueError(f"{setting_id}: minimum {minimum} exceeds maximum {maximum}")
        self.minimum = minimum
        self.maximum = maximum
        self._declared = self._clamp(value)
        self.value = self._declared

    def _clamp(self, value: int) -> int:
        if self.minimum is not None and value < self.minimum:
            return self.minimum
        if self.maximum is not None and value > self.maximum:
            return self.maximum
        return value

    def _fallback(self) -> int:
        if self.factory_default is not None:
            try:
                return self._clamp(int(self.factory_default))
            except ValueError:
                pass
        return self._declared

    def encode(self) -> str:
        return str(self.value)

    def decode(self, text: str) -> None:
        try:
            self.value = self._clamp(int(text.strip()))
        except ValueError:
            self.value = self._fallback()
