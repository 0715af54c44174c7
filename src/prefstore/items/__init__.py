"""Setting item kinds.

- BinarySetting: on/off switches
- IntegerSetting: bounded whole numbers
- ChoiceSetting: one token out of a fixed list
- TextSetting: one line of free text
"""

from .base import SettingItem
from .binary import BinarySetting
from .choice import ChoiceSetting
from .integer import IntegerSetting
from .text import TextSetting

__all__ = [
    "BinarySetting",
    "ChoiceSetting",
    "IntegerSetting",
    "SettingItem",
    "TextSetting",
]
