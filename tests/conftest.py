import pytest

from prefstore.bootstrap import capture_factory_defaults
from prefstore.items import BinarySetting, ChoiceSetting, IntegerSetting, TextSetting
from prefstore.manager import SettingsManager
from prefstore.registry import SettingsRegistry
from prefstore.storage import MemoryStorage


@pytest.fixture
def registry() -> SettingsRegistry:
    """Bootstrapped registry with one item of each kind."""
    reg = SettingsRegistry()
    reg.register(BinarySetting("adv3.notify", True, label="Score notifications"))
    reg.register(IntegerSetting("ui.width", 80, minimum=20, maximum=200))
    reg.register(ChoiceSetting("ui.exits", ["status", "room", "both", "none"], "both"))
    reg.register(TextSetting("player.name", "Nobody"))
    capture_factory_defaults(reg)
    return reg


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def manager(storage: MemoryStorage, registry: SettingsRegistry) -> SettingsManager:
    return SettingsManager(storage, registry)
