"""Factory-default capture.

Must run once, after the application has registered its items and
before the first restore. Capturing later would record values already
read from the settings file instead of the declared defaults.
"""

from __future__ import annotations

import logging
from typing import Final

from prefstore.errors import BootstrapError
from prefstore.registry import SettingsRegistry

logger: Final = logging.getLogger(__name__)


def capture_factory_defaults(registry: SettingsRegistry) -> dict[str, str]:
    """Record every registered item's current value as its factory default.

    Args:
        registry: Registry whose items should be captured

    Returns:
        Mapping of identifier to captured default text

    Raises:
        BootstrapError: If the registry was already bootstrapped
    """
    if registry.bootstrapped:
        raise BootstrapError("Factory defaults have already been captured")

    captured = {item.id: item.capture_factory_default() for item in registry}
    registry.bootstrapped = True
    logger.debug("Captured factory defaults for %d settings", len(captured))
    return captured
