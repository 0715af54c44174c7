"""prefstore command-line interface.

Shows, changes and resets the settings declared in prefstore.yaml,
reading and writing the managed settings file it names.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Final

import typer

from prefstore.config import StoreConfig
from prefstore.errors import SettingsError, UnknownSettingError
from prefstore.manager import SettingsManager

# ── CLI setup ────────────────────────────────────────────────────────────────
app = typer.Typer(help="Persisted preference settings", add_completion=False)
config_app = typer.Typer(help="Config helpers")
app.add_typer(config_app, name="config")

logger: Final = logging.getLogger(__name__)  # Will be "prefstore.cli"

# Options shared by the commands
CONFIG_OPTION = typer.Option(
    None, "--config", "-c", exists=True, dir_okay=False, help="Path to prefstore.yaml"
)
DEBUG_OPTION = typer.Option(False, "--debug", help="Enable debug logging")
ID_ARGUMENT = typer.Argument(..., help="Setting identifier, e.g. adv3.notify")
OPTIONAL_ID_ARGUMENT = typer.Argument(None, help="Setting identifier to reset")
VALUE_ARGUMENT = typer.Argument(..., help="New value, in the settings file format")
ALL_OPTION = typer.Option(False, "--all", "-a", help="Reset every setting")


def _fail(message: str, code: int = 1) -> typer.Exit:
    typer.secho(message, fg=typer.colors.RED, err=True)
    return typer.Exit(code=code)


def _open_manager(config: Path | None, debug: bool) -> SettingsManager:
    """Configure logging, load the config and restore current settings."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )
    try:
        cfg = StoreConfig.load(config)
    except (FileNotFoundError, RuntimeError) as exc:
        raise _fail(str(exc)) from exc

    manager = SettingsManager(cfg.storage(), cfg.build_registry())
    logger.debug("Using settings file %s", manager.storage.describe())
    return manager


def _restore(manager: SettingsManager) -> list[str]:
    try:
        return manager.restore()
    except SettingsError as exc:
        raise _fail(f"Cannot restore settings: {exc}") from exc


def _save(manager: SettingsManager) -> None:
    try:
        manager.save()
    except SettingsError as exc:
        raise _fail(f"Cannot save settings: {exc}") from exc


@app.command()
def show(config: Path | None = CONFIG_OPTION, debug: bool = DEBUG_OPTION) -> None:
    """List every setting with its current value."""
    manager = _open_manager(config, debug)
    defaulted = set(_restore(manager))

    if not len(manager.registry):
        typer.echo("No settings declared.")
        return

    width = max(len(setting_id) for setting_id in manager.registry.ids())
    for item in manager.registry:
        source = "default" if item.id in defaulted else "file"
        line = f"{item.id:<{width}}  {item.description}  ({source})"
        if item.label:
            line += f"  - {item.label}"
        typer.echo(line)


@app.command("set")
def set_value(
    setting_id: str = ID_ARGUMENT,
    value: str = VALUE_ARGUMENT,
    config: Path | None = CONFIG_OPTION,
    debug: bool = DEBUG_OPTION,
) -> None:
    """Change one setting and save the settings file."""
    manager = _open_manager(config, debug)
    _restore(manager)
    try:
        item = manager.registry.get(setting_id)
    except UnknownSettingError as exc:
        raise _fail(str(exc), code=2) from exc

    item.decode(value)
    _save(manager)
    typer.echo(f"{item.id} = {item.description}")


@app.command()
def reset(
    setting_id: str | None = OPTIONAL_ID_ARGUMENT,
    all_settings: bool = ALL_OPTION,
    config: Path | None = CONFIG_OPTION,
    debug: bool = DEBUG_OPTION,
) -> None:
    """Return one setting, or all of them, to the factory default."""
    if (setting_id is None) == (not all_settings):
        raise _fail("Give a setting id or --all, not both.", code=2)

    manager = _open_manager(config, debug)
    _restore(manager)
    if all_settings:
        targets = list(manager.registry)
    else:
        try:
            targets = [manager.registry.get(setting_id or "")]
        except UnknownSettingError as exc:
            raise _fail(str(exc), code=2) from exc

    for item in targets:
        item.reset()
        typer.echo(f"{item.id} = {item.description}")
    _save(manager)


@app.command()
def save(config: Path | None = CONFIG_OPTION, debug: bool = DEBUG_OPTION) -> None:
    """Rewrite the settings file, adding entries for any missing settings."""
    manager = _open_manager(config, debug)
    _restore(manager)
    _save(manager)
    typer.echo(f"Settings saved to {manager.storage.describe()}")


# ───────────────────────── config sub-commands ───────────────────────────────
@config_app.command("validate")
def validate_config(file: Path):
    """Validate a YAML config file against the schema."""
    try:
        cfg = StoreConfig.load(file)
    except (FileNotFoundError, RuntimeError) as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc
    typer.echo(f"✅ Config valid ({len(cfg.items)} settings)")


# ───────────────────────── module entrypoint ────────────────────────────────
if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        sys.exit(0)
