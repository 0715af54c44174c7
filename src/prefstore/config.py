"""Application configuration loaded from prefstore.yaml.

The config names the managed settings file and declares the setting
items the command-line front end should know about.
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import ClassVar, Literal

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from prefstore.bootstrap import capture_factory_defaults
from prefstore.constants import CONFIG_ENV_VAR, DEFAULT_SETTINGS_FILE, SETTING_ID_PATTERN
from prefstore.items import (
    BinarySetting,
    ChoiceSetting,
    IntegerSetting,
    SettingItem,
    TextSetting,
)
from prefstore.registry import SettingsRegistry
from prefstore.storage import LocalFileStorage

# Load environment variables from .env file(s)
load_dotenv()


def _switch_word(value: bool) -> str:
    return "on" if value else "off"


def _interpolate_env(content: str) -> str:
    return re.sub(r"\$\{(\w+)\}", lambda m: os.getenv(m.group(1), ""), content)


class ItemDeclaration(BaseModel):
    """One setting item declared in the config file."""

    id: str = Field(..., description="Setting identifier, e.g. adv3.notify")
    kind: Literal["binary", "integer", "choice", "text"] = "binary"
    default: bool | int | str | None = Field(None, description="Value before any file is read")
    label: str = Field("", description="What the setting controls")
    minimum: int | None = None
    maximum: int | None = None
    choices: list[str] | None = None

    @field_validator("id")
    @classmethod
    def validate_id(cls, v: str) -> str:
        if not SETTING_ID_PATTERN.fullmatch(v):
            raise ValueError("id may only contain letters, digits and periods")
        return v

    @field_validator("choices", mode="before")
    @classmethod
    def restore_switch_words(cls, v: object) -> object:
        # YAML reads bare on/off/yes/no as booleans
        if isinstance(v, list):
            return [_switch_word(c) if isinstance(c, bool) else c for c in v]
        return v

    @model_validator(mode="after")
    def check_kind_options(self) -> ItemDeclaration:
        if self.kind == "choice" and not self.choices:
            raise ValueError(f"{self.id}: choice settings need a non-empty 'choices' list")
        if self.kind != "choice" and self.choices:
            raise ValueError(f"{self.id}: 'choices' only applies to choice settings")
        if self.kind != "integer" and (self.minimum is not None or self.maximum is not None):
            raise ValueError(f"{self.id}: 'minimum'/'maximum' only apply to integer settings")
        if self.kind == "integer" and self.default is not None:
            # bool is an int subclass; "on" for a number is a config mistake
            if isinstance(self.default, bool) or not isinstance(self.default, int):
                raise ValueError(f"{self.id}: integer settings need an integer default")
        if (
            self.minimum is not None
            and self.maximum is not None
            and self.minimum > self.maximum
        ):
            raise ValueError(f"{self.id}: minimum exceeds maximum")
        return self

    def build(self) -> SettingItem:
        """Create the setting item this declaration describes."""
        if self.kind == "binary":
            item = BinarySetting(self.id, label=self.label)
            if isinstance(self.default, str):
                item.decode(self.default)
            else:
                item.value = bool(self.default)
            return item
        if self.kind == "integer":
            return IntegerSetting(
                self.id,
                value=self.default if isinstance(self.default, int) else 0,
                label=self.label,
                minimum=self.minimum,
                maximum=self.maximum,
            )
        if self.kind == "choice":
            return ChoiceSetting(
                self.id,
                choices=self.choices or [],
                value=self._default_text(),
                label=self.label,
            )
        return TextSetting(
            self.id,
            value=self._default_text() or "",
            label=self.label,
        )

    def _default_text(self) -> str | None:
        if self.default is None:
            return None
        if isinstance(self.default, bool):
            return _switch_word(self.default)
        return str(self.default)


class StoreConfig(BaseModel):
    """Schema for prefstore.yaml."""

    # Default search paths for configuration
    DEFAULT_CONFIG_PATHS: ClassVar[list[Path]] = [
        Path("prefstore.yaml"),
        Path("~/.config/prefstore/prefstore.yaml").expanduser(),
        Path("/etc/prefstore/prefstore.yaml"),
    ]

    settings_file: Path = Field(
        DEFAULT_SETTINGS_FILE, description="Managed settings file read and written by prefstore"
    )
    items: list[ItemDeclaration] = Field(default_factory=list)

    # ---- validators ----
    @field_validator("settings_file")
    @classmethod
    def expand_settings_file(cls, v: Path) -> Path:
        return v.expanduser()

    @field_validator("items")
    @classmethod
    def validate_unique_ids(cls, v: list[ItemDeclaration]) -> list[ItemDeclaration]:
        seen: set[str] = set()
        for decl in v:
            if decl.id in seen:
                raise ValueError(f"setting id {decl.id!r} declared twice")
            seen.add(decl.id)
        return v

    # ---- convenience methods ----
    def storage(self) -> LocalFileStorage:
        """Storage backend for the configured settings file."""
        return LocalFileStorage(self.settings_file)

    def build_registry(self) -> SettingsRegistry:
        """Register every declared item and capture factory defaults.

        Returns:
            A bootstrapped registry, ready for restore
        """
        registry = SettingsRegistry()
        for decl in self.items:
            registry.register(decl.build())
        capture_factory_defaults(registry)
        return registry

    @classmethod
    def load(cls, path: Path | None = None) -> StoreConfig:
        """Load configuration from a YAML file.

        Args:
            path: Path to config file (optional, searches default locations if None)

        Returns:
            Validated StoreConfig object

        Raises:
            FileNotFoundError: If no config file is found
            RuntimeError: If the config file cannot be parsed or is invalid
        """
        if path is None:
            env_path = os.environ.get(CONFIG_ENV_VAR)
            if env_path:
                path = Path(env_path)
                if not path.exists():
                    raise FileNotFoundError(f"Config file from {CONFIG_ENV_VAR} not found: {path}")
            else:
                for default_path in cls.DEFAULT_CONFIG_PATHS:
                    if default_path.exists():
                        path = default_path
                        break
                else:
                    raise FileNotFoundError(
                        f"No configuration file found. Create prefstore.yaml or set {CONFIG_ENV_VAR}."
                    )
        elif not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        try:
            raw = _interpolate_env(path.read_text(encoding="utf-8"))
            data = yaml.safe_load(raw)
        except (OSError, yaml.YAMLError) as exc:
            raise RuntimeError(f"Unable to read config YAML: {exc}") from exc

        try:
            return cls.model_validate(data or {})
        except ValidationError as err:
            raise RuntimeError(f"Invalid configuration:\n{err}") from err
