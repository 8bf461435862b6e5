"""Configuration models and loaders for the layer tools."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

from .translate import LOCALES

DEFAULT_CONFIG_PATH = Path("keymap_layers.yaml")


class CompareConfig(BaseModel):
    """Defaults for the compare subcommand."""

    left: str = Field("HEAD:keymap.json", description="Left keymap file or REV:path spec")
    right: str = Field("keymap.json", description="Right keymap file or REV:path spec")
    locale: str | None = Field("de", description="Locale applied to the left side")
    layers: list[str] = Field(default_factory=lambda: ["QWERTY", "Symbol"])

    @field_validator("locale")
    @classmethod
    def known_locale(cls, value: str | None) -> str | None:
        if value is not None and value not in LOCALES:
            raise ValueError(f"unknown locale {value!r}")
        return value


class TranslateConfig(BaseModel):
    """Files rewritten in place by the translate subcommand."""

    locale: str = "de"
    json_files: list[Path] = Field(
        default_factory=lambda: [
            Path("keymap.json"),
            Path("default.json"),
            Path("custom/layer-overrides.json"),
        ]
    )
    text_files: list[Path] = Field(default_factory=lambda: [Path("keymap.zmk")])

    @field_validator("locale")
    @classmethod
    def known_locale(cls, value: str) -> str:
        if value not in LOCALES:
            raise ValueError(f"unknown locale {value!r}")
        return value


class ToolConfig(BaseModel):
    """Top-level configuration, usually read from keymap_layers.yaml."""

    keymap: Path = Field(Path("keymap.json"), description="Default keymap JSON path")
    overrides: Path = Field(
        Path("custom/layer-overrides.json"),
        description="Override document, relative to the keymap directory",
    )
    preserve: Path = Field(
        Path("custom/layers_to_preserve.json"),
        description="Preserve list, relative to the keymap directory",
    )
    default_layers: list[str] = Field(default_factory=lambda: ["QWERTY", "Symbol"])
    cell_width: int = Field(7, ge=2, le=40)
    friendly: bool = True
    compare: CompareConfig = Field(default_factory=CompareConfig)
    translate: TranslateConfig = Field(default_factory=TranslateConfig)

    def overrides_path(self, keymap_path: Path) -> Path:
        return keymap_path.parent / self.overrides

    def preserve_path(self, keymap_path: Path) -> Path:
        return keymap_path.parent / self.preserve


def load_yaml(path: Path) -> dict[str, Any]:
    """Load a YAML file and return its contents."""
    with open(path) as f:
        return yaml.safe_load(f) or {}


def load_tool_config(path: Path | None = None) -> ToolConfig:
    """Load tool configuration from YAML, falling back to defaults.

    Args:
        path: Config file; defaults to keymap_layers.yaml in the working directory

    Returns:
        ToolConfig (all defaults if the file does not exist)

    Raises:
        pydantic.ValidationError: if a value is out of range or mistyped
    """
    path = path or DEFAULT_CONFIG_PATH
    if not path.exists():
        return ToolConfig()
    return ToolConfig.model_validate(load_yaml(path))
