"""
Keymap layer tools for JSON keymap exports.

Renders layers on the physical two-handed layout, merges hand-maintained
override layers, translates keycodes between locales and diffs layers
between two keymap versions.

Usage:
    python -m keymap_layers show QWERTY --both
    python -m keymap_layers compare --left HEAD~1:keymap.json --layer Symbol
    python -m keymap_layers capture
    python -m keymap_layers translate --locale de
"""

from .config import CompareConfig, ToolConfig, TranslateConfig, load_tool_config, load_yaml
from .diff import Mismatch, diff_labels
from .documents import (
    KeymapLoadError,
    LayerLookupError,
    detect_default_layers,
    load_keymap,
    load_overrides,
    locate_layer,
    parse_spec,
)
from .labels import format_node, friendly_label, layer_labels
from .layout import DEFAULT_LAYOUT, PhysicalLayout, Row, build_mirror_map
from .nodes import BindingNode, KeymapDocument
from .overrides import capture_overrides, merge_with_override
from .render import render_table, truncate
from .translate import LOCALES, US_TO_DE, LocaleTable, translate_document, translate_layer, translate_structure

__all__ = [
    # Config
    "CompareConfig",
    "ToolConfig",
    "TranslateConfig",
    "load_tool_config",
    "load_yaml",
    # Layout
    "DEFAULT_LAYOUT",
    "PhysicalLayout",
    "Row",
    "build_mirror_map",
    # Nodes and documents
    "BindingNode",
    "KeymapDocument",
    "KeymapLoadError",
    "LayerLookupError",
    "detect_default_layers",
    "load_keymap",
    "load_overrides",
    "locate_layer",
    "parse_spec",
    # Transformations
    "capture_overrides",
    "merge_with_override",
    "LOCALES",
    "US_TO_DE",
    "LocaleTable",
    "translate_document",
    "translate_layer",
    "translate_structure",
    # Output
    "format_node",
    "friendly_label",
    "layer_labels",
    "render_table",
    "truncate",
    "Mismatch",
    "diff_labels",
]
