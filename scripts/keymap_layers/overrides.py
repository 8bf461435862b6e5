"""Merging captured layers with hand-maintained override layers."""

from typing import Any

from .nodes import KeymapDocument, Layer


def merge_with_override(layer: Layer, override: Any) -> Layer:
    """Lay an override layer over a captured layer, position by position.

    Args:
        layer: Freshly captured layer
        override: Stored override layer; anything that is not a list is ignored

    Returns:
        Layer of length max(len(layer), len(override)). Positions the override
        covers come from the override, the rest from the layer. Override
        entries beyond the captured layer are appended.
    """
    if not isinstance(override, list):
        return layer

    merged = [override[i] if i < len(override) else entry for i, entry in enumerate(layer)]
    merged.extend(override[len(layer):])
    return merged


def capture_overrides(
    keymap: KeymapDocument,
    names_to_preserve: list[str],
    existing: dict[str, Any],
) -> tuple[dict[str, Layer], list[str]]:
    """Capture the named layers into a new override set.

    Hand edits in the existing overrides survive: each captured layer is
    merged with its previous override before being stored.

    Args:
        keymap: Current keymap export
        names_to_preserve: Layer names to capture (exact match)
        existing: Previously stored overrides, layer name -> layer

    Returns:
        (overrides, missing) where missing lists names not found in the keymap
    """
    overrides: dict[str, Layer] = {}
    missing: list[str] = []

    for name in names_to_preserve:
        if name not in keymap.layer_names:
            missing.append(name)
            continue
        layer = keymap.layer(keymap.layer_names.index(name))
        overrides[name] = merge_with_override(layer, existing.get(name))

    return overrides, missing
