"""Binding node and keymap document models."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

NONE_VALUE = "&none"
TRANS_VALUE = "&trans"


class BindingNode(BaseModel):
    """One key action: a value plus optional nested parameters.

    A node without params is a leaf (a keycode or a bare behavior); a node
    with params wraps them (modifier functions, layer-taps, macros). Unknown
    JSON keys are kept so documents round-trip unchanged.
    """

    model_config = ConfigDict(extra="allow")

    value: str
    params: list["BindingNode"] = Field(default_factory=list)

    @field_validator("params", mode="before")
    @classmethod
    def null_params_are_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @property
    def is_leaf(self) -> bool:
        return not self.params

    def to_json(self) -> dict[str, Any]:
        """Dump back to the JSON shape, omitting params that were never set."""
        return self.model_dump(exclude_unset=True)


# Entries may be null in hand-edited documents; they render as empty keys.
Layer = list[BindingNode | None]


class KeymapDocument(BaseModel):
    """Exported keymap: parallel lists of layer names and layers."""

    model_config = ConfigDict(extra="allow")

    layer_names: list[str]
    layers: list[Layer]

    def layer(self, index: int) -> Layer:
        if index < len(self.layers):
            return self.layers[index]
        return []


def parse_layer(data: Any) -> Layer | None:
    """Validate a raw JSON list of nodes into a Layer, or None if not a list."""
    if not isinstance(data, list):
        return None
    return [None if entry is None else BindingNode.model_validate(entry) for entry in data]


def dump_layer(layer: Layer) -> list[dict[str, Any] | None]:
    return [None if node is None else node.to_json() for node in layer]
