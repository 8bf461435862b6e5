"""Locale translation of binding nodes, keymap documents and keymap source."""

import re
from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, ConfigDict

from .nodes import Layer, dump_layer, parse_layer

NodeFactory = Callable[[], dict[str, Any]]


class LocaleTable(BaseModel):
    """Keycode substitutions from the US layout to another locale."""

    model_config = ConfigDict(frozen=True)

    tag: str
    renames: dict[str, str]
    # Rules that replace a whole node with a freshly built sub-tree
    transforms: dict[str, NodeFactory]

    def check_terminal(self) -> None:
        """Reject tables whose output would be translated again.

        Raises:
            ValueError: if a rename target or a value inside a transform's
                sub-tree is itself a translation source
        """
        sources = set(self.renames) | set(self.transforms)
        for source, target in self.renames.items():
            if target in sources:
                raise ValueError(f"{self.tag}: rename {source} -> {target} chains into another rule")
        for source, factory in self.transforms.items():
            for value in _values(factory()):
                if value in sources:
                    raise ValueError(f"{self.tag}: transform for {source} produces {value}")


def _values(node: dict[str, Any]) -> list[str]:
    values = [node["value"]]
    for param in node.get("params") or []:
        values.extend(_values(param))
    return values


US_TO_DE = LocaleTable(
    tag="de-DE",
    renames={
        "GRAVE": "DE_CIRC",
        "N1": "DE_1",
        "N2": "DE_2",
        "N3": "DE_3",
        "N4": "DE_4",
        "N5": "DE_5",
        "N6": "DE_6",
        "N7": "DE_7",
        "N8": "DE_8",
        "N9": "DE_9",
        "N0": "DE_0",
        "MINUS": "DE_SS",
        "EQUAL": "DE_ACUT",
        "Q": "DE_Q",
        "W": "DE_W",
        "E": "DE_E",
        "R": "DE_R",
        "T": "DE_T",
        "Y": "DE_Z",
        "U": "DE_U",
        "I": "DE_I",
        "O": "DE_O",
        "P": "DE_P",
        "LBKT": "DE_UDIA",
        "RBKT": "DE_PLUS",
        "BSLH": "DE_HASH",
        "A": "DE_A",
        "S": "DE_S",
        "D": "DE_D",
        "F": "DE_F",
        "G": "DE_G",
        "H": "DE_H",
        "J": "DE_J",
        "K": "DE_K",
        "L": "DE_L",
        "SEMI": "DE_ODIA",
        "SQT": "DE_ADIA",
        "Z": "DE_Y",
        "X": "DE_X",
        "C": "DE_C",
        "V": "DE_V",
        "B": "DE_B",
        "N": "DE_N",
        "M": "DE_M",
        "COMMA": "DE_COMMA",
        "DOT": "DE_DOT",
        "SLASH": "DE_MINUS",
        "FSLH": "DE_MINUS",
        "LT": "DE_LABK",
    },
    transforms={
        # German boards have no dedicated > key: it is shifted <
        "GT": lambda: {"value": "LS", "params": [{"value": "DE_LABK", "params": []}]},
    },
)

LOCALES: dict[str, LocaleTable] = {"de": US_TO_DE}

for _table in LOCALES.values():
    _table.check_terminal()


def get_locale(name: str) -> LocaleTable:
    """Look up a locale table by short name (e.g. "de")."""
    try:
        return LOCALES[name]
    except KeyError:
        raise ValueError(
            f"unknown locale {name!r}, expected one of: {', '.join(sorted(LOCALES))}"
        ) from None


def translate_structure(obj: Any, table: LocaleTable = US_TO_DE) -> Any:
    """Translate any JSON value, rewriting every binding node inside it.

    Children are translated before their parent so nested bindings
    (modifiers wrapping keycodes, hold-taps with two params) are handled at
    any depth. Scalars pass through unchanged.
    """
    if isinstance(obj, list):
        return [translate_structure(item, table) for item in obj]
    if isinstance(obj, dict):
        translated = {key: translate_structure(value, table) for key, value in obj.items()}
        return translate_node(translated, table)
    return obj


def translate_node(node: dict[str, Any], table: LocaleTable = US_TO_DE) -> dict[str, Any]:
    """Apply the table to a single node whose children are already translated."""
    value = node.get("value")
    if not isinstance(value, str):
        return node

    factory = table.transforms.get(value)
    if factory is not None:
        return translate_structure(factory(), table)

    replacement = table.renames.get(value)
    if replacement is not None:
        return {**node, "value": replacement}

    return node


def translate_layer(layer: Layer, table: LocaleTable = US_TO_DE) -> Layer:
    return parse_layer(translate_structure(dump_layer(layer), table)) or []


def translate_document(data: Any, table: LocaleTable = US_TO_DE) -> Any:
    """Translate a whole JSON document (keymap, defaults or overrides).

    A top-level "locale" key, when present, is set to the table's tag.
    """
    if isinstance(data, dict) and "locale" in data:
        data = {**data, "locale": table.tag}
    return translate_structure(data, table)


def node_expression(node: dict[str, Any]) -> str:
    """Render a node tree in keymap source syntax, e.g. LS(DE_LABK)."""
    params = node.get("params") or []
    if not params:
        return node["value"]
    return f"{node['value']}({', '.join(node_expression(param) for param in params)})"


# Next character must not continue an identifier
TOKEN_BOUNDARY = r"(?![A-Z0-9_])"


def translate_zmk_text(content: str, table: LocaleTable = US_TO_DE) -> str:
    """Rewrite &kp keycodes in keymap source text.

    Only `&kp CODE` bindings are touched; everything else in the file,
    including comments and other behaviors, is left as-is.
    """
    replacements = dict(table.renames)
    for source, factory in table.transforms.items():
        replacements[source] = node_expression(factory())

    def substitute(match: re.Match[str]) -> str:
        return match.group(1) + replacements[match.group(2)]

    alternatives = "|".join(
        re.escape(source) for source in sorted(replacements, key=len, reverse=True)
    )
    pattern = re.compile(rf"(&kp\s+)({alternatives}){TOKEN_BOUNDARY}")
    return pattern.sub(substitute, content)
