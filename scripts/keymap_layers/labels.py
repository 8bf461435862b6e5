"""Short human-readable labels for binding nodes."""

from .nodes import NONE_VALUE, TRANS_VALUE, BindingNode, Layer

LOCALE_PREFIX = "DE_"

KEYCODE_BEHAVIORS = ("&kp", "&sk")
CUSTOM_VALUE = "Custom"

FRIENDLY_KEYCODES: dict[str, str] = {
    "AMPS": "&",
    "AT": "@",
    "BACKSPACE": "Backsp",
    "BSPC": "Backsp",
    "BSLH": "\\",
    "CARET": "^",
    "COMMA": ",",
    "COLON": ":",
    "DEL": "Del",
    "DELETE": "Del",
    "DE_0": "0",
    "DE_1": "1",
    "DE_2": "2",
    "DE_3": "3",
    "DE_4": "4",
    "DE_5": "5",
    "DE_6": "6",
    "DE_7": "7",
    "DE_8": "8",
    "DE_9": "9",
    "DE_ADIA": "Ä",
    "DE_ODIA": "Ö",
    "DE_UDIA": "Ü",
    "DE_SS": "ß",
    "DE_PLUS": "+",
    "DE_MINUS": "-",
    "DE_HASH": "#",
    "DE_LABK": "<",
    "DE_COMMA": ",",
    "DE_DOT": ".",
    "DE_CIRC": "^",
    "DE_ACUT": "´",
    "DLLR": "$",
    "DQT": '"',
    "EQUAL": "=",
    "ESC": "Esc",
    "EXCL": "!",
    "GRAVE": "`",
    "FSLH": "/",
    "HASH": "#",
    "HOME": "Home",
    "INS": "Ins",
    "INSERT": "Ins",
    "LBRC": "[",
    "LBKT": "[",
    "LEFT": "Left",
    "LPAR": "(",
    "MINUS": "-",
    "MSC": "Mouse",
    "N0": "0",
    "N1": "1",
    "N2": "2",
    "N3": "3",
    "N4": "4",
    "N5": "5",
    "N6": "6",
    "N7": "7",
    "N8": "8",
    "N9": "9",
    "PAGE_UP": "PgUp",
    "PG_DN": "PgDn",
    "PG_UP": "PgUp",
    "PIPE": "|",
    "PLUS": "+",
    "PRCNT": "%",
    "QMARK": "?",
    "RBRC": "]",
    "RBKT": "]",
    "RET": "Enter",
    "ENTER": "Enter",
    "RIGHT": "Right",
    "RPAR": ")",
    "RSHFT": "Shift",
    "SLASH": "/",
    "SCRL_DOWN": "Scroll↓",
    "SCRL_UP": "Scroll↑",
    "SEMI": ";",
    "SPACE": "Space",
    "SQT": "'",
    "STAR": "*",
    "TAB": "Tab",
    "TILDE": "~",
    "UNDER": "_",
    "UP": "Up",
    "DOWN": "Down",
    "DOT": ".",
    "LT": "<",
    "GT": ">",
}
# German letters show as their plain letter
FRIENDLY_KEYCODES.update({f"{LOCALE_PREFIX}{c}": c for c in "ABCDEFGHIJKLMNOPQRSTUVWXYZ"})


def friendly_label(label: str) -> str:
    """Map a keycode to its display glyph, dropping the locale prefix if unknown."""
    if label in FRIENDLY_KEYCODES:
        return FRIENDLY_KEYCODES[label]
    return label.removeprefix(LOCALE_PREFIX)


def format_node(node: BindingNode | None, friendly: bool = True) -> str:
    """Format a binding node as a short label.

    Args:
        node: Binding to format; None renders as an empty key
        friendly: Replace keycodes with display glyphs (Backsp, Ä, ...)

    Returns:
        Label such as "Q", "LS(Ins)", "MO(1)" or "" for &none
    """
    if node is None:
        return ""

    value = node.value
    params = node.params

    if value == NONE_VALUE:
        return ""
    if value == TRANS_VALUE:
        return "TRANS"
    if value in KEYCODE_BEHAVIORS:
        # Only the keycode matters, extra params are ignored
        return format_node(params[0], friendly) if params else "KP"
    if value == CUSTOM_VALUE:
        if not params:
            return "Custom"
        return " ".join(format_node(param, friendly) for param in params)

    label = value[1:].upper() if value.startswith("&") else value
    if friendly:
        label = friendly_label(label)
    if not params:
        return label

    inner = ", ".join(
        text for text in (format_node(param, friendly) for param in params) if text
    )
    return f"{label}({inner})" if inner else label


def layer_labels(layer: Layer, friendly: bool = True) -> list[str]:
    """Format every binding of a layer, stripped of surrounding whitespace."""
    return [format_node(entry, friendly).strip() for entry in layer]
