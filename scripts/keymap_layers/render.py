"""ASCII table rendering of a layer on the two-handed layout."""

from .labels import format_node
from .layout import DEFAULT_LAYOUT, PhysicalLayout, Slot
from .nodes import Layer

CELL_WIDTH = 7
SPACE_BETWEEN_SLOTS = " "
ELLIPSIS = "…"


def truncate(text: str, width: int) -> str:
    """Shorten text to width characters, marking the cut with an ellipsis.

    Args:
        text: Text to shorten (surrounding whitespace is dropped)
        width: Maximum length; at least one character is kept for the ellipsis

    Returns:
        The stripped text if it fits, else its prefix plus the ellipsis
    """
    stripped = str(text).strip()
    if len(stripped) <= width:
        return stripped
    width = max(width, len(ELLIPSIS))
    return stripped[: width - len(ELLIPSIS)] + ELLIPSIS


def _cell_text(pos: int, layer: Layer, show_positions: bool, friendly: bool) -> str:
    if show_positions:
        return str(pos)
    entry = layer[pos] if pos < len(layer) else None
    return format_node(entry, friendly)


def render_side(
    slots: tuple[Slot, ...],
    layer: Layer,
    cell_width: int,
    slots_per_side: int,
    show_positions: bool = False,
    friendly: bool = True,
) -> str:
    """Render one hand of one row as fixed-width cells."""
    padded = list(slots) + [None] * (slots_per_side - len(slots))
    cells = []
    for pos in padded:
        if pos is None:
            cells.append(" " * cell_width)
        else:
            text = _cell_text(pos, layer, show_positions, friendly)
            cells.append(truncate(text, cell_width).ljust(cell_width))
    return SPACE_BETWEEN_SLOTS.join(cells)


def render_table(
    layer: Layer,
    mirrored: bool = False,
    cell_width: int = CELL_WIDTH,
    show_positions: bool = False,
    friendly: bool = True,
    layout: PhysicalLayout = DEFAULT_LAYOUT,
) -> str:
    """Render a layer as a framed left-hand / right-hand table.

    Args:
        layer: Bindings indexed by position
        mirrored: Show each key's mirror partner in its place
        cell_width: Width of a single key cell
        show_positions: Print position numbers instead of labels
        friendly: Use display glyphs for keycodes
        layout: Physical layout to render on

    Returns:
        Multi-line table without a trailing newline
    """
    slots = layout.slots_per_side
    column_width = slots * cell_width + (slots - 1) * len(SPACE_BETWEEN_SLOTS)
    divider = f"|{'-' * (column_width + 2)}|{'-' * (column_width + 2)}|"

    header_left = "LEFT HAND (mirrored)" if mirrored else "LEFT HAND"
    header_right = "RIGHT HAND (mirrored)" if mirrored else "RIGHT HAND"
    if show_positions:
        header_left += " positions"
        header_right += " positions"

    def line(left: str, right: str) -> str:
        return f"| {left:<{column_width}} | {right:<{column_width}} |"

    lines = [divider, line(header_left, header_right), divider]
    for row in layout.rows(mirrored):
        left = render_side(row.left, layer, cell_width, slots, show_positions, friendly)
        right = render_side(row.right, layer, cell_width, slots, show_positions, friendly)
        lines.append(line(left.rstrip(), right.rstrip()))
    lines.append(divider)

    return "\n".join(lines)
