"""Position-by-position comparison of two layers."""

from pydantic import BaseModel

from .layout import DEFAULT_LAYOUT, PhysicalLayout

EMPTY_MARKER = "∅"


class Mismatch(BaseModel):
    """A position whose labels differ between the two sides."""

    position: int
    description: str
    left: str
    right: str


def diff_labels(
    left: list[str],
    right: list[str],
    layout: PhysicalLayout = DEFAULT_LAYOUT,
) -> list[Mismatch]:
    """Compare two label sequences indexed by position.

    The shorter sequence is padded with empty labels, so bindings that exist
    on only one side show up as mismatches.
    """
    mismatches = []
    for idx in range(max(len(left), len(right))):
        left_label = left[idx] if idx < len(left) else ""
        right_label = right[idx] if idx < len(right) else ""
        if left_label == right_label:
            continue
        mismatches.append(
            Mismatch(
                position=idx,
                description=layout.describe_position(idx),
                left=left_label,
                right=right_label,
            )
        )
    return mismatches


def format_report(
    left_name: str,
    right_name: str,
    left: list[str],
    right: list[str],
    mismatches: list[Mismatch],
) -> list[str]:
    """Build the printable report lines for one compared layer."""
    if not mismatches:
        count = max(len(left), len(right))
        return [f"{left_name} layer matches {right_name} ({count} bindings)."]

    lines = [f"{left_name} layer differs from {right_name} ({len(mismatches)} mismatches):"]
    if len(left) != len(right):
        lines.append(f"  Binding counts differ: left={len(left)}, right={len(right)}")
    for mismatch in mismatches:
        left_text = mismatch.left or EMPTY_MARKER
        right_text = mismatch.right or EMPTY_MARKER
        lines.append(
            f"  {mismatch.description:<32} | left: {left_text:<10} | right: {right_text:<10}"
        )
    return lines
