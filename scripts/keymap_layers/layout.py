"""Physical key layout and the left/right mirror mapping."""

from typing import Literal

from pydantic import BaseModel, ConfigDict

Slot = int | None
Side = Literal["left", "right"]


class Row(BaseModel):
    """One physical row: left and right hand slots, outer edge first on the left."""

    model_config = ConfigDict(frozen=True)

    left: tuple[Slot, ...]
    right: tuple[Slot, ...]

    def side(self, side: Side) -> tuple[Slot, ...]:
        return self.left if side == "left" else self.right


def build_mirror_map(rows: tuple[Row, ...] | list[Row]) -> dict[int, int]:
    """Pair each row's occupied left slots with its occupied right slots.

    The k-th occupied left slot pairs with the k-th occupied right slot counted
    from the outer (right) edge. Empty slots are skipped independently on each
    side, so rows with an uneven number of keys leave the extra positions
    without a partner.

    Args:
        rows: Layout rows to pair

    Returns:
        Symmetric dict of position -> mirrored position
    """
    mirror: dict[int, int] = {}
    for row in rows:
        left_positions = [pos for pos in row.left if pos is not None]
        right_positions = [pos for pos in reversed(row.right) if pos is not None]
        for left_pos, right_pos in zip(left_positions, right_positions):
            mirror[left_pos] = right_pos
            mirror[right_pos] = left_pos
    return mirror


class PhysicalLayout:
    """Immutable two-handed layout with its mirrored view built eagerly."""

    def __init__(self, rows: list[Row]):
        self._rows = tuple(rows)
        self._check_unique()
        self.slots_per_side = max(
            (max(len(row.left), len(row.right)) for row in self._rows), default=0
        )
        self.mirror_map = build_mirror_map(self._rows)
        self._mirrored_rows = tuple(
            Row(
                left=tuple(self._mirror_slot(pos) for pos in row.left),
                right=tuple(self._mirror_slot(pos) for pos in row.right),
            )
            for row in self._rows
        )

    def _check_unique(self) -> None:
        seen: set[int] = set()
        for row in self._rows:
            for pos in (*row.left, *row.right):
                if pos is None:
                    continue
                if pos in seen:
                    raise ValueError(f"position {pos} appears more than once in layout")
                seen.add(pos)

    def _mirror_slot(self, pos: Slot) -> Slot:
        if pos is None:
            return None
        return self.mirror_map.get(pos)

    @property
    def positions(self) -> list[int]:
        """All occupied positions in ascending order."""
        return sorted(
            pos for row in self._rows for pos in (*row.left, *row.right) if pos is not None
        )

    def rows(self, mirrored: bool = False) -> tuple[Row, ...]:
        return self._mirrored_rows if mirrored else self._rows

    def mirror_position_of(self, pos: int) -> int | None:
        """Return the mirror partner of a position, or None if it has none."""
        return self.mirror_map.get(pos)

    def position_for(self, index: int) -> tuple[Side, int, int] | None:
        """Find a position in the layout.

        Returns:
            (side, row, column), all 0-based, or None if not in the layout
        """
        for row_idx, row in enumerate(self._rows):
            for side in ("left", "right"):
                slots = row.side(side)
                if index in slots:
                    return side, row_idx, slots.index(index)
        return None

    def describe_position(self, index: int) -> str:
        """Describe a position as hand, row and column for humans."""
        meta = self.position_for(index)
        if meta is None:
            return f"index {index}"
        side, row, col = meta
        return f"{side.capitalize()} row {row + 1}, column {col + 1} (index {index})"


DEFAULT_LAYOUT = PhysicalLayout([
    Row(left=(None, 0, 1, 2, 3, 4, None), right=(None, None, 5, 6, 7, 8, 9)),
    Row(left=(10, 11, 12, 13, 14, 15, None), right=(16, 17, 18, 19, 20, 21, None)),
    Row(left=(22, 23, 24, 25, 26, 27, None), right=(28, 29, 30, 31, 32, 33, None)),
    Row(left=(34, 35, 36, 37, 38, 39, None), right=(40, 41, 42, 43, 44, 45, None)),
    Row(left=(46, 47, 48, 49, 50, 51, None), right=(58, 59, 60, 61, 62, 63, None)),
    Row(left=(None, 64, 65, 66, 67, 68, None), right=(None, None, 75, 76, 77, 78, 79)),
    # Thumb clusters
    Row(left=(None, None, None, 69, 52, None, None), right=(None, None, None, 57, 74, None, None)),
    Row(left=(None, None, None, 70, 53, None, None), right=(None, None, None, 56, 73, None, None)),
    Row(left=(None, None, None, 71, 54, None, None), right=(None, None, None, 55, 72, None, None)),
])
