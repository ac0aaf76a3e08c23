"""Piece ordering strategies for decreasing-order heuristics.

Every strategy returns a new list sorted in descending order and leaves the
input untouched. Python's sort is stable, so pieces that compare equal keep
their relative input order.
"""

from __future__ import annotations

from enum import Enum
from functools import cmp_to_key
from typing import Callable, Sequence

from platecut.domain.value_objects import EPSILON, Piece


class SortStrategy(str, Enum):
    """Available piece orderings.

    Attributes:
        AREA_DESC: Largest area first (default).
        WIDTH_DESC: Widest first, ties broken by height.
        HEIGHT_DESC: Tallest first, ties broken by width.
        PERIMETER_DESC: Largest perimeter first.
    """

    AREA_DESC = "area-desc"
    WIDTH_DESC = "width-desc"
    HEIGHT_DESC = "height-desc"
    PERIMETER_DESC = "perimeter-desc"


_SORT_KEYS: dict[SortStrategy, Callable[[Piece], tuple[float, ...]]] = {
    SortStrategy.AREA_DESC: lambda p: (p.area,),
    SortStrategy.WIDTH_DESC: lambda p: (p.width, p.height),
    SortStrategy.HEIGHT_DESC: lambda p: (p.height, p.width),
    SortStrategy.PERIMETER_DESC: lambda p: (p.perimeter,),
}


def sort_pieces(
    pieces: Sequence[Piece],
    strategy: SortStrategy | str = SortStrategy.AREA_DESC,
) -> list[Piece]:
    """Sort pieces by a descending strategy.

    Args:
        pieces: Pieces to order.
        strategy: Strategy or its string value (e.g. ``"height-desc"``).

    Returns:
        New list in the requested order.

    Raises:
        ValueError: If the strategy name is unknown.
    """
    key = _SORT_KEYS[SortStrategy(strategy)]
    return sorted(pieces, key=key, reverse=True)


def _compare_height_then_area(a: Piece, b: Piece) -> int:
    if abs(b.height - a.height) > EPSILON:
        return -1 if a.height > b.height else 1
    if a.area != b.area:
        return -1 if a.area > b.area else 1
    return 0


def sort_by_height_then_area(pieces: Sequence[Piece]) -> list[Piece]:
    """Tallest first (within tolerance), then largest area first."""
    return sorted(pieces, key=cmp_to_key(_compare_height_then_area))
