"""Column-oriented cut plan for panel saw operators.

Groups the placements of a plate into vertical columns and describes, for
each column, the main width to rip, the cross cuts of full-width pieces and
the narrower leftover pieces grouped by height.
"""

from __future__ import annotations

from dataclasses import dataclass

from platecut.domain.plate import PlateSolution
from platecut.domain.value_objects import PlacementRecord, approx_eq

COLUMN_TOLERANCE = 1.0
WIDTH_TOLERANCE = 0.05


@dataclass(frozen=True)
class LeftoverGroup:
    """Narrower pieces of one column sharing a height.

    Attributes:
        height: Common piece height.
        widths: Widths of the pieces, top to bottom.
    """

    height: float
    widths: tuple[float, ...]


@dataclass(frozen=True)
class CutPhase:
    """One vertical column of the cut plan.

    Attributes:
        x: Left edge of the column.
        width: Main (widest) piece width in the column.
        cuts: Heights of the main-width pieces, top to bottom.
        trim: Trim applied before the column's cuts (0 without cuts).
        leftovers: Narrower pieces grouped by height.
    """

    x: float
    width: float
    cuts: tuple[float, ...]
    trim: float
    leftovers: tuple[LeftoverGroup, ...] = ()


def _group_columns(placements: list[PlacementRecord]) -> list[list[PlacementRecord]]:
    columns: list[list[PlacementRecord]] = []
    for placement in sorted(placements, key=lambda p: (p.x, p.y)):
        if columns and abs(placement.x - columns[-1][0].x) < COLUMN_TOLERANCE:
            columns[-1].append(placement)
        else:
            columns.append([placement])
    return columns


def _build_phase(column: list[PlacementRecord], trim: float) -> CutPhase:
    column = sorted(column, key=lambda p: p.y)
    main_width = max(p.width for p in column)

    cuts: list[float] = []
    leftovers: list[tuple[float, list[float]]] = []
    for placement in column:
        if approx_eq(placement.width, main_width, WIDTH_TOLERANCE):
            cuts.append(placement.height)
            continue
        group = next(
            (g for g in leftovers if approx_eq(g[0], placement.height, WIDTH_TOLERANCE)),
            None,
        )
        if group is None:
            group = (placement.height, [])
            leftovers.append(group)
        group[1].append(placement.width)

    return CutPhase(
        x=column[0].x,
        width=main_width,
        cuts=tuple(cuts),
        trim=trim if cuts else 0.0,
        leftovers=tuple(LeftoverGroup(height=h, widths=tuple(w)) for h, w in leftovers),
    )


def build_vertical_cut_plan(
    plate: PlateSolution, trim: float = 0.0
) -> list[CutPhase] | None:
    """Build the column cut plan for a plate.

    Placements whose x positions differ by less than ``COLUMN_TOLERANCE``
    share a column. Columns are ordered left to right.

    Args:
        plate: Plate to describe.
        trim: Trim the operator applies before cutting each column.

    Returns:
        Cut phases, or None if the plate has no placements.
    """
    placements = plate.get_placed_pieces_with_coords()
    if not placements:
        return None
    return [_build_phase(column, trim) for column in _group_columns(placements)]
