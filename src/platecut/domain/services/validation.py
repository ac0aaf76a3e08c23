"""Validation utilities for plate solutions.

- placements lie inside the usable rectangle
- no two placements on a plate overlap
- the cut sequence, applied in order as guillotine cuts, separates every
  piece into its own region without cutting through any piece

Useful both in tests and to sanity-check optimizer output.
"""

from __future__ import annotations

from dataclasses import dataclass
from itertools import combinations
from typing import Sequence

from platecut.domain.plate import PlateSolution
from platecut.domain.value_objects import (
    EPSILON,
    CutKind,
    CutSegment,
    PlacementRecord,
)


@dataclass(frozen=True)
class ValidationIssue:
    level: str  # "ERROR" or "WARN"
    message: str
    plate_index: int | None = None
    piece_id: str | None = None


@dataclass(frozen=True)
class Region:
    """Axis-aligned rectangle produced while replaying cuts."""

    x0: float
    y0: float
    x1: float
    y1: float

    def contains(self, placement: PlacementRecord) -> bool:
        return (
            placement.x >= self.x0 - EPSILON
            and placement.y >= self.y0 - EPSILON
            and placement.right_edge <= self.x1 + EPSILON
            and placement.bottom_edge <= self.y1 + EPSILON
        )

    def split(self, cut: CutSegment, kerf: float) -> tuple[Region, Region] | None:
        """Split this region with a cut that crosses it completely.

        Returns None if the cut does not fully cross the region.
        """
        if cut.kind == CutKind.VERTICAL:
            crosses = (
                self.x0 + EPSILON < cut.position < self.x1 - EPSILON
                and cut.y <= self.y0 + EPSILON
                and cut.y + cut.height >= self.y1 - EPSILON
            )
            if not crosses:
                return None
            right_start = min(cut.position + kerf, self.x1)
            return (
                Region(self.x0, self.y0, cut.position, self.y1),
                Region(right_start, self.y0, self.x1, self.y1),
            )

        crosses = (
            self.y0 + EPSILON < cut.position < self.y1 - EPSILON
            and cut.x <= self.x0 + EPSILON
            and cut.x + cut.width >= self.x1 - EPSILON
        )
        if not crosses:
            return None
        bottom_start = min(cut.position + kerf, self.y1)
        return (
            Region(self.x0, self.y0, self.x1, cut.position),
            Region(self.x0, bottom_start, self.x1, self.y1),
        )


def validate_placements(
    plate: PlateSolution, plate_index: int | None = None
) -> list[ValidationIssue]:
    """Check that placements fit the usable rectangle and do not overlap."""
    issues: list[ValidationIssue] = []
    placements = plate.get_placed_pieces_with_coords()

    for p in placements:
        inside = (
            p.x >= plate.trim_left - EPSILON
            and p.y >= plate.trim_top - EPSILON
            and p.right_edge <= plate.usable_right + EPSILON
            and p.bottom_edge <= plate.usable_bottom + EPSILON
        )
        if not inside:
            issues.append(
                ValidationIssue(
                    level="ERROR",
                    message=(
                        f"Placement out of usable bounds: x={p.x}, y={p.y}, "
                        f"w={p.width}, h={p.height}"
                    ),
                    plate_index=plate_index,
                    piece_id=p.piece.id,
                )
            )

    for a, b in combinations(placements, 2):
        if a.overlaps(b):
            issues.append(
                ValidationIssue(
                    level="ERROR",
                    message=f"Placements '{a.piece.id}' and '{b.piece.id}' overlap",
                    plate_index=plate_index,
                    piece_id=a.piece.id,
                )
            )
    return issues


def apply_cuts(plate: PlateSolution) -> tuple[list[Region], list[CutSegment]]:
    """Replay a plate's cut sequence on its usable rectangle.

    Returns:
        Tuple of (resulting regions, cuts that crossed no region).
    """
    regions = [
        Region(plate.trim_left, plate.trim_top, plate.usable_right, plate.usable_bottom)
    ]
    unused: list[CutSegment] = []

    for cut in plate.get_cut_sequence().sequence:
        applied = False
        next_regions: list[Region] = []
        for region in regions:
            parts = region.split(cut, plate.kerf)
            if parts is None:
                next_regions.append(region)
            else:
                next_regions.extend(parts)
                applied = True
        regions = next_regions
        if not applied:
            unused.append(cut)

    return regions, unused


def validate_cuts(
    plate: PlateSolution, plate_index: int | None = None
) -> list[ValidationIssue]:
    """Check that the cut sequence isolates every piece in its own region."""
    issues: list[ValidationIssue] = []
    regions, unused = apply_cuts(plate)

    for cut in unused:
        issues.append(
            ValidationIssue(
                level="WARN",
                message=f"{cut.kind.value} cut at {cut.position} crosses no region",
                plate_index=plate_index,
            )
        )

    occupancy: dict[Region, list[PlacementRecord]] = {}
    for placement in plate.get_placed_pieces_with_coords():
        region = next((r for r in regions if r.contains(placement)), None)
        if region is None:
            issues.append(
                ValidationIssue(
                    level="ERROR",
                    message=f"Piece '{placement.piece.id}' is cut through",
                    plate_index=plate_index,
                    piece_id=placement.piece.id,
                )
            )
            continue
        occupancy.setdefault(region, []).append(placement)

    for region, placed in occupancy.items():
        if len(placed) > 1:
            ids = ", ".join(p.piece.id for p in placed)
            issues.append(
                ValidationIssue(
                    level="ERROR",
                    message=f"Region {region} still holds several pieces: {ids}",
                    plate_index=plate_index,
                )
            )
    return issues


def validate_plate(
    plate: PlateSolution, plate_index: int | None = None, check_cuts: bool = True
) -> list[ValidationIssue]:
    issues = validate_placements(plate, plate_index)
    if check_cuts:
        issues.extend(validate_cuts(plate, plate_index))
    return issues


def validate_solution(
    plates: Sequence[PlateSolution], check_cuts: bool = True
) -> list[ValidationIssue]:
    """Validate every plate. Returns an empty list if all is well."""
    issues: list[ValidationIssue] = []
    for index, plate in enumerate(plates):
        issues.extend(validate_plate(plate, index, check_cuts))
    return issues


def raise_on_errors(issues: Sequence[ValidationIssue]) -> None:
    errors = [i for i in issues if i.level.upper() == "ERROR"]
    if errors:
        msg = "\n".join(
            f"[{e.level}] plate={e.plate_index} piece={e.piece_id} :: {e.message}"
            for e in errors
        )
        raise ValueError("Validation failed:\n" + msg)
