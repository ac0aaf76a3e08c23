"""First-Fit-Decreasing and Best-Fit-Decreasing placement heuristics.

Both heuristics are parametrized by the packing model carried in the
options. Pieces are first sorted by the model's default criterion (area for
the strip model, height for the band model, since bands need
height-homogeneous rows) and then placed one at a time.

A piece that does not fit even a freshly created plate in any orientation is
reported in ``remaining`` instead of raising.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import cmp_to_key
from typing import Sequence

from platecut.domain.options import OptimizerOptions, PackingModel
from platecut.domain.plate import PlateSolution, create_plate
from platecut.domain.sorting import SortStrategy, sort_pieces
from platecut.domain.value_objects import EPSILON, Piece, PlateSpec

logger = logging.getLogger(__name__)

DEFAULT_SORT: dict[PackingModel, SortStrategy] = {
    PackingModel.STRIP: SortStrategy.AREA_DESC,
    PackingModel.BAND: SortStrategy.HEIGHT_DESC,
}


@dataclass
class PlacementResult:
    """Outcome of one heuristic run.

    Attributes:
        plates: Plates in creation order.
        remaining: Pieces that fit no fresh plate in any orientation.
    """

    plates: list[PlateSolution] = field(default_factory=list)
    remaining: list[Piece] = field(default_factory=list)

    @property
    def placed_count(self) -> int:
        return sum(plate.piece_count for plate in self.plates)


def _compare_band_orientations(a: Piece, b: Piece) -> int:
    # Lower height keeps bands thin; then the wider orientation; then area.
    if abs(a.height - b.height) > EPSILON:
        return -1 if a.height < b.height else 1
    if abs(b.width - a.width) > EPSILON:
        return -1 if a.width > b.width else 1
    if a.area != b.area:
        return -1 if a.area > b.area else 1
    return 0


def candidate_orientations(
    piece: Piece,
    allow_rotation: bool,
    model: PackingModel = PackingModel.STRIP,
) -> list[Piece]:
    """List the orientations to try for a piece, in preference order.

    The piece as given always comes first for the strip model. Rotation adds
    the 90 degree copy unless the piece is square. For the band model the
    orientations are reordered to prefer the smaller height.
    """
    orientations = [piece]
    if allow_rotation and not piece.is_square:
        orientations.append(piece.rotate())

    if PackingModel(model) == PackingModel.BAND:
        orientations.sort(key=cmp_to_key(_compare_band_orientations))
    return orientations


def _place_on_new_plate(
    piece: Piece,
    orientations: Sequence[Piece],
    plate_spec: PlateSpec,
    options: OptimizerOptions,
    result: PlacementResult,
) -> None:
    plate = create_plate(plate_spec, options)
    for orientation in orientations:
        if plate.try_place(orientation):
            result.plates.append(plate)
            logger.debug(
                "Opened plate %d for piece '%s' (%sx%s)",
                len(result.plates),
                piece.id,
                orientation.width,
                orientation.height,
            )
            return

    logger.warning(
        "Piece '%s' (%sx%s) does not fit an empty %sx%s plate in any orientation",
        piece.id,
        piece.width,
        piece.height,
        plate_spec.width,
        plate_spec.height,
    )
    result.remaining.append(piece)


def first_fit_decreasing(
    pieces: Sequence[Piece],
    plate_spec: PlateSpec,
    options: OptimizerOptions | None = None,
) -> PlacementResult:
    """Place each piece on the first plate and orientation that accepts it.

    Existing plates are tried in creation order, each with every candidate
    orientation, before a new plate is opened.

    Args:
        pieces: Pieces to place. Input order breaks sort ties.
        plate_spec: Stock plate dimensions.
        options: Optimizer options (packing model, kerf, trims, rotation).

    Returns:
        PlacementResult with plates and unplaceable pieces.
    """
    options = options or OptimizerOptions()
    model = options.packing_model
    result = PlacementResult()

    for piece in sort_pieces(pieces, DEFAULT_SORT[model]):
        orientations = candidate_orientations(piece, options.allow_rotation, model)
        placed = _place_first_fit(result.plates, orientations)
        if placed is None:
            _place_on_new_plate(piece, orientations, plate_spec, options, result)
        elif placed.rotated != piece.rotated:
            logger.debug("Placed piece '%s' rotated", piece.id)

    return result


def _place_first_fit(
    plates: Sequence[PlateSolution], orientations: Sequence[Piece]
) -> Piece | None:
    """Place into the first plate/orientation that accepts; return the orientation."""
    for plate in plates:
        for orientation in orientations:
            if plate.try_place(orientation):
                return orientation
    return None


def best_fit_decreasing(
    pieces: Sequence[Piece],
    plate_spec: PlateSpec,
    options: OptimizerOptions | None = None,
) -> PlacementResult:
    """Place each piece where it leaves the least waste.

    Every orientation is simulated on a fresh replay of every existing plate;
    the plate/orientation pair with the lowest resulting waste (plate area
    minus used area) wins, the earliest pair winning ties. When no existing
    plate can take the piece a new plate is opened as in FFD.

    Args:
        pieces: Pieces to place. Input order breaks sort ties.
        plate_spec: Stock plate dimensions.
        options: Optimizer options (packing model, kerf, trims, rotation).

    Returns:
        PlacementResult with plates and unplaceable pieces.
    """
    options = options or OptimizerOptions()
    model = options.packing_model
    result = PlacementResult()

    for piece in sort_pieces(pieces, DEFAULT_SORT[model]):
        orientations = candidate_orientations(piece, options.allow_rotation, model)
        best: tuple[PlateSolution, Piece] | None = None
        best_waste = float("inf")

        for plate in result.plates:
            for orientation in orientations:
                trial = plate.simulate(orientation)
                if trial is None:
                    continue
                waste = trial.total_area - trial.used_area
                if waste < best_waste:
                    best_waste = waste
                    best = (plate, orientation)

        if best is not None and best[0].try_place(best[1]):
            logger.debug(
                "Best fit for piece '%s': plate %d, waste %.2f",
                piece.id,
                result.plates.index(best[0]) + 1,
                best_waste,
            )
            continue

        _place_on_new_plate(piece, orientations, plate_spec, options, result)

    return result
