"""Plate solutions for the strip and band packing models.

A plate solution owns every row and placement for one physical plate. The
usable rectangle is the plate minus its four trims; pieces are only ever
placed inside it and never overlap.

Both models expose the same surface to heuristics and report consumers:
``try_place``, ``used_area``, ``total_area``, ``utilization``,
``get_cut_sequence`` and ``get_placed_pieces_with_coords``.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Sequence

from platecut.domain.options import OptimizerOptions, PackingModel
from platecut.domain.rows import Band, Strip
from platecut.domain.value_objects import (
    EPSILON,
    CutKind,
    CutSegment,
    CutSequence,
    Piece,
    PlacementRecord,
    PlateSpec,
    approx_le,
)

logger = logging.getLogger(__name__)


class PlateSolution(ABC):
    """Placement state for a single plate.

    Attributes:
        plate_width: Nominal plate width.
        plate_height: Nominal plate height.
        trim_left: Trim on the left edge.
        trim_top: Trim on the top edge.
        trim_right: Trim on the right edge.
        trim_bottom: Trim on the bottom edge.
        kerf: Saw kerf width.
        placed_pieces: Pieces in the order they were placed, in their
            placed orientation.
    """

    model: PackingModel

    def __init__(
        self,
        plate_width: float,
        plate_height: float,
        trim_left: float = 0.0,
        trim_top: float = 0.0,
        trim_right: float = 0.0,
        trim_bottom: float = 0.0,
        kerf: float = 0.0,
    ) -> None:
        self.plate_width = plate_width
        self.plate_height = plate_height
        self.trim_left = trim_left
        self.trim_top = trim_top
        self.trim_right = trim_right
        self.trim_bottom = trim_bottom
        self.kerf = kerf
        self.placed_pieces: list[Piece] = []

    @classmethod
    def from_options(cls, plate_spec: PlateSpec, options: OptimizerOptions) -> PlateSolution:
        """Create an empty plate of this model from a spec and options."""
        return cls(
            plate_spec.width,
            plate_spec.height,
            trim_left=options.trim_left,
            trim_top=options.trim_top,
            trim_right=options.trim_right,
            trim_bottom=options.trim_bottom,
            kerf=options.kerf,
        )

    @property
    def usable_width(self) -> float:
        return max(0.0, self.plate_width - self.trim_left - self.trim_right)

    @property
    def usable_height(self) -> float:
        return max(0.0, self.plate_height - self.trim_top - self.trim_bottom)

    @property
    def usable_right(self) -> float:
        """X coordinate of the right edge of the usable rectangle."""
        return self.trim_left + self.usable_width

    @property
    def usable_bottom(self) -> float:
        """Y coordinate of the bottom edge of the usable rectangle."""
        return self.trim_top + self.usable_height

    @property
    def usable_area(self) -> float:
        return self.usable_width * self.usable_height

    @property
    def total_area(self) -> float:
        """Nominal plate area (trims included)."""
        return self.plate_width * self.plate_height

    @property
    def used_area(self) -> float:
        """Sum of placed piece areas."""
        return sum(p.area for p in self.get_placed_pieces_with_coords())

    @property
    def waste_area(self) -> float:
        return self.total_area - self.used_area

    @property
    def utilization(self) -> float:
        """Percentage of the nominal plate area covered by pieces."""
        total = self.total_area
        return (self.used_area / total) * 100 if total > 0 else 0.0

    @property
    def piece_count(self) -> int:
        return len(self.placed_pieces)

    def copy_empty(self) -> PlateSolution:
        """Return a new empty plate with the same dimensions and settings."""
        return type(self)(
            self.plate_width,
            self.plate_height,
            trim_left=self.trim_left,
            trim_top=self.trim_top,
            trim_right=self.trim_right,
            trim_bottom=self.trim_bottom,
            kerf=self.kerf,
        )

    def simulate(self, piece: Piece) -> PlateSolution | None:
        """Replay this plate on a fresh copy and try one more piece.

        The current plate is left untouched.

        Args:
            piece: Candidate piece in the orientation to test.

        Returns:
            The simulated plate if the piece fits, otherwise None.
        """
        trial = self.copy_empty()
        for placed in self.placed_pieces:
            trial.try_place(placed)
        if trial.try_place(piece):
            return trial
        return None

    def try_place(self, piece: Piece) -> bool:
        """Place a piece in the first row that accepts it, or open a new row.

        Returns:
            True if the piece was placed. On False nothing changed and the
            caller should try another orientation or plate.
        """
        if self.usable_width <= EPSILON or self.usable_height <= EPSILON:
            return False
        if not self._place(piece):
            return False
        self.placed_pieces.append(piece)
        return True

    @abstractmethod
    def _place(self, piece: Piece) -> bool:
        """Model-specific placement; must not mutate the plate on False."""
        ...

    @abstractmethod
    def get_placed_pieces_with_coords(self) -> list[PlacementRecord]:
        """Return every placement with absolute plate coordinates."""
        ...

    @abstractmethod
    def get_cut_sequence(self) -> CutSequence:
        """Return the two-stage guillotine cut sequence for this plate."""
        ...

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}({self.plate_width}x{self.plate_height}, "
            f"pieces={self.piece_count}, utilization={self.utilization:.2f}%)"
        )


class StripPlateSolution(PlateSolution):
    """Strip+shelf model: vertical strips of single-piece shelves.

    The first cutting stage splits the plate into strips with vertical cuts;
    the second stage splits each strip into shelves with horizontal cuts.
    """

    model = PackingModel.STRIP

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.strips: list[Strip] = []
        self.current_x = self.trim_left

    def _place(self, piece: Piece) -> bool:
        """Place into the first strip that accepts the piece, else open a strip.

        A new strip starts one kerf right of the previous strip and is as
        wide as the piece.

        Returns:
            True if placed, False if no strip accepts the piece and the
            remaining usable width is too narrow for a new one.
        """
        for strip in self.strips:
            if strip.try_place(piece):
                return True

        gap = self.kerf if self.strips else 0.0
        strip_x = self.current_x + gap
        remaining_width = self.usable_right - strip_x
        if not approx_le(piece.width, remaining_width):
            return False

        strip = Strip(
            x=strip_x,
            y=self.trim_top,
            width=piece.width,
            max_height=self.usable_height,
            kerf=self.kerf,
        )
        if not strip.try_place(piece):
            return False

        self.strips.append(strip)
        self.current_x = strip_x + piece.width
        logger.debug(
            "Opened strip %d at x=%s (width %s)", len(self.strips), strip_x, piece.width
        )
        return True

    def get_placed_pieces_with_coords(self) -> list[PlacementRecord]:
        return [p for strip in self.strips for p in strip.placements]

    def get_cut_sequence(self) -> CutSequence:
        vertical: list[CutSegment] = []
        horizontal: list[CutSegment] = []

        for strip in self.strips:
            right = strip.right_edge
            duplicate = any(abs(cut.position - right) < EPSILON for cut in vertical)
            if right < self.usable_right - EPSILON and not duplicate:
                vertical.append(
                    CutSegment(
                        kind=CutKind.VERTICAL,
                        position=right,
                        x=right,
                        y=self.trim_top,
                        width=0.0,
                        height=self.usable_height,
                    )
                )

            for shelf in strip.shelves:
                bottom = shelf.y + shelf.height
                if bottom < self.usable_bottom - EPSILON:
                    horizontal.append(
                        CutSegment(
                            kind=CutKind.HORIZONTAL,
                            position=bottom,
                            x=strip.x,
                            y=bottom,
                            width=strip.width,
                            height=0.0,
                        )
                    )

        return CutSequence(
            vertical=tuple(vertical),
            horizontal=tuple(horizontal),
            sequence=tuple(vertical + horizontal),
        )


class BandPlateSolution(PlateSolution):
    """Horizontal band model: full-width bands of left-to-right pieces.

    The first cutting stage splits the plate into bands with horizontal
    cuts; the second stage splits each band into pieces with vertical cuts.
    """

    model = PackingModel.BAND

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.bands: list[Band] = []
        self.current_y = self.trim_top

    def _place(self, piece: Piece) -> bool:
        """Place into the first band that accepts the piece, else open a band.

        A new band starts one kerf below the previous band and spans the
        usable width.

        Returns:
            True if placed, False if no band accepts the piece and the
            remaining usable height is too low for a new one.
        """
        for band in self.bands:
            if band.try_place(piece):
                return True

        gap = self.kerf if self.bands else 0.0
        band_y = self.current_y + gap
        remaining_height = self.usable_bottom - band_y
        if not approx_le(piece.height, remaining_height):
            return False

        band = Band(
            x=self.trim_left,
            y=band_y,
            capacity_width=self.usable_width,
            kerf=self.kerf,
        )
        if not band.try_place(piece):
            return False

        self.bands.append(band)
        self.current_y = band_y + band.height
        logger.debug(
            "Opened band %d at y=%s (height %s)", len(self.bands), band_y, band.height
        )
        return True

    def get_placed_pieces_with_coords(self) -> list[PlacementRecord]:
        return [p for band in self.bands for p in band.placements]

    def get_cut_sequence(self) -> CutSequence:
        vertical: list[CutSegment] = []
        horizontal: list[CutSegment] = []

        for band in self.bands:
            bottom = band.bottom_edge
            if bottom < self.usable_bottom - EPSILON:
                horizontal.append(
                    CutSegment(
                        kind=CutKind.HORIZONTAL,
                        position=bottom,
                        x=self.trim_left,
                        y=bottom,
                        width=self.usable_width,
                        height=0.0,
                    )
                )

            for placement in sorted(band.placements, key=lambda p: p.x):
                right = placement.right_edge
                if right < self.usable_right - EPSILON:
                    vertical.append(
                        CutSegment(
                            kind=CutKind.VERTICAL,
                            position=right,
                            x=right,
                            y=band.y,
                            width=0.0,
                            height=band.height,
                        )
                    )

        return CutSequence(
            vertical=tuple(vertical),
            horizontal=tuple(horizontal),
            sequence=tuple(horizontal + vertical),
        )


_PLATE_TYPES: dict[PackingModel, type[PlateSolution]] = {
    PackingModel.STRIP: StripPlateSolution,
    PackingModel.BAND: BandPlateSolution,
}


def plate_type_for(model: PackingModel) -> type[PlateSolution]:
    """Return the plate solution class implementing a packing model."""
    return _PLATE_TYPES[PackingModel(model)]


def create_plate(plate_spec: PlateSpec, options: OptimizerOptions) -> PlateSolution:
    """Create an empty plate for the packing model selected in the options."""
    return plate_type_for(options.packing_model).from_options(plate_spec, options)


def total_used_area(plates: Sequence[PlateSolution]) -> float:
    return sum(plate.used_area for plate in plates)
