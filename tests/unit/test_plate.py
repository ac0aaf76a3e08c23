"""Tests for strip and band plate solutions.

Tests cover:
- Usable rectangle derived from the four trims
- Strip+shelf placement and cut sequence (vertical then horizontal)
- Horizontal band placement and cut sequence (horizontal then vertical)
- Simulation on a fresh replay without mutating the plate
- Plate creation from options
"""

from __future__ import annotations

import pytest

from platecut.contracts import PlateLayout
from platecut.domain.options import OptimizerOptions
from platecut.domain.plate import (
    BandPlateSolution,
    StripPlateSolution,
    create_plate,
    plate_type_for,
)
from platecut.domain.services.validation import validate_plate
from platecut.domain.value_objects import CutKind, Piece, PlateSpec


def _positions(cuts) -> list[tuple[str, float]]:
    return [(c.kind.value, c.position) for c in cuts]


# =============================================================================
# Usable rectangle
# =============================================================================


class TestUsableRectangle:
    """Tests for trims and derived areas."""

    def test_all_four_trims(self) -> None:
        plate = StripPlateSolution(
            1000, 500, trim_left=10, trim_top=20, trim_right=30, trim_bottom=40
        )
        assert plate.usable_width == 960
        assert plate.usable_height == 440
        assert plate.usable_right == 970
        assert plate.usable_bottom == 460
        assert plate.usable_area == 960 * 440

    def test_total_area_includes_trims(self) -> None:
        plate = BandPlateSolution(1000, 500, trim_left=10, trim_top=10)
        assert plate.total_area == 500000

    def test_trims_larger_than_plate_leave_no_room(self) -> None:
        """A plate consumed by trims accepts nothing."""
        plate = StripPlateSolution(10, 10, trim_left=10)
        assert plate.usable_width == 0
        assert not plate.try_place(Piece(1, 1))

    def test_empty_plate_metrics(self) -> None:
        plate = StripPlateSolution(1000, 500)
        assert plate.used_area == 0
        assert plate.utilization == 0
        assert plate.waste_area == 500000
        assert plate.get_placed_pieces_with_coords() == []
        assert len(plate.get_cut_sequence()) == 0


# =============================================================================
# Strip model
# =============================================================================


class TestStripPlateSolution:
    """Tests for the strip+shelf model."""

    @pytest.fixture
    def plate(self) -> StripPlateSolution:
        plate = StripPlateSolution(1000, 500, trim_left=10, trim_top=10, kerf=5)
        for piece_id in ("a", "b", "c"):
            assert plate.try_place(Piece(300, 200, id=piece_id))
        return plate

    def test_positions(self, plate: StripPlateSolution) -> None:
        """Pieces stack in the first strip, then open a strip after a kerf."""
        coords = [(p.piece.id, p.x, p.y) for p in plate.get_placed_pieces_with_coords()]
        assert coords == [("a", 10, 10), ("b", 10, 215), ("c", 315, 10)]
        assert len(plate.strips) == 2
        assert plate.current_x == 615

    def test_rejects_piece_without_room(self, plate: StripPlateSolution) -> None:
        """A piece too wide for every strip and the remaining width fails."""
        assert not plate.try_place(Piece(400, 100, id="d"))
        assert plate.piece_count == 3

    def test_cut_sequence(self, plate: StripPlateSolution) -> None:
        """Vertical strip cuts come before horizontal shelf cuts."""
        cuts = plate.get_cut_sequence()

        assert _positions(cuts.vertical) == [("vertical", 310), ("vertical", 615)]
        assert _positions(cuts.horizontal) == [
            ("horizontal", 210),
            ("horizontal", 415),
            ("horizontal", 210),
        ]
        assert list(cuts.sequence) == list(cuts.vertical) + list(cuts.horizontal)

    def test_horizontal_cuts_span_their_strip(self, plate: StripPlateSolution) -> None:
        horizontal = plate.get_cut_sequence().horizontal
        assert [(c.x, c.width) for c in horizontal] == [(10, 300), (10, 300), (315, 300)]

    def test_vertical_cuts_span_usable_height(self, plate: StripPlateSolution) -> None:
        for cut in plate.get_cut_sequence().vertical:
            assert cut.y == 10
            assert cut.height == 490

    def test_no_cut_at_usable_edges(self) -> None:
        """A strip reaching the usable right edge gets no vertical cut."""
        plate = StripPlateSolution(310, 100, kerf=5)
        plate.try_place(Piece(310, 60))
        plate.try_place(Piece(310, 35))

        cuts = plate.get_cut_sequence()
        assert cuts.vertical == ()
        assert _positions(cuts.horizontal) == [("horizontal", 60)]

    def test_cut_sequence_isolates_pieces(self, plate: StripPlateSolution) -> None:
        assert validate_plate(plate) == []

    def test_metrics(self, plate: StripPlateSolution) -> None:
        assert plate.used_area == 180000
        assert plate.utilization == pytest.approx(36.0)


# =============================================================================
# Band model
# =============================================================================


class TestBandPlateSolution:
    """Tests for the horizontal band model."""

    @pytest.fixture
    def plate(self) -> BandPlateSolution:
        plate = BandPlateSolution(1000, 500, trim_left=10, trim_top=10, kerf=5)
        assert plate.try_place(Piece(400, 200, id="a"))
        assert plate.try_place(Piece(400, 150, id="b"))
        assert plate.try_place(Piece(300, 100, id="c"))
        return plate

    def test_positions(self, plate: BandPlateSolution) -> None:
        """Pieces fill a band left to right, then a band opens below a kerf."""
        coords = [(p.piece.id, p.x, p.y) for p in plate.get_placed_pieces_with_coords()]
        assert coords == [("a", 10, 10), ("b", 415, 10), ("c", 10, 215)]
        assert [b.height for b in plate.bands] == [200, 100]
        assert plate.current_y == 315

    def test_rejects_piece_without_room(self, plate: BandPlateSolution) -> None:
        assert not plate.try_place(Piece(200, 250, id="d"))
        assert plate.piece_count == 3

    def test_cut_sequence(self, plate: BandPlateSolution) -> None:
        """Horizontal band cuts come before vertical piece cuts."""
        cuts = plate.get_cut_sequence()

        assert _positions(cuts.horizontal) == [("horizontal", 210), ("horizontal", 315)]
        assert _positions(cuts.vertical) == [
            ("vertical", 410),
            ("vertical", 815),
            ("vertical", 310),
        ]
        assert list(cuts.sequence) == list(cuts.horizontal) + list(cuts.vertical)
        assert cuts.sequence[0].kind is CutKind.HORIZONTAL

    def test_vertical_cuts_span_their_band(self, plate: BandPlateSolution) -> None:
        vertical = plate.get_cut_sequence().vertical
        assert [(c.y, c.height) for c in vertical] == [(10, 200), (10, 200), (215, 100)]

    def test_horizontal_cuts_span_usable_width(self, plate: BandPlateSolution) -> None:
        for cut in plate.get_cut_sequence().horizontal:
            assert cut.x == 10
            assert cut.width == 990

    def test_no_cut_at_usable_bottom(self) -> None:
        """A band reaching the usable bottom gets no horizontal cut."""
        plate = BandPlateSolution(100, 300, kerf=5)
        plate.try_place(Piece(40, 300))
        plate.try_place(Piece(55, 300))

        cuts = plate.get_cut_sequence()
        assert cuts.horizontal == ()
        assert _positions(cuts.vertical) == [("vertical", 40)]

    def test_cut_sequence_isolates_pieces(self, plate: BandPlateSolution) -> None:
        assert validate_plate(plate) == []


# =============================================================================
# Simulation and factories
# =============================================================================


class TestSimulation:
    """Tests for simulate and copy_empty."""

    def test_simulate_does_not_mutate(self) -> None:
        plate = StripPlateSolution(1000, 500, kerf=5)
        plate.try_place(Piece(300, 200, id="a"))

        trial = plate.simulate(Piece(300, 200, id="b"))

        assert trial is not None
        assert trial.piece_count == 2
        assert plate.piece_count == 1

    def test_simulate_returns_none_when_piece_does_not_fit(self) -> None:
        plate = BandPlateSolution(100, 100)
        plate.try_place(Piece(100, 100))
        assert plate.simulate(Piece(10, 10)) is None

    def test_copy_empty(self) -> None:
        plate = BandPlateSolution(1000, 500, trim_left=10, trim_bottom=7, kerf=3)
        plate.try_place(Piece(100, 100))

        copy = plate.copy_empty()

        assert isinstance(copy, BandPlateSolution)
        assert copy.piece_count == 0
        assert copy.trim_bottom == 7
        assert copy.kerf == 3


class TestCreatePlate:
    """Tests for plate creation from options."""

    def test_default_model_is_strip(self) -> None:
        plate = create_plate(PlateSpec(1220, 2440), OptimizerOptions())
        assert isinstance(plate, StripPlateSolution)
        assert plate.trim_left == 13
        assert plate.trim_top == 13
        assert plate.kerf == 5

    def test_band_model(self) -> None:
        options = OptimizerOptions(packing_model="band", trim_right=4, trim_bottom=6)
        plate = create_plate(PlateSpec(1220, 2440), options)
        assert isinstance(plate, BandPlateSolution)
        assert plate.usable_width == 1220 - 13 - 4
        assert plate.usable_height == 2440 - 13 - 6

    def test_plate_type_for_string(self) -> None:
        assert plate_type_for("band") is BandPlateSolution

    @pytest.mark.parametrize("plate_type", [StripPlateSolution, BandPlateSolution])
    def test_plates_are_plate_layouts(self, plate_type) -> None:
        assert isinstance(plate_type(100, 100), PlateLayout)
