"""Tests for placement and cut sequence validation."""

from __future__ import annotations

from dataclasses import dataclass, field

import pytest

from platecut.domain.options import OptimizerOptions
from platecut.domain.services.placement import first_fit_decreasing
from platecut.domain.services.validation import (
    Region,
    ValidationIssue,
    apply_cuts,
    raise_on_errors,
    validate_plate,
    validate_solution,
)
from platecut.domain.value_objects import (
    CutKind,
    CutSegment,
    CutSequence,
    Piece,
    PlacementRecord,
    PlateSpec,
)


@dataclass
class _StubPlate:
    """Plate with hand-written placements and cuts (usable area 0..100)."""

    placements: list[PlacementRecord] = field(default_factory=list)
    cuts: tuple[CutSegment, ...] = ()
    trim_left: float = 0.0
    trim_top: float = 0.0
    usable_right: float = 100.0
    usable_bottom: float = 100.0
    kerf: float = 2.0

    def get_placed_pieces_with_coords(self) -> list[PlacementRecord]:
        return self.placements

    def get_cut_sequence(self) -> CutSequence:
        return CutSequence(sequence=self.cuts)


def _vertical(position: float) -> CutSegment:
    return CutSegment(CutKind.VERTICAL, position, x=position, y=0, width=0, height=100)


def _horizontal(position: float, x: float = 0, width: float = 100) -> CutSegment:
    return CutSegment(CutKind.HORIZONTAL, position, x=x, y=position, width=width, height=0)


def _errors(issues: list[ValidationIssue]) -> list[ValidationIssue]:
    return [i for i in issues if i.level == "ERROR"]


class TestRegion:
    """Tests for Region splitting."""

    def test_vertical_split_removes_kerf(self) -> None:
        left, right = Region(0, 0, 100, 100).split(_vertical(40), kerf=2)
        assert left == Region(0, 0, 40, 100)
        assert right == Region(42, 0, 100, 100)

    def test_cut_outside_region(self) -> None:
        assert Region(0, 0, 30, 100).split(_vertical(40), kerf=2) is None

    def test_partial_cut_does_not_split(self) -> None:
        """A horizontal cut must cross the full region width."""
        assert Region(0, 0, 100, 100).split(_horizontal(50, width=60), kerf=0) is None


class TestValidatePlacements:
    """Tests for bounds and overlap checks."""

    def test_overlap_detected(self) -> None:
        plate = _StubPlate(
            [
                PlacementRecord(Piece(50, 50, id="a"), x=0, y=0),
                PlacementRecord(Piece(50, 50, id="b"), x=25, y=25),
            ]
        )
        issues = validate_plate(plate, check_cuts=False)
        assert len(issues) == 1
        assert "overlap" in issues[0].message

    def test_out_of_bounds(self) -> None:
        plate = _StubPlate([PlacementRecord(Piece(50, 50, id="a"), x=60, y=0)])
        issues = validate_plate(plate, plate_index=3, check_cuts=False)
        assert len(issues) == 1
        assert issues[0].piece_id == "a"
        assert issues[0].plate_index == 3


class TestValidateCuts:
    """Tests for guillotine replay."""

    def test_valid_cuts(self) -> None:
        plate = _StubPlate(
            [
                PlacementRecord(Piece(40, 100, id="a"), x=0, y=0),
                PlacementRecord(Piece(58, 50, id="b"), x=42, y=0),
            ],
            cuts=(_vertical(40), _horizontal(50, x=42, width=58)),
        )
        regions, unused = apply_cuts(plate)

        assert unused == []
        assert len(regions) == 3
        assert validate_plate(plate) == []

    def test_cut_through_piece(self) -> None:
        plate = _StubPlate(
            [PlacementRecord(Piece(60, 60, id="a"), x=0, y=0)],
            cuts=(_vertical(30),),
        )
        errors = _errors(validate_plate(plate))
        assert any("cut through" in e.message for e in errors)

    def test_pieces_not_separated(self) -> None:
        plate = _StubPlate(
            [
                PlacementRecord(Piece(40, 40, id="a"), x=0, y=0),
                PlacementRecord(Piece(40, 40, id="b"), x=50, y=0),
            ]
        )
        errors = _errors(validate_plate(plate))
        assert len(errors) == 1
        assert "several pieces" in errors[0].message

    def test_unused_cut_is_warning(self) -> None:
        plate = _StubPlate(
            [PlacementRecord(Piece(40, 40, id="a"), x=0, y=0)],
            cuts=(_vertical(40), _vertical(40)),
        )
        issues = validate_plate(plate)
        assert [i.level for i in issues] == ["WARN"]


class TestValidateSolution:
    """Tests for whole-solution validation."""

    @pytest.mark.parametrize("model", ["strip", "band"])
    def test_heuristic_output_is_valid(
        self, model: str, three_pieces: list[Piece], standard_plate: PlateSpec
    ) -> None:
        options = OptimizerOptions(packing_model=model, allow_rotation=False)
        result = first_fit_decreasing(three_pieces, standard_plate, options)
        assert validate_solution(result.plates) == []

    def test_raise_on_errors(self) -> None:
        issues = [
            ValidationIssue("WARN", "minor"),
            ValidationIssue("ERROR", "broken", plate_index=0, piece_id="a"),
        ]
        with pytest.raises(ValueError, match="Validation failed"):
            raise_on_errors(issues)

    def test_warnings_do_not_raise(self) -> None:
        raise_on_errors([ValidationIssue("WARN", "minor")])
