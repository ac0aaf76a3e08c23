"""Structured, serializable report of an optimization result.

The report is machine-readable (Pydantic models, ``model_dump()`` ready)
and carries what external report or label generators need: summary
figures, per-plate cut sequences, placements and column cut plans, and the
pieces that could not be placed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from platecut.contracts.protocols import PlateLayout
from platecut.domain.plate import PlateSolution
from platecut.domain.services.cut_plan import build_vertical_cut_plan

if TYPE_CHECKING:
    from platecut.application.optimizer import OptimizationResult


class CutSchema(BaseModel):
    """A guillotine cut."""

    kind: str = Field(..., description="vertical or horizontal")
    position: float = Field(..., description="Cut line coordinate")
    x: float = Field(..., description="Left of the segment being cut")
    y: float = Field(..., description="Top of the segment being cut")
    width: float = Field(..., description="Horizontal cut length")
    height: float = Field(..., description="Vertical cut length")


class CutSequenceSchema(BaseModel):
    """Cut sequence of one plate."""

    vertical: list[CutSchema] = Field(default_factory=list)
    horizontal: list[CutSchema] = Field(default_factory=list)
    sequence: list[CutSchema] = Field(
        default_factory=list, description="Cuts in execution order"
    )


class PlacementSchema(BaseModel):
    """A placed piece with absolute plate coordinates."""

    id: str = Field(..., description="Piece identifier")
    x: float = Field(..., description="Left edge")
    y: float = Field(..., description="Top edge")
    width: float = Field(..., description="Placed width")
    height: float = Field(..., description="Placed height")
    rotated: bool = Field(default=False, description="Placed rotated")
    group_id: str | int | None = Field(default=None, description="Grouping key")


class LeftoverGroupSchema(BaseModel):
    height: float
    widths: list[float] = Field(default_factory=list)


class CutPhaseSchema(BaseModel):
    """One column of the vertical cut plan."""

    x: float = Field(..., description="Column left edge")
    width: float = Field(..., description="Main column width")
    cuts: list[float] = Field(default_factory=list, description="Main piece heights")
    trim: float = Field(default=0.0, description="Trim before the column cuts")
    leftovers: list[LeftoverGroupSchema] = Field(default_factory=list)


class PlateReportSchema(BaseModel):
    """Report for a single plate."""

    plate_number: int = Field(..., description="1-based plate number")
    width: float = Field(..., description="Plate width")
    height: float = Field(..., description="Plate height")
    pieces: int = Field(..., description="Number of placed pieces")
    used_area: float = Field(..., description="Sum of placed piece areas")
    utilization: float = Field(..., description="Used area percentage")
    cut_sequence: CutSequenceSchema
    placements: list[PlacementSchema] = Field(default_factory=list)
    cut_plan: list[CutPhaseSchema] = Field(default_factory=list)


class RemainingPieceSchema(BaseModel):
    """A piece that could not be placed."""

    id: str
    width: float
    height: float
    area: float


class SummarySchema(BaseModel):
    """Totals across all plates."""

    plate_count: int
    total_pieces: int
    remaining_pieces: int
    total_area: float
    used_area: float
    waste_area: float
    utilization: float
    score: float


class OptimizationReportSchema(BaseModel):
    """Complete optimization report."""

    summary: SummarySchema
    plates: list[PlateReportSchema] = Field(default_factory=list)
    remaining: list[RemainingPieceSchema] = Field(default_factory=list)


def _cut_sequence_schema(plate: PlateLayout) -> CutSequenceSchema:
    cuts = plate.get_cut_sequence()

    def convert(segments) -> list[CutSchema]:
        return [
            CutSchema(
                kind=c.kind.value,
                position=c.position,
                x=c.x,
                y=c.y,
                width=c.width,
                height=c.height,
            )
            for c in segments
        ]

    return CutSequenceSchema(
        vertical=convert(cuts.vertical),
        horizontal=convert(cuts.horizontal),
        sequence=convert(cuts.sequence),
    )


def _plate_report(number: int, plate: PlateSolution, trim: float) -> PlateReportSchema:
    placements = plate.get_placed_pieces_with_coords()
    phases = build_vertical_cut_plan(plate, trim=trim) or []
    return PlateReportSchema(
        plate_number=number,
        width=plate.plate_width,
        height=plate.plate_height,
        pieces=len(placements),
        used_area=plate.used_area,
        utilization=plate.utilization,
        cut_sequence=_cut_sequence_schema(plate),
        placements=[
            PlacementSchema(
                id=p.piece.id,
                x=p.x,
                y=p.y,
                width=p.width,
                height=p.height,
                rotated=p.piece.rotated,
                group_id=p.piece.group_id,
            )
            for p in placements
        ],
        cut_plan=[
            CutPhaseSchema(
                x=phase.x,
                width=phase.width,
                cuts=list(phase.cuts),
                trim=phase.trim,
                leftovers=[
                    LeftoverGroupSchema(height=g.height, widths=list(g.widths))
                    for g in phase.leftovers
                ],
            )
            for phase in phases
        ],
    )


def build_report(
    result: "OptimizationResult", cut_plan_trim: float = 0.0
) -> OptimizationReportSchema:
    """Build the structured report for an optimization result.

    Args:
        result: Result returned by ``optimize``.
        cut_plan_trim: Trim reported for columns of the vertical cut plan.

    Returns:
        OptimizationReportSchema ready for serialization.
    """
    evaluation = result.evaluation
    return OptimizationReportSchema(
        summary=SummarySchema(
            plate_count=len(result.plates),
            total_pieces=result.placed_count,
            remaining_pieces=len(result.remaining),
            total_area=evaluation.total_area,
            used_area=evaluation.used_area,
            waste_area=evaluation.waste_area,
            utilization=evaluation.utilization,
            score=evaluation.score,
        ),
        plates=[
            _plate_report(index + 1, plate, cut_plan_trim)
            for index, plate in enumerate(result.plates)
        ],
        remaining=[
            RemainingPieceSchema(id=p.id, width=p.width, height=p.height, area=p.area)
            for p in result.remaining
        ],
    )
