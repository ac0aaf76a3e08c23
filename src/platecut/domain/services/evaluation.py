"""Solution quality scoring.

The score rewards used area and subtracts a fixed cost per plate that is
large enough to dominate any area gain, so fewer plates always wins before
less waste does. Optional penalties discourage rotated pieces and groups
that mix rotated and unrotated pieces.

    score = used_area
            - plate_count * PLATE_PENALTY
            - rotated_count * rotation_penalty
            - mixed_rotation_rows * rotation_mix_penalty
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

from platecut.domain.options import OptimizerOptions
from platecut.domain.plate import PlateSolution, total_used_area

PLATE_PENALTY = 10_000


@dataclass(frozen=True)
class Evaluation:
    """Derived quality metrics for a set of plates.

    Recomputed whenever the plate set changes; never stored apart from it.

    Attributes:
        plate_count: Number of plates used.
        total_area: Sum of nominal plate areas.
        used_area: Sum of placed piece areas.
        waste_area: total_area - used_area.
        utilization: used_area / total_area as a percentage.
        rotated_count: Rotated placements (0 unless a penalty is active).
        mixed_rotation_rows: Groups mixing rotated and unrotated pieces.
        rotation_penalty_applied: rotated_count * rotation_penalty.
        rotation_mix_penalty_applied: mixed_rotation_rows * rotation_mix_penalty.
        score: Higher is better.
    """

    plate_count: int
    total_area: float
    used_area: float
    waste_area: float
    utilization: float
    rotated_count: int
    mixed_rotation_rows: int
    rotation_penalty_applied: float
    rotation_mix_penalty_applied: float
    score: float


def _non_negative(value: float) -> float:
    if not math.isfinite(value):
        return 0.0
    return max(0.0, value)


def evaluate_solution(
    plates: Sequence[PlateSolution],
    rotation_penalty: float = 0.0,
    rotation_mix_penalty: float = 0.0,
    allow_rotation: bool = True,
) -> Evaluation:
    """Score a set of plates.

    Rotations are only counted when rotation is allowed and at least one
    rotation penalty is set. Mixed groups are only counted when
    ``rotation_mix_penalty`` is set; pieces without a group id are ignored
    for that check.

    Args:
        plates: Plates to evaluate.
        rotation_penalty: Cost per rotated placement.
        rotation_mix_penalty: Cost per mixed-rotation group.
        allow_rotation: Whether rotation was enabled for the run.

    Returns:
        Evaluation of the plate set.
    """
    rotation_penalty = _non_negative(rotation_penalty)
    rotation_mix_penalty = _non_negative(rotation_mix_penalty)

    total_area = sum(plate.total_area for plate in plates)
    used_area = total_used_area(plates)
    utilization = (used_area / total_area) * 100 if total_area > 0 else 0.0

    rotated_count = 0
    mixed_rotation_rows = 0
    if allow_rotation and (rotation_penalty > 0 or rotation_mix_penalty > 0):
        groups: dict[str | int, list[int]] = {}
        for plate in plates:
            for piece in plate.placed_pieces:
                rotated_count += int(piece.rotated)
                if rotation_mix_penalty > 0 and piece.group_id is not None:
                    state = groups.setdefault(piece.group_id, [0, 0])
                    state[0] += int(piece.rotated)
                    state[1] += 1
        mixed_rotation_rows = sum(
            1 for rotated, total in groups.values() if 0 < rotated < total
        )

    rotation_cost = rotated_count * rotation_penalty
    mix_cost = mixed_rotation_rows * rotation_mix_penalty
    return Evaluation(
        plate_count=len(plates),
        total_area=total_area,
        used_area=used_area,
        waste_area=total_area - used_area,
        utilization=utilization,
        rotated_count=rotated_count,
        mixed_rotation_rows=mixed_rotation_rows,
        rotation_penalty_applied=rotation_cost,
        rotation_mix_penalty_applied=mix_cost,
        score=used_area - len(plates) * PLATE_PENALTY - rotation_cost - mix_cost,
    )


def evaluate_with_options(
    plates: Sequence[PlateSolution], options: OptimizerOptions
) -> Evaluation:
    """Score plates with the penalties configured in the options."""
    return evaluate_solution(
        plates,
        rotation_penalty=options.rotation_penalty,
        rotation_mix_penalty=options.rotation_mix_penalty,
        allow_rotation=options.allow_rotation,
    )
