"""Domain services: placement heuristics, scoring, annealing and checks."""

from .annealing import AnnealingResult, SimulatedAnnealingOptimizer
from .cut_plan import CutPhase, LeftoverGroup, build_vertical_cut_plan
from .evaluation import (
    PLATE_PENALTY,
    Evaluation,
    evaluate_solution,
    evaluate_with_options,
)
from .placement import (
    PlacementResult,
    best_fit_decreasing,
    candidate_orientations,
    first_fit_decreasing,
)
from .validation import (
    ValidationIssue,
    raise_on_errors,
    validate_plate,
    validate_solution,
)

__all__ = [
    # Placement
    "PlacementResult",
    "best_fit_decreasing",
    "candidate_orientations",
    "first_fit_decreasing",
    # Evaluation
    "Evaluation",
    "PLATE_PENALTY",
    "evaluate_solution",
    "evaluate_with_options",
    # Annealing
    "AnnealingResult",
    "SimulatedAnnealingOptimizer",
    # Cut plan
    "CutPhase",
    "LeftoverGroup",
    "build_vertical_cut_plan",
    # Validation
    "ValidationIssue",
    "raise_on_errors",
    "validate_plate",
    "validate_solution",
]
