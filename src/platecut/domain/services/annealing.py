"""Simulated annealing over piece orderings and orientations.

The optimizer keeps a mutable current solution and the best solution seen.
Both start from the best FFD run over every sort strategy. Each iteration
perturbs the caller's piece list (random swaps, forced rotations and an
occasional re-sort), re-runs FFD and accepts the neighbour with the
Metropolis criterion::

    accept if delta > 0, else with probability exp(delta / temperature)

The temperature starts at ``INITIAL_TEMPERATURE`` and is multiplied by
``COOLING_RATE`` after every iteration. The iteration budget is the only
stopping condition.

Randomness comes from an injected ``random.Random`` so runs can be
reproduced by seeding it.
"""

from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass, field
from typing import Sequence

from platecut.domain.options import OptimizerOptions, PackingModel
from platecut.domain.services.evaluation import Evaluation, evaluate_with_options
from platecut.domain.services.placement import PlacementResult, first_fit_decreasing
from platecut.domain.sorting import SortStrategy, sort_by_height_then_area, sort_pieces
from platecut.domain.value_objects import Piece, PlateSpec

logger = logging.getLogger(__name__)

INITIAL_TEMPERATURE = 2000.0
COOLING_RATE = 0.92
MIN_SWAPS = 2
MAX_SWAPS = 9
MIN_FORCED_ROTATIONS = 1
MAX_FORCED_ROTATIONS = 4

# Probability of re-sorting a neighbour as a restart bias
RESORT_PROBABILITY: dict[PackingModel, float] = {
    PackingModel.STRIP: 0.3,
    PackingModel.BAND: 0.35,
}

INITIAL_STRATEGIES: dict[PackingModel, tuple[SortStrategy, ...]] = {
    PackingModel.STRIP: (
        SortStrategy.AREA_DESC,
        SortStrategy.WIDTH_DESC,
        SortStrategy.HEIGHT_DESC,
        SortStrategy.PERIMETER_DESC,
    ),
    PackingModel.BAND: (
        SortStrategy.HEIGHT_DESC,
        SortStrategy.AREA_DESC,
        SortStrategy.WIDTH_DESC,
        SortStrategy.PERIMETER_DESC,
    ),
}


@dataclass
class AnnealingResult:
    """Best solution found by the annealing loop.

    Attributes:
        solution: Best placement result.
        evaluation: Evaluation of the best solution.
        best_score_history: Best score after each iteration.
        accepted_moves: Number of accepted neighbours.
    """

    solution: PlacementResult
    evaluation: Evaluation
    best_score_history: list[float] = field(default_factory=list)
    accepted_moves: int = 0


class SimulatedAnnealingOptimizer:
    """Searches piece orderings and orientations with simulated annealing.

    Attributes:
        plate_spec: Stock plate dimensions.
        options: Optimizer options (model, penalties, iteration budget).
        rng: Random source driving neighbour generation and acceptance.
    """

    def __init__(
        self,
        plate_spec: PlateSpec,
        options: OptimizerOptions | None = None,
        rng: random.Random | None = None,
    ) -> None:
        """Initialize the optimizer.

        Args:
            plate_spec: Stock plate dimensions.
            options: Optimizer options; defaults are used when omitted.
            rng: Random generator. When omitted, a generator seeded with
                ``options.seed`` is created.
        """
        self.plate_spec = plate_spec
        self.options = options or OptimizerOptions()
        self.rng = rng if rng is not None else random.Random(self.options.seed)

    @property
    def model(self) -> PackingModel:
        return self.options.packing_model

    def _run(self, pieces: Sequence[Piece]) -> tuple[PlacementResult, Evaluation]:
        solution = first_fit_decreasing(pieces, self.plate_spec, self.options)
        return solution, evaluate_with_options(solution.plates, self.options)

    def initial_solution(
        self, pieces: Sequence[Piece]
    ) -> tuple[PlacementResult, Evaluation]:
        """Run FFD under every sort strategy and keep the best scoring run."""
        first, *others = INITIAL_STRATEGIES[self.model]
        best = self._run(sort_pieces(pieces, first))
        for strategy in others:
            candidate = self._run(sort_pieces(pieces, strategy))
            if candidate[1].score > best[1].score:
                best = candidate
        return best

    def neighbor(self, pieces: Sequence[Piece]) -> list[Piece]:
        """Build a perturbed copy of the piece list.

        Applies 2-9 random swaps, forces 1-4 random rotations when rotation
        is allowed, and sometimes re-sorts the result by decreasing area
        (strip model) or height (band model).
        """
        shuffled = list(pieces)
        if not shuffled:
            return shuffled
        rng = self.rng
        size = len(shuffled)

        for _ in range(rng.randint(MIN_SWAPS, MAX_SWAPS)):
            i, j = rng.randrange(size), rng.randrange(size)
            shuffled[i], shuffled[j] = shuffled[j], shuffled[i]

        if self.options.allow_rotation:
            for _ in range(rng.randint(MIN_FORCED_ROTATIONS, MAX_FORCED_ROTATIONS)):
                idx = rng.randrange(size)
                shuffled[idx] = shuffled[idx].rotate()

        if rng.random() < RESORT_PROBABILITY[self.model]:
            if self.model == PackingModel.BAND:
                shuffled = sort_by_height_then_area(shuffled)
            else:
                shuffled = sort_pieces(shuffled, SortStrategy.AREA_DESC)

        return shuffled

    @staticmethod
    def acceptance_probability(delta: float, temperature: float) -> float:
        """Metropolis acceptance probability for a score change."""
        if delta > 0:
            return 1.0
        if temperature <= 0:
            return 0.0
        return math.exp(delta / temperature)

    def optimize(self, pieces: Sequence[Piece]) -> AnnealingResult:
        """Run the annealing loop for the configured iteration budget.

        Args:
            pieces: Pieces to place.

        Returns:
            AnnealingResult holding the best solution and its evaluation.
        """
        current, current_eval = self.initial_solution(pieces)
        result = AnnealingResult(solution=current, evaluation=current_eval)

        if not pieces:
            return result

        temperature = INITIAL_TEMPERATURE
        for iteration in range(self.options.iterations):
            candidate, candidate_eval = self._run(self.neighbor(pieces))
            delta = candidate_eval.score - current_eval.score

            if self.rng.random() < self.acceptance_probability(delta, temperature):
                current, current_eval = candidate, candidate_eval
                result.accepted_moves += 1

                if candidate_eval.score > result.evaluation.score:
                    result.solution = candidate
                    result.evaluation = candidate_eval
                    logger.debug(
                        "Improvement at iteration %d: %d plates, %.2f%% utilization",
                        iteration,
                        candidate_eval.plate_count,
                        candidate_eval.utilization,
                    )

            result.best_score_history.append(result.evaluation.score)
            temperature *= COOLING_RATE

        return result
