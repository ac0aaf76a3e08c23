"""Optimization entry point.

Dispatches a cut list to FFD, BFD or simulated annealing and always returns
plates, unplaceable pieces and the evaluation of the plates.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Sequence

from platecut.application.config import (
    ConfigError,
    config_to_options,
    config_to_request,
    load_options_from_dict,
    load_request_from_dict,
)
from platecut.domain.options import Algorithm, InvalidConfigurationError, OptimizerOptions
from platecut.domain.plate import PlateSolution
from platecut.domain.services.annealing import SimulatedAnnealingOptimizer
from platecut.domain.services.evaluation import Evaluation, evaluate_with_options
from platecut.domain.services.placement import (
    PlacementResult,
    best_fit_decreasing,
    first_fit_decreasing,
)
from platecut.domain.value_objects import Piece, PlateSpec

logger = logging.getLogger(__name__)


@dataclass
class OptimizationResult:
    """Result of an optimization call.

    Attributes:
        plates: Plate solutions in creation order.
        remaining: Pieces that fit no plate in any orientation.
        evaluation: Evaluation of ``plates``.
        options: Options the run used.
    """

    plates: list[PlateSolution]
    remaining: list[Piece]
    evaluation: Evaluation
    options: OptimizerOptions = field(default_factory=OptimizerOptions)

    @property
    def placed_count(self) -> int:
        return sum(plate.piece_count for plate in self.plates)


class PlateOptimizer:
    """Coordinates a single optimization run.

    Attributes:
        options: Validated optimizer options.
        rng: Random generator for simulated annealing.
    """

    def __init__(
        self,
        options: OptimizerOptions | None = None,
        rng: random.Random | None = None,
    ) -> None:
        """Initialize the optimizer.

        Args:
            options: Optimizer options; defaults are used when omitted.
            rng: Random generator for simulated annealing. When omitted, one
                seeded with ``options.seed`` is created per run.
        """
        self.options = options or OptimizerOptions()
        self.rng = rng
        self._dispatch: dict[
            Algorithm, Callable[[Sequence[Piece], PlateSpec], OptimizationResult]
        ] = {
            Algorithm.FFD: self._run_ffd,
            Algorithm.BFD: self._run_bfd,
            Algorithm.SIMULATED_ANNEALING: self._run_annealing,
        }

    def optimize(self, pieces: Sequence[Piece], plate_spec: PlateSpec) -> OptimizationResult:
        """Plan the cutting of ``pieces`` from plates of ``plate_spec``.

        Args:
            pieces: Pieces to cut.
            plate_spec: Stock plate dimensions.

        Returns:
            OptimizationResult with plates, remaining pieces and evaluation.
        """
        options = self.options
        logger.info(
            "Optimizing %d pieces on %sx%s plates (algorithm=%s, model=%s)",
            len(pieces),
            plate_spec.width,
            plate_spec.height,
            options.algorithm.value,
            options.packing_model.value,
        )

        result = self._dispatch[options.algorithm](pieces, plate_spec)

        logger.info(
            "Optimization finished: %d plates, %.2f%% utilization, %d remaining",
            result.evaluation.plate_count,
            result.evaluation.utilization,
            len(result.remaining),
        )
        return result

    def _wrap(self, placement: PlacementResult) -> OptimizationResult:
        return OptimizationResult(
            plates=placement.plates,
            remaining=placement.remaining,
            evaluation=evaluate_with_options(placement.plates, self.options),
            options=self.options,
        )

    def _run_ffd(self, pieces: Sequence[Piece], plate_spec: PlateSpec) -> OptimizationResult:
        return self._wrap(first_fit_decreasing(pieces, plate_spec, self.options))

    def _run_bfd(self, pieces: Sequence[Piece], plate_spec: PlateSpec) -> OptimizationResult:
        return self._wrap(best_fit_decreasing(pieces, plate_spec, self.options))

    def _run_annealing(
        self, pieces: Sequence[Piece], plate_spec: PlateSpec
    ) -> OptimizationResult:
        annealer = SimulatedAnnealingOptimizer(plate_spec, self.options, rng=self.rng)
        outcome = annealer.optimize(pieces)
        logger.debug(
            "Annealing accepted %d of %d moves",
            outcome.accepted_moves,
            self.options.iterations,
        )
        return OptimizationResult(
            plates=outcome.solution.plates,
            remaining=outcome.solution.remaining,
            evaluation=outcome.evaluation,
            options=self.options,
        )


def _options_from_mapping(values: Mapping[str, Any]) -> OptimizerOptions:
    """Validate a mapping of options the same way request options are validated.

    Accepts snake_case and camelCase names. Unknown keys and invalid values
    raise InvalidConfigurationError.
    """
    try:
        schema = load_options_from_dict(dict(values))
    except ConfigError as e:
        raise InvalidConfigurationError(str(e)) from e
    return config_to_options(schema)


def optimize(
    pieces: Sequence[Piece],
    plate_spec: PlateSpec,
    options: OptimizerOptions | Mapping[str, Any] | None = None,
    rng: random.Random | None = None,
) -> OptimizationResult:
    """Optimize a cut list.

    Args:
        pieces: Pieces to cut.
        plate_spec: Stock plate dimensions.
        options: Optimizer options (see ``platecut.domain.options``), or a
            mapping of option names (snake_case or camelCase) to values.
        rng: Optional random generator for simulated annealing.

    Returns:
        OptimizationResult with plates, remaining pieces and evaluation.

    Raises:
        InvalidConfigurationError: If the options name an unknown algorithm,
            packing model or option, or hold an invalid value.
    """
    if isinstance(options, Mapping):
        options = _options_from_mapping(options)
    return PlateOptimizer(options, rng=rng).optimize(pieces, plate_spec)


def optimize_from_dict(
    data: dict[str, Any], rng: random.Random | None = None
) -> OptimizationResult:
    """Validate a dictionary request and optimize it.

    Raises:
        ConfigError: If the request fails validation.
        InvalidConfigurationError: If the options name an unknown algorithm
            or packing model.
    """
    pieces, plate_spec, options = config_to_request(load_request_from_dict(data))
    return optimize(pieces, plate_spec, options, rng=rng)
