"""Guillotine cut planning for rectangular plates.

Example:
    ```python
    from platecut import OptimizerOptions, Piece, PlateSpec, optimize

    result = optimize(
        [Piece(400, 300, id="A"), Piece(300, 200, id="B")],
        PlateSpec(1220, 2440),
        OptimizerOptions(algorithm="ffd"),
    )
    for plate in result.plates:
        print(plate.utilization, plate.get_cut_sequence().sequence)
    ```
"""

from platecut.application import (
    OptimizationResult,
    PlateOptimizer,
    build_report,
    optimize,
    optimize_from_dict,
)
from platecut.application.config import ConfigError
from platecut.domain import (
    Algorithm,
    InvalidConfigurationError,
    OptimizerOptions,
    PackingModel,
    Piece,
    PlateSpec,
)
from platecut.domain.services import Evaluation

__all__ = [
    "Algorithm",
    "ConfigError",
    "Evaluation",
    "InvalidConfigurationError",
    "OptimizationResult",
    "OptimizerOptions",
    "PackingModel",
    "Piece",
    "PlateOptimizer",
    "PlateSpec",
    "build_report",
    "optimize",
    "optimize_from_dict",
]
