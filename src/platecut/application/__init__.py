"""Application layer - optimization entry point, configuration and reports."""

from .optimizer import (
    OptimizationResult,
    PlateOptimizer,
    optimize,
    optimize_from_dict,
)
from .report import OptimizationReportSchema, build_report

__all__ = [
    "OptimizationReportSchema",
    "OptimizationResult",
    "PlateOptimizer",
    "build_report",
    "optimize",
    "optimize_from_dict",
]
