"""Domain layer - pieces, plates, containers and packing rules."""

from .options import Algorithm, InvalidConfigurationError, OptimizerOptions, PackingModel
from .plate import (
    BandPlateSolution,
    PlateSolution,
    StripPlateSolution,
    create_plate,
    plate_type_for,
)
from .rows import Band, Shelf, Strip
from .sorting import SortStrategy, sort_pieces
from .value_objects import (
    EPSILON,
    CutKind,
    CutSegment,
    CutSequence,
    Piece,
    PlacementRecord,
    PlateSpec,
    approx_eq,
    approx_le,
)

__all__ = [
    # Value objects
    "EPSILON",
    "CutKind",
    "CutSegment",
    "CutSequence",
    "Piece",
    "PlacementRecord",
    "PlateSpec",
    "approx_eq",
    "approx_le",
    # Options
    "Algorithm",
    "InvalidConfigurationError",
    "OptimizerOptions",
    "PackingModel",
    # Containers
    "Band",
    "Shelf",
    "Strip",
    # Plates
    "BandPlateSolution",
    "PlateSolution",
    "StripPlateSolution",
    "create_plate",
    "plate_type_for",
    # Sorting
    "SortStrategy",
    "sort_pieces",
]
