"""Request configuration: schemas, loading and conversion to domain objects."""

from .adapter import (
    config_to_options,
    config_to_pieces,
    config_to_plate_spec,
    config_to_request,
)
from .loader import ConfigError, load_options_from_dict, load_request_from_dict
from .schema import (
    OptimizationRequestSchema,
    OptimizerOptionsSchema,
    PieceSchema,
    PlateSpecSchema,
)

__all__ = [
    # Loader
    "ConfigError",
    "load_options_from_dict",
    "load_request_from_dict",
    # Adapters
    "config_to_options",
    "config_to_pieces",
    "config_to_plate_spec",
    "config_to_request",
    # Schemas
    "OptimizationRequestSchema",
    "OptimizerOptionsSchema",
    "PieceSchema",
    "PlateSpecSchema",
]
