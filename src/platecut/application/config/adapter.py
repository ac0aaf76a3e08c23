"""Adapters from validated request schemas to domain objects."""

from platecut.application.config.schema import (
    OptimizationRequestSchema,
    OptimizerOptionsSchema,
    PieceSchema,
    PlateSpecSchema,
)
from platecut.domain.options import OptimizerOptions
from platecut.domain.value_objects import Piece, PlateSpec


def config_to_options(config: OptimizerOptionsSchema | None) -> OptimizerOptions:
    """Convert Pydantic options to the domain dataclass.

    Returns the default options if ``config`` is None.

    Raises:
        InvalidConfigurationError: If the algorithm or packing model name is
            unknown.
    """
    if config is None:
        return OptimizerOptions()

    return OptimizerOptions(
        algorithm=config.algorithm,
        packing_model=config.packing_model,
        iterations=config.iterations,
        kerf=config.kerf,
        trim_left=config.trim_left,
        trim_top=config.trim_top,
        trim_right=config.trim_right,
        trim_bottom=config.trim_bottom,
        allow_rotation=config.allow_rotation,
        rotation_penalty=config.rotation_penalty,
        rotation_mix_penalty=config.rotation_mix_penalty,
        seed=config.seed,
    )


def config_to_plate_spec(config: PlateSpecSchema) -> PlateSpec:
    return PlateSpec(width=config.width, height=config.height)


def config_to_pieces(pieces: list[PieceSchema]) -> list[Piece]:
    """Expand cut-list entries into individual pieces.

    An entry with quantity N becomes N pieces. Their ids get a ``#i`` suffix
    when N > 1 so each physical piece can be told apart in reports.
    """
    expanded: list[Piece] = []
    for entry in pieces:
        for i in range(entry.quantity):
            piece_id = entry.id if entry.quantity == 1 else f"{entry.id} #{i + 1}"
            expanded.append(
                Piece(
                    width=entry.width,
                    height=entry.height,
                    id=piece_id,
                    rotated=entry.rotated,
                    group_id=entry.group_id,
                )
            )
    return expanded


def config_to_request(
    config: OptimizationRequestSchema,
) -> tuple[list[Piece], PlateSpec, OptimizerOptions]:
    """Convert a whole request into (pieces, plate spec, options)."""
    return (
        config_to_pieces(config.pieces),
        config_to_plate_spec(config.plate),
        config_to_options(config.options),
    )
