"""Pydantic models for optimization requests.

These models validate dictionary/JSON shaped input coming from cut-list
parsers or front ends. Field names are snake_case; camelCase aliases
(``trimLeft``, ``allowRotation``, ``groupId`` ...) are accepted as well.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from platecut.domain.options import Algorithm, PackingModel


class _RequestModel(BaseModel):
    model_config = ConfigDict(
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )


class PieceSchema(_RequestModel):
    """A cut-list entry.

    Attributes:
        id: Piece identifier.
        width: Piece width.
        height: Piece height.
        rotated: Whether the declared orientation is already rotated.
        group_id: Optional group (e.g. cut-list row) for rotation-mix checks.
        quantity: Number of identical pieces to cut.
    """

    id: str = Field(default="", description="Piece identifier")
    width: float = Field(gt=0, description="Piece width")
    height: float = Field(gt=0, description="Piece height")
    rotated: bool = Field(default=False, description="Declared rotation flag")
    group_id: str | int | None = Field(default=None, description="Grouping key")
    quantity: int = Field(default=1, ge=1, description="Number of pieces")


class PlateSpecSchema(_RequestModel):
    """Stock plate dimensions."""

    width: float = Field(gt=0, description="Plate width")
    height: float = Field(gt=0, description="Plate height")


class OptimizerOptionsSchema(_RequestModel):
    """Optimizer options with their documented defaults.

    Attributes:
        algorithm: ffd, bfd or simulated-annealing.
        packing_model: strip (strip+shelf) or band (horizontal bands).
        iterations: Annealing iteration budget.
        kerf: Saw blade width.
        trim_left: Left edge trim.
        trim_top: Top edge trim.
        trim_right: Right edge trim.
        trim_bottom: Bottom edge trim.
        allow_rotation: Allow 90 degree rotation.
        rotation_penalty: Score cost per rotated piece.
        rotation_mix_penalty: Score cost per mixed-rotation group.
        seed: Seed for the annealing random generator.
    """

    # Names are checked by OptimizerOptions so an unknown algorithm or model
    # raises InvalidConfigurationError on every entry path.
    algorithm: str = Field(
        default=Algorithm.SIMULATED_ANNEALING.value,
        description="Optimization algorithm (ffd, bfd, simulated-annealing)",
    )
    packing_model: str = Field(
        default=PackingModel.STRIP.value, description="Placement model (strip, band)"
    )
    iterations: int = Field(default=100, ge=0, description="Annealing iterations")
    kerf: float = Field(default=5.0, ge=0, description="Saw kerf width")
    trim_left: float = Field(default=13.0, ge=0, description="Left trim")
    trim_top: float = Field(default=13.0, ge=0, description="Top trim")
    trim_right: float = Field(default=0.0, ge=0, description="Right trim")
    trim_bottom: float = Field(default=0.0, ge=0, description="Bottom trim")
    allow_rotation: bool = Field(default=True, description="Allow rotation")
    rotation_penalty: float = Field(default=0.0, ge=0, description="Rotation cost")
    rotation_mix_penalty: float = Field(
        default=0.0, ge=0, description="Mixed rotation group cost"
    )
    seed: int | None = Field(default=None, description="Random seed")


class OptimizationRequestSchema(_RequestModel):
    """Complete optimization request."""

    pieces: list[PieceSchema] = Field(default_factory=list)
    plate: PlateSpecSchema
    options: OptimizerOptionsSchema = Field(default_factory=OptimizerOptionsSchema)
