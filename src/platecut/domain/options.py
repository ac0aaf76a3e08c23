"""Optimizer options and configuration errors.

Recognized options (all optional):

==========================  =======================  ==========================
Field                       Default                  Meaning
==========================  =======================  ==========================
``algorithm``               ``simulated-annealing``  ``ffd``, ``bfd`` or
                                                     ``simulated-annealing``
``packing_model``           ``strip``                ``strip`` (strip+shelf) or
                                                     ``band`` (horizontal bands)
``iterations``              100                      Annealing iteration budget
``kerf``                    5                        Saw blade width
``trim_left``               13                       Trim on the left edge
``trim_top``                13                       Trim on the top edge
``trim_right``              0                        Trim on the right edge
``trim_bottom``             0                        Trim on the bottom edge
``allow_rotation``          True                     Allow 90 degree rotation
``rotation_penalty``        0                        Score cost per rotated piece
``rotation_mix_penalty``    0                        Score cost per mixed group
``seed``                    None                     Seed for the annealing RNG
==========================  =======================  ==========================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class InvalidConfigurationError(ValueError):
    """Raised when optimizer options are invalid (e.g. unknown algorithm)."""

    pass


class Algorithm(str, Enum):
    """Optimization algorithm selected by the entry point."""

    FFD = "ffd"
    BFD = "bfd"
    SIMULATED_ANNEALING = "simulated-annealing"


class PackingModel(str, Enum):
    """Geometric placement model.

    Attributes:
        STRIP: Vertical strips subdivided into single-piece shelves
            (vertical first cut, horizontal second cut).
        BAND: Horizontal bands holding several pieces of compatible height
            (horizontal first cut, vertical second cut).
    """

    STRIP = "strip"
    BAND = "band"


def _coerce_enum(enum_cls: type[Enum], value: object, option: str) -> Enum:
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise InvalidConfigurationError(
            f"Unknown {option} '{value}'. Expected one of: {allowed}"
        ) from None


@dataclass(frozen=True)
class OptimizerOptions:
    """Validated configuration for one optimization call.

    String values for ``algorithm`` and ``packing_model`` are coerced to
    their enums; anything unrecognized fails immediately.
    """

    algorithm: Algorithm = Algorithm.SIMULATED_ANNEALING
    packing_model: PackingModel = PackingModel.STRIP
    iterations: int = 100
    kerf: float = 5.0
    trim_left: float = 13.0
    trim_top: float = 13.0
    trim_right: float = 0.0
    trim_bottom: float = 0.0
    allow_rotation: bool = True
    rotation_penalty: float = 0.0
    rotation_mix_penalty: float = 0.0
    seed: int | None = None

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "algorithm", _coerce_enum(Algorithm, self.algorithm, "algorithm")
        )
        object.__setattr__(
            self,
            "packing_model",
            _coerce_enum(PackingModel, self.packing_model, "packing model"),
        )
        if self.iterations < 0:
            raise InvalidConfigurationError("Iterations must be non-negative")
        if self.kerf < 0:
            raise InvalidConfigurationError("Kerf must be non-negative")
        trims = (self.trim_left, self.trim_top, self.trim_right, self.trim_bottom)
        if any(trim < 0 for trim in trims):
            raise InvalidConfigurationError("Trims must be non-negative")
        if self.rotation_penalty < 0 or self.rotation_mix_penalty < 0:
            raise InvalidConfigurationError("Rotation penalties must be non-negative")
