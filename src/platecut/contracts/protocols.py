"""Protocol definitions for packing containers and plate layouts.

These protocols describe the structural contracts shared by the two packing
models so heuristics, validators and report builders can depend on the
behaviour rather than on a concrete container class.

All protocols are decorated with @runtime_checkable to enable isinstance()
checks at runtime.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from platecut.domain.value_objects import (
        CutSequence,
        Piece,
        PlacementRecord,
    )


@runtime_checkable
class RowUnit(Protocol):
    """Protocol for row containers (Shelf, Band) and strips.

    ``try_place`` appends a placement and advances the container's occupied
    extent on success, and returns False without mutation on failure.
    """

    def try_place(self, piece: "Piece") -> bool:
        """Try to place a piece in this container.

        Args:
            piece: Piece in the orientation to place.

        Returns:
            True if the piece was placed.
        """
        ...

    @property
    def used_area(self) -> float:
        """Sum of the placed piece areas."""
        ...


@runtime_checkable
class PlateLayout(Protocol):
    """Protocol for a single plate consumed by reports and validators."""

    @property
    def used_area(self) -> float:
        """Sum of the placed piece areas."""
        ...

    @property
    def total_area(self) -> float:
        """Nominal plate area."""
        ...

    @property
    def utilization(self) -> float:
        """Used area as a percentage of the nominal plate area."""
        ...

    def get_cut_sequence(self) -> "CutSequence":
        """Return the two-stage guillotine cut sequence."""
        ...

    def get_placed_pieces_with_coords(self) -> list["PlacementRecord"]:
        """Return every placement with absolute coordinates."""
        ...


__all__ = [
    "PlateLayout",
    "RowUnit",
]
