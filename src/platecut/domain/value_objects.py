"""Value objects for plate cutting optimization.

This module provides the immutable building blocks shared by every packing
model: pieces to cut, the stock plate specification, placement records and
guillotine cut segments.

All dataclasses are frozen (immutable) so they can be shared freely between
plate solutions created during a single optimization run.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum

# Tolerance for comparing float dimensions
EPSILON = 1e-4


def approx_eq(a: float, b: float, tolerance: float = EPSILON) -> bool:
    """Return True if two dimensions differ by less than the tolerance."""
    return abs(a - b) < tolerance


def approx_le(a: float, b: float, tolerance: float = EPSILON) -> bool:
    """Return True if ``a`` does not exceed ``b`` by more than the tolerance."""
    return a <= b + tolerance


@dataclass(frozen=True)
class Piece:
    """A rectangular piece to be cut from a plate.

    A rotated variant is a derived copy with width and height swapped and
    the ``rotated`` flag toggled (see :meth:`rotate`).

    Attributes:
        width: Piece width as it will be placed.
        height: Piece height as it will be placed.
        id: Identifier used by reports and the caller.
        rotated: True if the dimensions are swapped relative to the
            orientation declared by the caller.
        group_id: Optional grouping key (e.g. a cut-list row) used to detect
            groups with mixed rotation.
    """

    width: float
    height: float
    id: str = ""
    rotated: bool = False
    group_id: str | int | None = None

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("Piece dimensions must be positive")

    @property
    def area(self) -> float:
        """Area of the piece."""
        return self.width * self.height

    @property
    def perimeter(self) -> float:
        """Perimeter of the piece."""
        return 2 * self.width + 2 * self.height

    @property
    def is_square(self) -> bool:
        """True if width and height are equal within tolerance."""
        return approx_eq(self.width, self.height)

    def rotate(self) -> Piece:
        """Return the 90 degree rotated copy of this piece."""
        return replace(
            self,
            width=self.height,
            height=self.width,
            rotated=not self.rotated,
        )


@dataclass(frozen=True)
class PlateSpec:
    """Nominal stock plate dimensions.

    Shared read-only by every plate solution created in one run.

    Attributes:
        width: Plate width.
        height: Plate height.
    """

    width: float
    height: float

    def __post_init__(self) -> None:
        if self.width <= 0:
            raise ValueError("Plate width must be positive")
        if self.height <= 0:
            raise ValueError("Plate height must be positive")

    @property
    def area(self) -> float:
        """Nominal plate area."""
        return self.width * self.height


@dataclass(frozen=True)
class PlacementRecord:
    """A piece placed at absolute plate coordinates.

    Coordinates are measured from the top-left corner of the plate (trims
    included). The record is produced once per successful placement and
    never mutated afterward.

    Attributes:
        piece: The piece as placed (already in its placed orientation).
        x: Left edge of the piece.
        y: Top edge of the piece.
    """

    piece: Piece
    x: float
    y: float

    @property
    def width(self) -> float:
        """Placed width."""
        return self.piece.width

    @property
    def height(self) -> float:
        """Placed height."""
        return self.piece.height

    @property
    def right_edge(self) -> float:
        """X coordinate of the piece right edge."""
        return self.x + self.width

    @property
    def bottom_edge(self) -> float:
        """Y coordinate of the piece bottom edge."""
        return self.y + self.height

    @property
    def area(self) -> float:
        return self.width * self.height

    def overlaps(self, other: PlacementRecord, tolerance: float = EPSILON) -> bool:
        """Check for a positive-area intersection with another placement.

        Rectangles that only touch along an edge do not overlap.
        """
        return (
            self.x < other.right_edge - tolerance
            and other.x < self.right_edge - tolerance
            and self.y < other.bottom_edge - tolerance
            and other.y < self.bottom_edge - tolerance
        )


class CutKind(str, Enum):
    """Direction of a guillotine cut.

    Attributes:
        VERTICAL: Cut parallel to the plate height, at an x position.
        HORIZONTAL: Cut parallel to the plate width, at a y position.
    """

    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"


@dataclass(frozen=True)
class CutSegment:
    """A straight full-length cut through one segment of a plate.

    The saw removes ``kerf`` material immediately after ``position``.

    Attributes:
        kind: Cut direction.
        position: X (vertical cut) or Y (horizontal cut) of the cut line.
        x: Left of the segment being cut.
        y: Top of the segment being cut.
        width: Length of a horizontal cut (0 for vertical cuts).
        height: Length of a vertical cut (0 for horizontal cuts).
    """

    kind: CutKind
    position: float
    x: float
    y: float
    width: float
    height: float

    @property
    def length(self) -> float:
        return self.height if self.kind == CutKind.VERTICAL else self.width


@dataclass(frozen=True)
class CutSequence:
    """Guillotine cuts for one plate in two stages.

    Attributes:
        vertical: Vertical cuts in emission order.
        horizontal: Horizontal cuts in emission order.
        sequence: All cuts in execution order; first-stage cuts come
            before second-stage cuts.
    """

    vertical: tuple[CutSegment, ...] = ()
    horizontal: tuple[CutSegment, ...] = ()
    sequence: tuple[CutSegment, ...] = field(default=())

    def __len__(self) -> int:
        return len(self.sequence)
