"""Row containers used by the packing models.

Two interchangeable row units share the ``try_place`` contract:

- ``Shelf``: holds exactly one piece and has a fixed height. Shelves live
  inside a ``Strip`` (strip+shelf model).
- ``Band``: spans the usable plate width and holds several pieces laid out
  left to right. Its height is fixed by the first piece placed.

``Strip`` is a vertical column of shelves. All containers return False
without mutating themselves when a piece does not fit.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from platecut.domain.value_objects import Piece, PlacementRecord, approx_le


@dataclass
class Shelf:
    """Horizontal row inside a strip holding a single piece.

    Attributes:
        x: Left edge of the shelf.
        y: Top edge of the shelf.
        capacity_width: Width available on the shelf (the strip width).
        height: Fixed shelf height.
        kerf: Saw kerf width.
        placements: Placed pieces (at most one).
    """

    x: float
    y: float
    capacity_width: float
    height: float
    kerf: float
    placements: list[PlacementRecord] = field(default_factory=list)
    current_width: float = 0.0

    def try_place(self, piece: Piece) -> bool:
        """Place the piece at the shelf origin if the shelf is still empty.

        Args:
            piece: Piece in the orientation to place.

        Returns:
            True if placed. False if the shelf is occupied or the piece is
            taller or wider than the shelf; the shelf is left unchanged.
        """
        if self.placements:
            return False
        if not approx_le(piece.height, self.height):
            return False
        if not approx_le(piece.width, self.capacity_width):
            return False

        self.placements.append(PlacementRecord(piece=piece, x=self.x, y=self.y))
        self.current_width = piece.width
        return True

    @property
    def used_area(self) -> float:
        """Sum of placed piece areas."""
        return sum(p.area for p in self.placements)


@dataclass
class Band:
    """Horizontal band holding pieces of compatible height left to right.

    The band height is zero until the first piece is placed; it is then fixed
    to that piece's height. Later pieces must not be taller.

    Attributes:
        x: Left edge of the band.
        y: Top edge of the band.
        capacity_width: Width available in the band.
        kerf: Saw kerf width added between adjacent pieces.
        height: Band height (set by the first piece).
        current_width: Occupied width including kerf gaps.
        placements: Placed pieces in left-to-right order.
    """

    x: float
    y: float
    capacity_width: float
    kerf: float
    height: float = 0.0
    current_width: float = 0.0
    placements: list[PlacementRecord] = field(default_factory=list)

    def try_place(self, piece: Piece) -> bool:
        """Append the piece to the right of the band's last piece.

        The first piece fixes the band height. Later pieces are separated
        from their left neighbour by one kerf.

        Returns:
            True if placed, False (without mutation) if the piece is taller
            than the band or would overflow its capacity width.
        """
        is_empty = not self.placements
        if not is_empty and not approx_le(piece.height, self.height):
            return False

        spacing = 0.0 if is_empty else self.kerf
        next_width = self.current_width + spacing + piece.width
        if not approx_le(next_width, self.capacity_width):
            return False

        if is_empty:
            self.height = piece.height

        self.placements.append(
            PlacementRecord(
                piece=piece,
                x=self.x + self.current_width + spacing,
                y=self.y,
            )
        )
        self.current_width = next_width
        return True

    @property
    def used_area(self) -> float:
        """Sum of placed piece areas."""
        return sum(p.area for p in self.placements)

    @property
    def bottom_edge(self) -> float:
        return self.y + self.height


@dataclass
class Strip:
    """Vertical column of shelves (first-stage guillotine segment).

    Shelves are stacked top to bottom with one kerf between consecutive
    shelves. The strip width is fixed when the strip is opened.

    Attributes:
        x: Left edge of the strip.
        y: Top edge of the strip.
        width: Strip width.
        max_height: Height available for shelves.
        kerf: Saw kerf width.
        shelves: Shelves in insertion (top to bottom) order.
        current_height: Height consumed by shelves and kerf gaps.
    """

    x: float
    y: float
    width: float
    max_height: float
    kerf: float
    shelves: list[Shelf] = field(default_factory=list)
    current_height: float = 0.0

    def try_place(self, piece: Piece) -> bool:
        """Place the piece on an existing shelf or on a new shelf below.

        Returns:
            True if placed. False if the piece is wider than the strip or
            no shelf fits in the remaining height; the strip is unchanged.
        """
        if not approx_le(piece.width, self.width):
            return False

        for shelf in self.shelves:
            if shelf.try_place(piece):
                return True

        gap = self.kerf if self.shelves else 0.0
        remaining_height = self.max_height - self.current_height - gap
        if not approx_le(piece.height, remaining_height):
            return False

        shelf = Shelf(
            x=self.x,
            y=self.y + self.current_height + gap,
            capacity_width=self.width,
            height=piece.height,
            kerf=self.kerf,
        )
        if not shelf.try_place(piece):
            return False

        self.shelves.append(shelf)
        self.current_height += gap + piece.height
        return True

    @property
    def placements(self) -> list[PlacementRecord]:
        """Placements of all shelves, top to bottom."""
        return [p for shelf in self.shelves for p in shelf.placements]

    @property
    def used_area(self) -> float:
        """Sum of placed piece areas."""
        return sum(shelf.used_area for shelf in self.shelves)

    @property
    def utilization(self) -> float:
        """Percentage of the strip area covered by pieces."""
        total = self.width * self.max_height
        return (self.used_area / total) * 100 if total > 0 else 0.0

    @property
    def right_edge(self) -> float:
        return self.x + self.width
