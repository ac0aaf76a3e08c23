"""Contracts layer - structural protocols shared across layers."""

from .protocols import PlateLayout, RowUnit

__all__ = [
    "PlateLayout",
    "RowUnit",
]
