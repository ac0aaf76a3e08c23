"""Pytest configuration and shared fixtures for plate cutting tests."""

from __future__ import annotations

import pytest

from platecut.domain import OptimizerOptions, Piece, PlateSpec


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "slow: tests that take a long time to run")


# =============================================================================
# Shared fixtures
# =============================================================================


@pytest.fixture
def standard_plate() -> PlateSpec:
    """Create a standard 1220x2440 mm board."""
    return PlateSpec(width=1220, height=2440)


@pytest.fixture
def ffd_options() -> OptimizerOptions:
    """FFD on the strip model with rotation disabled and default kerf/trims."""
    return OptimizerOptions(algorithm="ffd", allow_rotation=False)


@pytest.fixture
def three_pieces() -> list[Piece]:
    """Two 400x300 pieces and one 300x200 piece."""
    return [
        Piece(400, 300, id="A"),
        Piece(400, 300, id="B"),
        Piece(300, 200, id="C"),
    ]


@pytest.fixture
def cabinet_cut_list() -> list[dict]:
    """Realistic cut list for a small kitchen run, in millimetres."""
    return [
        {"id": "side", "width": 720, "height": 560, "quantity": 4, "groupId": 1},
        {"id": "top", "width": 764, "height": 560, "quantity": 2, "groupId": 2},
        {"id": "shelf", "width": 762, "height": 540, "quantity": 4, "groupId": 3},
        {"id": "back", "width": 800, "height": 720, "quantity": 2, "groupId": 4},
        {"id": "door", "width": 397, "height": 716, "quantity": 4, "groupId": 5},
        {"id": "drawer", "width": 396, "height": 150, "quantity": 6, "groupId": 6},
    ]
