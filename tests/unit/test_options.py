"""Tests for OptimizerOptions validation and enum coercion."""

from __future__ import annotations

import pytest

from platecut.domain.options import (
    Algorithm,
    InvalidConfigurationError,
    OptimizerOptions,
    PackingModel,
)


class TestOptimizerOptionsDefaults:
    """Tests for the documented defaults."""

    def test_defaults(self) -> None:
        """Defaults match the documented option table."""
        options = OptimizerOptions()
        assert options.algorithm is Algorithm.SIMULATED_ANNEALING
        assert options.packing_model is PackingModel.STRIP
        assert options.iterations == 100
        assert options.kerf == 5
        assert options.trim_left == 13
        assert options.trim_top == 13
        assert options.trim_right == 0
        assert options.trim_bottom == 0
        assert options.allow_rotation is True
        assert options.rotation_penalty == 0
        assert options.rotation_mix_penalty == 0
        assert options.seed is None

    def test_options_are_frozen(self) -> None:
        """Options cannot be modified after creation."""
        options = OptimizerOptions()
        with pytest.raises(AttributeError):
            options.kerf = 3  # type: ignore[misc]


class TestOptimizerOptionsCoercion:
    """Tests for string to enum coercion."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("ffd", Algorithm.FFD),
            ("bfd", Algorithm.BFD),
            ("simulated-annealing", Algorithm.SIMULATED_ANNEALING),
        ],
    )
    def test_algorithm_strings(self, value: str, expected: Algorithm) -> None:
        """Algorithm names are coerced to the enum."""
        assert OptimizerOptions(algorithm=value).algorithm is expected

    def test_packing_model_string(self) -> None:
        """Packing model names are coerced to the enum."""
        assert OptimizerOptions(packing_model="band").packing_model is PackingModel.BAND

    def test_unknown_algorithm(self) -> None:
        """An unknown algorithm fails with the allowed values listed."""
        with pytest.raises(InvalidConfigurationError, match="Unknown algorithm 'genetic'"):
            OptimizerOptions(algorithm="genetic")

    def test_unknown_algorithm_is_value_error(self) -> None:
        """Configuration errors are ValueErrors."""
        with pytest.raises(ValueError):
            OptimizerOptions(algorithm="simulated-annealing-horizontal")

    def test_unknown_packing_model(self) -> None:
        """An unknown packing model fails immediately."""
        with pytest.raises(InvalidConfigurationError, match="packing model"):
            OptimizerOptions(packing_model="spiral")


class TestOptimizerOptionsValidation:
    """Tests for numeric validation."""

    def test_negative_iterations(self) -> None:
        with pytest.raises(InvalidConfigurationError, match="Iterations"):
            OptimizerOptions(iterations=-1)

    def test_negative_kerf(self) -> None:
        with pytest.raises(InvalidConfigurationError, match="Kerf"):
            OptimizerOptions(kerf=-0.5)

    @pytest.mark.parametrize("trim", ["trim_left", "trim_top", "trim_right", "trim_bottom"])
    def test_negative_trim(self, trim: str) -> None:
        """Every trim must be non-negative."""
        with pytest.raises(InvalidConfigurationError, match="Trims"):
            OptimizerOptions(**{trim: -1})

    def test_negative_penalty(self) -> None:
        with pytest.raises(InvalidConfigurationError, match="penalties"):
            OptimizerOptions(rotation_mix_penalty=-10)

    def test_zero_values_allowed(self) -> None:
        """Zero kerf, trims and iterations are valid."""
        options = OptimizerOptions(iterations=0, kerf=0, trim_left=0, trim_top=0)
        assert options.kerf == 0
        assert options.iterations == 0
