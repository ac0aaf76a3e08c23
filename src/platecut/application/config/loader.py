"""Request loader with comprehensive error handling.

This module validates dictionary-shaped optimization requests and turns
Pydantic validation errors into a single ConfigError with clear, actionable
messages.
"""

from typing import Any

from pydantic import ValidationError as PydanticValidationError

from platecut.application.config.schema import (
    OptimizationRequestSchema,
    OptimizerOptionsSchema,
)


class ConfigError(Exception):
    """Exception raised for request and configuration errors.

    Attributes:
        message: The primary error message
        error_type: Category of error (validation)
        details: Validation errors as dicts with path, message, value, error_type
    """

    def __init__(
        self,
        message: str,
        error_type: str = "unknown",
        details: list[dict[str, Any]] | None = None,
    ) -> None:
        self.message = message
        self.error_type = error_type
        self.details = details or []
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


def _format_json_path(loc: tuple[str | int, ...]) -> str:
    """Format a Pydantic location tuple as a JSON path string.

    Examples:
        >>> _format_json_path(("plate", "width"))
        'plate.width'
        >>> _format_json_path(("pieces", 2, "height"))
        'pieces[2].height'
    """
    parts: list[str] = []
    for segment in loc:
        if isinstance(segment, int):
            if parts:
                parts[-1] = f"{parts[-1]}[{segment}]"
            else:
                parts.append(f"[{segment}]")
        else:
            parts.append(str(segment))
    return ".".join(parts)


def _extract_validation_errors(
    error: PydanticValidationError,
) -> list[dict[str, Any]]:
    details: list[dict[str, Any]] = []
    for err in error.errors():
        details.append(
            {
                "path": _format_json_path(err["loc"]),
                "message": err["msg"],
                "value": err.get("input"),
                "error_type": err["type"],
            }
        )
    return details


def _format_validation_error_message(details: list[dict[str, Any]]) -> str:
    lines = ["Request validation failed:"]
    for detail in details:
        value = detail.get("value")
        if value is not None:
            lines.append(f"  - {detail['path']}: {detail['message']} (got: {value!r})")
        else:
            lines.append(f"  - {detail['path']}: {detail['message']}")
    return "\n".join(lines)


def load_request_from_dict(data: dict[str, Any]) -> OptimizationRequestSchema:
    """Load and validate an optimization request from a dictionary.

    Args:
        data: Dictionary with ``pieces``, ``plate`` and optional ``options``.

    Returns:
        A validated OptimizationRequestSchema instance.

    Raises:
        ConfigError: If the data fails validation.

    Example:
        >>> request = load_request_from_dict({
        ...     "pieces": [{"id": "A", "width": 400, "height": 300}],
        ...     "plate": {"width": 1220, "height": 2440},
        ...     "options": {"algorithm": "ffd", "trimLeft": 10},
        ... })
        >>> request.options.trim_left
        10.0
    """
    try:
        return OptimizationRequestSchema.model_validate(data)
    except PydanticValidationError as e:
        details = _extract_validation_errors(e)
        raise ConfigError(
            message=_format_validation_error_message(details),
            error_type="validation",
            details=details,
        )


def load_options_from_dict(data: dict[str, Any]) -> OptimizerOptionsSchema:
    """Load and validate optimizer options alone.

    Raises:
        ConfigError: If the data fails validation.
    """
    try:
        return OptimizerOptionsSchema.model_validate(data)
    except PydanticValidationError as e:
        details = _extract_validation_errors(e)
        raise ConfigError(
            message=_format_validation_error_message(details),
            error_type="validation",
            details=details,
        )
