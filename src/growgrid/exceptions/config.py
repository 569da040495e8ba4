"""Errors raised while reading configuration and other JSON files."""

from typing import Any

from .base import GrowGridError

_FIELD_HINTS = {
    "serial_port": "Run 'growgrid serial list' to see available ports.",
    "brightness": "Master brightness is a percentage (0-100).",
    "speed": "Animation speed ranges from 1 (0.1x) to 10000 (1000x).",
    "grid_size": "Grids are square, 1 to 32 cells per side.",
    "total_days": "Schedules hold 1 to 14 days.",
}


class ConfigurationError(GrowGridError):
    """Configuration is invalid or cannot be loaded."""


class ConfigFileInvalidError(ConfigurationError):
    """File is not valid JSON."""

    def __init__(self, file_path: str, parse_error: str):
        lowered = parse_error.lower()
        if "trailing comma" in lowered:
            user_msg = "Configuration file has a trailing comma"
            hint = f"Remove the comma after the last item in {file_path}."
        else:
            user_msg = (
                "Configuration file has a syntax error"
                if "expecting" in lowered
                else "Configuration file has invalid syntax"
            )
            hint = (
                f"Fix the JSON in {file_path}: look for trailing commas, "
                "unquoted strings and unclosed braces."
            )

        super().__init__(
            user_message=user_msg,
            technical_message=f"JSON parse error in {file_path}: {parse_error}",
            recovery_hint=hint,
        )
        self.file_path = file_path
        self.parse_error = parse_error


class ConfigValidationError(ConfigurationError):
    """A value has the wrong type or is out of range."""

    def __init__(self, field: str, value: Any, error_msg: str, file_path: str | None = None):
        lines = [f"Update '{field}' in your configuration."]
        if file_path:
            lines.append(f"Config file: {file_path}")
        for key, extra in _FIELD_HINTS.items():
            if key in field.lower():
                lines.append(extra)
                break

        super().__init__(
            user_message=f"Invalid configuration value for '{field}': {error_msg}",
            technical_message=f"Validation failed for {field}={value!r}: {error_msg}",
            recovery_hint="\n".join(lines),
        )
        self.field = field
        self.value = value
        self.file_path = file_path
