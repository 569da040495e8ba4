"""
Error handling helpers shared by the session and the CLI.

Low-level code lets ``OSError``, ``serial.SerialException`` and
``requests.RequestException`` escape. Services translate those into a
``GrowGridError``; the session and commands use the helpers below to log
them once and show ``user_message`` plus ``recovery_hint``.

    @handle_errors(operation_name="save recipe")
    def save_recipe(self, path): ...

    with ErrorContext("open serial port", re_raise=False) as ctx:
        transport.open()
    if ctx.error:
        ...
"""

import logging
from collections.abc import Callable
from functools import wraps
from typing import Any, TypeVar

from pydantic import ValidationError

from .base import GrowGridError
from .config import ConfigFileInvalidError, ConfigValidationError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _log_failure(log: logging.Logger, level: int, operation: str, error: BaseException) -> None:
    if isinstance(error, GrowGridError):
        log.log(level, f"Failed to {operation}: {error.technical_message}")
    else:
        log.log(level, f"Unexpected error during {operation}: {error}", exc_info=error)


def handle_errors(
    *,
    operation_name: str,
    user_notification: Callable[[str], None] | None = None,
    fallback_value: Any = None,
    re_raise: bool = True,
    log_level: int = logging.ERROR,
) -> Callable:
    """
    Log failures of the wrapped call and optionally tell the user.

    Args:
        operation_name: Verb phrase used in log lines ("load recipe")
        user_notification: Called with the printable message, e.g. click.echo
        fallback_value: Returned instead of raising when ``re_raise`` is False
        re_raise: Propagate the exception after logging
        log_level: Level for the log line
    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        def wrapper(*args, **kwargs) -> T:
            try:
                return func(*args, **kwargs)
            except Exception as e:
                _log_failure(logger, log_level, operation_name, e)
                if user_notification:
                    if isinstance(e, GrowGridError):
                        user_notification(e.get_full_message())
                    else:
                        user_notification(f"Error: {e}")
                if re_raise:
                    raise
                return fallback_value

        return wrapper

    return decorator


class ErrorContext:
    """
    Context manager that logs a failing block and keeps the exception.

    With ``re_raise=False`` the exception is swallowed and left on
    ``ctx.error`` for the caller to report.
    """

    def __init__(
        self,
        operation: str,
        logger_instance: logging.Logger | None = None,
        re_raise: bool = True,
    ):
        self.operation = operation
        self.logger = logger_instance or logger
        self.re_raise = re_raise
        self.error: Exception | None = None

    def __enter__(self):
        self.logger.debug(f"Starting: {self.operation}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_val is None:
            self.logger.debug(f"Completed: {self.operation}")
            return False

        self.error = exc_val
        _log_failure(self.logger, logging.ERROR, self.operation, exc_val)
        return not self.re_raise


def _field_name(error_details: dict) -> str:
    return ".".join(str(part) for part in error_details.get("loc", ("unknown",)))


def wrap_pydantic_error(error: Exception, file_path: str) -> GrowGridError:
    """
    Translate a pydantic failure while reading ``file_path``.

    JSON syntax problems become ``ConfigFileInvalidError``; schema problems
    become ``ConfigValidationError`` naming the offending field (or listing
    every field when several fail).
    """
    text = str(error)

    if "json_invalid" in text or "Invalid JSON" in text:
        # pydantic renders these as "Invalid JSON: <reason> [type=json_invalid, ...]"
        reason = text.split("Invalid JSON:", 1)[-1].split("[type=", 1)[0].strip()
        return ConfigFileInvalidError(file_path, reason or text)

    details = error.errors() if isinstance(error, ValidationError) else []

    if len(details) == 1:
        (only,) = details
        return ConfigValidationError(
            field=_field_name(only),
            value=only.get("input"),
            error_msg=only.get("msg", "validation failed"),
            file_path=file_path,
        )

    if details:
        listing = "\n".join(
            f"  - {_field_name(d)}: {d.get('msg', 'validation failed')}" for d in details
        )
        return ConfigValidationError(
            field="multiple fields",
            value=None,
            error_msg=f"{len(details)} validation errors:\n{listing}",
            file_path=file_path,
        )

    return ConfigValidationError(field="unknown", value=None, error_msg=text, file_path=file_path)


def format_error_for_display(error: Exception) -> tuple[str, str | None]:
    """Return ``(message, hint)`` for printing any exception."""
    if isinstance(error, GrowGridError):
        return error.user_message, error.recovery_hint
    return f"{type(error).__name__}: {error}", None
