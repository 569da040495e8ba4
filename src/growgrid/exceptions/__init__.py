"""
Custom exception hierarchy for growgrid.

```
GrowGridError (base)
├── TransportError
│   ├── TransportOpenError
│   └── TransportWriteError
├── GenerationError
├── RecipeLoadError
└── ConfigurationError
    ├── ConfigFileInvalidError
    └── ConfigValidationError
```

Nothing here is fatal: every error degrades to "leave previous state
intact and notify". Invariant-guard rejections (deleting the last keyframe
of a day, day counts out of range) are silent clamps, not exceptions.

See `growgrid.exceptions.handlers` for utilities to handle these exceptions
systematically.
"""

from .base import GrowGridError
from .config import ConfigFileInvalidError, ConfigurationError, ConfigValidationError
from .generation import GenerationError
from .handlers import ErrorContext, format_error_for_display, handle_errors, wrap_pydantic_error
from .recipe import RecipeLoadError
from .transport import TransportError, TransportOpenError, TransportWriteError

__all__ = [
    # Base
    "GrowGridError",
    # Config
    "ConfigFileInvalidError",
    "ConfigValidationError",
    "ConfigurationError",
    # Domain
    "GenerationError",
    "RecipeLoadError",
    "TransportError",
    "TransportOpenError",
    "TransportWriteError",
    # Handlers
    "ErrorContext",
    "format_error_for_display",
    "handle_errors",
    "wrap_pydantic_error",
]
