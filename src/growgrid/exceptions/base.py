"""Root of the growgrid exception tree.

Every error carries two texts: ``user_message`` is short and printable,
``technical_message`` goes to the log. ``recovery_hint`` tells the grower
what to do next, if there is anything to do.
"""


class GrowGridError(Exception):
    """Base exception for all growgrid errors."""

    def __init__(
        self,
        user_message: str,
        technical_message: str | None = None,
        recovery_hint: str | None = None,
    ):
        super().__init__(user_message)
        self.user_message = user_message
        self.technical_message = technical_message or user_message
        self.recovery_hint = recovery_hint

    def __str__(self) -> str:
        return self.user_message

    def get_full_message(self) -> str:
        """User message followed by the hint on its own line."""
        if not self.recovery_hint:
            return self.user_message
        return f"{self.user_message}\nHint: {self.recovery_hint}"
