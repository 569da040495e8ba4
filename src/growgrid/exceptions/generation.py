"""Keyframe generation exceptions."""

from .base import GrowGridError


class GenerationError(GrowGridError):
    """Keyframe generation failed or returned unusable data."""

    def __init__(self, user_message: str = "Failed to generate AI pattern.", **kwargs):
        """
        Initialize generation error.

        Args:
            user_message: User-friendly error message
        """
        kwargs.setdefault("recovery_hint", "Check the generator settings and try again.")
        super().__init__(user_message, **kwargs)
