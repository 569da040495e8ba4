"""Recipe file exceptions."""

from .base import GrowGridError


class RecipeLoadError(GrowGridError):
    """Recipe file is missing, unparsable or malformed."""

    def __init__(self, file_path: str, reason: str):
        """
        Initialize recipe load error.

        Args:
            file_path: Path to the recipe that failed to load
            reason: What was wrong with it
        """
        super().__init__(
            user_message="Error loading recipe file",
            technical_message=f"Failed to load recipe {file_path}: {reason}",
            recovery_hint=(
                f"Check that {file_path} is a recipe saved by growgrid "
                "(it needs 'keyframesByDay' or 'keyframes')."
            ),
        )
        self.file_path = file_path
        self.reason = reason
