"""Editing, persistence and generation services (no hardware, no UI)."""

from growgrid.services.generator import (
    RESPONSE_SCHEMA,
    GenerationRequest,
    GeneratorService,
    HttpKeyframeGenerator,
    KeyframeGenerator,
    build_prompt,
)
from growgrid.services.keyframe_store import KeyframeStore
from growgrid.services.patterns import (
    PATTERN_CATEGORIES,
    Pattern,
    PatternCategory,
    find_pattern,
    load_pattern,
)
from growgrid.services.recipe_service import RecipeService

__all__ = [
    "PATTERN_CATEGORIES",
    "RESPONSE_SCHEMA",
    "GenerationRequest",
    "GeneratorService",
    "HttpKeyframeGenerator",
    "KeyframeGenerator",
    "KeyframeStore",
    "Pattern",
    "PatternCategory",
    "RecipeService",
    "build_prompt",
    "find_pattern",
    "load_pattern",
]
