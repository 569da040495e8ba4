"""Generic utility modules for growgrid.

- observer: observer list management
- persistence: JSON load/save for Pydantic models
"""

from .observer import ObserverManager
from .persistence import PydanticPersistence, write_text_atomic

__all__ = ["ObserverManager", "PydanticPersistence", "write_text_atomic"]
