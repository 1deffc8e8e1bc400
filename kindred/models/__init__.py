"""
Kindred — ORM model registry.

Importing every model here ensures that Alembic (and any other tool that
inspects ``Base.metadata``) discovers all tables automatically.
"""

from kindred.models.companion import Companion, UserCompanion
from kindred.models.mood import MoodEntry

__all__ = [
    "Companion",
    "UserCompanion",
    "MoodEntry",
]
