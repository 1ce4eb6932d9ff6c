"""
Core module - Configuration, schemas, and exceptions.
"""
from .config import PathSettings, Settings, load_settings
from .exceptions import (
    FloraSearchError,
    ClauseFormatError,
    SessionStorageError,
    SessionStateError,
)
from .schemas import (
    Clause,
    RankedDocument,
    VectorSearchResult,
    SessionRecord,
)

__all__ = [
    "PathSettings",
    "Settings",
    "load_settings",
    "FloraSearchError",
    "ClauseFormatError",
    "SessionStorageError",
    "SessionStateError",
    "Clause",
    "RankedDocument",
    "VectorSearchResult",
    "SessionRecord",
]
