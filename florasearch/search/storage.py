"""
JSON storage for structured search sessions and vector search results.

Provides:
- Path resolution against the archives directory
- Session record export/import
- Vector search result import
"""
import logging
from datetime import datetime
from pathlib import Path
from typing import TypeVar

from pydantic import BaseModel

from ..core.config import Settings
from ..core.exceptions import SessionStorageError
from ..core.schemas import SessionRecord, VectorSearchResult

logger = logging.getLogger(__name__)

FILE_SUFFIX = ".json"

ModelT = TypeVar("ModelT", bound=BaseModel)


def resolve_storage_path(name: str | Path, absolute: bool, settings: Settings) -> Path:
    """
    Resolve where a stored file lives.

    Args:
        name: Absolute file path (extension included) or a bare file name
            relative to the archives directory (no extension)
        absolute: True if name is a complete path
        settings: Settings providing the archives directory

    Returns:
        Resolved path. An empty relative name becomes a timestamp.
    """
    if absolute:
        return Path(name)

    name = str(name)
    if not name:
        name = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
    return settings.paths.archives / f"{name}{FILE_SUFFIX}"


def write_model(model: BaseModel, path: Path, create_parent: bool = False) -> Path:
    """
    Write a pydantic model as indented JSON.

    Raises:
        SessionStorageError: If the file cannot be written
    """
    try:
        if create_parent:
            path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(model.model_dump_json(indent=2), encoding="utf-8")
    except OSError as e:
        raise SessionStorageError(f"Could not write file {path}: {e}") from e

    logger.info(f"Wrote {type(model).__name__} to {path}")
    return path


def read_model(model_cls: type[ModelT], path: Path) -> ModelT:
    """
    Read a pydantic model from a JSON file.

    Raises:
        SessionStorageError: If the file cannot be read
        pydantic.ValidationError: If the content is malformed
    """
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise SessionStorageError(f"Could not read file {path}: {e}") from e

    return model_cls.model_validate_json(content)


def export_session_record(
    record: SessionRecord,
    name: str | Path,
    absolute: bool,
    settings: Settings
) -> Path:
    """Export a session record; returns the path written."""
    path = resolve_storage_path(name, absolute, settings)
    return write_model(record, path, create_parent=not absolute)


def import_session_record(
    name: str | Path,
    absolute: bool,
    settings: Settings
) -> tuple[SessionRecord, Path]:
    """Import a session record; returns it with the path it was read from."""
    path = resolve_storage_path(name, absolute, settings)
    record = read_model(SessionRecord, path)
    logger.info(f"Imported session with {len(record.clauses)} clauses from {path}")
    return record, path


def load_vector_result(path: str | Path) -> VectorSearchResult:
    """
    Load an exported vector search result.

    The result path is set to the file it was loaded from.

    Args:
        path: Complete path of the exported vector search

    Returns:
        VectorSearchResult with its ranking
    """
    path = Path(path)
    result = read_model(VectorSearchResult, path)
    logger.info(f"Loaded vector search result ({len(result.ranking)} documents) from {path}")
    return result.model_copy(update={"result_path": str(path)})
