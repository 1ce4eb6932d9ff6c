"""
Structured search sessions.

A session takes the ranking of a vector search, parses a structured query
into clauses and prunes the ranking with them. Sessions can be exported,
imported again, and rendered as reports.

Lifecycle:
    UNFILTERED --execute()--> PARSED --> FILTERED

execute() runs both steps in one call; a session is filtered at most once.
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path

from ..core.config import Settings, load_settings
from ..core.exceptions import SessionStateError
from ..core.schemas import Clause, RankedDocument, SessionRecord, VectorSearchResult
from ..query.clause_parser import parse_query
from ..query.ranking_filter import DocumentLoadFn, filter_ranking
from .report import DEFAULT_REPORT_LIMIT, build_report, write_html_report
from .storage import export_session_record, import_session_record, load_vector_result

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    """States of a structured search session."""
    UNFILTERED = "unfiltered"
    PARSED = "parsed"
    FILTERED = "filtered"


# ============================================================
# Session Sources
# ============================================================

@dataclass(frozen=True)
class FromPath:
    """Vector search result exported to a file (complete path)."""
    path: str | Path


@dataclass(frozen=True)
class FromValue:
    """Vector search result already in memory."""
    result: VectorSearchResult


SessionSource = FromPath | FromValue


class SearchSession:
    """
    Structured search over the ranking of a vector search.

    Owns its clauses and its copy of the ranking; the ranking only ever
    shrinks, keeping the vector-search order.
    """

    def __init__(
        self,
        vector_result: VectorSearchResult | None = None,
        structured_query_timestamp: datetime | None = None
    ):
        """
        Initialize a session from a vector search result.

        Args:
            vector_result: Vector search whose ranking will be refined
            structured_query_timestamp: Defaults to now
        """
        if vector_result is None:
            vector_result = VectorSearchResult()

        self.structured_query_timestamp = structured_query_timestamp or datetime.now()
        self.vector_query_timestamp = vector_result.search_timestamp
        self.vector_result_path = vector_result.result_path
        self.collection_path = vector_result.collection_path
        self.vector_query_text = vector_result.query_text

        self.clauses: list[Clause] = []
        self.ranking: list[RankedDocument] = list(vector_result.ranking)

        # Where this session is stored, once imported or exported. Never persisted.
        self.storage_path: Path | None = None

        self._state = SessionState.UNFILTERED

    @property
    def state(self) -> SessionState:
        return self._state

    def __len__(self) -> int:
        return len(self.ranking)

    def __bool__(self) -> bool:
        # A session with an empty ranking is still a session
        return True

    def __repr__(self) -> str:
        return (
            f"SearchSession(state={self._state.value}, clauses={len(self.clauses)}, "
            f"ranking={len(self.ranking)})"
        )

    # --------------------------------------------------------
    # Execution
    # --------------------------------------------------------

    def execute(
        self,
        raw_query: str,
        load_document: DocumentLoadFn,
        cache_documents: bool = False
    ):
        """
        Parse a structured query and filter the ranking with it.

        Nothing changes on the session unless both steps succeed.

        Args:
            raw_query: Structured query, e.g. "leaf color green, stem"
            load_document: Loads the entity/character view of a ranked document
            cache_documents: Load each document at most once while filtering

        Raises:
            SessionStateError: If the session was already executed
            ClauseFormatError: If the query has no valid clauses
        """
        if self._state != SessionState.UNFILTERED:
            raise SessionStateError(f"Session already {self._state.value}; it can be filtered only once")

        clauses = parse_query(raw_query)
        self._state = SessionState.PARSED

        ranking = list(self.ranking)
        try:
            filter_ranking(ranking, clauses, load_document, cache_documents=cache_documents)
        except Exception:
            self._state = SessionState.UNFILTERED
            raise

        self.clauses = clauses
        self.ranking = ranking
        self._state = SessionState.FILTERED

        logger.info(
            f"Structured query '{raw_query}' executed: "
            f"{len(clauses)} clauses, {len(ranking)} documents kept"
        )

    # --------------------------------------------------------
    # Persistence
    # --------------------------------------------------------

    def to_record(self) -> SessionRecord:
        return SessionRecord(
            structured_query_timestamp=self.structured_query_timestamp,
            vector_query_timestamp=self.vector_query_timestamp,
            vector_result_path=self.vector_result_path,
            collection_path=self.collection_path,
            vector_query_text=self.vector_query_text,
            clauses=list(self.clauses),
            ranking=list(self.ranking),
        )

    @classmethod
    def from_record(cls, record: SessionRecord) -> "SearchSession":
        session = cls(structured_query_timestamp=record.structured_query_timestamp)
        session.vector_query_timestamp = record.vector_query_timestamp
        session.vector_result_path = record.vector_result_path
        session.collection_path = record.collection_path
        session.vector_query_text = record.vector_query_text
        session.clauses = list(record.clauses)
        session.ranking = list(record.ranking)
        if session.clauses:
            session._state = SessionState.FILTERED
        return session

    def export_to(
        self,
        path: str | Path = "",
        absolute: bool = False,
        settings: Settings | None = None
    ) -> Path:
        """
        Export the session as JSON.

        Args:
            path: Complete file path if absolute, otherwise a file name
                (without extension) inside the archives directory. An empty
                name uses the current date and time.
            absolute: True if path is a complete path
            settings: Settings providing the archives directory

        Returns:
            Path the session was written to

        Raises:
            SessionStorageError: If the file cannot be written
        """
        settings = settings or load_settings()
        self.storage_path = export_session_record(self.to_record(), path, absolute, settings)
        return self.storage_path

    @classmethod
    def import_from(
        cls,
        path: str | Path,
        absolute: bool = False,
        settings: Settings | None = None
    ) -> "SearchSession":
        """
        Import a session previously exported with export_to().

        Raises:
            SessionStorageError: If the file cannot be read
            pydantic.ValidationError: If the content is not a session
        """
        settings = settings or load_settings()
        record, stored_at = import_session_record(path, absolute, settings)
        session = cls.from_record(record)
        session.storage_path = stored_at
        return session

    # --------------------------------------------------------
    # Reports
    # --------------------------------------------------------

    def build_report(self, load_document, limit: int = DEFAULT_REPORT_LIMIT) -> str:
        """Plain-text report of the session (top ranked documents only)."""
        return build_report(self, load_document, limit=limit)

    def render_report(self, settings: Settings, load_document) -> Path:
        """
        Write the session report as an HTML file.

        Returns:
            Path of the report file

        Raises:
            SessionStorageError: If the report cannot be written
        """
        text = self.build_report(load_document, limit=settings.report_limit)
        return write_html_report(text, settings)


def create_session(
    source: SessionSource,
    raw_query: str | None = None,
    load_document: DocumentLoadFn | None = None,
    cache_documents: bool = False
) -> SearchSession:
    """
    Create a session from a vector search and optionally execute a query.

    Args:
        source: FromPath for an exported vector search, FromValue for one in memory
        raw_query: Structured query to execute right away
        load_document: Document loader, required when raw_query is given
        cache_documents: Load each document at most once while filtering

    Returns:
        New SearchSession
    """
    if isinstance(source, FromPath):
        vector_result = load_vector_result(source.path)
    elif isinstance(source, FromValue):
        vector_result = source.result
    else:
        raise TypeError(f"Unsupported session source: {type(source).__name__}")

    session = SearchSession(vector_result)
    logger.info(
        f"Session created from vector query '{session.vector_query_text}' "
        f"({len(session.ranking)} ranked documents)"
    )

    if raw_query is not None:
        if load_document is None:
            raise ValueError("A document loader is required to execute a structured query")
        session.execute(raw_query, load_document, cache_documents=cache_documents)

    return session
