"""
Text and HTML reports for structured search sessions.

The report lists the session metadata, its clauses and the top ranked
documents that survived filtering, each with its taxon description.
"""
import logging
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Callable, Protocol

from ..core.config import Settings
from ..core.exceptions import SessionStorageError
from ..core.schemas import RankedDocument

if TYPE_CHECKING:
    from .session import SearchSession

logger = logging.getLogger(__name__)

DEFAULT_REPORT_LIMIT = 30

HTML_HEADER = '<head><meta charset ="UTF-8"></head><h1>Consulta estructurada</h1><pre>'
HTML_FOOTER = "</pre>"


class DescribedDocument(Protocol):
    def taxon_description(self) -> str:
        ...


def format_timestamp(value: datetime) -> str:
    """Format as dd/MM/yyyy hh:mm:ss.fff AM/PM."""
    millis = value.microsecond // 1000
    return f"{value.strftime('%d/%m/%Y %I:%M:%S')}.{millis:03d} {'AM' if value.hour < 12 else 'PM'}"


def build_report(
    session: "SearchSession",
    load_document: Callable[[RankedDocument], DescribedDocument],
    limit: int = DEFAULT_REPORT_LIMIT
) -> str:
    """
    Build the plain-text report of a session.

    Args:
        session: Session to report
        load_document: Loads a ranked document to read its taxon description
        limit: Maximum number of ranked documents to include

    Returns:
        Report text
    """
    lines = [
        f"Fecha de la consulta estructurada: \t{format_timestamp(session.structured_query_timestamp)}",
        f"Fecha de la consulta vectorial: \t{format_timestamp(session.vector_query_timestamp)}",
        f"Ruta de la coleccion consultada: \t{session.collection_path}",
        f"Texto de la consulta: \t{session.vector_query_text}",
        "Listas de cláusulas de la consulta: ",
    ]

    for clause in session.clauses:
        lines.append(f"Bilogical entity: {clause.entity}")
        lines.append(f"Character Name: {clause.attribute_name}")
        lines.append(f"Character Value: {clause.attribute_value}")

    for ranked in session.ranking[:limit]:
        description = load_document(ranked).taxon_description()
        lines.append("")
        lines.append(f"ID del documento: {ranked.document_id}")
        lines.append(f"Posicion obtenida: {ranked.position}")
        lines.append(f"Similitud: {ranked.similarity:.3f}")
        lines.append(f"Taxon Name: {ranked.taxon_name}")
        lines.append(f"Taxon Rank: {ranked.taxon_rank}")
        lines.append("Taxon Description:")
        lines.append(description)

    return "\n".join(lines) + "\n"


def report_filename(prefix: str, created: datetime | None = None) -> str:
    created = created or datetime.now()
    return f"{prefix} Busqueda Estruc {created.strftime('%Y-%m-%d %H.%M.%S.%f')}.html"


def write_html_report(text: str, settings: Settings) -> Path:
    """
    Write a report as an HTML file in the reports directory.

    Raises:
        SessionStorageError: If the file cannot be created
    """
    path = settings.paths.reports / report_filename(settings.default_prefix)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(HTML_HEADER + text + HTML_FOOTER + "\n", encoding="utf-8")
    except OSError as e:
        raise SessionStorageError(f"Could not create the html report: {e}") from e

    logger.info(f"Report written to {path}")
    return path
