"""
Search module - Structured search sessions, storage and reports.

Provides:
- SearchSession: parse + filter orchestration over a vector ranking
- create_session: build a session from FromPath / FromValue sources
- storage: JSON export/import of sessions and vector results
- report: fixed-format text report and HTML writer
"""
from .report import build_report, format_timestamp, write_html_report
from .session import FromPath, FromValue, SearchSession, SessionSource, SessionState, create_session
from .storage import load_vector_result, resolve_storage_path

__all__ = [
    "SearchSession",
    "SessionSource",
    "SessionState",
    "FromPath",
    "FromValue",
    "create_session",
    "load_vector_result",
    "resolve_storage_path",
    "build_report",
    "format_timestamp",
    "write_html_report",
]
