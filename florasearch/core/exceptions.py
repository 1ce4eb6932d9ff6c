"""
Exception hierarchy for FloraSearch.
"""


class FloraSearchError(Exception):
    """Base class for all FloraSearch errors."""


class ClauseFormatError(FloraSearchError, ValueError):
    """A structured query could not be turned into clauses."""


class SessionStorageError(FloraSearchError, OSError):
    """A session, vector result or report could not be read or written."""


class SessionStateError(FloraSearchError, RuntimeError):
    """An operation is not allowed in the session's current state."""
