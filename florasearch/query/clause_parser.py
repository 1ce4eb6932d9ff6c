"""
Clause parser for structured queries.

Turns free text such as "leaf color green, stem length" into an ordered
list of clauses. Each clause holds one to three terms:

    <entity> [<character name> [<character value>]]

Clauses are separated by commas. A term is either a word token or a
decimal number that may carry an internal comma ("1,5").
"""
import logging
import re

from ..core.exceptions import ClauseFormatError
from ..core.schemas import Clause

logger = logging.getLogger(__name__)

# Any comma plus trailing whitespace becomes the canonical ", " separator
SEPARATOR_PATTERN = re.compile(r",\s*")
CANONICAL_SEPARATOR = ", "

# One to three whitespace-separated terms; a 4th term starts a new group
_TERM = r"(?:\d*\d,?\d+|\w+)"
CLAUSE_GROUP_PATTERN = re.compile(rf"{_TERM}(?:\s{_TERM}){{0,2}}")


def normalize_separators(raw_query: str) -> str:
    """Rewrite every clause separator to exactly ', '."""
    return SEPARATOR_PATTERN.sub(CANONICAL_SEPARATOR, raw_query)


def find_clause_groups(raw_query: str) -> list[str]:
    """
    Split a raw query into clause-group strings, left to right.

    Args:
        raw_query: Structured query as typed by the user

    Returns:
        Matched groups of one to three terms
    """
    normalized = normalize_separators(raw_query)
    return [match.group(0) for match in CLAUSE_GROUP_PATTERN.finditer(normalized)]


def build_clause(group: str) -> Clause:
    """
    Build a clause from a single clause group.

    Raises:
        ClauseFormatError: If the group has no terms
    """
    terms = group.lower().split(" ")
    if not terms or not terms[0]:
        raise ClauseFormatError(f"Clause has invalid shape and cannot be processed: {group!r}")

    return Clause(
        entity=terms[0],
        attribute_name=terms[1] if len(terms) > 1 else "",
        attribute_value=terms[2] if len(terms) > 2 else "",
    )


def parse_query(raw_query: str) -> list[Clause]:
    """
    Parse a structured query into clauses, preserving their order.

    Args:
        raw_query: Structured query (case-insensitive)

    Returns:
        Clauses in the order they appear in the text

    Raises:
        ClauseFormatError: If the query contains no clauses at all
    """
    clauses = [build_clause(group) for group in find_clause_groups(raw_query)]

    if not clauses:
        raise ClauseFormatError(f"Structured query contains no clauses: {raw_query!r}")

    logger.debug(f"Parsed {len(clauses)} clauses from {raw_query!r}: {[str(c) for c in clauses]}")
    return clauses
