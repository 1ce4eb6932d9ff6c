"""
Query module - Structured clause parsing, matching and ranking filter.

Provides:
- parse_query: raw text -> ordered clauses
- matches: clause check against one document
- filter_ranking: AND-reduction of a ranking by a clause sequence
"""
from .clause_parser import parse_query, find_clause_groups, normalize_separators
from .matcher import EntityAttributes, matches
from .ranking_filter import filter_ranking

__all__ = [
    "parse_query",
    "find_clause_groups",
    "normalize_separators",
    "EntityAttributes",
    "matches",
    "filter_ranking",
]
