"""
Unit tests for the structured query clause parser.
"""
import pytest
from pathlib import Path

from pydantic import ValidationError

import sys
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from florasearch.core.exceptions import ClauseFormatError
from florasearch.core.schemas import Clause
from florasearch.query.clause_parser import (
    build_clause,
    find_clause_groups,
    normalize_separators,
    parse_query,
)


class TestSeparators:
    """Tests for separator normalization."""

    def test_comma_with_spaces_becomes_canonical(self):
        assert normalize_separators("a,   b") == "a, b"

    def test_comma_without_space_becomes_canonical(self):
        assert normalize_separators("a,b") == "a, b"

    def test_space_before_comma_is_kept(self):
        assert normalize_separators("a ,  b") == "a , b"

    def test_equivalent_separators_parse_identically(self):
        assert parse_query("a ,  b") == parse_query("a, b")
        assert parse_query("a,b") == parse_query("a, b")


class TestClauseGroups:
    """Tests for clause-group scanning."""

    def test_three_terms_then_one(self):
        assert find_clause_groups("a b c, d") == ["a b c", "d"]

    def test_fourth_term_starts_new_group(self):
        """Long values split into a new clause group (known limitation)."""
        assert find_clause_groups("leaf color dark green") == ["leaf color dark", "green"]

    def test_consecutive_commas_collapse(self):
        assert find_clause_groups("leaf,,, stem") == ["leaf", "stem"]

    def test_surrounding_whitespace_ignored(self):
        assert find_clause_groups("   leaf color   ") == ["leaf color"]

    def test_punctuation_is_not_a_term(self):
        assert find_clause_groups("leaf; stem") == ["leaf", "stem"]

    def test_decimal_comma_is_split_by_normalization(self):
        """Separator normalization runs first, so "1,5" never survives as one term."""
        assert find_clause_groups("petal length 1,5") == ["petal length 1", "5"]


class TestBuildClause:
    """Tests for building a clause from one group."""

    def test_entity_only(self):
        clause = build_clause("Leaf")
        assert clause == Clause(entity="leaf")
        assert clause.attribute_name == ""
        assert clause.attribute_value == ""

    def test_three_terms(self):
        clause = build_clause("LEAF Color Green")
        assert (clause.entity, clause.attribute_name, clause.attribute_value) == ("leaf", "color", "green")
        assert clause.term_count == 3

    def test_empty_group_rejected(self):
        with pytest.raises(ClauseFormatError, match="invalid shape"):
            build_clause("")


class TestParseQuery:
    """Tests for full query parsing."""

    def test_two_clauses(self):
        clauses = parse_query("a b c, d")
        assert clauses == [
            Clause(entity="a", attribute_name="b", attribute_value="c"),
            Clause(entity="d"),
        ]

    def test_case_insensitive(self):
        assert parse_query("LEAF COLOR GREEN") == parse_query("leaf color green")

    def test_order_preserved(self):
        clauses = parse_query("stem length, leaf, flower color white")
        assert [c.entity for c in clauses] == ["stem", "leaf", "flower"]
        assert [c.term_count for c in clauses] == [2, 1, 3]

    @pytest.mark.parametrize("raw_query", ["", "   ", ",,,", "; - !"])
    def test_query_without_clauses_rejected(self, raw_query):
        with pytest.raises(ClauseFormatError, match="no clauses"):
            parse_query(raw_query)

    def test_format_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_query("")


class TestClause:
    """Tests for the Clause schema."""

    def test_lowercased_on_creation(self):
        clause = Clause(entity="Leaf", attribute_name="COLOR", attribute_value="Green")
        assert str(clause) == "leaf color green"

    def test_immutable(self):
        clause = Clause(entity="leaf")
        with pytest.raises(ValidationError, match="frozen"):
            clause.entity = "stem"
        assert clause.entity == "leaf"
