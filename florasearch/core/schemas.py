"""
Pydantic schemas for structured searches.

These schemas define the clauses of a structured query, the ranked
documents produced by the upstream vector search, and the persisted
shape of a structured search session.
"""
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ============================================================
# Structured Query
# ============================================================

class Clause(BaseModel):
    """
    A 1-3 term predicate over a document's biological entities.

    Examples:
        leaf                -> entity only
        leaf color          -> entity + character name
        leaf color green    -> entity + character name + character value
    """
    model_config = ConfigDict(frozen=True)

    entity: str = Field(..., description="Biological entity name (e.g., 'leaf')")
    attribute_name: str = Field(default="", description="Character name (e.g., 'color')")
    attribute_value: str = Field(default="", description="Character value (e.g., 'green')")

    @field_validator("entity", "attribute_name", "attribute_value", mode="before")
    @classmethod
    def _lower(cls, value):
        # Matching is case-insensitive; normalize once at creation
        if isinstance(value, str):
            return value.lower()
        return value

    @property
    def term_count(self) -> int:
        if self.attribute_value:
            return 3
        if self.attribute_name:
            return 2
        return 1

    def __str__(self) -> str:
        return " ".join(t for t in (self.entity, self.attribute_name, self.attribute_value) if t)


# ============================================================
# Vector Search Ranking
# ============================================================

class RankedDocument(BaseModel):
    """A document entry in a vector-search ranking."""
    position: int = Field(..., description="Position obtained in the vector ranking")
    similarity: float = Field(..., description="Cosine similarity with the vector query")
    document_id: int = Field(..., description="Document identifier in the collection")
    document_path: str = Field(..., description="Path of the taxon treatment file")
    taxon_name: str = Field(default="", description="Taxon name of the document")
    taxon_rank: str = Field(default="", description="Taxon rank (e.g., 'species')")


class VectorSearchResult(BaseModel):
    """Exported result of a vector-space search over a document collection."""
    search_timestamp: datetime = Field(default_factory=datetime.now)
    result_path: str = Field(default="", description="File the result was exported to")
    collection_path: str = Field(default="", description="Document collection that was queried")
    query_text: str = Field(default="", description="Raw vector query text")
    ranking: list[RankedDocument] = Field(default_factory=list)


# ============================================================
# Persisted Session
# ============================================================

class SessionRecord(BaseModel):
    """
    Persisted shape of a structured search session.

    The location the session itself is stored at is deliberately absent.
    """
    model_config = ConfigDict(extra="forbid")

    structured_query_timestamp: datetime
    vector_query_timestamp: datetime
    vector_result_path: str = ""
    collection_path: str = ""
    vector_query_text: str = ""
    clauses: list[Clause] = Field(default_factory=list)
    ranking: list[RankedDocument] = Field(default_factory=list)

