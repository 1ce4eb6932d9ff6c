"""
Pytest configuration and fixtures.
"""
import pytest
import sys
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from florasearch.core.config import PathSettings, Settings
from florasearch.core.schemas import RankedDocument, VectorSearchResult


@dataclass
class FakeDocument:
    """In-memory document with entities given as (name, [(char, value), ...])."""
    entities: list[tuple[str, list[tuple[str, str]]]] = field(default_factory=list)
    description: str = ""

    def entity_names(self) -> list[str]:
        return [name for name, _ in self.entities]

    def entity_characters(self, entity_name: str) -> list[tuple[str, str]]:
        characters = []
        for name, chars in self.entities:
            if name == entity_name:
                characters.extend(chars)
        return characters

    def taxon_description(self) -> str:
        return self.description


class FakeLoader:
    """Loader double counting how many times each document is loaded."""

    def __init__(self, documents: dict[int, FakeDocument]):
        self.documents = documents
        self.calls: list[int] = []

    def __call__(self, ranked: RankedDocument) -> FakeDocument:
        self.calls.append(ranked.document_id)
        return self.documents[ranked.document_id]


def make_ranking(count: int) -> list[RankedDocument]:
    return [
        RankedDocument(
            position=i + 1,
            similarity=1.0 - i * 0.01,
            document_id=100 + i,
            document_path=f"doc_{100 + i}.xml",
            taxon_name=f"Taxon {i}",
            taxon_rank="species",
        )
        for i in range(count)
    ]


@pytest.fixture
def documents():
    """Small collection with leaves, stems and flowers."""
    return {
        100: FakeDocument([("leaf", [("color", "green"), ("shape", "ovate")])], "Leaves green."),
        101: FakeDocument([("leaf", [("color", "red")]), ("stem", [("length", "2")])], "Leaves red."),
        102: FakeDocument([("stem", [("length", "5")]), ("Leaf", [("COLOR", "Green")])], "Stem long."),
        103: FakeDocument([("flower", [("color", "white")])], "Flowers white."),
        104: FakeDocument([("leaf", [("shape", "ovate"), ("color", "green")])], "Leaves ovate."),
        105: FakeDocument([("stem", []), ("leaf", [("color", "green")]), ("stem", [("length", "1")])], ""),
    }


@pytest.fixture
def loader(documents):
    return FakeLoader(documents)


@pytest.fixture
def ranking():
    return make_ranking(6)


@pytest.fixture
def vector_result(ranking):
    return VectorSearchResult(
        search_timestamp=datetime(2024, 3, 5, 14, 7, 9, 123000),
        result_path="/archives/vector.json",
        collection_path="/collection",
        query_text="green leaves",
        ranking=ranking,
    )


@pytest.fixture
def settings(tmp_path):
    return Settings(
        paths=PathSettings(
            collection=tmp_path / "collection",
            archives=tmp_path / "archives",
            reports=tmp_path / "reports",
        ),
        default_prefix="TEST",
    )


@pytest.fixture
def sample_treatment():
    """Sample taxon treatment markup."""
    return """<?xml version="1.0" encoding="UTF-8"?>
<bio:treatment xmlns:bio="http://www.github.com/biosemantics">
  <taxon_identification status="ACCEPTED">
    <taxon_name rank="species">Acer rubrum</taxon_name>
  </taxon_identification>
  <description type="morphology">
    <statement id="d0_s0">
      <text>Leaves palmately lobed, red in autumn.</text>
      <biological_entity id="o0" name="leaf" type="structure">
        <character name="architecture" value="lobed" />
        <character name="coloration" value="red" />
      </biological_entity>
    </statement>
    <statement id="d0_s1">
      <text>Stems smooth.</text>
      <biological_entity id="o1" name="stem" type="structure">
        <character name="texture" value="smooth" />
      </biological_entity>
      <biological_entity id="o2" name="leaf" type="structure">
        <character name="coloration" value="green" />
      </biological_entity>
    </statement>
  </description>
</bio:treatment>
"""


@pytest.fixture
def make_document():
    """Factory for in-memory documents."""
    return FakeDocument


@pytest.fixture
def ranking_factory():
    """Factory for rankings of N documents (ids start at 100)."""
    return make_ranking
