"""
Taxon treatment loader using BeautifulSoup.

Reads the XML treatments of a document collection and exposes the
biological entities, their characters and the taxon description:

    <description type="morphology">
      <statement id="d0_s0">
        <text>Leaves green, 2-5 cm.</text>
        <biological_entity id="o1" name="leaf" type="structure">
          <character name="coloration" value="green" />
        </biological_entity>
      </statement>
    </description>
"""
import logging
import warnings
from dataclasses import dataclass, field
from pathlib import Path

from bs4 import BeautifulSoup, XMLParsedAsHTMLWarning

from ..core.schemas import RankedDocument

logger = logging.getLogger(__name__)


@dataclass
class BiologicalEntity:
    """One biological_entity occurrence with its characters."""
    name: str
    characters: list[tuple[str, str]] = field(default_factory=list)


@dataclass
class TaxonDocument:
    """Parsed taxon treatment."""
    document_id: int
    source_path: Path | None
    entities: list[BiologicalEntity] = field(default_factory=list)
    description: str = ""

    def entity_names(self) -> list[str]:
        """Names of all biological entities, in document order (duplicates kept)."""
        return [entity.name for entity in self.entities]

    def entity_characters(self, entity_name: str) -> list[tuple[str, str]]:
        """Characters of every entity occurrence carrying this name, in document order."""
        characters = []
        for entity in self.entities:
            if entity.name == entity_name:
                characters.extend(entity.characters)
        return characters

    def taxon_description(self) -> str:
        return self.description


def parse_treatment(markup: str, document_id: int = 0, source_path: Path | None = None) -> TaxonDocument:
    """
    Parse treatment markup into a TaxonDocument.

    Args:
        markup: XML content of the treatment
        document_id: Identifier of the document in the collection
        source_path: File the markup was read from, if any

    Returns:
        TaxonDocument with entities and description
    """
    # Treatments are plain XML without HTML-sensitive tags
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", XMLParsedAsHTMLWarning)
        soup = BeautifulSoup(markup, "html.parser")

    entities = []
    for tag in soup.find_all("biological_entity"):
        characters = [
            (character.get("name", ""), character.get("value", ""))
            for character in tag.find_all("character")
        ]
        entities.append(BiologicalEntity(name=tag.get("name", ""), characters=characters))

    paragraphs = []
    for description in soup.find_all("description"):
        statements = [t.get_text(" ", strip=True) for t in description.find_all("text")]
        if statements:
            paragraphs.extend(s for s in statements if s)
        else:
            text = description.get_text(" ", strip=True)
            if text:
                paragraphs.append(text)

    if not paragraphs:
        logger.warning(f"Document {document_id} has no taxon description")

    return TaxonDocument(
        document_id=document_id,
        source_path=source_path,
        entities=entities,
        description="\n".join(paragraphs),
    )


class TaxonDocumentLoader:
    """
    Loads ranked documents from the collection on disk.

    Relative document paths are resolved against the collection directory.
    Every call reads and parses the file again; no caching happens here.
    """

    def __init__(self, collection_path: str | Path | None = None, encoding: str = "utf-8"):
        """
        Initialize document loader.

        Args:
            collection_path: Directory holding the treatment files
            encoding: Encoding of the treatment files
        """
        self.collection_path = Path(collection_path) if collection_path else None
        self.encoding = encoding
        self.loads = 0

    def resolve_path(self, document_path: str | Path) -> Path:
        path = Path(document_path)
        if not path.is_absolute() and self.collection_path is not None:
            path = self.collection_path / path
        return path

    def load(self, ranked: RankedDocument) -> TaxonDocument:
        """
        Load and parse the treatment of a ranked document.

        Raises:
            FileNotFoundError: If the treatment file does not exist
        """
        path = self.resolve_path(ranked.document_path)
        markup = path.read_text(encoding=self.encoding)
        self.loads += 1
        logger.debug(f"Loaded document {ranked.document_id} from {path}")
        return parse_treatment(markup, document_id=ranked.document_id, source_path=path)

    __call__ = load
