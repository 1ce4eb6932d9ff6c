"""
Clause matching against a document's biological entities.

A document is described by the names of its biological entities and, per
entity name, the (character name, character value) pairs recorded for it.
"""
import logging
from typing import Protocol, Sequence

from ..core.schemas import Clause

logger = logging.getLogger(__name__)


class EntityAttributes(Protocol):
    """Entity/character view of a loaded document."""

    def entity_names(self) -> Sequence[str]:
        """Names of the biological entities, in document order."""
        ...

    def entity_characters(self, entity_name: str) -> Sequence[tuple[str, str]]:
        """(character name, character value) pairs of an entity, in document order."""
        ...


def matches(document: EntityAttributes, clause: Clause) -> bool:
    """
    Check whether a document satisfies a clause.

    The first entity occurrence named like the clause entity decides:
    an entity-only clause passes immediately, otherwise only the first
    character pair of that entity is examined. A name mismatch or value
    mismatch on that pair rejects the document without looking further.
    Entity occurrences without any characters are skipped.

    Args:
        document: Entity/character view of the document
        clause: Lower-cased clause to evaluate

    Returns:
        True if the document contains the queried structure
    """
    for entity_name in document.entity_names():
        if entity_name.lower() != clause.entity:
            continue

        if not clause.attribute_name:
            return True

        for character_name, character_value in document.entity_characters(entity_name):
            if character_name.lower() != clause.attribute_name:
                return False
            if not clause.attribute_value:
                return True
            return character_value.lower() == clause.attribute_value

    return False
