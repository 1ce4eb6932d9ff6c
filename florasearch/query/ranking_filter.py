"""
Ranking filter applying structured clauses to a vector ranking.

Every clause acts as an AND condition: a document survives only if it
matches all clauses. Removal is stable, so survivors keep the relative
order they had in the vector ranking.
"""
import logging
from typing import Callable, Sequence

from ..core.schemas import Clause, RankedDocument
from .matcher import EntityAttributes, matches

logger = logging.getLogger(__name__)

DocumentLoadFn = Callable[[RankedDocument], EntityAttributes]


def filter_ranking(
    ranking: list[RankedDocument],
    clauses: Sequence[Clause],
    load_document: DocumentLoadFn,
    cache_documents: bool = False
) -> None:
    """
    Remove from the ranking every document failing at least one clause.

    The list is modified in place. Clauses are applied in order and each
    pass only looks at documents that survived the previous ones.

    Args:
        ranking: Ranked documents to prune (mutated)
        clauses: Clauses to apply, in query order
        load_document: Loads the entity/character view of a ranked document.
            Errors propagate and abort the pass.
        cache_documents: Load each document at most once for this call
            instead of once per clause pass
    """
    loaded: dict[int, EntityAttributes] = {}

    def attributes_of(doc: RankedDocument) -> EntityAttributes:
        if not cache_documents:
            return load_document(doc)
        if doc.document_id not in loaded:
            loaded[doc.document_id] = load_document(doc)
        return loaded[doc.document_id]

    initial = len(ranking)

    for clause in clauses:
        before = len(ranking)
        ranking[:] = [doc for doc in ranking if matches(attributes_of(doc), clause)]
        logger.debug(f"Clause '{clause}' kept {len(ranking)}/{before} documents")

    logger.info(f"Ranking filtered with {len(clauses)} clauses: {len(ranking)}/{initial} documents kept")
