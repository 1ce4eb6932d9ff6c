"""
Documents module - Taxon treatment loading.
"""
from .taxon_document import BiologicalEntity, TaxonDocument, TaxonDocumentLoader, parse_treatment

__all__ = [
    "BiologicalEntity",
    "TaxonDocument",
    "TaxonDocumentLoader",
    "parse_treatment",
]
