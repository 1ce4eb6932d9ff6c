"""
FloraSearch - Structured refinement of vector-search rankings

Filters an already computed ranking of taxon descriptions with a small
clause language over biological entities and their characters:

    "leaf color green, stem length"

Modules:
    core        - Configuration, schemas, exceptions
    query       - Clause parsing, document matching, ranking filter
    documents   - Taxon treatment loader (biological_entity / character markup)
    search      - Search sessions, JSON storage, reports
"""

__version__ = "1.0.0"
