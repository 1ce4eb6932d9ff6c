"""
FloraSearch structured search.

Refines the ranking of an exported vector search with a structured query
over biological entities and their characters.

Usage:
    python scripts/structured_search.py run data/archives/vector.json "leaf color green, stem"
    python scripts/structured_search.py run vector.json "leaf" --export my_search --report
    python scripts/structured_search.py show my_search              # From archives directory
    python scripts/structured_search.py show /tmp/search.json --absolute
"""
import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from florasearch.core.config import load_dotenv_if_exists, load_settings
from florasearch.core.exceptions import FloraSearchError
from florasearch.documents.taxon_document import TaxonDocumentLoader
from florasearch.search.session import FromValue, SearchSession, create_session
from florasearch.search.storage import load_vector_result

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%H:%M:%S"
)
logger = logging.getLogger("structured_search")


def print_summary(session: SearchSession):
    """Print the surviving ranking."""
    print(f"\n{'='*60}")
    print(f"Vector query:  {session.vector_query_text}")
    print(f"Clauses:       {', '.join(str(c) for c in session.clauses)}")
    print(f"Documents:     {len(session.ranking)}")
    print(f"{'='*60}")
    for ranked in session.ranking:
        print(
            f"  #{ranked.position:<4} {ranked.similarity:.3f}  "
            f"[{ranked.document_id}] {ranked.taxon_name} ({ranked.taxon_rank})"
        )


def cmd_run(args, settings) -> int:
    vector_result = load_vector_result(args.vector_result)
    # Relative document paths belong to the collection the vector search queried
    loader = TaxonDocumentLoader(vector_result.collection_path or settings.paths.collection)
    session = create_session(
        FromValue(vector_result),
        raw_query=args.query,
        load_document=loader,
        cache_documents=args.cache,
    )
    print_summary(session)
    logger.info(f"Loaded {loader.loads} documents while filtering")

    if args.export is not None:
        path = session.export_to(args.export, absolute=args.absolute, settings=settings)
        print(f"\nSession exported to {path}")

    if args.report:
        path = session.render_report(settings, loader)
        print(f"Report written to {path}")

    return 0


def cmd_show(args, settings) -> int:
    session = SearchSession.import_from(args.session, absolute=args.absolute, settings=settings)
    loader = TaxonDocumentLoader(session.collection_path or settings.paths.collection)
    print(session.build_report(loader, limit=settings.report_limit))
    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(description="FloraSearch structured search")
    subparsers = parser.add_subparsers(dest="command", required=True)

    run = subparsers.add_parser("run", help="Filter a vector ranking with a structured query")
    run.add_argument("vector_result", type=Path, help="Exported vector search (JSON)")
    run.add_argument("query", help='Structured query, e.g. "leaf color green, stem"')
    run.add_argument("--export", metavar="NAME", help="Export the session (name inside archives, or path with --absolute)")
    run.add_argument("--absolute", action="store_true", help="Treat --export as a complete path")
    run.add_argument("--report", action="store_true", help="Write the HTML report")
    run.add_argument("--cache", action="store_true", help="Load each document once while filtering")

    show = subparsers.add_parser("show", help="Print the report of a stored session")
    show.add_argument("session", help="Session name inside archives, or path with --absolute")
    show.add_argument("--absolute", action="store_true", help="Treat session as a complete path")

    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    load_dotenv_if_exists()
    settings = load_settings()

    try:
        if args.command == "run":
            return cmd_run(args, settings)
        return cmd_show(args, settings)
    except (FloraSearchError, OSError, ValidationError) as e:
        logger.error(f"Structured search failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
