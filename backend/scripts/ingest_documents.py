"""Embed content into the dimension-sharded document store.

Examples:
    python -m scripts.ingest_documents data/xeto -c xeto -e text-embedding-3-small
    python -m scripts.ingest_documents docs/ -c markdown -e text-embedding-3-large -e gemini-embedding-001 --chunk-size 1000
    python -m scripts.ingest_documents --stats
"""

import argparse
import asyncio
import json
import logging
import sys

from core.config import settings
from core.exceptions import RAGException
from core.logging_utils import setup_logging
from domain.evaluation.presets import available_embedding_models
from domain.rag.ingestion.loader import load_content_items
from services.ingestion_service import IngestionService
from storage.database import create_db_engine
from storage.pg_document_store import PgDocumentStore

logger = logging.getLogger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Split, embed and store content for the retrieval benchmark",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "paths",
        nargs="*",
        help="Files or directories (.json, .md, .txt, .xeto)",
    )
    parser.add_argument(
        "-c", "--content",
        dest="content_type",
        choices=settings.content_types,
        help="Content type to store the documents under",
    )
    parser.add_argument(
        "-e", "--embedding",
        action="append",
        dest="embedding_models",
        help="Embedding model. Can be passed several times (default: every available model).",
    )
    parser.add_argument(
        "--chunk-size",
        type=int,
        action="append",
        dest="chunk_sizes",
        help=f"Chunk size in characters. Can be passed several times (default: {settings.ingestion_chunk_size}).",
    )
    parser.add_argument(
        "--batch-size",
        type=int,
        default=settings.ingestion_batch_size,
        help="Texts embedded per batch",
    )
    parser.add_argument(
        "--stats",
        action="store_true",
        help="Print document counts per shard and content type, then exit",
    )
    return parser.parse_args(argv)


async def run(args: argparse.Namespace) -> int:
    document_store = PgDocumentStore(engine=create_db_engine())
    service = IngestionService(document_store=document_store, batch_size=args.batch_size)
    failed = []
    try:
        if not args.stats:
            items = load_content_items(args.paths)
            result = await service.ingest(
                items,
                content_type=args.content_type,
                embedding_models=args.embedding_models or available_embedding_models(),
                chunk_sizes=args.chunk_sizes,
            )
            print(f"Stored {result['documents_stored']} documents from {result['items']} items")
            failed = result["failed"]
            for failure in failed:
                print(f"  Failed: {failure['embedding_model']}: {failure['error']}", file=sys.stderr)

        stats = await document_store.get_stats(settings.content_types)
        print(json.dumps(stats, indent=2))
        return 1 if failed else 0
    finally:
        await service.close()
        await document_store.close()


def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging()

    if not args.stats and (not args.paths or not args.content_type):
        print("Paths and --content are required unless --stats is given", file=sys.stderr)
        return 2

    try:
        return asyncio.run(run(args))
    except RAGException as e:
        print(f"Ingestion failed: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
