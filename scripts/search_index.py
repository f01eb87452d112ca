#!/usr/bin/env python3
"""
Manage and query the local guideline index from the command line.

Reads settings from .env.local / .env (STORAGE_DIR, SEARCH_TOP_K,
MIN_RELEVANCE_SCORE, ...). Plain-text input only: convert PDF/DOCX to
text before ingesting.
"""

import logging
import sys
from pathlib import Path

from guideline_retrieval.bm25 import has_confident_hit
from guideline_retrieval.config import get_settings, load_environment
from guideline_retrieval.corpus import GuidelineCorpus
from guideline_retrieval.logging_config import setup_logging
from guideline_retrieval.storage import IndexStorage

FALLBACK_MESSAGE = "No guideline passage is relevant enough to answer this query."


def print_usage() -> None:
    print("Usage:")
    print("  python scripts/search_index.py --sources")
    print("  python scripts/search_index.py --ingest <file.txt> <title> [lang]")
    print("  python scripts/search_index.py --remove <source_id>")
    print('  python scripts/search_index.py "<query>"')


def list_sources(corpus: GuidelineCorpus) -> None:
    sources = corpus.list_sources()
    if not sources:
        print("No sources indexed")
        return
    for source in sources:
        print(f"{source.source_id}  {source.title}  ({source.chunks} passages, uploaded {source.uploaded_at})")


def ingest(corpus: GuidelineCorpus, path: str, title: str, lang: str = "") -> None:
    file_path = Path(path)
    text = file_path.read_text(encoding="utf-8")
    record = corpus.add_source(title, text, filename=file_path.name, lang=lang)
    print(f"Added {record.source_id}: {record.chunks} passages")


def remove(corpus: GuidelineCorpus, source_id: str) -> None:
    removed_sources, removed_passages = corpus.remove_source(source_id)
    print(f"Removed {removed_sources} sources, {removed_passages} passages")


def query(corpus: GuidelineCorpus, text: str, top_k: int, min_score: float) -> None:
    hits = corpus.search(text, k=top_k)
    if not has_confident_hit(hits, min_score):
        print(FALLBACK_MESSAGE)
        return

    titles = {s.source_id: s.title for s in corpus.list_sources()}
    for i, hit in enumerate(hits, start=1):
        snippet = " ".join(hit.text.split())
        print(f"({i}) [{titles.get(hit.source_id, 'Guideline')}] score={hit.score:.3f}")
        print(f"    {snippet[:200]}")


def main():
    """Main entry point."""
    if len(sys.argv) < 2:
        print_usage()
        sys.exit(1)

    load_environment()
    settings = get_settings()
    setup_logging(
        log_file=settings.log_file,
        console_level=getattr(logging, settings.log_level, logging.INFO),
    )

    corpus = GuidelineCorpus(IndexStorage(settings.storage_dir), chunk_max_chars=settings.chunk_max_chars)
    corpus.load()

    command = sys.argv[1]
    try:
        if command == "--sources":
            list_sources(corpus)
        elif command == "--ingest" and len(sys.argv) >= 4:
            ingest(corpus, sys.argv[2], sys.argv[3], sys.argv[4] if len(sys.argv) > 4 else "")
        elif command == "--remove" and len(sys.argv) >= 3:
            remove(corpus, sys.argv[2])
        elif command.startswith("--"):
            print_usage()
            sys.exit(1)
        else:
            query(corpus, " ".join(sys.argv[1:]), settings.top_k, settings.min_score)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
