"""
Guideline corpus manager

Owns the passage list and the current BM25 IndexModel snapshot:
- Add a source document: chunk → append → full rebuild → persist → swap
- Remove a source document: filter → full rebuild → persist → swap
- Search the current snapshot

Concurrency model:
- One writer at a time. Every mutation holds self._write_lock from reading
  the passage list until the new snapshot is in place, so two uploads
  cannot interleave and drop each other's passages.
- Readers never lock. They take a reference to the current IndexModel,
  which is immutable; a swap only rebinds the attribute.
"""

import logging
import threading
import uuid
from datetime import datetime, timezone
from typing import List, Optional, Tuple

from .bm25 import IndexModel, SearchResult, apply_min_score, build_bm25_index, search_top
from .bm25.models import CorpusState, SourceRecord
from .chunking import DEFAULT_MAX_CHARS, chunk_text_to_passages
from .storage import IndexLoadError, IndexStorage
from .utils import index_fingerprint

logger = logging.getLogger(__name__)


class GuidelineCorpus:
    """Single-writer corpus of guideline passages with a BM25 snapshot"""

    def __init__(self, storage: IndexStorage, chunk_max_chars: int = DEFAULT_MAX_CHARS):
        """
        Args:
            storage: Persistence for corpus.json / bm25.json
            chunk_max_chars: Passage size used when adding sources
        """
        self.storage = storage
        self.chunk_max_chars = chunk_max_chars
        self._write_lock = threading.Lock()
        self._state = CorpusState()
        self._model = IndexModel.empty()

    @property
    def model(self) -> IndexModel:
        """Current immutable index snapshot"""
        return self._model

    def load(self) -> IndexModel:
        """
        Load persisted state, falling back instead of failing.

        - corpus.json unreadable → start with an empty corpus
        - bm25.json unreadable or out of sync with corpus.json → rebuild it

        Returns:
            Active IndexModel
        """
        with self._write_lock:
            try:
                state = self.storage.load_corpus()
            except IndexLoadError as e:
                logger.warning(f"Starting with empty corpus: {e}")
                state = CorpusState()

            try:
                model = self.storage.load_model()
            except IndexLoadError as e:
                logger.warning(f"Rebuilding BM25 model: {e}")
                model = None

            # The model must equal a fresh build of the passages: same ids, same
            # text and the same term counts under the current tokenizer
            rebuilt = build_bm25_index(state.passages)
            if model is not None and model != rebuilt:
                logger.warning("Persisted BM25 model does not match corpus passages, rebuilding")
                model = None

            if model is None:
                model = rebuilt
                self.storage.save_model(model)

            self._state = state
            self._model = model

        logger.info(f"Corpus loaded: {len(state.sources)} sources, {model.statistics.document_count} passages")
        return model

    def add_source(self, title: str, text: str, filename: str = "", lang: str = "") -> SourceRecord:
        """
        Chunk a document's text and add it to the corpus.

        Args:
            title: Display title of the guideline
            text: Extracted plain text
            filename: Original file name (metadata only)
            lang: Language hint (metadata only)

        Returns:
            SourceRecord of the new source

        Raises:
            ValueError: blank title, or text yields no passages
        """
        title = (title or "").strip()
        if not title:
            raise ValueError("Missing title")

        source_id = str(uuid.uuid4())
        passages = chunk_text_to_passages(text, source_id, max_chars=self.chunk_max_chars)
        if not passages:
            raise ValueError("Could not extract text from document (empty text)")

        record = SourceRecord(
            source_id=source_id,
            title=title,
            filename=filename,
            uploaded_at=datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            lang=lang,
            chunks=len(passages),
        )

        with self._write_lock:
            state = CorpusState(
                sources=[*self._state.sources, record],
                passages=[*self._state.passages, *passages],
            )
            self._commit(state)

        logger.info(f"Added source {source_id} ('{title}'): {len(passages)} passages")
        return record

    def remove_source(self, source_id: str) -> Tuple[int, int]:
        """
        Remove a source document and all of its passages.

        Args:
            source_id: Source to remove

        Returns:
            (removed_sources, removed_passages); (0, 0) when unknown
        """
        with self._write_lock:
            sources = [s for s in self._state.sources if s.source_id != source_id]
            passages = [p for p in self._state.passages if p.source_id != source_id]

            removed_sources = len(self._state.sources) - len(sources)
            removed_passages = len(self._state.passages) - len(passages)

            if not removed_sources and not removed_passages:
                logger.info(f"Source {source_id} not found, nothing removed")
                return 0, 0

            self._commit(CorpusState(sources=sources, passages=passages))

        logger.info(f"Removed source {source_id}: {removed_sources} sources, {removed_passages} passages")
        return removed_sources, removed_passages

    def rebuild(self) -> IndexModel:
        """Rebuild the model from the current passage list and persist it"""
        with self._write_lock:
            self._commit(self._state)
            return self._model

    def list_sources(self) -> List[SourceRecord]:
        return list(self._state.sources)

    def search(self, query: str, k: int = 5, min_score: Optional[float] = None) -> List[SearchResult]:
        """
        Search the current snapshot.

        Args:
            query: Free-text query
            k: Maximum number of results
            min_score: Optional inclusive score floor; None returns all
                ranked results including zero scores

        Returns:
            Ranked results
        """
        results = search_top(self._model, query, k)
        if min_score is not None:
            results = apply_min_score(results, min_score)

        logger.debug(f"Search '{query}': {len(results)} results (k={k}, min_score={min_score})")
        return results

    def _commit(self, state: CorpusState) -> None:
        # Caller holds self._write_lock
        model = build_bm25_index(state.passages)
        self.storage.save_corpus(state)
        self.storage.save_model(model)
        self._state = state
        self._model = model
        logger.debug(f"Committed corpus snapshot {index_fingerprint(model)[:12]}")
