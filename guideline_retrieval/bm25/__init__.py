"""
BM25 (Best Match 25) lexical retrieval over guideline passages.

Components:
- tokenizer: lowercase + character-class splitting (ASCII alphanumerics, CJK)
- models: typed, versioned IndexModel shared by builder, scorer and storage
- index_builder: full-corpus term frequency / document frequency / avgdl
- scorer: Okapi BM25 ranking (k1=1.5, b=0.75)
- relevance: explicit minimum-score gating for callers

Lifecycle: the index is never updated in place. Any corpus change rebuilds
the whole IndexModel from the full passage list and replaces the old one.
"""

from .tokenizer import tokenize
from .models import (
    CorpusStatistics,
    IndexedDocument,
    IndexModel,
    Passage,
    SearchResult,
)
from .index_builder import build_bm25_index, compute_corpus_statistics
from .scorer import BM25Scorer, search_top
from .relevance import apply_min_score, has_confident_hit

__all__ = [
    "tokenize",
    "Passage",
    "IndexedDocument",
    "CorpusStatistics",
    "IndexModel",
    "SearchResult",
    "build_bm25_index",
    "compute_corpus_statistics",
    "BM25Scorer",
    "search_top",
    "apply_min_score",
    "has_confident_hit",
]
