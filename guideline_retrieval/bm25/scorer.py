"""
Okapi BM25 scorer over a prebuilt IndexModel.

Formula:
    score(q, d) = Σ idf(t) × (tf × (k1 + 1)) / (tf + k1 × (1 - b + b × dl/avgdl))

    idf(t) = ln((N - n_t + 0.5) / (n_t + 0.5) + 1)

Where:
    tf = term frequency of t in document d
    n_t = number of documents containing t
    N = number of documents
    dl = document length (tokens)
    avgdl = average document length (1 is used when avgdl is 0)
    k1 = 1.5, b = 0.75 (fixed)

The "+ 1" inside the log keeps idf non-negative for any n_t <= N, so terms
present in most documents never push a score below zero.

Every document is a candidate, zero scores included. Relevance thresholds
belong to the caller (see relevance.py).
"""

import math
from typing import Iterable, List

from .models import CorpusStatistics, IndexedDocument, IndexModel, SearchResult
from .tokenizer import tokenize

K1 = 1.5
B = 0.75


def unique_terms(terms: Iterable[str]) -> List[str]:
    """Deduplicate terms, keeping first-seen order"""
    return list(dict.fromkeys(terms))


class BM25Scorer:
    """
    BM25 scoring with corpus-level IDF.

    Parameters are fixed per scorer; search_top() uses the module default
    (k1=1.5, b=0.75).
    """

    def __init__(self, k1: float = K1, b: float = B):
        """
        Args:
            k1: Term frequency saturation parameter
            b: Length normalization parameter (0 = none, 1 = full)
        """
        self.k1 = k1
        self.b = b

    @staticmethod
    def idf(document_frequency: int, document_count: int) -> float:
        """
        Inverse document frequency, non-negative for document_frequency <= document_count.

        Example:
            >>> round(BM25Scorer.idf(1, 2), 4)
            0.6931
        """
        return math.log(
            (document_count - document_frequency + 0.5) / (document_frequency + 0.5) + 1
        )

    def score(
        self,
        query_terms: List[str],
        document: IndexedDocument,
        statistics: CorpusStatistics,
    ) -> float:
        """
        Compute BM25 score of one document.

        Args:
            query_terms: Distinct query terms (already deduplicated)
            document: Indexed document to score
            statistics: Corpus statistics of the model the document belongs to

        Returns:
            BM25 score (0.0 when no query term occurs in the document)
        """
        avgdl = statistics.average_document_length or 1
        score = 0.0

        for term in query_terms:
            n_t = statistics.document_frequency.get(term, 0)
            if n_t == 0:
                # Term not in corpus
                continue

            tf = document.term_frequency.get(term, 0)
            if tf == 0:
                continue

            numerator = tf * (self.k1 + 1)
            denominator = tf + self.k1 * (
                1 - self.b + self.b * (document.length / avgdl)
            )

            score += self.idf(n_t, statistics.document_count) * (numerator / denominator)

        return score


_default_scorer = BM25Scorer()


def search_top(model: IndexModel, query: str, k: int = 5) -> List[SearchResult]:
    """
    Rank every document of the model against the query.

    Pure function of (model, query, k); the model is not modified.

    Args:
        model: Index model snapshot
        query: Free-text query
        k: Maximum number of results

    Returns:
        At most k results sorted by non-increasing score. Equal scores keep
        corpus order. Empty model or k <= 0 returns [].

    Example:
        >>> from guideline_retrieval.bm25 import Passage, build_bm25_index
        >>> model = build_bm25_index([
        ...     Passage(id="1", source_id="A", text="aspirin reduces polyp recurrence"),
        ...     Passage(id="2", source_id="B", text="colonoscopy surveillance interval five years"),
        ... ])
        >>> hits = search_top(model, "aspirin polyp", k=2)
        >>> [(h.source_id, round(h.score, 3)) for h in hits]
        [('A', 1.459), ('B', 0.0)]
    """
    if model.statistics.document_count == 0 or not model.documents or k <= 0:
        return []

    query_terms = unique_terms(tokenize(query))
    statistics = model.statistics

    scored = [
        SearchResult(
            source_id=doc.source_id,
            text=doc.text,
            score=_default_scorer.score(query_terms, doc, statistics),
        )
        for doc in model.documents
    ]

    # sorted() is stable, reverse=True keeps corpus order among ties
    scored = sorted(scored, key=lambda r: r.score, reverse=True)

    return scored[:k]
