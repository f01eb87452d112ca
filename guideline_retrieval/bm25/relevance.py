"""
Caller-side relevance gating for ranked BM25 results.

The scorer returns every document, zero scores included. Whether a weak
match is good enough is a decision of the consumer (e.g. the answer
pipeline falls back to a canned reply when nothing clears its threshold),
so the threshold is always an explicit argument here.
"""

from typing import List

from .models import SearchResult


def apply_min_score(results: List[SearchResult], min_score: float) -> List[SearchResult]:
    """
    Keep results scoring at least min_score, preserving rank order.
    
    Args:
        results: Ranked results from search_top()
        min_score: Inclusive lower bound
    
    Returns:
        Filtered results (may be empty)
    
    Example:
        >>> hits = [
        ...     SearchResult(source_id="A", text="aspirin reduces polyp recurrence", score=1.46),
        ...     SearchResult(source_id="B", text="polyp surveillance", score=0.31),
        ...     SearchResult(source_id="C", text="colonoscopy interval", score=0.0),
        ... ]
        >>> [r.source_id for r in apply_min_score(hits, 0.5)]
        ['A']
    """
    return [r for r in results if r.score >= min_score]


def has_confident_hit(results: List[SearchResult], min_score: float) -> bool:
    """True when the top-ranked result scores at least min_score"""
    return bool(results) and results[0].score >= min_score
