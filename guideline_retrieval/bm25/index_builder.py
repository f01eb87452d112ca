"""
BM25 index builder - turns a full passage list into an IndexModel.

Always a full rebuild: callers hand over the whole corpus (not a delta)
whenever it changes and replace the old model with the returned one.
"""

import logging
from collections import defaultdict
from typing import Dict, Iterable, List, Sequence

from .models import CorpusStatistics, IndexedDocument, IndexModel, Passage
from .tokenizer import tokenize

logger = logging.getLogger(__name__)


def build_bm25_index(passages: Sequence[Passage]) -> IndexModel:
    """
    Build the BM25 index model from a complete passage list.

    Each passage becomes one document: its text is tokenized, term
    occurrences are counted, and the token count is kept as its length.
    Corpus statistics are then derived from those documents.

    Args:
        passages: Complete list of passages (whole corpus)

    Returns:
        New IndexModel. Identical input always yields an identical model.

    Example:
        >>> model = build_bm25_index([
        ...     Passage(id="1", source_id="A", text="aspirin reduces polyp recurrence"),
        ...     Passage(id="2", source_id="B", text="polyp polyp surveillance"),
        ... ])
        >>> model.statistics.document_frequency["polyp"]
        2
        >>> model.statistics.average_document_length
        3.5
    """
    if not passages:
        logger.debug("Built BM25 index: empty corpus")
        return IndexModel.empty()

    documents = []
    for passage in passages:
        tokens = tokenize(passage.text)

        # Count term occurrences in this passage
        term_frequency: Dict[str, int] = defaultdict(int)
        for term in tokens:
            term_frequency[term] += 1

        documents.append(IndexedDocument(
            id=passage.id,
            source_id=passage.source_id,
            text=passage.text,
            term_frequency=dict(term_frequency),
            length=len(tokens),
        ))

    statistics = compute_corpus_statistics(documents)

    logger.debug(
        f"Built BM25 index: {statistics.document_count} documents, "
        f"{len(statistics.document_frequency)} unique terms, avgdl={statistics.average_document_length:.2f}"
    )

    return IndexModel(documents=documents, statistics=statistics)


def compute_corpus_statistics(documents: Iterable[IndexedDocument]) -> CorpusStatistics:
    """
    Derive corpus statistics from indexed documents alone.

    Used by build_bm25_index and to re-derive statistics from a deserialized
    model's term frequency maps (must match the persisted statistics).

    Args:
        documents: Indexed documents in corpus order

    Returns:
        CorpusStatistics with document frequency, N and avgdl
    """
    document_frequency: Dict[str, int] = defaultdict(int)
    lengths: List[int] = []

    for doc in documents:
        lengths.append(doc.length)
        # Each distinct term counts once per document
        for term, count in doc.term_frequency.items():
            if count > 0:
                document_frequency[term] += 1

    document_count = len(lengths)
    average_document_length = sum(lengths) / document_count if document_count else 0.0

    return CorpusStatistics(
        document_frequency=dict(document_frequency),
        document_count=document_count,
        average_document_length=average_document_length,
    )
