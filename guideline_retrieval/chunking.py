"""
Split extracted document text into passages for indexing.

Word-based packing: words are appended to a buffer until the space-joined
buffer grows past max_chars, then the buffer becomes one passage. A passage
may therefore exceed max_chars by at most one word; words are never split.
"""

import logging
import re
import uuid
from typing import List

from .bm25.models import Passage

logger = logging.getLogger(__name__)

DEFAULT_MAX_CHARS = 800


def chunk_text_to_passages(text: str, source_id: str, max_chars: int = DEFAULT_MAX_CHARS) -> List[Passage]:
    """
    Chunk text into passages belonging to one source document.
    
    Args:
        text: Extracted plain text (any whitespace layout)
        source_id: Identifier of the parent document
        max_chars: Flush threshold in characters
    
    Returns:
        Passages in document order, each with a fresh UUID4 id.
        Blank text returns [].
    
    Raises:
        ValueError: max_chars is not positive
    """
    if max_chars <= 0:
        raise ValueError(f"max_chars must be positive, got {max_chars}")
    
    clean = re.sub(r'\s+', ' ', text or '').strip()
    if not clean:
        return []
    
    chunks = []
    buf: List[str] = []
    buf_len = 0  # length of ' '.join(buf)
    
    for word in clean.split(' '):
        buf_len += len(word) + (1 if buf else 0)
        buf.append(word)
        if buf_len > max_chars:
            chunks.append(' '.join(buf))
            buf = []
            buf_len = 0
    
    if buf:
        chunks.append(' '.join(buf))
    
    logger.debug(f"Chunked {len(clean)} chars into {len(chunks)} passages (source={source_id}, max_chars={max_chars})")
    
    return [
        Passage(id=str(uuid.uuid4()), source_id=source_id, text=chunk)
        for chunk in chunks
    ]
