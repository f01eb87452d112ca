"""
Tokenizer for BM25 text processing.

Tokenization pipeline:
1. Lowercase conversion
2. Replace every character outside [a-z0-9] and CJK Unified Ideographs
   (U+4E00..U+9FFF) with a separator
3. Split on separator runs, drop empty strings

No stemming and no stopword removal: guideline passages are short and
clinical terms ("polyp", "polyps") are kept as written.

Known limitation: CJK text is not segmented. A contiguous run of CJK
characters becomes one multi-character term. Swapping in a segmenter only
needs a new tokenize(); the index statistics work on any term list.
"""

import re
from typing import List

# Anything that is not an ASCII letter, ASCII digit or CJK ideograph
_SEPARATOR_RE = re.compile(r'[^a-z0-9\u4e00-\u9fff]+')


def tokenize(text: str) -> List[str]:
    """
    Tokenize text into index terms.
    
    Order is preserved and duplicates are kept (term frequency depends on
    them). Callers that need distinct terms deduplicate themselves.
    
    Args:
        text: Input text to tokenize
        
    Returns:
        List of lowercase terms
        
    Examples:
        >>> tokenize("Aspirin reduces polyp recurrence.")
        ['aspirin', 'reduces', 'polyp', 'recurrence']
        
        >>> tokenize("FIT-positive: colonoscopy within 30 days")
        ['fit', 'positive', 'colonoscopy', 'within', '30', 'days']
        
        >>> tokenize("结直肠癌 screening")
        ['结直肠癌', 'screening']
        
        >>> tokenize("   ")
        []
    """
    if not text:
        return []
    
    return [t for t in _SEPARATOR_RE.split(text.lower()) if t]
