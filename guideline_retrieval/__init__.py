"""
Guideline retrieval - BM25 lexical search over clinical guideline passages.

Text extraction, HTTP routing and answer generation live outside this
package; it consumes plain-text passages and returns ranked hits.
"""

__version__ = "0.1.0"
