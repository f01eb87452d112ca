"""Utility functions for the retrieval engine"""

import hashlib
from pathlib import Path
from typing import Union

from .bm25.models import IndexModel


def calculate_content_hash(path_or_content: Union[str, Path, bytes]) -> str:
    """
    Calculate SHA256 hash of a file or of raw bytes
    
    Args:
        path_or_content: File path (str/Path) or content (bytes)
    
    Returns:
        Hexadecimal hash string (64 characters)
    
    Examples:
        >>> calculate_content_hash("storage/bm25.json")
        'a1b2c3d4...'
        
        >>> calculate_content_hash(b"binary content")
        'e5f6g7h8...'
    """
    if isinstance(path_or_content, bytes):
        content = path_or_content
    else:
        path = Path(path_or_content)
        with open(path, "rb") as f:  # Always binary mode!
            content = f.read()
    
    return hashlib.sha256(content).hexdigest()


def index_fingerprint(model: IndexModel) -> str:
    """
    SHA256 of the serialized model.
    
    Two builds from the same passage list give the same fingerprint, which
    makes rebuilds easy to compare in logs.
    """
    return calculate_content_hash(model.to_json().encode("utf-8"))
