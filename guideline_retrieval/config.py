"""
Configuration from environment variables

Load order: .env.local (local dev, highest priority), then .env, then the
process environment. Values are validated once by pydantic; a bad number in
the environment fails at startup instead of at the first search.
"""

import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).parent.parent


class Settings(BaseModel):
    """Runtime settings"""

    storage_dir: str = Field("storage", description="Directory for corpus.json and bm25.json")
    chunk_max_chars: int = Field(800, gt=0, description="Passage flush threshold in characters")
    top_k: int = Field(5, ge=0, description="Number of hits returned per query")
    min_score: float = Field(0.5, ge=0.0, description="Top hit must score at least this to be used")
    log_level: str = Field("INFO", description="Console log level")
    log_file: str = Field("logs/guideline-retrieval.log", description="Base path of the session log file")


def load_environment(project_root: Optional[Path] = None) -> Optional[Path]:
    """
    Load .env.local or .env into os.environ.

    Returns:
        Path of the file that was loaded, or None when only the system
        environment is used
    """
    root = project_root or PROJECT_ROOT
    for candidate in (root / ".env.local", root / ".env"):
        if candidate.exists():
            load_dotenv(candidate, override=True)
            logger.debug(f"Loaded environment from {candidate}")
            return candidate

    logger.debug("No .env.local or .env file found - using system environment variables only")
    return None


def get_settings() -> Settings:
    """
    Build Settings from the current environment.

    Raises:
        pydantic.ValidationError: a variable holds an invalid value
    """
    return Settings(
        storage_dir=os.getenv("STORAGE_DIR", "storage"),
        chunk_max_chars=os.getenv("CHUNK_MAX_CHARS", "800"),
        top_k=os.getenv("SEARCH_TOP_K", "5"),
        min_score=os.getenv("MIN_RELEVANCE_SCORE", "0.5"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        log_file=os.getenv("LOG_FILE", "logs/guideline-retrieval.log"),
    )
