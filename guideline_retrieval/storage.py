"""
Local storage for the guideline corpus and its BM25 index

Structure on disk:
{storage_dir}/
├── corpus.json      # CorpusState: source metadata + full passage list
└── bm25.json        # IndexModel built from corpus.json passages

Writes go to "<name>.tmp" first and are moved into place with os.replace(),
so readers only ever see a complete previous or complete new file.

Loading fails fast with IndexLoadError; deciding what to use instead
(empty corpus, rebuilt model) is up to the caller.
"""

import logging
import os
from pathlib import Path
from typing import Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from .bm25.models import CorpusState, IndexModel

logger = logging.getLogger(__name__)

CORPUS_FILENAME = "corpus.json"
MODEL_FILENAME = "bm25.json"

_M = TypeVar("_M", bound=BaseModel)


class IndexLoadError(Exception):
    """Persisted corpus or index file is missing, malformed or of an unknown schema version"""


class IndexStorage:
    """JSON snapshot storage for corpus state and BM25 model"""

    def __init__(self, storage_dir: Union[str, Path] = "storage"):
        """
        Args:
            storage_dir: Directory holding corpus.json and bm25.json (created if missing)
        """
        self.storage_dir = Path(storage_dir)
        self.storage_dir.mkdir(parents=True, exist_ok=True)
        self.corpus_path = self.storage_dir / CORPUS_FILENAME
        self.model_path = self.storage_dir / MODEL_FILENAME

    def load_corpus(self) -> CorpusState:
        """Load corpus.json. Raises IndexLoadError."""
        return self._load(self.corpus_path, CorpusState)

    def save_corpus(self, state: CorpusState) -> None:
        """Atomically replace corpus.json"""
        self._write_atomic(self.corpus_path, state.model_dump_json(indent=2))
        logger.debug(f"Saved corpus: {len(state.sources)} sources, {len(state.passages)} passages")

    def load_model(self) -> IndexModel:
        """Load bm25.json. Raises IndexLoadError."""
        return self._load(self.model_path, IndexModel)

    def save_model(self, model: IndexModel) -> None:
        """Atomically replace bm25.json"""
        self._write_atomic(self.model_path, model.to_json())
        logger.debug(f"Saved BM25 model: {model.statistics.document_count} documents")

    def _load(self, path: Path, model_cls: Type[_M]) -> _M:
        try:
            raw = path.read_bytes()
        except FileNotFoundError as e:
            raise IndexLoadError(f"{path} does not exist") from e
        except OSError as e:
            raise IndexLoadError(f"Failed to read {path}: {e}") from e

        try:
            return model_cls.model_validate_json(raw)
        except ValidationError as e:
            raise IndexLoadError(f"Malformed {path.name}: {e.error_count()} validation errors") from e

    def _write_atomic(self, path: Path, content: str) -> None:
        tmp_path = path.with_suffix(f"{path.suffix}.tmp")
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                f.write(content)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, path)
        finally:
            if tmp_path.exists():
                tmp_path.unlink()
