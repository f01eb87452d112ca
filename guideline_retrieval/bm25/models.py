"""
Typed records shared by the index builder, the scorer and storage.

An IndexModel is a complete, immutable snapshot of the BM25 statistics for
one corpus state. It is rebuilt from scratch whenever the passage list
changes and is exchanged with storage as versioned JSON:

{
    "schema_version": 1,
    "documents": [
        {"id": "...", "source_id": "...", "text": "...",
         "term_frequency": {"aspirin": 1, ...}, "length": 4},
        ...
    ],
    "statistics": {
        "document_frequency": {"aspirin": 1, ...},
        "document_count": 2,
        "average_document_length": 4.5
    }
}
"""

from typing import Annotated, Dict, List, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

# Bump when the JSON shape changes; old snapshots are then rejected and rebuilt
SCHEMA_VERSION = 1

# Counts of terms that actually occur; zero or negative values are rejected on load
PositiveCount = Annotated[int, Field(gt=0)]


class Passage(BaseModel):
    """Input unit: one chunk of extracted guideline text"""
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Passage identifier")
    source_id: str = Field(..., description="Identifier of the parent document")
    text: str = Field(..., description="Plain passage text")


class IndexedDocument(BaseModel):
    """Per-passage term statistics derived by the index builder"""
    model_config = ConfigDict(frozen=True)

    id: str
    source_id: str
    text: str
    term_frequency: Dict[str, PositiveCount] = Field(default_factory=dict, description="term -> count")
    length: int = Field(0, ge=0, description="Token count")


class CorpusStatistics(BaseModel):
    """Corpus-wide statistics used by the IDF and length normalization terms"""
    model_config = ConfigDict(frozen=True)

    document_frequency: Dict[str, PositiveCount] = Field(default_factory=dict, description="term -> number of documents")
    document_count: int = Field(0, ge=0)
    average_document_length: float = Field(0.0, ge=0.0)


class IndexModel(BaseModel):
    """Documents plus corpus statistics: everything the scorer needs"""
    model_config = ConfigDict(frozen=True)

    schema_version: Literal[1] = SCHEMA_VERSION
    documents: List[IndexedDocument] = Field(default_factory=list)
    statistics: CorpusStatistics = Field(default_factory=CorpusStatistics)

    @classmethod
    def empty(cls) -> "IndexModel":
        """Model for an empty corpus (N=0, avgdl=0)"""
        return cls()

    def to_json(self) -> str:
        """Serialize to JSON. Identical models produce identical bytes."""
        return self.model_dump_json()

    @classmethod
    def from_json(cls, data: Union[str, bytes]) -> "IndexModel":
        """
        Deserialize a model produced by to_json().

        Raises:
            pydantic.ValidationError: malformed JSON, wrong shape or unknown schema_version
        """
        return cls.model_validate_json(data)


class SearchResult(BaseModel):
    """One ranked hit"""
    model_config = ConfigDict(frozen=True)

    source_id: str
    text: str
    score: float


class SourceRecord(BaseModel):
    """Metadata of one uploaded guideline document"""
    model_config = ConfigDict(frozen=True)

    source_id: str
    title: str
    filename: str = ""
    uploaded_at: str = Field(..., description="ISO-8601 UTC timestamp")
    lang: str = Field("", description="Language hint supplied by the uploader")
    chunks: int = Field(0, ge=0)


class CorpusState(BaseModel):
    """The full passage list every rebuild starts from, plus source metadata"""
    model_config = ConfigDict(frozen=True)

    schema_version: Literal[1] = SCHEMA_VERSION
    sources: List[SourceRecord] = Field(default_factory=list)
    passages: List[Passage] = Field(default_factory=list)
