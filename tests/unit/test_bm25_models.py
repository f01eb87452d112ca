"""
Unit tests for IndexModel serialization and record immutability.
"""

import json

import pytest
from pydantic import ValidationError

from guideline_retrieval.bm25 import IndexModel, Passage, search_top
from guideline_retrieval.bm25.models import SCHEMA_VERSION


class TestIndexModelSerialization:
    """Test versioned JSON round trip"""
    
    def test_round_trip_equality(self, guideline_model):
        """Test from_json(to_json(m)) == m"""
        restored = IndexModel.from_json(guideline_model.to_json())
        
        assert restored == guideline_model
        assert restored.to_json() == guideline_model.to_json()
    
    def test_round_trip_preserves_scores(self, guideline_model):
        """Test scores from a deserialized model are identical"""
        restored = IndexModel.from_json(guideline_model.to_json())
        query = "colonoscopy aspirin risk"
        
        assert search_top(restored, query, k=5) == search_top(guideline_model, query, k=5)
    
    def test_json_shape(self, scenario_model):
        """Test persisted fields needed to rebuild the scoring function"""
        data = json.loads(scenario_model.to_json())
        
        assert data["schema_version"] == SCHEMA_VERSION
        assert data["statistics"]["document_count"] == 2
        assert data["statistics"]["average_document_length"] == 4.5
        assert data["statistics"]["document_frequency"]["aspirin"] == 1
        assert data["documents"][0]["term_frequency"] == {
            "aspirin": 1, "reduces": 1, "polyp": 1, "recurrence": 1,
        }
        assert data["documents"][0]["length"] == 4
        assert data["documents"][0]["source_id"] == "A"
    
    def test_empty_model_round_trip(self):
        """Test empty model serializes and loads"""
        restored = IndexModel.from_json(IndexModel.empty().to_json())
        
        assert restored.statistics.document_count == 0
        assert restored.documents == []
    
    def test_from_json_accepts_bytes(self, scenario_model):
        assert IndexModel.from_json(scenario_model.to_json().encode("utf-8")) == scenario_model
    
    def test_unknown_schema_version_rejected(self, scenario_model):
        """Test a snapshot from another schema version fails validation"""
        data = json.loads(scenario_model.to_json())
        data["schema_version"] = 2
        
        with pytest.raises(ValidationError):
            IndexModel.from_json(json.dumps(data))
    
    def test_malformed_json_rejected(self):
        with pytest.raises(ValidationError):
            IndexModel.from_json("{not json")
    
    def test_negative_counts_rejected(self, scenario_model):
        """Test invalid statistics fail validation"""
        data = json.loads(scenario_model.to_json())
        data["statistics"]["document_count"] = -1
        
        with pytest.raises(ValidationError):
            IndexModel.from_json(json.dumps(data))
    
    @pytest.mark.parametrize("count", [0, -2])
    def test_non_positive_term_counts_rejected(self, scenario_model, count):
        """Test zero or negative tf/df values fail validation"""
        tf_data = json.loads(scenario_model.to_json())
        tf_data["documents"][0]["term_frequency"]["aspirin"] = count
        df_data = json.loads(scenario_model.to_json())
        df_data["statistics"]["document_frequency"]["aspirin"] = count
        
        with pytest.raises(ValidationError):
            IndexModel.from_json(json.dumps(tf_data))
        with pytest.raises(ValidationError):
            IndexModel.from_json(json.dumps(df_data))


class TestImmutability:
    """Test records are frozen"""
    
    def test_passage_frozen(self):
        passage = Passage(id="1", source_id="A", text="aspirin")
        
        with pytest.raises(ValidationError):
            passage.text = "changed"
    
    def test_model_frozen(self, scenario_model):
        with pytest.raises(ValidationError):
            scenario_model.documents = []
