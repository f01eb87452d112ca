"""Unit tests for environment configuration"""

import pytest
from pydantic import ValidationError

from guideline_retrieval.config import get_settings, load_environment

ENV_VARS = ["STORAGE_DIR", "CHUNK_MAX_CHARS", "SEARCH_TOP_K", "MIN_RELEVANCE_SCORE", "LOG_LEVEL", "LOG_FILE"]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    # setenv first so monkeypatch restores the original state even when
    # load_dotenv() writes to os.environ behind its back
    for name in ENV_VARS:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)


class TestSettings:
    """Test defaults and overrides"""
    
    def test_defaults(self):
        settings = get_settings()
        
        assert settings.storage_dir == "storage"
        assert settings.chunk_max_chars == 800
        assert settings.top_k == 5
        assert settings.min_score == 0.5
        assert settings.log_level == "INFO"
    
    def test_overrides(self, monkeypatch):
        monkeypatch.setenv("STORAGE_DIR", "/data/guidelines")
        monkeypatch.setenv("CHUNK_MAX_CHARS", "400")
        monkeypatch.setenv("SEARCH_TOP_K", "3")
        monkeypatch.setenv("MIN_RELEVANCE_SCORE", "0.2")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        
        settings = get_settings()
        
        assert settings.storage_dir == "/data/guidelines"
        assert settings.chunk_max_chars == 400
        assert settings.top_k == 3
        assert settings.min_score == 0.2
        assert settings.log_level == "DEBUG"
    
    def test_invalid_number(self, monkeypatch):
        monkeypatch.setenv("SEARCH_TOP_K", "five")
        
        with pytest.raises(ValidationError):
            get_settings()
    
    def test_non_positive_chunk_size(self, monkeypatch):
        monkeypatch.setenv("CHUNK_MAX_CHARS", "0")
        
        with pytest.raises(ValidationError):
            get_settings()


class TestLoadEnvironment:
    """Test .env file discovery"""
    
    def test_env_local_preferred(self, tmp_path):
        (tmp_path / ".env.local").write_text("SEARCH_TOP_K=7\n")
        (tmp_path / ".env").write_text("SEARCH_TOP_K=9\n")
        
        loaded = load_environment(tmp_path)
        
        assert loaded == tmp_path / ".env.local"
        assert get_settings().top_k == 7
    
    def test_env_fallback(self, tmp_path):
        (tmp_path / ".env").write_text("MIN_RELEVANCE_SCORE=0.2\n")
        
        assert load_environment(tmp_path) == tmp_path / ".env"
        assert get_settings().min_score == 0.2
    
    def test_no_env_file(self, tmp_path):
        assert load_environment(tmp_path) is None
