"""Unit tests for logging setup"""

import logging

import pytest

from guideline_retrieval.logging_config import MAX_SESSION_LOGS, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


class TestSetupLogging:
    """Test console + file handler configuration"""
    
    def test_writes_session_file(self, tmp_path, restore_root_logger):
        session_log = setup_logging(log_file=str(tmp_path / "logs" / "app.log"))
        logging.getLogger("guideline_retrieval.test").debug("detailed message")
        for handler in logging.getLogger().handlers:
            handler.flush()
        
        assert session_log.parent == tmp_path / "logs"
        assert session_log.name.startswith("app_")
        assert "detailed message" in session_log.read_text(encoding="utf-8")
    
    def test_replaces_handlers(self, tmp_path, restore_root_logger):
        setup_logging(log_file=str(tmp_path / "app.log"))
        setup_logging(log_file=str(tmp_path / "app.log"))
        
        assert len(logging.getLogger().handlers) == 2
    
    def test_old_session_logs_pruned(self, tmp_path, restore_root_logger):
        for i in range(8):
            (tmp_path / f"app_20250101_00000{i}.log").write_text("old")
        
        setup_logging(log_file=str(tmp_path / "app.log"))
        
        assert len(list(tmp_path.glob("app_*.log"))) <= MAX_SESSION_LOGS
