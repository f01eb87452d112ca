"""Unit test fixtures - small in-memory corpora"""

import pytest

from guideline_retrieval.bm25 import Passage, build_bm25_index


@pytest.fixture
def scenario_passages():
    """Two-document corpus: A mentions aspirin and polyps, B neither"""
    return [
        Passage(id="p1", source_id="A", text="aspirin reduces polyp recurrence"),
        Passage(id="p2", source_id="B", text="colonoscopy surveillance interval five years"),
    ]


@pytest.fixture
def guideline_passages():
    """Larger corpus with repeated terms and several sources"""
    return [
        Passage(id="g1", source_id="crc-screening", text="Colonoscopy every 10 years from age 45 for average-risk adults."),
        Passage(id="g2", source_id="crc-screening", text="FIT testing annually is an alternative to colonoscopy."),
        Passage(id="g3", source_id="polyp-followup", text="After removal of 1-2 small adenomas, repeat colonoscopy in 7-10 years."),
        Passage(id="g4", source_id="polyp-followup", text="Aspirin may reduce adenoma recurrence; aspirin dosing should be discussed."),
        Passage(id="g5", source_id="diet", text="High fibre diet and physical activity lower colorectal cancer risk."),
    ]


@pytest.fixture
def scenario_model(scenario_passages):
    return build_bm25_index(scenario_passages)


@pytest.fixture
def guideline_model(guideline_passages):
    return build_bm25_index(guideline_passages)
