import pytest

from simcheck.config import load_config
from simcheck.schemas.comparison_schemas import Submission


@pytest.fixture
def config():
    """Default bundle, independent of any SIMCHECK_* variables in the environment."""
    return load_config(
        flag_threshold=0.5,
        min_report_score=0.0,
        line_match_cutoff=0.8,
        kgram_size=5,
        window_size=4,
        max_document_length=20000,
        max_workers=2,
        parallel_algorithms=False,
        algorithms=["jaccard", "cosine", "tfidf", "levenshtein", "lcs", "winnowing", "ast", "semantic"],
    )


@pytest.fixture
def make_submission():
    """Factory for submissions with generated ids."""
    counter = {"n": 0}

    def _make(content: str, author: str = None, sub_id: str = None) -> Submission:
        counter["n"] += 1
        return Submission(
            id=sub_id or f"sub-{counter['n']}",
            author=author or f"student-{counter['n']}",
            content=content,
        )
    return _make
